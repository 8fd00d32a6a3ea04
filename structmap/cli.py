"""CLI entrypoints for structmap commands."""

from __future__ import annotations

import argparse
from pathlib import Path

from .analyzers import discover_extractors
from .config import ConfigError, load_config
from .inventory import InventoryScanner
from .logging import configure_logging
from .pipeline import StructureFingerprinter


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structmap",
        description="Fingerprint a project's structure: file roles, directory purposes and architecture.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a project directory and emit its structural fingerprint as JSON.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the project root (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Configuration file to use instead of <path>/.structmap.yml.",
    )
    analyze_parser.add_argument(
        "--workers",
        type=_positive_int,
        default=None,
        help="Worker threads for the analysis (1 runs serially).",
    )
    analyze_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the JSON result to this file instead of stdout.",
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for structmap commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))

    if args.command == "analyze":
        root = Path(args.path).expanduser().resolve()
        try:
            config = load_config(args.config if args.config is not None else root)
            files = InventoryScanner().scan(root, config.inventory)
            fingerprinter = StructureFingerprinter(
                extractors=discover_extractors(config.analysis.extractors),
                max_workers=args.workers or config.analysis.max_workers,
            )
            result = fingerprinter.run(files, modules=config.modules, hints=config.hints)
        except (FileNotFoundError, NotADirectoryError) as exc:
            parser.exit(1, f"{exc}\n")
        except ConfigError as exc:
            parser.exit(1, f"Invalid configuration: {exc}\n")
        except (ValueError, TypeError) as exc:
            parser.exit(1, f"structmap analyze failed: {exc}\nRun with --verbose for more details.\n")

        payload = result.to_json()
        if args.output is not None:
            args.output.write_text(payload + "\n", encoding="utf-8")
            print(f"Fingerprint written to {args.output}")
        else:
            print(payload)
    else:  # pragma: no cover - argparse restricts commands
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":  # pragma: no cover
    main()
