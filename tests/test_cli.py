"""CLI parser and command behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from structmap.cli import _build_parser, main


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "analyze"])
    assert args.verbose is True
    assert args.command == "analyze"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "--verbose"])
    assert args.verbose is True


def test_cli_parses_analyze_options() -> None:
    parser = _build_parser()
    args = parser.parse_args(["analyze", "proj", "--config", "cfg.yml", "--workers", "2", "--output", "out.json"])
    assert args.path == "proj"
    assert args.config == Path("cfg.yml")
    assert args.workers == 2
    assert args.output == Path("out.json")


def test_cli_rejects_non_positive_workers() -> None:
    parser = _build_parser()
    with pytest.raises(SystemExit):
        parser.parse_args(["analyze", "--workers", "0"])


def test_analyze_prints_json(repo_builder, capsys) -> None:
    repo_builder.touch(["src/services/payment/client.ts", "src/components/Button/Button.tsx"])

    main(["analyze", str(repo_builder.path()), "--workers", "1"])

    data = json.loads(capsys.readouterr().out)
    purposes = {item["path"]: item["purpose"] for item in data["directoryAnalyses"]}
    assert purposes["src/services/payment"] == "支付相关 API 服务"
    assert purposes["src/components/Button"] == "组件"


def test_analyze_writes_output_file_and_uses_config(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write(
        {
            ".structmap.yml": """
                dependencies: [redux]
                modules:
                  - name: state
                    path: src/store
                analysis:
                  extractors: [naming]
            """,
        }
    )
    repo_builder.touch(["src/store/cart.ts"])
    output = tmp_path / "fingerprint.json"

    main(["analyze", str(repo_builder.path()), "--output", str(output)])

    assert "Fingerprint written to" in capsys.readouterr().out
    data = json.loads(output.read_text(encoding="utf-8"))
    store = next(item for item in data["directoryAnalyses"] if item["path"] == "src/store")
    assert store["purpose"] == "状态管理相关"
    assert store["module"] == "state"
    assert data["versionIsolation"] == {"hasVersioning": False, "versions": [], "pattern": "none"}


def test_analyze_reports_invalid_config(repo_builder, capsys) -> None:
    repo_builder.write({".structmap.yml": "- nope\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "Invalid configuration" in capsys.readouterr().err


def test_analyze_reports_unknown_extractor(repo_builder, capsys) -> None:
    repo_builder.write({".structmap.yml": "analysis:\n  extractors: [bogus]\n"})

    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(repo_builder.path())])

    assert excinfo.value.code == 1
    assert "Unknown extractors requested: bogus" in capsys.readouterr().err


def test_analyze_reports_missing_path(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["analyze", str(tmp_path / "nowhere")])

    assert excinfo.value.code == 1
    assert "Project path not found" in capsys.readouterr().err
