"""Configuration loading for structmap (.structmap.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import ModuleDescriptor, ProjectHints

CONFIG_FILENAME = ".structmap.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be read or parsed."""


@dataclass
class InventoryConfig:
    """Which files the inventory provider leaves out."""

    exclude_paths: List[str] = field(default_factory=list)
    respect_gitignore: bool = True


@dataclass
class AnalysisConfig:
    """Pipeline tuning knobs."""

    max_workers: Optional[int] = None
    extractors: Optional[List[str]] = None


@dataclass
class StructmapConfig:
    """Represents the settings defined in .structmap.yml."""

    root: Path
    modules: List[ModuleDescriptor] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    architecture: Optional[str] = None
    inventory: InventoryConfig = field(default_factory=InventoryConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)

    @property
    def hints(self) -> ProjectHints:
        return ProjectHints(dependencies=tuple(self.dependencies), architecture=self.architecture)


def load_config(config_path: Path) -> StructmapConfig:
    """Load configuration from a project directory or an explicit file."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return StructmapConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    modules: List[ModuleDescriptor] = []
    for entry in data.get("modules") or []:
        item = _as_dict(entry)
        name = _as_str(item.get("name"))
        path = _as_str(item.get("path"))
        if name and path:
            modules.append(ModuleDescriptor(name=name, path=path))

    inventory = InventoryConfig(exclude_paths=_as_str_list(data.get("exclude_paths")))
    respect_gitignore = _as_bool(data.get("respect_gitignore"))
    if respect_gitignore is not None:
        inventory.respect_gitignore = respect_gitignore

    analysis_data = _as_dict(data.get("analysis"))
    analysis = AnalysisConfig()
    if analysis_data:
        workers = _as_int(analysis_data.get("max_workers"))
        analysis.max_workers = workers if workers is not None and workers > 0 else None
        if "extractors" in analysis_data:
            analysis.extractors = _as_str_list(analysis_data.get("extractors"))

    return StructmapConfig(
        root=root,
        modules=modules,
        dependencies=_as_str_list(data.get("dependencies")),
        architecture=_as_str(data.get("architecture")),
        inventory=inventory,
        analysis=analysis,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "AnalysisConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "InventoryConfig",
    "StructmapConfig",
    "load_config",
]
