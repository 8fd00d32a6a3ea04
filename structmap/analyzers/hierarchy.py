"""Module hierarchy leveling, e.g. ``markets/ph/loan`` style country splits."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from ..models import HierarchyLevel, ModuleHierarchy
from ..paths import basename, split_segments
from .base import Extractor, ProjectView

COUNTRY_CODES = frozenset(
    {"ph", "th", "sg", "my", "id", "vn", "tw", "hk", "cn", "jp", "kr", "in", "us", "uk", "de", "fr", "br", "mx", "au"}
)
REGION_WORDS = ("asia", "europe", "america", "emea", "apac", "latam", "region")
MODULE_WORDS = ("module", "package", "service")

# Feature and module levels are only recognised this close to the root.
MAX_MODULE_DEPTH = 2


def _is_country(name: str) -> bool:
    if name in COUNTRY_CODES:
        return True
    _, dash, code = name.rpartition("-")
    return bool(dash) and code in COUNTRY_CODES


def infer_level_type(directories: Sequence[str], depth: int) -> str:
    names = [basename(directory).lower() for directory in directories]
    if not names:
        return "other"

    countries = sum(1 for name in names if _is_country(name))
    if countries and (countries >= 2 or countries * 2 >= len(names)):
        return "country"
    if any(word in name for name in names for word in REGION_WORDS):
        return "region"
    if depth <= MAX_MODULE_DEPTH:
        if any("feature" in name for name in names):
            return "feature"
        if any(word in name for name in names for word in MODULE_WORDS):
            return "module"
    return "other"


class ModuleHierarchyExtractor(Extractor):
    name = "hierarchy"

    def extract(self, view: ProjectView) -> ModuleHierarchy:
        by_depth: Dict[int, List[str]] = defaultdict(list)
        for directory in view.directories:
            by_depth[len(split_segments(directory))].append(directory)

        levels = [
            HierarchyLevel(
                level=depth,
                name=f"Level {depth}",
                type=infer_level_type(directories, depth),
                directories=sorted(directories),
            )
            for depth, directories in sorted(by_depth.items())
        ]
        return ModuleHierarchy(levels=levels)


__all__ = ["ModuleHierarchyExtractor", "infer_level_type"]
