"""Naming convention extraction based on file stem casing."""

from __future__ import annotations

import re
from collections import Counter
from typing import Iterable, Optional

from ..models import NamingConvention
from ..paths import base_stem, basename
from .base import Extractor, ProjectView

PASCAL_CASE = "PascalCase"
CAMEL_CASE = "camelCase"
KEBAB_CASE = "kebab-case"
SNAKE_CASE = "snake_case"
MIXED = "mixed"

_CASINGS = (PASCAL_CASE, CAMEL_CASE, KEBAB_CASE, SNAKE_CASE)

_PATTERNS = (
    (PASCAL_CASE, re.compile(r"^[A-Z][A-Za-z0-9]*[a-z][A-Za-z0-9]*$")),
    (CAMEL_CASE, re.compile(r"^[a-z][a-z0-9]*(?:[A-Z][a-z0-9]*)+$")),
    (KEBAB_CASE, re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)+$")),
    (SNAKE_CASE, re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)+$")),
)

# Share a casing must exceed to be reported as the convention.
DOMINANCE_SHARE = 0.6


def casing_of(stem: str) -> Optional[str]:
    """Return the casing of ``stem`` or None when it is ambiguous."""
    for casing, pattern in _PATTERNS:
        if pattern.match(stem):
            return casing
    return None


def tally_casings(paths: Iterable[str]) -> Counter:
    counts: Counter = Counter()
    for path in paths:
        stem = base_stem(basename(path))
        if not stem:
            continue
        casing = casing_of(stem)
        if casing is not None:
            counts[casing] += 1
    return counts


def dominant_casing(counts: Counter) -> str:
    classified = sum(counts.values())
    if not classified:
        return MIXED
    for casing in _CASINGS:
        if counts[casing] / classified > DOMINANCE_SHARE:
            return casing
    return MIXED


def detect_naming_pattern(paths: Iterable[str]) -> str:
    """Return the dominant casing of the given file names, or ``mixed``."""
    return dominant_casing(tally_casings(paths))


class NamingConventionExtractor(Extractor):
    name = "naming"

    def extract(self, view: ProjectView) -> NamingConvention:
        counts = tally_casings(view.files)
        return NamingConvention(
            pattern=dominant_casing(counts),
            counts={casing: counts[casing] for casing in _CASINGS if counts[casing]},
        )


__all__ = ["NamingConventionExtractor", "casing_of", "detect_naming_pattern"]
