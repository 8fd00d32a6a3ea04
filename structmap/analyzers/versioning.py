"""Version isolation detection (``v2/``, ``legacy-checkout/``, ``api_v1`` ...)."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple

from ..models import VersionIsolation
from ..paths import base_stem, basename, split_segments
from .base import Extractor, ProjectView

_TOKEN = r"(?:v\d+|legacy|old|new|current)"
_WHOLE = re.compile(rf"^({_TOKEN})$", re.IGNORECASE)
_PREFIX = re.compile(rf"^({_TOKEN})[-_]", re.IGNORECASE)
_SUFFIX = re.compile(rf"[-_]({_TOKEN})$", re.IGNORECASE)
_STEM_VERSION = re.compile(r"(?:^|[-_.])(v\d+)(?:[-_.]|$)", re.IGNORECASE)

DIRECTORY = "directory"
PREFIX = "prefix"
SUFFIX = "suffix"
NONE = "none"

_PRECEDENCE = (DIRECTORY, PREFIX, SUFFIX)


def match_segment(segment: str) -> Optional[Tuple[str, str]]:
    """Return ``(mechanism, token)`` for a single path segment."""
    for mechanism, pattern in ((DIRECTORY, _WHOLE), (PREFIX, _PREFIX), (SUFFIX, _SUFFIX)):
        found = pattern.search(segment)
        if found:
            return mechanism, found.group(1).lower()
    return None


def identify_version(directory: str, files: Iterable[str] = ()) -> Optional[str]:
    """Return the first version token in the directory path, else in its file stems."""
    for segment in split_segments(directory):
        matched = match_segment(segment)
        if matched:
            return matched[1]
    for path in files:
        found = _STEM_VERSION.search(base_stem(basename(path)))
        if found:
            return found.group(1).lower()
    return None


class VersionIsolationExtractor(Extractor):
    name = "versioning"

    def extract(self, view: ProjectView) -> VersionIsolation:
        versions: List[str] = []
        mechanisms = set()
        for directory in view.directories:
            for segment in split_segments(directory):
                matched = match_segment(segment)
                if matched:
                    mechanisms.add(matched[0])
                    if matched[1] not in versions:
                        versions.append(matched[1])
        for path in view.files:
            matched = match_segment(base_stem(basename(path)))
            if matched and matched[0] != DIRECTORY:
                mechanisms.add(matched[0])
                if matched[1] not in versions:
                    versions.append(matched[1])

        pattern = next((mechanism for mechanism in _PRECEDENCE if mechanism in mechanisms), NONE)
        return VersionIsolation(has_versioning=bool(versions), versions=versions, pattern=pattern)


__all__ = ["VersionIsolationExtractor", "identify_version", "match_segment"]
