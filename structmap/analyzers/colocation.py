"""Co-location detection for styles, tests and types kept beside their code."""

from __future__ import annotations

from ..models import CoLocation, DirectoryHistogram, FileCategory

# Categories that never count as the file a companion sits next to.
_COMPANION_CATEGORIES = frozenset(
    {
        FileCategory.STYLE,
        FileCategory.TEST,
        FileCategory.TYPE,
        FileCategory.CONFIG,
        FileCategory.OTHER,
    }
)


def _has_primary_file(histogram: DirectoryHistogram) -> bool:
    return any(
        count > 0 and category not in _COMPANION_CATEGORIES
        for category, count in histogram.counts.items()
    )


def detect_co_location(histogram: DirectoryHistogram) -> CoLocation:
    """Flag which companion file kinds live next to primary files in a directory."""
    if not _has_primary_file(histogram):
        return CoLocation()
    counts = histogram.counts
    return CoLocation(
        styles=counts.get(FileCategory.STYLE, 0) > 0,
        tests=counts.get(FileCategory.TEST, 0) > 0,
        types=counts.get(FileCategory.TYPE, 0) > 0,
    )


__all__ = ["detect_co_location"]
