"""Directory aggregator: groups file classifications by their exact parent directory."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from ..logging import get_logger
from ..models import DirectoryHistogram, FileCategory, FileClassification
from ..paths import ancestors, parent_directory

# A category is primary when it covers at least a fifth of the direct files.
PRIMARY_SHARE_DIVISOR = 5


class DirectoryAggregator:
    """Builds per-directory category histograms from file classifications."""

    def __init__(self) -> None:
        self.logger = get_logger("aggregation")

    def aggregate(
        self, classifications: Iterable[FileClassification]
    ) -> Dict[str, DirectoryHistogram]:
        """Return histograms keyed by directory path, sorted by path.

        Intermediate directories that only hold subdirectories get an empty
        histogram so every directory on the way to a file is represented.
        """
        counts: Dict[str, Counter] = defaultdict(Counter)
        files: Dict[str, List[str]] = defaultdict(list)
        known: set[str] = set()

        for item in classifications:
            directory = parent_directory(item.path)
            if not directory:
                continue
            counts[directory][item.category] += 1
            files[directory].append(item.path)
            known.update(ancestors(directory))

        histograms: Dict[str, DirectoryHistogram] = {}
        for directory in sorted(known):
            tally = counts.get(directory, Counter())
            histograms[directory] = DirectoryHistogram(
                directory_path=directory,
                counts={category: tally[category] for category in FileCategory if tally[category] > 0},
                files=tuple(sorted(files.get(directory, []))),
            )

        self.logger.debug("Aggregated %d directories", len(histograms))
        return histograms


def primary_threshold(total: int) -> int:
    """Return ceil(20% of ``total``) using integer arithmetic."""
    return (total + PRIMARY_SHARE_DIVISOR - 1) // PRIMARY_SHARE_DIVISOR


def primary_categories(histogram: DirectoryHistogram) -> List[FileCategory]:
    """Categories meeting the 20% share, by count descending then enum order."""
    total = histogram.total
    if total == 0:
        return []
    threshold = primary_threshold(total)
    qualifying = [
        category
        for category in FileCategory
        if histogram.counts.get(category, 0) > 0 and histogram.counts[category] >= threshold
    ]
    return sorted(qualifying, key=lambda category: (-histogram.counts[category], FileCategory.order(category)))


__all__ = ["DirectoryAggregator", "primary_categories", "primary_threshold"]
