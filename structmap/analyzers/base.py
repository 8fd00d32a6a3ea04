"""Base classes for project-wide extractor plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from ..models import DirectoryHistogram, FileClassification


@dataclass(frozen=True)
class ProjectView:
    """Read-only snapshot of a run handed to every extractor."""

    files: Tuple[str, ...]
    classifications: Tuple[FileClassification, ...] = ()
    histograms: Dict[str, DirectoryHistogram] = field(default_factory=dict)

    @property
    def directories(self) -> Tuple[str, ...]:
        return tuple(sorted(self.histograms))


class Extractor(ABC):
    """Contract for extractors that derive one project-wide signal."""

    name: str = ""

    @abstractmethod
    def extract(self, view: ProjectView) -> Any:
        """Return a model with a ``to_dict`` method describing the signal."""


__all__ = ["Extractor", "ProjectView"]
