"""Whole-project architecture pattern detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import (
    ArchitecturePattern,
    Confidence,
    DirectoryAnalysis,
    FileCategory,
    PatternMatch,
    ProjectHints,
)
from ..paths import basename, parent_directory

WORKSPACE_MARKERS = frozenset({"pnpm-workspace.yaml", "lerna.json", "nx.json", "turbo.json", "rush.json"})
PACKAGE_MANIFESTS = frozenset({"package.json", "pyproject.toml", "setup.py", "Cargo.toml", "go.mod"})
WORKSPACE_ROOTS = ("packages", "apps")
COMPOSE_FILES = frozenset({"docker-compose.yml", "docker-compose.yaml", "compose.yml", "compose.yaml"})

CLEAN_LAYERS = ("domain", "application", "infrastructure", "presentation")
FEATURE_ROOTS = frozenset({"features", "modules"})
SHARED_ROOTS = frozenset({"shared", "common"})
DDD_MARKERS = ("domain", "entities", "aggregates")
BUSINESS_LAYERS = frozenset({"business", "bll"})
DATA_LAYERS = frozenset({"dal", "data", "persistence"})

KNOWN_PATTERNS = (
    "monorepo",
    "clean-architecture",
    "feature-based",
    "mvc",
    "domain-driven",
    "layered",
    "microservices",
)


@dataclass(frozen=True)
class _Evidence:
    analyses: Dict[str, DirectoryAnalysis]
    inventory: Tuple[str, ...]

    def named(self, names) -> List[str]:
        """Directories whose own name is in ``names``, sorted by path."""
        return [path for path in sorted(self.analyses) if basename(path).lower() in names]

    def sibling(self, directory: str, name: str) -> Optional[DirectoryAnalysis]:
        parent = parent_directory(directory)
        return self.analyses.get(f"{parent}/{name}" if parent else name)


def _monorepo(evidence: _Evidence) -> List[str]:
    indicators = [f"workspace marker: {path}" for path in evidence.inventory if basename(path) in WORKSPACE_MARKERS]
    for root in WORKSPACE_ROOTS:
        manifests = [
            path
            for path in evidence.inventory
            if path.startswith(f"{root}/") and path.count("/") >= 2 and basename(path) in PACKAGE_MANIFESTS
        ]
        if manifests:
            indicators.append(f"{root}/ holds {len(manifests)} package manifest(s)")
    return indicators


def _clean_architecture(evidence: _Evidence) -> List[str]:
    return [f"{basename(path).lower()} layer: {path}" for path in evidence.named(CLEAN_LAYERS)]


def _feature_based(evidence: _Evidence) -> List[str]:
    return [f"feature root: {path}" for path in evidence.named(FEATURE_ROOTS)]


def _mvc(evidence: _Evidence) -> List[str]:
    indicators: List[str] = []
    for models_dir in evidence.named({"models"}):
        controllers = evidence.sibling(models_dir, "controllers")
        if controllers is None:
            continue
        models = evidence.analyses[models_dir]
        if FileCategory.MODEL not in models.primary_categories:
            continue
        if FileCategory.CONTROLLER not in controllers.primary_categories:
            continue
        indicators.append(f"models/controllers siblings: {models_dir}, {controllers.path}")
        views = evidence.sibling(models_dir, "views")
        if views is not None:
            indicators.append(f"views sibling: {views.path}")
    return indicators


def _domain_driven(evidence: _Evidence) -> List[str]:
    return [f"domain directory: {path}" for path in evidence.named(DDD_MARKERS)]


def _layered(evidence: _Evidence) -> List[str]:
    indicators = [f"layers directory: {path}" for path in evidence.named({"layers"})]
    for business in evidence.named(BUSINESS_LAYERS):
        for name in sorted(DATA_LAYERS):
            data = evidence.sibling(business, name)
            if data is not None:
                indicators.append(f"business/data-access siblings: {business}, {data.path}")
    return indicators


def _microservices(evidence: _Evidence) -> List[str]:
    compose = [path for path in evidence.inventory if path in COMPOSE_FILES]
    dockerfiles = [
        path
        for path in evidence.inventory
        if basename(path) == "Dockerfile" or basename(path).startswith("Dockerfile.")
    ]
    if not compose or not dockerfiles:
        return []
    return [f"compose file: {path}" for path in compose] + [f"Dockerfile: {path}" for path in dockerfiles]


# Priority order. Microservices is checked first because it overrides the rest.
PATTERN_RULES: Tuple[Tuple[str, Confidence, Callable[[_Evidence], List[str]]], ...] = (
    ("microservices", Confidence.HIGH, _microservices),
    ("monorepo", Confidence.HIGH, _monorepo),
    ("clean-architecture", Confidence.HIGH, _clean_architecture),
    ("feature-based", Confidence.HIGH, _feature_based),
    ("mvc", Confidence.MEDIUM, _mvc),
    ("domain-driven", Confidence.HIGH, _domain_driven),
    ("layered", Confidence.MEDIUM, _layered),
)


class ArchitecturePatternDetector:
    """Picks one best-fit architecture by fixed priority."""

    def __init__(self) -> None:
        self.logger = get_logger("architecture")

    def evaluate(
        self,
        analyses: Sequence[DirectoryAnalysis],
        inventory: Sequence[str],
    ) -> List[PatternMatch]:
        """Return every pattern whose indicators are satisfied, in priority order."""
        evidence = _Evidence({item.path: item for item in analyses}, tuple(sorted(inventory)))
        matches: List[PatternMatch] = []
        for name, confidence, check in PATTERN_RULES:
            indicators = check(evidence)
            if indicators:
                matches.append(PatternMatch(type=name, confidence=confidence, indicators=tuple(indicators)))
        return matches

    def detect(
        self,
        analyses: Sequence[DirectoryAnalysis],
        inventory: Sequence[str],
        hints: ProjectHints | None = None,
    ) -> ArchitecturePattern:
        matches = self.evaluate(analyses, inventory)
        if matches:
            winner = matches[0]
            pattern = ArchitecturePattern(
                type=winner.type,
                confidence=winner.confidence,
                indicators=list(winner.indicators),
            )
        elif hints is not None and hints.architecture in KNOWN_PATTERNS:
            pattern = ArchitecturePattern(
                type=hints.architecture,
                confidence=Confidence.LOW,
                indicators=[f"hint: {hints.architecture}"],
            )
        else:
            pattern = ArchitecturePattern()

        pattern.layer_structure = layer_structure(analyses)
        pattern.feature_structure = feature_structure(analyses)
        self.logger.debug(
            "Architecture candidates: %s -> %s",
            [match.type for match in matches] or ["none"],
            pattern.type,
        )
        return pattern


def layer_structure(analyses: Sequence[DirectoryAnalysis]) -> Optional[Dict[str, List[str]]]:
    """Map each clean-architecture layer to the directories named after it."""
    layers: Dict[str, List[str]] = {}
    for layer in CLEAN_LAYERS:
        paths = sorted(item.path for item in analyses if basename(item.path).lower() == layer)
        if paths:
            layers[layer] = paths
    return layers or None


def feature_structure(analyses: Sequence[DirectoryAnalysis]) -> Optional[Dict[str, List[str]]]:
    """List feature directories and, when present, shared directories."""
    roots = {item.path for item in analyses if basename(item.path).lower() in FEATURE_ROOTS}
    if not roots:
        return None
    structure: Dict[str, List[str]] = {
        "features": sorted(item.path for item in analyses if parent_directory(item.path) in roots)
    }
    shared = sorted(item.path for item in analyses if basename(item.path).lower() in SHARED_ROOTS)
    if shared:
        structure["shared"] = shared
    return structure


__all__ = [
    "ArchitecturePatternDetector",
    "KNOWN_PATTERNS",
    "feature_structure",
    "layer_structure",
]
