"""Fingerprinting pipeline: classify, aggregate, infer purposes, detect patterns."""

from __future__ import annotations

import os
from collections import defaultdict
from concurrent.futures import Executor, ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .analyzers import Extractor, ProjectView, discover_extractors
from .analyzers.aggregation import DirectoryAggregator, primary_categories
from .analyzers.architecture import ArchitecturePatternDetector
from .analyzers.colocation import detect_co_location
from .analyzers.file_types import FileTypeClassifier
from .analyzers.naming import detect_naming_pattern
from .analyzers.purpose import DirectoryPurposeEngine, LocalResolution, PurposeOutcome
from .analyzers.versioning import identify_version
from .logging import get_logger, log_run_summary
from .models import (
    DirectoryAnalysis,
    DirectoryHistogram,
    FingerprintResult,
    ModuleDescriptor,
    ModuleHierarchy,
    NamingConvention,
    ProjectHints,
    VersionIsolation,
)
from .paths import base_stem, basename, normalize_path, parent_directory, split_segments

_T = TypeVar("_T")
_R = TypeVar("_R")

_INDEX_STEMS = frozenset({"index", "__init__"})


def default_max_workers() -> int:
    return min(8, os.cpu_count() or 1)


class StructureFingerprinter:
    """Runs the full fingerprint over a pre-filtered list of file paths."""

    def __init__(
        self,
        *,
        classifier: FileTypeClassifier | None = None,
        aggregator: DirectoryAggregator | None = None,
        detector: ArchitecturePatternDetector | None = None,
        extractors: Optional[Iterable[Extractor]] = None,
        max_workers: int | None = None,
    ) -> None:
        self.classifier = classifier or FileTypeClassifier()
        self.aggregator = aggregator or DirectoryAggregator()
        self.detector = detector or ArchitecturePatternDetector()
        self.extractors = list(extractors) if extractors is not None else discover_extractors()
        self.max_workers = max(1, max_workers) if max_workers is not None else default_max_workers()
        self.logger = get_logger("pipeline")

    def run(
        self,
        paths: Iterable[str],
        modules: Optional[Sequence[ModuleDescriptor]] = None,
        hints: ProjectHints | None = None,
        root: str | None = None,
    ) -> FingerprintResult:
        """Fingerprint ``paths`` and return the aggregate result."""
        files, skipped = self._normalise(paths, root)
        self.logger.debug("Accepted %d files, skipped %d", len(files), len(skipped))

        if self.max_workers == 1:
            return self._run(files, skipped, modules or (), hints, root, _serial_map)
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="structmap") as executor:
            return self._run(files, skipped, modules or (), hints, root, _executor_map(executor))

    def _run(
        self,
        files: List[str],
        skipped: List[str],
        modules: Sequence[ModuleDescriptor],
        hints: ProjectHints | None,
        root: str | None,
        fork: Callable[[Callable[[_T], _R], Sequence[_T]], List[_R]],
    ) -> FingerprintResult:
        classifications = fork(self.classifier.classify, files)
        histograms = self.aggregator.aggregate(classifications)
        directories = list(histograms)
        primaries = {directory: primary_categories(histograms[directory]) for directory in directories}

        siblings = _sibling_names(directories)
        engine = DirectoryPurposeEngine(hints)
        resolved = fork(
            lambda directory: engine.resolve_local(
                directory, histograms[directory], primaries[directory], siblings[directory]
            ),
            directories,
        )
        local_index: Dict[str, LocalResolution] = dict(zip(directories, resolved))

        def _finalize(directory: str) -> DirectoryAnalysis:
            parent = local_index.get(parent_directory(directory))
            parent_outcome: Optional[PurposeOutcome] = parent.outcome if parent is not None else None
            outcome = engine.finalize(local_index[directory], parent_outcome)
            return _build_analysis(directory, histograms[directory], primaries[directory], outcome)

        analyses = fork(_finalize, directories)
        _link(analyses)
        unattributed = self._attribute_modules(analyses, files, modules, root)

        pattern = self.detector.detect(analyses, files, hints)
        view = ProjectView(files=tuple(files), classifications=tuple(classifications), histograms=histograms)
        outputs = {extractor.name: extractor.extract(view) for extractor in self.extractors}

        result = FingerprintResult(
            file_classifications=classifications,
            directory_analyses=analyses,
            architecture_pattern=pattern,
            naming_convention=outputs.pop("naming", None) or NamingConvention(),
            version_isolation=outputs.pop("versioning", None) or VersionIsolation(),
            module_hierarchy=outputs.pop("hierarchy", None) or ModuleHierarchy(),
            skipped_paths=skipped,
            unattributed_modules=unattributed,
            extensions=outputs,
        )
        log_run_summary(self.logger, result)
        return result

    def _normalise(self, paths: Iterable[str], root: str | None) -> Tuple[List[str], List[str]]:
        accepted: set[str] = set()
        skipped: List[str] = []
        for raw in paths:
            normalised = normalize_path(raw, root)
            if normalised is None:
                self.logger.warning("Skipping malformed path: %r", raw)
                skipped.append(str(raw))
                continue
            accepted.add(normalised)
        return sorted(accepted), skipped

    def _attribute_modules(
        self,
        analyses: Sequence[DirectoryAnalysis],
        files: Sequence[str],
        modules: Sequence[ModuleDescriptor],
        root: str | None,
    ) -> List[str]:
        """Set ``module`` on each analysis by longest whole-segment prefix."""
        resolved: List[Tuple[str, str]] = []
        unattributed: List[str] = []
        for module in modules:
            path = normalize_path(module.path, root)
            if path is None or not any(_within(file, path) for file in files):
                self.logger.warning("Module %s (%s) matches no files", module.name, module.path)
                unattributed.append(module.name)
                continue
            resolved.append((path, module.name))

        # Longest path first so the deepest module wins.
        resolved.sort(key=lambda item: (-len(split_segments(item[0])), item[0]))
        for analysis in analyses:
            analysis.module = next(
                (name for path, name in resolved if _within(analysis.path, path)),
                None,
            )
        return unattributed


def _within(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(f"{prefix}/")


def _build_analysis(
    directory: str,
    histogram: DirectoryHistogram,
    primary: Sequence,
    outcome: PurposeOutcome,
) -> DirectoryAnalysis:
    return DirectoryAnalysis(
        path=directory,
        purpose=outcome.purpose,
        category=outcome.category,
        primary_categories=list(primary),
        naming_pattern=detect_naming_pattern(histogram.files),
        co_location=detect_co_location(histogram),
        has_index_file=any(base_stem(basename(path)).lower() in _INDEX_STEMS for path in histogram.files),
        depth=len(split_segments(directory)),
        file_count=histogram.total,
        purpose_stage=outcome.stage,
        version=identify_version(directory, histogram.files),
    )


def _sibling_names(directories: Sequence[str]) -> Dict[str, Tuple[str, ...]]:
    """Map each directory to the names of the other directories under the same parent."""
    grouped: Dict[str, List[str]] = defaultdict(list)
    for directory in directories:
        grouped[parent_directory(directory)].append(basename(directory))
    return {
        directory: tuple(name for name in grouped[parent_directory(directory)] if name != basename(directory))
        for directory in directories
    }


def _link(analyses: Sequence[DirectoryAnalysis]) -> None:
    index = {analysis.path: analysis for analysis in analyses}
    for analysis in analyses:
        parent = index.get(parent_directory(analysis.path))
        if parent is None:
            continue
        analysis.parent_directory = parent.path
        parent.child_directories.append(analysis.path)


def _serial_map(func: Callable[[_T], _R], items: Sequence[_T]) -> List[_R]:
    return [func(item) for item in items]


def _executor_map(executor: Executor) -> Callable[[Callable[[_T], _R], Sequence[_T]], List[_R]]:
    def _map(func: Callable[[_T], _R], items: Sequence[_T]) -> List[_R]:
        return list(executor.map(func, items))

    return _map


def analyze_project(
    paths: Iterable[str],
    modules: Optional[Sequence[ModuleDescriptor]] = None,
    hints: ProjectHints | None = None,
    root: str | None = None,
    max_workers: int | None = None,
) -> FingerprintResult:
    """Fingerprint a project from its list of file paths."""
    return StructureFingerprinter(max_workers=max_workers).run(paths, modules=modules, hints=hints, root=root)


__all__ = ["StructureFingerprinter", "analyze_project", "default_max_workers"]
