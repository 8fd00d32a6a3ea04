"""Directory purpose engine.

Purposes are inferred by a five-stage cascade of pure functions tried in
order, each returning a :class:`PurposeOutcome` or ``None``:

1. dependency-anchored tagging (declared third-party package families)
2. structural keyword matching on the directory name; source roots such as
   ``src`` are recognised here and left without a functional label
3. sibling project folders, then business qualifier plus dominant file category
4. composition with the parent's bare structural label
5. fallback to ``其他``

Stages 1-3 only look at the directory itself (:meth:`resolve_local`), stages
4-5 also need the parent's local outcome (:meth:`finalize`). Splitting the
cascade this way lets the pipeline run each half over all directories in
parallel with a barrier in between.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import DirectoryHistogram, FileCategory, ProjectHints
from ..paths import base_stem, basename, name_tokens, split_segments
from .keywords import (
    CATEGORY_PURPOSES,
    CONTAINER_CATEGORY,
    CONTAINER_DIRECTORIES,
    DEPENDENCY_FAMILIES,
    FALLBACK_CATEGORY,
    FALLBACK_PURPOSE,
    PROJECT_CATEGORY,
    PROJECT_COUNTRY_CODES,
    PROJECT_SUFFIX,
    STRUCTURAL_KEYWORDS,
    DependencyFamily,
    StructuralLabel,
    lookup_business,
)

_PASCAL = re.compile(r"^[A-Z][a-zA-Z0-9]+$")
_ASCII_ALNUM = re.compile(r"[A-Za-z0-9]")
_RELATED = "相关"
_PROJECT_PREFIX = re.compile(r"^([a-z]+(?:-[a-z]+)+)-")


@dataclass(frozen=True)
class PurposeOutcome:
    """Label produced by one stage of the cascade."""

    purpose: str
    category: str
    stage: int
    qualifier: Optional[str] = None
    bare: bool = False


@dataclass(frozen=True)
class PurposeContext:
    path: str
    name: str
    lower: str
    segments: Tuple[str, ...]
    histogram: DirectoryHistogram
    primary: Tuple[FileCategory, ...]
    qualifier: Optional[str]
    families: Tuple[DependencyFamily, ...]
    dependencies: frozenset[str]
    siblings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class LocalResolution:
    context: PurposeContext
    outcome: Optional[PurposeOutcome]


@dataclass(frozen=True)
class _FinalizeInput:
    context: PurposeContext
    local: Optional[PurposeOutcome]
    parent: Optional[PurposeOutcome]


def join_label(left: str, right: str) -> str:
    """Concatenate label parts, spacing only where CJK text meets ASCII words."""
    if not left:
        return right
    if not right:
        return left
    left_ascii = bool(_ASCII_ALNUM.match(left[-1]))
    right_ascii = bool(_ASCII_ALNUM.match(right[0]))
    left_cjk = not left[-1].isascii()
    right_cjk = not right[0].isascii()
    if (left_ascii and right_cjk) or (left_cjk and right_ascii):
        return f"{left} {right}"
    return f"{left}{right}"


def compose_related(qualifier: str, label: str) -> str:
    """Build ``<qualifier>相关<label>``."""
    return join_label(join_label(qualifier, _RELATED), label)


# Stage 1 ------------------------------------------------------------------


def _family_matches(name: str, family: DependencyFamily, dependencies: frozenset[str]) -> bool:
    for keyword in family.keywords:
        if (
            name == keyword
            or name == f"{keyword}s"
            or name.startswith(f"{keyword}-")
            or name.endswith(f"-{keyword}")
            or f"-{keyword}-" in name
        ):
            return True
    for package in family.packages:
        if package not in dependencies:
            continue
        base = package.rsplit("/", 1)[-1]
        if name in {package, base, package.lstrip("@").replace("/", "-")}:
            return True
    return False


def _match_family(name: str, context: PurposeContext) -> Optional[DependencyFamily]:
    for family in context.families:
        if _family_matches(name, family, context.dependencies):
            return family
    return None


def dependency_stage(context: PurposeContext) -> Optional[PurposeOutcome]:
    if not context.families:
        return None
    family = _match_family(context.lower, context)
    if family is not None:
        return PurposeOutcome(join_label(family.label, _RELATED), family.category, 1)
    for ancestor in reversed(context.segments[:-1]):
        family = _match_family(ancestor, context)
        if family is not None:
            purpose = f"{join_label(family.label, _RELATED)}子模块（{context.name}）"
            return PurposeOutcome(purpose, family.category, 1)
    return None


# Stage 2 ------------------------------------------------------------------


def _structural_label(name: str) -> Optional[StructuralLabel]:
    label = STRUCTURAL_KEYWORDS.get(name)
    if label is not None:
        return label
    for part in re.split(r"[-_]+", name):
        if part and part in STRUCTURAL_KEYWORDS:
            return STRUCTURAL_KEYWORDS[part]
    return None


def container_stage(context: PurposeContext) -> Optional[PurposeOutcome]:
    if context.lower not in CONTAINER_DIRECTORIES:
        return None
    return PurposeOutcome("", CONTAINER_CATEGORY, 2)


def keyword_stage(context: PurposeContext) -> Optional[PurposeOutcome]:
    label = _structural_label(context.lower)
    if label is None:
        return None
    return PurposeOutcome(label.purpose, label.category, 2, qualifier=context.qualifier, bare=True)


# Stage 3 ------------------------------------------------------------------


def _is_project_family(siblings: Sequence[str]) -> bool:
    """True when sibling folder names look like parallel projects (region or variant builds)."""
    if len(siblings) < 2:
        return False
    half = len(siblings) * 0.5
    names = [sibling.lower() for sibling in siblings]

    regional = [name for name in names if any(name.endswith(f"-{code}") for code in PROJECT_COUNTRY_CODES)]
    if len(regional) >= half:
        return True

    prefixes = Counter(match.group(1) for match in map(_PROJECT_PREFIX.match, names) if match)
    if any(count >= half for count in prefixes.values()):
        return True

    hyphenated = [name for name in names if "-" in name]
    return len(hyphenated) >= 2 and len(hyphenated) >= half


def sibling_project_stage(context: PurposeContext) -> Optional[PurposeOutcome]:
    if not _is_project_family(context.siblings):
        return None
    return PurposeOutcome(join_label(context.name, PROJECT_SUFFIX), PROJECT_CATEGORY, 3)


def business_stage(context: PurposeContext) -> Optional[PurposeOutcome]:
    label: Optional[str] = None
    category = FALLBACK_CATEGORY
    for candidate in context.primary:
        label = CATEGORY_PURPOSES.get(candidate)
        if label:
            category = candidate.value
            break

    if label and context.qualifier:
        return PurposeOutcome(compose_related(context.qualifier, label), category, 3, qualifier=context.qualifier)
    if label:
        return PurposeOutcome(label, category, 3)
    if context.qualifier:
        return PurposeOutcome(
            compose_related(context.qualifier, "模块"), FALLBACK_CATEGORY, 3, qualifier=context.qualifier
        )
    return None


# Stage 4 ------------------------------------------------------------------


def _is_unit_folder(context: PurposeContext) -> bool:
    if _PASCAL.match(context.name):
        return True
    return any(base_stem(basename(path)) == context.name for path in context.histogram.files)


def parent_stage(item: _FinalizeInput) -> Optional[PurposeOutcome]:
    parent = item.parent
    if parent is None or parent.stage != 2 or not parent.bare:
        return None
    if item.local is not None and item.local.stage != 3:
        return None

    context = item.context
    if context.qualifier:
        return PurposeOutcome(
            compose_related(context.qualifier, parent.purpose), parent.category, 4, qualifier=context.qualifier
        )
    if _structural_label(context.lower) is not None:
        return None
    if _is_unit_folder(context):
        return PurposeOutcome(parent.purpose, parent.category, 4)
    return PurposeOutcome(compose_related(context.name, parent.purpose), parent.category, 4)


def local_stage(item: _FinalizeInput) -> Optional[PurposeOutcome]:
    return item.local


# Stage 5 ------------------------------------------------------------------


def fallback_stage(item: _FinalizeInput) -> PurposeOutcome:
    return PurposeOutcome(FALLBACK_PURPOSE, FALLBACK_CATEGORY, 5)


LOCAL_STAGES: Tuple[Callable[[PurposeContext], Optional[PurposeOutcome]], ...] = (
    container_stage,
    dependency_stage,
    keyword_stage,
    sibling_project_stage,
    business_stage,
)

FINAL_STAGES: Tuple[Callable[[_FinalizeInput], Optional[PurposeOutcome]], ...] = (
    parent_stage,
    local_stage,
)


def _first(stages: Iterable[Callable], argument) -> Optional[PurposeOutcome]:
    for stage in stages:
        outcome = stage(argument)
        if outcome is not None:
            return outcome
    return None


class DirectoryPurposeEngine:
    """Infers a purpose label and category for a directory."""

    def __init__(self, hints: ProjectHints | None = None) -> None:
        hints = hints or ProjectHints()
        self._dependencies = frozenset(name.strip().lower() for name in hints.dependencies if name.strip())
        self._families = tuple(
            family
            for family in DEPENDENCY_FAMILIES
            if any(package in self._dependencies for package in family.packages)
        )
        self.logger = get_logger("purpose")

    def context(
        self,
        directory: str,
        histogram: DirectoryHistogram,
        primary: Sequence[FileCategory],
        siblings: Sequence[str] = (),
    ) -> PurposeContext:
        segments = tuple(segment.lower() for segment in split_segments(directory))
        name = basename(directory)
        return PurposeContext(
            path=directory,
            name=name,
            lower=name.lower(),
            segments=segments,
            histogram=histogram,
            primary=tuple(primary),
            qualifier=_business_qualifier(name),
            families=self._families,
            dependencies=self._dependencies,
            siblings=tuple(siblings),
        )

    def resolve_local(
        self,
        directory: str,
        histogram: DirectoryHistogram,
        primary: Sequence[FileCategory],
        siblings: Sequence[str] = (),
    ) -> LocalResolution:
        """Run stages 1-3, which depend only on the directory and the names beside it."""
        context = self.context(directory, histogram, primary, siblings)
        return LocalResolution(context=context, outcome=_first(LOCAL_STAGES, context))

    def finalize(self, local: LocalResolution, parent: Optional[PurposeOutcome] = None) -> PurposeOutcome:
        """Run stages 4-5 given the parent's local outcome."""
        item = _FinalizeInput(local.context, local.outcome, parent)
        outcome = _first(FINAL_STAGES, item) or fallback_stage(item)
        self.logger.debug("%s -> %s (stage %d)", local.context.path, outcome.purpose, outcome.stage)
        return outcome

    def infer(
        self,
        directory: str,
        histogram: DirectoryHistogram,
        primary: Sequence[FileCategory],
        parent: Optional[PurposeOutcome] = None,
        siblings: Sequence[str] = (),
    ) -> PurposeOutcome:
        return self.finalize(self.resolve_local(directory, histogram, primary, siblings), parent)


def _business_qualifier(name: str) -> Optional[str]:
    for token in name_tokens(name):
        qualifier = lookup_business(token)
        if qualifier:
            return qualifier
    return None


def infer_purpose(
    directory: str,
    histogram: DirectoryHistogram,
    primary: Sequence[FileCategory],
    parent_purpose: Optional[PurposeOutcome] = None,
    hints: ProjectHints | None = None,
) -> Tuple[str, str]:
    """Return ``(purpose, category)`` for a directory."""
    outcome = DirectoryPurposeEngine(hints).infer(directory, histogram, primary, parent_purpose)
    return outcome.purpose, outcome.category


__all__ = [
    "DirectoryPurposeEngine",
    "LocalResolution",
    "PurposeOutcome",
    "compose_related",
    "infer_purpose",
    "join_label",
]
