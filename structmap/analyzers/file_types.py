"""File type classifier: assigns each path a semantic role from its name and location."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..logging import get_logger
from ..models import Confidence, FileCategory, FileClassification
from ..paths import base_stem, basename, name_tokens, parent_directory, split_name, split_segments

_JSX_EXTENSIONS = frozenset({".tsx", ".jsx", ".vue", ".svelte"})
_SCRIPT_EXTENSIONS = frozenset({".ts", ".js", ".mjs", ".cjs", ".mts", ".cts", ".py"})
_CODE_EXTENSIONS = _SCRIPT_EXTENSIONS | frozenset(
    {".go", ".rb", ".java", ".kt", ".rs", ".php", ".cs", ".swift", ".dart", ".scala"}
)
_STYLE_EXTENSIONS = frozenset({".css", ".scss", ".sass", ".less", ".styl", ".pcss"})

_CONFIG_FILE_NAMES = frozenset(
    {
        "package.json",
        "package-lock.json",
        "pnpm-lock.yaml",
        "pnpm-workspace.yaml",
        "yarn.lock",
        "lerna.json",
        "nx.json",
        "turbo.json",
        "pyproject.toml",
        "setup.cfg",
        "requirements.txt",
        "pipfile",
        "tox.ini",
        "dockerfile",
        "docker-compose.yml",
        "docker-compose.yaml",
        "compose.yml",
        "compose.yaml",
        "makefile",
        "go.mod",
        "cargo.toml",
    }
)

_TEST_DIRS = frozenset({"__tests__", "__test__", "tests", "test", "spec", "specs"})
_PAGE_DIRS = frozenset({"pages", "app", "views", "screens"})
_COMPONENT_DIRS = frozenset({"components", "component", "ui"})

_HOOK_STEM = re.compile(r"^use(?:[A-Z0-9_]|$)")
_PASCAL = re.compile(r"^[A-Z][a-zA-Z0-9]+$")
_CAMEL_OR_LOWER = re.compile(r"^[a-z][a-zA-Z0-9]+$")
_KEBAB_OR_SNAKE = re.compile(r"^[a-z][a-z0-9]*(?:[-_][a-z0-9]+)+$")
_ENUM_STEM = re.compile(r"^[A-Z][a-zA-Z]*Enum$")


@dataclass(frozen=True)
class _PathFacts:
    path: str
    file_name: str
    lower_name: str
    stem: str
    base: str
    extension: str
    tokens: FrozenSet[str]
    ancestors: Tuple[str, ...]
    parent: str

    @property
    def is_jsx(self) -> bool:
        return self.extension in _JSX_EXTENSIONS

    @property
    def is_script(self) -> bool:
        return self.extension in _SCRIPT_EXTENSIONS

    def under(self, *names: str) -> bool:
        return any(ancestor in names for ancestor in self.ancestors)

    def named(self, *words: str) -> bool:
        return any(word in self.tokens for word in words)


def _facts(path: str) -> _PathFacts:
    file_name = basename(path)
    stem, extension = split_name(file_name)
    directory = parent_directory(path)
    ancestors = tuple(segment.lower() for segment in split_segments(directory))
    return _PathFacts(
        path=path,
        file_name=file_name,
        lower_name=file_name.lower(),
        stem=stem,
        base=base_stem(file_name),
        extension=extension,
        tokens=frozenset(name_tokens(stem)),
        ancestors=ancestors,
        parent=ancestors[-1] if ancestors else "",
    )


# Stage 1: fast-path rules -------------------------------------------------


def _is_test(facts: _PathFacts) -> bool:
    name = facts.lower_name
    if ".test." in name or ".spec." in name:
        return True
    if facts.extension == ".py" and (name.startswith("test_") or facts.stem.endswith("_test") or name == "conftest.py"):
        return True
    if facts.extension == ".go" and facts.stem.endswith("_test"):
        return True
    return facts.under(*_TEST_DIRS)


def _is_style(facts: _PathFacts) -> bool:
    return facts.extension in _STYLE_EXTENSIONS


def _is_config(facts: _PathFacts) -> bool:
    name = facts.lower_name
    if name.startswith("."):
        return True
    if "config." in name:
        return True
    if name in _CONFIG_FILE_NAMES:
        return True
    return facts.under("config", "configs", "configuration")


def _is_type(facts: _PathFacts) -> bool:
    if facts.lower_name.endswith(".d.ts"):
        return True
    if not facts.is_script:
        return False
    if facts.named("type", "types", "interface", "interfaces", "typings"):
        return True
    return facts.under("types", "@types", "interfaces", "typings")


def _is_enum(facts: _PathFacts) -> bool:
    if not facts.is_script:
        return False
    return facts.named("enum", "enums") or bool(_ENUM_STEM.match(facts.stem))


def _is_constant(facts: _PathFacts) -> bool:
    if not facts.is_script:
        return False
    if facts.named("constant", "constants", "const", "consts"):
        return True
    stem = facts.stem
    return any(char.isalpha() for char in stem) and stem.upper() == stem


def _is_page(facts: _PathFacts) -> bool:
    if not facts.is_jsx:
        return False
    if facts.stem.lower() == "page" or "Page" in facts.stem:
        return True
    for ancestor in reversed(facts.ancestors):
        if ancestor in _COMPONENT_DIRS:
            return False
        if ancestor in _PAGE_DIRS:
            return True
    return False


def _is_layout(facts: _PathFacts) -> bool:
    if not facts.is_jsx:
        return False
    return facts.stem.lower() == "layout" or "Layout" in facts.stem or facts.under("layouts")


def _is_component(facts: _PathFacts) -> bool:
    return facts.is_jsx


def _is_hook(facts: _PathFacts) -> bool:
    if not facts.is_script:
        return False
    return bool(_HOOK_STEM.match(facts.stem)) or facts.under("hooks", "composables")


def _is_route(facts: _PathFacts) -> bool:
    return facts.named("route", "routes", "router", "routers") or facts.under("routes", "routers")


def _is_middleware(facts: _PathFacts) -> bool:
    return facts.named("middleware", "middlewares") or facts.under("middleware", "middlewares")


def _is_controller(facts: _PathFacts) -> bool:
    return facts.named("controller", "controllers") or facts.under("controller", "controllers")


def _is_model(facts: _PathFacts) -> bool:
    return facts.named("model", "models") or facts.under("model", "models", "entities")


def _is_repository(facts: _PathFacts) -> bool:
    return facts.named("repository", "repositories", "repo") or facts.under("repository", "repositories")


def _is_service(facts: _PathFacts) -> bool:
    return facts.named("service", "services", "api") or facts.under("services", "service", "api", "apis")


def _is_utility(facts: _PathFacts) -> bool:
    return facts.under("utils", "util", "utilities", "helpers", "lib")


_Rule = Tuple[str, FileCategory, Callable[[_PathFacts], bool]]

FAST_PATH_RULES: Tuple[_Rule, ...] = (
    ("test-marker", FileCategory.TEST, _is_test),
    ("style-extension", FileCategory.STYLE, _is_style),
    ("config-file", FileCategory.CONFIG, _is_config),
    ("type-definition", FileCategory.TYPE, _is_type),
    ("enum-name", FileCategory.ENUM, _is_enum),
    ("constant-name", FileCategory.CONSTANT, _is_constant),
    ("page-file", FileCategory.PAGE, _is_page),
    ("layout-file", FileCategory.LAYOUT, _is_layout),
    ("component-extension", FileCategory.COMPONENT, _is_component),
    ("hook-name", FileCategory.HOOK, _is_hook),
    ("route-name", FileCategory.ROUTE, _is_route),
    ("middleware-name", FileCategory.MIDDLEWARE, _is_middleware),
    ("controller-name", FileCategory.CONTROLLER, _is_controller),
    ("model-name", FileCategory.MODEL, _is_model),
    ("repository-name", FileCategory.REPOSITORY, _is_repository),
    ("service-name", FileCategory.SERVICE, _is_service),
    ("utility-location", FileCategory.UTILITY, _is_utility),
)

# Stage 3: immediate parent directory keywords, matched as token prefixes.
DIRECTORY_KEYWORDS: Tuple[Tuple[Tuple[str, ...], FileCategory], ...] = (
    (("component",), FileCategory.COMPONENT),
    (("page", "view"), FileCategory.PAGE),
    (("hook",), FileCategory.HOOK),
    (("util", "helper"), FileCategory.UTILITY),
    (("service", "api"), FileCategory.SERVICE),
    (("type", "interface"), FileCategory.TYPE),
    (("model", "entit"), FileCategory.MODEL),
    (("controller",), FileCategory.CONTROLLER),
    (("repositor", "repo"), FileCategory.REPOSITORY),
    (("route",), FileCategory.ROUTE),
    (("middleware",), FileCategory.MIDDLEWARE),
    (("layout",), FileCategory.LAYOUT),
)


@dataclass(frozen=True)
class _StageResult:
    category: FileCategory
    confidence: Confidence
    rule: str


class FileTypeClassifier:
    """Three-stage deterministic cascade over a file path."""

    def __init__(self) -> None:
        self.logger = get_logger("file_types")

    def classify(self, path: str) -> FileClassification:
        """Return the classification for ``path``; never raises."""
        if not isinstance(path, str) or not path.strip():
            return _unresolved(str(path) if path is not None else "")

        facts = _facts(path.replace("\\", "/"))

        fast = self._fast_path(facts)
        if fast is not None:
            return FileClassification(
                path=path,
                category=fast.category,
                confidence=fast.confidence,
                evidence=(fast.rule,),
            )

        naming = self._naming_pattern(facts)
        structure = self._directory_structure(facts)
        evidence = tuple(result.rule for result in (naming, structure) if result is not None)

        if structure is not None:
            return FileClassification(
                path=path,
                category=structure.category,
                confidence=structure.confidence,
                evidence=evidence,
            )
        if naming is not None:
            return FileClassification(
                path=path,
                category=naming.category,
                confidence=naming.confidence,
                evidence=evidence,
            )

        self.logger.debug("No rule matched %s; flagging for deep inspection", path)
        return _unresolved(path)

    def classify_many(self, paths: Iterable[str]) -> List[FileClassification]:
        return [self.classify(path) for path in paths]

    @staticmethod
    def _fast_path(facts: _PathFacts) -> Optional[_StageResult]:
        for name, category, predicate in FAST_PATH_RULES:
            if predicate(facts):
                return _StageResult(category, Confidence.HIGH, f"fast-path:{name}")
        return None

    @staticmethod
    def _naming_pattern(facts: _PathFacts) -> Optional[_StageResult]:
        stem = facts.base
        extension = facts.extension
        if _PASCAL.match(stem):
            if extension in _JSX_EXTENSIONS:
                return _StageResult(FileCategory.COMPONENT, Confidence.MEDIUM, "naming:pascal-case-component")
            if extension in _SCRIPT_EXTENSIONS:
                return _StageResult(FileCategory.TYPE, Confidence.MEDIUM, "naming:pascal-case-type")
            return None
        if _CAMEL_OR_LOWER.match(stem):
            if _HOOK_STEM.match(stem):
                return _StageResult(FileCategory.HOOK, Confidence.MEDIUM, "naming:use-prefix-hook")
            if extension in _CODE_EXTENSIONS:
                return _StageResult(FileCategory.UTILITY, Confidence.MEDIUM, "naming:camel-case-utility")
            return None
        if _KEBAB_OR_SNAKE.match(stem):
            if extension in _JSX_EXTENSIONS:
                return _StageResult(FileCategory.COMPONENT, Confidence.MEDIUM, "naming:kebab-case-component")
            if extension in _CODE_EXTENSIONS:
                return _StageResult(FileCategory.UTILITY, Confidence.MEDIUM, "naming:kebab-case-utility")
        return None

    @staticmethod
    def _directory_structure(facts: _PathFacts) -> Optional[_StageResult]:
        if not facts.parent:
            return None
        tokens = name_tokens(facts.parent)
        for prefixes, category in DIRECTORY_KEYWORDS:
            if any(token.startswith(prefix) for token in tokens for prefix in prefixes):
                return _StageResult(category, Confidence.HIGH, f"directory:{category.value}")
        return None


def _unresolved(path: str) -> FileClassification:
    return FileClassification(
        path=path,
        category=FileCategory.OTHER,
        confidence=Confidence.LOW,
        evidence=("unresolved",),
        needs_deep_inspection=True,
    )


def classify_file(path: str) -> FileClassification:
    """Classify a single path with a fresh classifier."""
    return FileTypeClassifier().classify(path)


def classify_files(paths: Sequence[str]) -> List[FileClassification]:
    return FileTypeClassifier().classify_many(paths)


__all__ = [
    "DIRECTORY_KEYWORDS",
    "FAST_PATH_RULES",
    "FileTypeClassifier",
    "classify_file",
    "classify_files",
]
