"""Core data models shared across structmap components."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class FileCategory(str, Enum):
    """Closed set of semantic roles a file can play. Declaration order matters."""

    PAGE = "page"
    COMPONENT = "component"
    HOOK = "hook"
    UTILITY = "utility"
    SERVICE = "service"
    TYPE = "type"
    ENUM = "enum"
    CONSTANT = "constant"
    CONFIG = "config"
    TEST = "test"
    STYLE = "style"
    LAYOUT = "layout"
    MIDDLEWARE = "middleware"
    MODEL = "model"
    REPOSITORY = "repository"
    CONTROLLER = "controller"
    ROUTE = "route"
    OTHER = "other"

    @classmethod
    def order(cls, category: "FileCategory") -> int:
        return _CATEGORY_ORDER[category]


_CATEGORY_ORDER = {category: index for index, category in enumerate(FileCategory)}


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _CONFIDENCE_RANK[self]


_CONFIDENCE_RANK = {Confidence.LOW: 0, Confidence.MEDIUM: 1, Confidence.HIGH: 2}


@dataclass(frozen=True)
class FileClassification:
    """Role assigned to a single file along with the rules that produced it."""

    path: str
    category: FileCategory
    confidence: Confidence
    evidence: Tuple[str, ...] = ()
    needs_deep_inspection: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "category": self.category.value,
            "confidence": self.confidence.value,
            "evidence": list(self.evidence),
            "needsDeepInspection": self.needs_deep_inspection,
        }


@dataclass(frozen=True)
class DirectoryHistogram:
    """Per-directory tally of direct file categories."""

    directory_path: str
    counts: Dict[FileCategory, int] = field(default_factory=dict)
    files: Tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def observed(self) -> List[FileCategory]:
        return [category for category in FileCategory if self.counts.get(category, 0) > 0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "directoryPath": self.directory_path,
            "counts": {
                category.value: self.counts[category]
                for category in FileCategory
                if self.counts.get(category, 0) > 0
            },
        }


@dataclass(frozen=True)
class CoLocation:
    styles: bool = False
    tests: bool = False
    types: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {"styles": self.styles, "tests": self.tests, "types": self.types}


@dataclass
class DirectoryAnalysis:
    """Purpose, category and structural signals inferred for a directory."""

    path: str
    purpose: str
    category: str
    primary_categories: List[FileCategory]
    naming_pattern: str
    co_location: CoLocation
    has_index_file: bool
    depth: int
    file_count: int = 0
    purpose_stage: int = 5
    module: Optional[str] = None
    version: Optional[str] = None
    parent_directory: Optional[str] = None
    child_directories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "purpose": self.purpose,
            "category": self.category,
            "primaryCategories": [category.value for category in self.primary_categories],
            "namingPattern": self.naming_pattern,
            "coLocation": self.co_location.to_dict(),
            "hasIndexFile": self.has_index_file,
            "depth": self.depth,
            "fileCount": self.file_count,
            "purposeStage": self.purpose_stage,
            "module": self.module,
            "version": self.version,
            "parentDirectory": self.parent_directory,
            "childDirectories": list(self.child_directories),
        }


@dataclass(frozen=True)
class PatternMatch:
    """A single architecture pattern whose indicators were satisfied."""

    type: str
    confidence: Confidence
    indicators: Tuple[str, ...] = ()


@dataclass
class ArchitecturePattern:
    """Best-fit architecture for the whole project."""

    type: str = "unknown"
    confidence: Confidence = Confidence.LOW
    indicators: List[str] = field(default_factory=list)
    layer_structure: Optional[Dict[str, List[str]]] = None
    feature_structure: Optional[Dict[str, List[str]]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "confidence": self.confidence.value,
            "indicators": list(self.indicators),
        }
        if self.layer_structure is not None:
            data["layerStructure"] = {key: list(value) for key, value in self.layer_structure.items()}
        if self.feature_structure is not None:
            data["featureStructure"] = {
                key: list(value) for key, value in self.feature_structure.items()
            }
        return data


@dataclass
class NamingConvention:
    pattern: str = "mixed"
    counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"pattern": self.pattern, "counts": dict(self.counts)}


@dataclass
class VersionIsolation:
    has_versioning: bool = False
    versions: List[str] = field(default_factory=list)
    pattern: str = "none"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasVersioning": self.has_versioning,
            "versions": list(self.versions),
            "pattern": self.pattern,
        }


@dataclass
class HierarchyLevel:
    level: int
    name: str
    type: str
    directories: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "name": self.name,
            "type": self.type,
            "directories": list(self.directories),
        }


@dataclass
class ModuleHierarchy:
    levels: List[HierarchyLevel] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"levels": [level.to_dict() for level in self.levels]}


@dataclass(frozen=True)
class ModuleDescriptor:
    """Named module rooted at a project-relative path."""

    name: str
    path: str


@dataclass(frozen=True)
class ProjectHints:
    """Optional caller-supplied facts about the project."""

    dependencies: Tuple[str, ...] = ()
    architecture: Optional[str] = None


@dataclass
class FingerprintResult:
    """Aggregate output of a single fingerprinting run."""

    file_classifications: List[FileClassification]
    directory_analyses: List[DirectoryAnalysis]
    architecture_pattern: ArchitecturePattern
    naming_convention: NamingConvention
    version_isolation: VersionIsolation
    module_hierarchy: ModuleHierarchy
    skipped_paths: List[str] = field(default_factory=list)
    unattributed_modules: List[str] = field(default_factory=list)
    extensions: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "fileClassifications": [item.to_dict() for item in self.file_classifications],
            "directoryAnalyses": [item.to_dict() for item in self.directory_analyses],
            "architecturePattern": self.architecture_pattern.to_dict(),
            "namingConvention": self.naming_convention.to_dict(),
            "versionIsolation": self.version_isolation.to_dict(),
            "moduleHierarchy": self.module_hierarchy.to_dict(),
            "skippedPaths": list(self.skipped_paths),
            "unattributedModules": list(self.unattributed_modules),
        }
        if self.extensions:
            # Plugin extractor output, keyed by entry point name.
            data["extensions"] = {
                name: value.to_dict() if hasattr(value, "to_dict") else value
                for name, value in self.extensions.items()
            }
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2)
