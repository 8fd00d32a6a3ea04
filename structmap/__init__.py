"""Structural fingerprinting for software projects."""

from .models import (
    ArchitecturePattern,
    Confidence,
    DirectoryAnalysis,
    FileCategory,
    FileClassification,
    FingerprintResult,
    ModuleDescriptor,
    ProjectHints,
)
from .pipeline import StructureFingerprinter, analyze_project

__all__ = [
    "ArchitecturePattern",
    "Confidence",
    "DirectoryAnalysis",
    "FileCategory",
    "FileClassification",
    "FingerprintResult",
    "ModuleDescriptor",
    "ProjectHints",
    "StructureFingerprinter",
    "analyze_project",
]
