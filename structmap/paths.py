"""Path-string helpers shared by the classifiers and extractors.

Everything here works on POSIX-style relative path strings and never touches
the filesystem.
"""

from __future__ import annotations

import posixpath
import re
from typing import List, Optional, Tuple

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_TOKEN_SPLIT = re.compile(r"[-_.\s]+")


def normalize_path(path: str, root: str | None = None) -> Optional[str]:
    """Return a clean project-relative POSIX path, or None when malformed.

    Absolute paths are made relative to ``root``; paths outside it, paths that
    climb above the project with ``..`` and empty paths are rejected.
    """
    if not isinstance(path, str):
        return None
    candidate = path.strip().replace("\\", "/")
    if not candidate:
        return None

    if root is not None:
        base = posixpath.normpath(root.strip().replace("\\", "/"))
        if candidate.startswith("/") or _has_drive(candidate):
            normalised = posixpath.normpath(candidate)
            if normalised == base:
                return None
            prefix = base.rstrip("/") + "/"
            if not normalised.startswith(prefix):
                return None
            candidate = normalised[len(prefix):]
    elif candidate.startswith("/") or _has_drive(candidate):
        return None

    normalised = posixpath.normpath(candidate)
    if normalised in {".", ""} or normalised == ".." or normalised.startswith("../"):
        return None
    return normalised


def _has_drive(path: str) -> bool:
    return len(path) > 1 and path[1] == ":" and path[0].isalpha()


def split_segments(path: str) -> List[str]:
    return [segment for segment in path.split("/") if segment and segment != "."]


def parent_directory(path: str) -> str:
    """Return the parent directory path, or an empty string for top-level entries."""
    parent = posixpath.dirname(path)
    return "" if parent == "." else parent


def ancestors(directory: str) -> List[str]:
    """Return every ancestor of ``directory`` including itself, shallowest first."""
    parts = split_segments(directory)
    return ["/".join(parts[: index + 1]) for index in range(len(parts))]


def basename(path: str) -> str:
    return posixpath.basename(path)


def split_name(file_name: str) -> Tuple[str, str]:
    """Split ``file_name`` into (stem before the last dot, lowercased extension)."""
    if file_name.startswith(".") and file_name.count(".") == 1:
        return file_name, ""
    stem, extension = posixpath.splitext(file_name)
    return stem, extension.lower()


def base_stem(file_name: str) -> str:
    """Return the name before its first dot (``Button.test.tsx`` -> ``Button``)."""
    if file_name.startswith("."):
        return ""
    return file_name.split(".", 1)[0]


def name_tokens(name: str) -> List[str]:
    """Split a directory or file name into lowercase word tokens."""
    tokens: List[str] = []
    for chunk in _TOKEN_SPLIT.split(name):
        if not chunk:
            continue
        tokens.extend(part.lower() for part in _CAMEL_BOUNDARY.split(chunk) if part)
    return tokens


__all__ = [
    "ancestors",
    "base_stem",
    "basename",
    "name_tokens",
    "normalize_path",
    "parent_directory",
    "split_name",
    "split_segments",
]
