"""Tests for the auxiliary structural extractors."""

from __future__ import annotations

import pytest

from structmap.analyzers.aggregation import DirectoryAggregator
from structmap.analyzers.base import ProjectView
from structmap.analyzers.colocation import detect_co_location
from structmap.analyzers.file_types import classify_files
from structmap.analyzers.hierarchy import ModuleHierarchyExtractor, infer_level_type
from structmap.analyzers.naming import NamingConventionExtractor, casing_of, detect_naming_pattern
from structmap.analyzers.versioning import VersionIsolationExtractor, identify_version
from structmap.models import CoLocation, DirectoryHistogram, FileCategory


def _view(paths):
    classifications = classify_files(paths)
    return ProjectView(
        files=tuple(paths),
        classifications=tuple(classifications),
        histograms=DirectoryAggregator().aggregate(classifications),
    )


@pytest.mark.parametrize(
    ("stem", "casing"),
    [
        ("UserCard", "PascalCase"),
        ("Button", "PascalCase"),
        ("formatDate", "camelCase"),
        ("date-utils", "kebab-case"),
        ("date_utils", "snake_case"),
        ("index", None),
        ("API", None),
    ],
)
def test_casing_of(stem: str, casing) -> None:
    assert casing_of(stem) == casing


def test_naming_pattern_needs_more_than_sixty_percent() -> None:
    dominant = ["a/UserCard.tsx", "a/Button.tsx", "a/Modal.tsx", "a/formatDate.ts", "a/index.ts"]
    split = ["a/UserCard.tsx", "a/Button.tsx", "a/formatDate.ts", "a/date-utils.ts", "a/index.ts"]

    assert detect_naming_pattern(dominant) == "PascalCase"
    assert detect_naming_pattern(split) == "mixed"


def test_naming_pattern_uses_text_before_first_dot_and_skips_dotfiles() -> None:
    paths = ["a/Button.test.tsx", "a/Button.module.css", "a/.eslintrc.json"]

    assert detect_naming_pattern(paths) == "PascalCase"


def test_naming_extractor_reports_counts() -> None:
    convention = NamingConventionExtractor().extract(_view(["src/user_service.py", "src/order_repo.py", "src/main.py"]))

    assert convention.pattern == "snake_case"
    assert convention.counts == {"snake_case": 2}


def test_co_location_requires_a_primary_file() -> None:
    with_component = DirectoryHistogram(
        directory_path="a",
        counts={FileCategory.COMPONENT: 1, FileCategory.STYLE: 1, FileCategory.TEST: 1},
    )
    only_companions = DirectoryHistogram(
        directory_path="b",
        counts={FileCategory.STYLE: 2, FileCategory.TYPE: 1},
    )

    assert detect_co_location(with_component) == CoLocation(styles=True, tests=True, types=False)
    assert detect_co_location(only_companions) == CoLocation()


@pytest.mark.parametrize(
    ("directory", "files", "version"),
    [
        ("src/api/v2/users", (), "v2"),
        ("src/legacy-checkout", (), "legacy"),
        ("src/checkout_new", (), "new"),
        ("src/api", ("src/api/client-v3.ts",), "v3"),
        ("src/api", ("src/api/client.ts",), None),
        ("src/renewal", (), None),
    ],
)
def test_identify_version(directory: str, files, version) -> None:
    assert identify_version(directory, files) == version


def test_version_isolation_prefers_directory_mechanism() -> None:
    view = _view(["src/api/v1/users.ts", "src/legacy-cart/Cart.tsx", "src/checkout-new/Checkout.tsx"])

    isolation = VersionIsolationExtractor().extract(view)

    assert isolation.has_versioning is True
    assert isolation.pattern == "directory"
    assert isolation.versions == ["v1", "new", "legacy"]


def test_version_isolation_prefix_beats_suffix() -> None:
    view = _view(["src/old-cart/Cart.tsx", "src/checkout_v2/Checkout.tsx"])

    isolation = VersionIsolationExtractor().extract(view)

    assert isolation.pattern == "prefix"


def test_no_versioning() -> None:
    isolation = VersionIsolationExtractor().extract(_view(["src/app.ts"]))

    assert isolation.has_versioning is False
    assert isolation.versions == []
    assert isolation.pattern == "none"


def test_hierarchy_levels_by_depth() -> None:
    view = _view(
        [
            "markets/ph/loan/apply.ts",
            "markets/th/loan/apply.ts",
            "markets/sg/insurance/quote.ts",
        ]
    )

    hierarchy = ModuleHierarchyExtractor().extract(view)

    assert [(level.level, level.name, level.type) for level in hierarchy.levels] == [
        (1, "Level 1", "other"),
        (2, "Level 2", "country"),
        (3, "Level 3", "other"),
    ]
    assert hierarchy.levels[1].directories == ["markets/ph", "markets/sg", "markets/th"]


@pytest.mark.parametrize(
    ("directories", "depth", "expected"),
    [
        (["app-ph", "app-th", "shared"], 1, "country"),
        (["ph", "docs", "scripts"], 1, "other"),
        (["asia-pacific"], 1, "region"),
        (["src/features"], 2, "feature"),
        (["src/payment-service"], 2, "module"),
        (["a/b/c/payment-service"], 4, "other"),
    ],
)
def test_infer_level_type(directories, depth: int, expected: str) -> None:
    assert infer_level_type(directories, depth) == expected
