"""Tests for the five-stage directory purpose cascade."""

from __future__ import annotations

from typing import Dict, Sequence

import pytest

from structmap.analyzers.aggregation import primary_categories
from structmap.analyzers.purpose import (
    DirectoryPurposeEngine,
    PurposeOutcome,
    infer_purpose,
    join_label,
)
from structmap.models import DirectoryHistogram, FileCategory, ProjectHints


def _histogram(path: str, counts: Dict[FileCategory, int] | None = None, files: Sequence[str] = ()) -> DirectoryHistogram:
    return DirectoryHistogram(directory_path=path, counts=dict(counts or {}), files=tuple(files))


def _infer(engine: DirectoryPurposeEngine, path: str, histogram: DirectoryHistogram, parent: PurposeOutcome | None = None):
    return engine.infer(path, histogram, primary_categories(histogram), parent)


def _local(engine: DirectoryPurposeEngine, path: str, histogram: DirectoryHistogram | None = None):
    histogram = histogram or _histogram(path)
    return engine.resolve_local(path, histogram, primary_categories(histogram)).outcome


@pytest.mark.parametrize(
    ("left", "right", "expected"),
    [
        ("支付相关", "API 服务", "支付相关 API 服务"),
        ("Redux", "状态管理相关", "Redux 状态管理相关"),
        ("保险", "相关", "保险相关"),
        ("", "组件", "组件"),
    ],
)
def test_join_label_spaces_only_between_cjk_and_ascii(left: str, right: str, expected: str) -> None:
    assert join_label(left, right) == expected


def test_structural_keyword_is_bare_stage_two() -> None:
    engine = DirectoryPurposeEngine()

    outcome = _infer(engine, "src/components", _histogram("src/components"))

    assert (outcome.purpose, outcome.category, outcome.stage) == ("组件", "component", 2)
    assert outcome.bare is True


def test_keyword_tokens_match_when_whole_name_does_not() -> None:
    engine = DirectoryPurposeEngine()

    outcome = _infer(engine, "src/ui-components", _histogram("src/ui-components"))

    assert (outcome.purpose, outcome.category, outcome.stage) == ("组件", "component", 2)


def test_business_qualifier_composes_with_parent_label() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "components")
    histogram = _histogram("components/insurance", {FileCategory.COMPONENT: 2})

    outcome = _infer(engine, "components/insurance", histogram, parent)

    assert (outcome.purpose, outcome.category, outcome.stage) == ("保险相关组件", "component", 4)


def test_payment_service_directory() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "services")
    histogram = _histogram("services/payment", {FileCategory.SERVICE: 1}, ["services/payment/client.ts"])

    outcome = _infer(engine, "services/payment", histogram, parent)

    assert outcome.purpose == "支付相关 API 服务"
    assert outcome.category == "service"


def test_unit_folder_inherits_parent_label() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "src/components")
    histogram = _histogram(
        "src/components/Button",
        {FileCategory.COMPONENT: 1, FileCategory.STYLE: 1},
        ["src/components/Button/Button.tsx", "src/components/Button/Button.module.css"],
    )

    outcome = _infer(engine, "src/components/Button", histogram, parent)

    assert (outcome.purpose, outcome.category) == ("组件", "component")


def test_lowercase_folder_named_after_its_file_is_a_unit_folder() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "src/pages")
    histogram = _histogram("src/pages/home", {FileCategory.PAGE: 1}, ["src/pages/home/home.tsx"])

    outcome = _infer(engine, "src/pages/home", histogram, parent)

    assert outcome.purpose == "页面"


def test_unqualified_name_is_composed_with_parent_label() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "src/components")
    histogram = _histogram("src/components/forms", {FileCategory.COMPONENT: 3})

    outcome = _infer(engine, "src/components/forms", histogram, parent)

    assert outcome.purpose == "forms 相关组件"
    assert outcome.stage == 4


def test_parent_label_not_from_keyword_stage_leaves_child_unchanged() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "misc", _histogram("misc", {FileCategory.UTILITY: 1}))
    assert parent is not None and parent.stage == 3

    histogram = _histogram("misc/payments", {FileCategory.SERVICE: 1})
    outcome = _infer(engine, "misc/payments", histogram, parent)

    assert outcome.purpose == "支付相关 API 服务"
    assert outcome.stage == 3


def test_child_keyword_is_not_overridden_by_parent() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "src/components")

    outcome = _infer(engine, "src/components/hooks", _histogram("src/components/hooks"), parent)

    assert (outcome.purpose, outcome.stage) == ("Hooks", 2)


def test_dominant_category_labels_unknown_directory() -> None:
    engine = DirectoryPurposeEngine()

    outcome = _infer(engine, "misc", _histogram("misc", {FileCategory.UTILITY: 1}, ["misc/util.py"]))

    assert (outcome.purpose, outcome.category, outcome.stage) == ("工具函数", "utility", 3)


def test_qualifier_without_category_label() -> None:
    engine = DirectoryPurposeEngine()

    outcome = _infer(engine, "loans", _histogram("loans", {FileCategory.OTHER: 2}))

    assert (outcome.purpose, outcome.category) == ("贷款相关模块", "other")


def test_fallback_when_nothing_supports_a_label() -> None:
    engine = DirectoryPurposeEngine()

    outcome = _infer(engine, "misc", _histogram("misc"))

    assert (outcome.purpose, outcome.category, outcome.stage) == ("其他", "other", 5)


def test_dependency_family_requires_declared_package() -> None:
    histogram = _histogram("src/store")

    without = _infer(DirectoryPurposeEngine(), "src/store", histogram)
    with_redux = _infer(DirectoryPurposeEngine(ProjectHints(dependencies=("redux",))), "src/store", histogram)

    assert (without.purpose, without.stage) == ("状态管理", 2)
    assert (with_redux.purpose, with_redux.category, with_redux.stage) == ("状态管理相关", "store", 1)


def test_dependency_family_tags_descendants() -> None:
    engine = DirectoryPurposeEngine(ProjectHints(dependencies=("i18next",)))

    outcome = _infer(engine, "src/locales/en", _histogram("src/locales/en", {FileCategory.OTHER: 1}))

    assert outcome.purpose == "国际化相关子模块（en）"
    assert outcome.category == "config"


def test_infer_purpose_returns_label_and_category() -> None:
    histogram = _histogram("src/api", {FileCategory.SERVICE: 2})

    assert infer_purpose("src/api", histogram, primary_categories(histogram)) == ("API", "service")


@pytest.mark.parametrize("name", ["src", "source", "sources", "app", "apps"])
def test_source_roots_carry_no_functional_label(name: str) -> None:
    histogram = _histogram(name, {FileCategory.UTILITY: 2}, files=(f"{name}/index.ts", f"{name}/main.ts"))

    outcome = _infer(DirectoryPurposeEngine(), name, histogram)

    assert (outcome.purpose, outcome.category, outcome.stage) == ("", "container", 2)


def test_children_of_source_roots_do_not_compose_with_them() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "src")

    outcome = _infer(engine, "src/payment", _histogram("src/payment", {FileCategory.SERVICE: 1}), parent)

    assert outcome.purpose == "支付相关 API 服务"
    assert outcome.stage == 3


@pytest.mark.parametrize(
    ("name", "siblings"),
    [
        ("gateway-web-hk", ("gateway-web-id", "gateway-web-my")),
        ("portal-sg", ("portal-th", "shared")),
        ("admin-console", ("merchant-site", "ops-tools")),
    ],
)
def test_sibling_project_folders_are_named_as_projects(name: str, siblings: Sequence[str]) -> None:
    path = f"projects/{name}"
    histogram = _histogram(path, {FileCategory.CONFIG: 1})

    outcome = DirectoryPurposeEngine().infer(path, histogram, primary_categories(histogram), siblings=siblings)

    assert (outcome.purpose, outcome.category, outcome.stage) == (f"{name} 项目", "project", 3)


@pytest.mark.parametrize("siblings", [(), ("gateway-web-id",), ("docs", "tools", "scripts-old")])
def test_sibling_project_needs_a_family_of_names(siblings: Sequence[str]) -> None:
    path = "projects/gateway-web-hk"
    histogram = _histogram(path, {FileCategory.CONFIG: 1})

    outcome = DirectoryPurposeEngine().infer(path, histogram, primary_categories(histogram), siblings=siblings)

    assert outcome.purpose != "gateway-web-hk 项目"


def test_bare_parent_label_still_composes_over_sibling_projects() -> None:
    engine = DirectoryPurposeEngine()
    parent = _local(engine, "components")
    histogram = _histogram("components/date-picker", {FileCategory.COMPONENT: 1})

    outcome = engine.infer(
        "components/date-picker",
        histogram,
        primary_categories(histogram),
        parent,
        siblings=("nav-bar", "tab-bar"),
    )

    assert (outcome.purpose, outcome.stage) == ("date-picker 相关组件", 4)
