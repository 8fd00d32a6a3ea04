"""Tests for extractor discovery utilities."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from structmap.analyzers import Extractor, discover_extractors
from structmap.analyzers.naming import NamingConventionExtractor
from structmap.models import NamingConvention


class DummyExtractor(Extractor):
    """Test extractor used for plugin discovery validation."""

    name = "dummy"

    def extract(self, view):  # pragma: no cover - unused
        return NamingConvention()


def _no_entry_points(monkeypatch) -> None:
    class EmptyEntryPoints(list):
        def select(self, **kwargs):
            return []

    monkeypatch.setattr("structmap.analyzers.metadata.entry_points", lambda: EmptyEntryPoints())


def test_discover_extractors_returns_builtin_extractors(monkeypatch) -> None:
    _no_entry_points(monkeypatch)

    extractors = discover_extractors()

    assert [extractor.name for extractor in extractors] == ["naming", "versioning", "hierarchy"]


def test_discover_extractors_respects_enabled_filter(monkeypatch) -> None:
    _no_entry_points(monkeypatch)

    extractors = discover_extractors(["Naming"])

    assert len(extractors) == 1
    assert isinstance(extractors[0], NamingConventionExtractor)


def test_discover_extractors_loads_entry_points(monkeypatch) -> None:
    dummy_entry = SimpleNamespace(name="dummy", load=lambda: DummyExtractor)

    class DummyEntryPoints(list):
        def select(self, **kwargs):
            if kwargs.get("group") == "structmap.extractors":
                return self
            return []

    monkeypatch.setattr(
        "structmap.analyzers.metadata.entry_points",
        lambda: DummyEntryPoints([dummy_entry]),
    )

    extractors = discover_extractors(["dummy"])

    assert len(extractors) == 1
    assert isinstance(extractors[0], DummyExtractor)


def test_discover_extractors_rejects_non_extractor_plugins(monkeypatch) -> None:
    bad_entry = SimpleNamespace(name="bad", load=lambda: object)

    class DummyEntryPoints(list):
        def select(self, **kwargs):
            return self

    monkeypatch.setattr(
        "structmap.analyzers.metadata.entry_points",
        lambda: DummyEntryPoints([bad_entry]),
    )

    with pytest.raises(TypeError):
        discover_extractors(["bad"])


def test_discover_extractors_raises_for_unknown_name(monkeypatch) -> None:
    _no_entry_points(monkeypatch)

    with pytest.raises(ValueError):
        discover_extractors(["does-not-exist"])
