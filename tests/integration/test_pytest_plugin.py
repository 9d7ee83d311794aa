"""Integration tests for the enum-coverage pytest plugin.

These tests verify that the enum_tracker and assert_full_coverage fixtures are
auto-discovered via the pytest11 entry point and behave correctly.

NOTE: These tests require enum-coverage to be installed (even in editable mode
via ``pip install -e .``). The pytest11 entry point is only registered at
install time -- running from a raw source checkout without installing will not
discover the fixtures.
"""

from __future__ import annotations

from typing import Any

import pytest

from enum_coverage import EnumTracker, TrackerConfig, UnboundedRecursionError
from enum_coverage.schema import EnumType, TypeRegistry, Variant


def _shapes() -> TypeRegistry:
    return TypeRegistry().add(
        EnumType("Shape", (Variant("Circle", ("float",)), Variant("Square", ("Side",)))),
        EnumType("Side", (Variant("Short"), Variant("Long"))),
    )


def test_enum_tracker_fixture_is_fresh(enum_tracker: EnumTracker) -> None:
    assert isinstance(enum_tracker, EnumTracker)
    assert enum_tracker.nodes == ()
    assert enum_tracker.all_complete()


def test_full_coverage_passes(assert_full_coverage: Any) -> None:
    result = assert_full_coverage(_shapes(), "Shape")
    assert result.passes >= 2
    assert {n.name for n in result.nodes} == {"Shape", "Side"}


def test_full_coverage_forwards_config(assert_full_coverage: Any) -> None:
    registry = TypeRegistry().add(EnumType("Loop", (Variant("Again", ("Loop",)),)))
    with pytest.raises(UnboundedRecursionError):
        assert_full_coverage(registry, "Loop", config=TrackerConfig(max_depth=4))


def test_full_coverage_ignores_unreachable_enums(assert_full_coverage: Any) -> None:
    """Only enums reachable from the root have to be covered."""
    registry = _shapes().add(EnumType("Orphan", (Variant("X"),)))
    assert_full_coverage(registry, "Shape")


def test_full_coverage_reports_missing_variants(
    assert_full_coverage: Any, monkeypatch: pytest.MonkeyPatch
) -> None:
    from enum_coverage.schema import SchemaSampler

    monkeypatch.setattr(SchemaSampler, "missing", lambda self: {"Shape": ["Square"]})
    with pytest.raises(AssertionError, match=r"variants never sampled for 'Shape'"):
        assert_full_coverage(_shapes(), "Shape")
