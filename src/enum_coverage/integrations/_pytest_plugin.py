"""pytest plugin for enum-coverage.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from typing import Any

import pytest

from enum_coverage import EnumTracker, TrackerConfig
from enum_coverage.driver import trace_variants
from enum_coverage.schema import SchemaSampler, TypeRegistry


@pytest.fixture
def enum_tracker() -> EnumTracker:
    """A fresh EnumTracker with the default configuration."""
    return EnumTracker()


@pytest.fixture(scope="session")
def assert_full_coverage() -> Any:
    """Fixture that returns a callable variant coverage asserter.

    Usage in tests::

        def test_shapes(assert_full_coverage):
            result = assert_full_coverage(registry, "Shape")
            assert result.passes == 3

    Returns:
        A callable ``_assert(registry, root, config=None) -> TraceResult``
        that raises ``AssertionError`` when any variant of an enum reachable
        from ``root`` was never sampled.
    """

    def _assert(
        registry: TypeRegistry,
        root: str,
        config: TrackerConfig | None = None,
    ) -> Any:
        sampler = SchemaSampler(registry, root)
        result = trace_variants(sampler, config=config)
        missing = sampler.missing()
        if missing:
            raise AssertionError(
                f"variants never sampled for {root!r} "
                f"after {result.passes} passes: {missing}"
            )
        return result

    return _assert
