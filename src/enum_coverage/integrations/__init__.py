"""Integrations subpackage for enum-coverage.

Contains the pytest plugin (auto-discovered via the pytest11 entry point).
It is loaded by pytest itself and is not imported by the base package, so a
plain install never needs pytest.
"""

from __future__ import annotations

__all__: list[str] = []
