"""Tracker subpackage: enum variant coverage bookkeeping.

Re-exports the public API for the tracker module:
- Phase: StrEnum of the node lifecycle (DISCOVERY, COMPLETION, COMPLETED)
- Node: per-enum coverage record (cursor, children, recursive variants)
- EnumTracker: node table plus the open/close protocol driven by a sampler
"""

from enum_coverage.tracker.nodes import Node, Phase
from enum_coverage.tracker.tracker import EnumTracker

__all__ = ["EnumTracker", "Node", "Phase"]
