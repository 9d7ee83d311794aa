"""Enum coverage - exhaustive variant tracking across repeated sampling passes."""

from __future__ import annotations

from enum_coverage.config import TrackerConfig
from enum_coverage.driver import TraceResult, trace_variants
from enum_coverage.errors import (
    EnumTrackerError,
    PassLimitExceededError,
    ProtocolMisuseError,
    UnboundedRecursionError,
    UnknownTypeError,
    VariantCountMismatchError,
)
from enum_coverage.protocols import PassSampler
from enum_coverage.tracker import EnumTracker, Node, Phase

__version__: str = "0.1.0"
__all__: list[str] = [
    "EnumTracker",
    "EnumTrackerError",
    "Node",
    "PassLimitExceededError",
    "PassSampler",
    "Phase",
    "ProtocolMisuseError",
    "TraceResult",
    "TrackerConfig",
    "UnboundedRecursionError",
    "UnknownTypeError",
    "VariantCountMismatchError",
    "trace_variants",
]
