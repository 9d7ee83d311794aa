"""Driving loop: run sampling passes until every enum variant is covered.

Each call creates a fresh EnumTracker unless one is supplied, so separate
tracing runs never share state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from enum_coverage.config import TrackerConfig
from enum_coverage.errors import PassLimitExceededError, ProtocolMisuseError
from enum_coverage.tracker import EnumTracker, Node

if TYPE_CHECKING:
    from enum_coverage.protocols import PassSampler

__all__ = ["TraceResult", "trace_variants"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TraceResult:
    """Outcome of a complete tracing run.

    Attributes:
        samples: The value produced by each pass, in pass order.
        passes:  Number of passes that were needed.
        nodes:   Snapshot of the tracker's node table after the last pass.
    """

    samples: list[Any]
    passes: int
    nodes: tuple[Node, ...]


def trace_variants(
    sampler: PassSampler,
    config: TrackerConfig | None = None,
    tracker: EnumTracker | None = None,
) -> TraceResult:
    """Run ``sampler`` pass after pass until the tracker reports full coverage.

    Args:
        sampler: Any PassSampler-conformant object.
        config:  Limits for the run.  Ignored when ``tracker`` is given (the
                 tracker's own config applies).  Defaults to ``TrackerConfig()``.
        tracker: Tracker to drive.  A fresh one is created when None.

    Returns:
        A ``TraceResult`` with one sample per pass.

    Raises:
        ProtocolMisuseError: If a pass leaves an occurrence open.
        PassLimitExceededError: If coverage is still incomplete after
            ``max_passes`` passes.
    """
    if tracker is None:
        tracker = EnumTracker(config)
    max_passes = tracker.config.max_passes

    samples: list[Any] = []
    logger.info("tracing %s (max_passes=%d)", type(sampler).__name__, max_passes)
    while True:
        if len(samples) >= max_passes:
            raise PassLimitExceededError(len(samples))
        samples.append(sampler.sample(tracker))
        if tracker.in_pass:
            raise ProtocolMisuseError(
                f"pass {len(samples)} returned with {tracker.depth} occurrence(s) open"
            )
        if tracker.all_complete():
            break

    logger.info(
        "tracing finished after %d passes, %d enums", len(samples), len(tracker)
    )
    return TraceResult(samples=samples, passes=len(samples), nodes=tracker.snapshot())
