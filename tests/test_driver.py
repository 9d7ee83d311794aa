"""Tests for trace_variants, the pass-repeating driver.

Covers:
- A sampler that meets no enum needs exactly one pass
- A flat enum of n variants needs 2n - 1 passes
- TraceResult contents (samples, passes, node snapshot)
- A pass that leaves an occurrence open is rejected
- max_passes is enforced
"""

from __future__ import annotations

import logging
from typing import Any

import pytest

from enum_coverage import (
    EnumTracker,
    PassLimitExceededError,
    PassSampler,
    Phase,
    ProtocolMisuseError,
    TraceResult,
    TrackerConfig,
    trace_variants,
)

COLORS = ["Red", "Green", "Blue"]


class ColorSampler:
    def sample(self, tracker: EnumTracker) -> Any:
        tracker.open("Color", len(COLORS) - 1)
        value = COLORS[tracker.next_variant_index()]
        tracker.close()
        return value


class ConstantSampler:
    def sample(self, tracker: EnumTracker) -> Any:
        return 42


class LeakySampler:
    def sample(self, tracker: EnumTracker) -> Any:
        tracker.open("Color", 2)
        return None


class TestProtocolConformance:
    def test_samplers_satisfy_protocol(self) -> None:
        assert isinstance(ColorSampler(), PassSampler)
        assert isinstance(ConstantSampler(), PassSampler)

    def test_object_without_sample_does_not(self) -> None:
        assert not isinstance(object(), PassSampler)


class TestTraceVariants:
    def test_no_enums_single_pass(self) -> None:
        result = trace_variants(ConstantSampler())
        assert isinstance(result, TraceResult)
        assert result.passes == 1
        assert result.samples == [42]
        assert result.nodes == ()

    def test_flat_enum_sweeps_twice(self) -> None:
        result = trace_variants(ColorSampler())
        assert result.passes == 5
        assert result.samples == ["Red", "Green", "Blue", "Red", "Green"]
        assert set(result.samples) == set(COLORS)

    def test_result_snapshot(self) -> None:
        result = trace_variants(ColorSampler())
        (node,) = result.nodes
        assert node.name == "Color"
        assert node.phase is Phase.COMPLETION
        assert node.cursor == node.max_index

    def test_uses_given_tracker(self) -> None:
        tracker = EnumTracker()
        result = trace_variants(ColorSampler(), tracker=tracker)
        assert tracker.all_complete()
        assert result.nodes == tracker.snapshot()

    def test_completed_tracker_needs_one_more_pass_only(self) -> None:
        tracker = EnumTracker()
        trace_variants(ColorSampler(), tracker=tracker)
        assert trace_variants(ColorSampler(), tracker=tracker).passes == 1

    def test_unclosed_occurrence_rejected(self) -> None:
        with pytest.raises(ProtocolMisuseError, match="pass 1 returned with 1"):
            trace_variants(LeakySampler())

    def test_pass_limit(self) -> None:
        with pytest.raises(PassLimitExceededError) as exc_info:
            trace_variants(ColorSampler(), config=TrackerConfig(max_passes=2))
        assert exc_info.value.passes == 2

    def test_pass_limit_exactly_enough(self) -> None:
        result = trace_variants(ColorSampler(), config=TrackerConfig(max_passes=5))
        assert result.passes == 5

    def test_logs_progress(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="enum_coverage"):
            trace_variants(ColorSampler())
        assert "tracing ColorSampler" in caplog.text
        assert "finished after 5 passes, 1 enums" in caplog.text
