"""
Per-stage cost accounting for the parse and serialize pipeline.

Each stage reports what it consumed and what it produced in its own units:
the tokenizers count characters or bytes in and tokens out, the validator
counts tokens in and flags rejections, the builder counts tokens in and
nodes out, and the serializer counts characters out. Nothing is recorded
unless TREEJSON_PROFILE is set.
"""

import os
import time
from dataclasses import dataclass
from typing import Any

PROFILE_STAGES = __debug__ and "TREEJSON_PROFILE" in os.environ

_stage_stats: dict[str, "StageStats"] = {}


@dataclass
class StageStats:
    """Accumulated cost of one pipeline stage."""

    stage: str
    call_count: int = 0
    failures: int = 0
    total_time_ns: int = 0
    units_in: int = 0
    units_out: int = 0

    def record_call(
        self,
        duration_ns: int,
        units_in: int = 0,
        units_out: int = 0,
        failed: bool = False,
    ) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.units_in += units_in
        self.units_out += units_out
        if failed:
            self.failures += 1

    @property
    def ns_per_unit(self) -> float:
        """Average time per unit of input; 0.0 until input is recorded."""
        if not self.units_in:
            return 0.0
        return self.total_time_ns / self.units_in


class _StageRecorder:
    """
    Times one stage call and files the result under the stage name.

    The stage reports its sizes through record(). A call that ends with an
    exception is counted as a failure.
    """

    def __init__(self, stage: str, units_in: int = 0):
        self.stage = stage
        self.units_in = units_in
        self.units_out = 0
        self.failed = False
        self.start_time = 0

    def record(
        self,
        units_out: int = 0,
        failed: bool = False,
        units_in: int | None = None,
    ) -> None:
        self.units_out = units_out
        self.failed = failed
        if units_in is not None:
            self.units_in = units_in

    def __enter__(self) -> "_StageRecorder":
        self.start_time = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration = time.perf_counter_ns() - self.start_time
        stats = _stage_stats.setdefault(self.stage, StageStats(self.stage))
        stats.record_call(
            duration,
            self.units_in,
            self.units_out,
            self.failed or exc_type is not None,
        )


class _NullRecorder:
    def __init__(self, stage: str, units_in: int = 0) -> None:
        pass

    def record(
        self,
        units_out: int = 0,
        failed: bool = False,
        units_in: int | None = None,
    ) -> None:
        pass

    def __enter__(self) -> "_NullRecorder":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


ProfileContext = _StageRecorder if PROFILE_STAGES else _NullRecorder


def get_stage_stats() -> dict[str, StageStats]:
    """Returns a snapshot of the statistics collected so far, by stage."""
    return {
        stage: StageStats(
            stats.stage,
            stats.call_count,
            stats.failures,
            stats.total_time_ns,
            stats.units_in,
            stats.units_out,
        )
        for stage, stats in _stage_stats.items()
    }


def clear_stage_stats() -> None:
    _stage_stats.clear()
