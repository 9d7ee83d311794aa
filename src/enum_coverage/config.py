"""TrackerConfig: limits and strictness for enum coverage tracking.

TrackerConfig is a frozen (immutable) dataclass.  The defaults are generous
enough for any realistic type; the limits exist so that a misbehaving sampler
fails with a clear error instead of exhausting the interpreter stack or
looping forever.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["TrackerConfig"]


@dataclass(frozen=True, slots=True)
class TrackerConfig:
    """Immutable configuration for EnumTracker and the tracing driver.

    Attributes:
        max_depth: Maximum number of simultaneously open enum occurrences
            (>= 1).  Exceeding it raises ``UnboundedRecursionError``.
        max_passes: Maximum number of sampling passes the driver runs before
            raising ``PassLimitExceededError`` (>= 1).
        strict: When True, reopening an enum name with a different variant
            count raises ``VariantCountMismatchError``.  When False the
            mismatch is logged as a warning and the first count is kept.
    """

    max_depth: int = 512
    max_passes: int = 10_000
    strict: bool = True

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            msg = f"max_depth must be >= 1, got {self.max_depth}"
            raise ValueError(msg)
        if self.max_passes < 1:
            msg = f"max_passes must be >= 1, got {self.max_passes}"
            raise ValueError(msg)
