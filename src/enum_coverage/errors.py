"""Exception classes raised by the enum coverage tracker.

Every error here signals a defect in the caller (an unmatched open/close, a
type whose shape changed between passes, a type that cannot be sampled to a
finite value).  None of them is retryable: they are raised from the call that
detects the problem and are never swallowed inside the library.
"""

from __future__ import annotations

__all__ = [
    "EnumTrackerError",
    "PassLimitExceededError",
    "ProtocolMisuseError",
    "UnboundedRecursionError",
    "UnknownTypeError",
    "VariantCountMismatchError",
]


class EnumTrackerError(Exception):
    """Base class for all enum coverage errors.

    Attributes:
        message: Human-readable description of what went wrong.
    """

    default_message = "Enum coverage tracking failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ProtocolMisuseError(EnumTrackerError, RuntimeError):
    """The open/close call sequence is not balanced.

    Raised for ``close()`` or ``next_variant_index()`` with nothing open, and
    by the driver when a pass returns with occurrences still open.
    """

    default_message = "open()/close() calls are not paired"


class VariantCountMismatchError(EnumTrackerError, ValueError):
    """An enum name was reopened with a different variant count.

    Attributes:
        name:     The enum name.
        expected: ``max_index`` recorded when the node was created.
        actual:   ``max_index`` passed to the offending ``open()``.
    """

    def __init__(self, name: str, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"enum {name!r} was opened with max_index={actual}, "
            f"but was first seen with max_index={expected}"
        )


class UnboundedRecursionError(EnumTrackerError, RecursionError):
    """Sampling cannot bottom out.

    Raised when the open stack grows past ``TrackerConfig.max_depth`` or when
    every variant of a re-entered enum refers back to the enum itself.
    """

    default_message = "enum recursion does not terminate"


class PassLimitExceededError(EnumTrackerError):
    """The driver ran ``max_passes`` passes without reaching full coverage.

    Attributes:
        passes: Number of passes that were run.
    """

    def __init__(self, passes: int) -> None:
        self.passes = passes
        super().__init__(f"coverage still incomplete after {passes} passes")


class UnknownTypeError(EnumTrackerError, KeyError):
    """A schema refers to a type name that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown type {name!r}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return self.message
