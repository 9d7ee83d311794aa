"""Node dataclass and Phase StrEnum for per-enum coverage state.

A Node is the tracking record for one enum *type* (identified by name), not
for one occurrence: every occurrence of the same enum across all passes
shares a single Node.  Nodes never hold references to each other; children
are stored as integer ids into the owning EnumTracker's node table.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum, auto

from enum_coverage.errors import UnboundedRecursionError

__all__ = ["Node", "Phase"]


class Phase(StrEnum):
    """Lifecycle of a Node.

    - DISCOVERY  -> "discovery"  : first sweep, learns which variants nest enums
    - COMPLETION -> "completion" : second sweep, lets nested enums finish
    - COMPLETED  -> "completed"  : terminal, cursor and children are frozen
    """

    DISCOVERY = auto()
    COMPLETION = auto()
    COMPLETED = auto()


@dataclass(slots=True)
class Node:
    """Coverage state for one enum type.

    Attributes:
        self_index:  Position of this node in the owning table.
        name:        Enum name; the identity key of the node.
        max_index:   Highest valid variant index (variant count - 1).
        cursor:      Next variant index to hand out, always in [0, max_index].
        children:    Variant index -> id of the nested enum node discovered
                     while sampling that variant.  Variants with no nested
                     enum have no entry.
        phase:       Lifecycle phase (see Phase).
        recursive_variants: Variant indices at which the enum re-entered
                     itself.
    """

    self_index: int
    name: str
    max_index: int
    cursor: int = 0
    children: dict[int, int] = field(default_factory=dict)
    phase: Phase = Phase.DISCOVERY
    recursive_variants: set[int] = field(default_factory=set)

    def __post_init__(self) -> None:
        if self.max_index < 0:
            msg = f"max_index must be >= 0, got {self.max_index} for {self.name!r}"
            raise ValueError(msg)
        if not 0 <= self.cursor <= self.max_index:
            msg = f"cursor must be in [0, {self.max_index}], got {self.cursor}"
            raise ValueError(msg)

    @property
    def variant_count(self) -> int:
        return self.max_index + 1

    @property
    def completed(self) -> bool:
        return self.phase is Phase.COMPLETED

    # ------------------------------------------------------------------
    # State transitions
    # ------------------------------------------------------------------

    def advance(self) -> None:
        """Move the cursor one step, switching phase at the end of a sweep.

        At the last variant a DISCOVERY sweep restarts from 0 in COMPLETION,
        and a COMPLETION sweep ends in COMPLETED.  Does nothing once COMPLETED.
        """
        self.phase, self.cursor = self.next_position()

    def next_position(self) -> tuple[Phase, int]:
        """Return the ``(phase, cursor)`` pair that advance() would move to."""
        if self.phase is Phase.COMPLETED:
            return self.phase, self.cursor
        if self.cursor == self.max_index:
            if self.phase is Phase.DISCOVERY:
                return Phase.COMPLETION, 0
            return Phase.COMPLETED, self.cursor
        return self.phase, self.cursor + 1

    def mark_recursive(self, variant: int) -> None:
        """Record that ``variant`` leads back into this enum.

        A self-loop child entry is added so completeness checks see the cycle;
        an existing child registered for the variant is kept.
        """
        if self.phase is Phase.COMPLETED:
            return
        self.recursive_variants.add(variant)
        self.children.setdefault(variant, self.self_index)

    def skip_recursive_variant(self) -> None:
        """Mark the variant under the cursor as recursive and step past it.

        Stands in for the close that a self-referential occurrence would
        otherwise never reach, including the phase change at the last variant.
        """
        self.mark_recursive(self.cursor)
        self.advance()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_complete(
        self,
        nodes: Sequence[Node],
        _visiting: frozenset[int] = frozenset(),
    ) -> bool:
        """Return True when nothing is left to explore under this node.

        True when COMPLETED, or when a COMPLETION sweep sits on the last
        variant and every child is complete.  Children already being evaluated
        higher up (self-loops) count as complete.  Never mutates state.
        """
        if self.phase is Phase.COMPLETED:
            return True
        if self.cursor != self.max_index or self.phase is not Phase.COMPLETION:
            return False
        visiting = _visiting | {self.self_index}
        return all(
            child in visiting or nodes[child].is_complete(nodes, visiting)
            for child in self.children.values()
        )

    def terminating_variant(self, also: int | None = None) -> int:
        """Return the lowest variant index not known to be recursive.

        ``also`` is treated as recursive too, so the answer can be had before
        a variant is actually marked.
        """
        for variant in range(self.variant_count):
            if variant not in self.recursive_variants and variant != also:
                return variant
        raise UnboundedRecursionError(
            f"every variant of enum {self.name!r} refers back to itself"
        )
