"""EnumTracker: remembers enum variant coverage across sampling passes.

A sampler that builds sample values of a type calls ``open()`` when it starts
an enum occurrence, asks ``next_variant_index()`` which variant to build,
recurses into that variant's payload and finally calls ``close()``.  It keeps
running whole passes until ``all_complete()`` reports that every variant of
every reachable enum, nested ones included, has been produced.

Architecture:
- Node table:  one Node per distinct enum name, addressed by list position.
               All cross references are ids into this table.
- Open stack:  one frame per currently open occurrence, root first.  Empty
               between passes.
- Roots:       nodes created while nothing was open.  The first node ever
               created is root 0.

Re-entry (an enum opened while it is already on the open stack) is how
recursive types show up.  The topmost frame of that enum is realizing the
variant that led back to it, so that variant is marked recursive.  If the
sweep still sits on it, the cursor is stepped past it on behalf of that frame
(the frame is *settled* and will not advance again on close).  Otherwise the
new occurrence is *pinned* to a variant that does not recurse and leaves the
sweep alone.  Either way the depth of the open stack stays bounded.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass

from enum_coverage.config import TrackerConfig
from enum_coverage.errors import (
    ProtocolMisuseError,
    UnboundedRecursionError,
    VariantCountMismatchError,
)
from enum_coverage.tracker.nodes import Node, Phase

__all__ = ["EnumTracker"]

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _Frame:
    """One open enum occurrence.

    Attributes:
        node_id: Node being sampled.
        variant: Variant index this occurrence realizes.
        settled: The cursor was already advanced on behalf of this occurrence.
        pinned:  This occurrence realizes a non-recursive fallback variant and
                 does not drive the node's sweep.
    """

    node_id: int
    variant: int
    settled: bool = False
    pinned: bool = False


class EnumTracker:
    """Variant coverage bookkeeping shared by all passes of one tracing run.

    Not thread-safe: exactly one pass may be in flight at a time.  Trace
    independent types with independent trackers.

    Example::

        tracker = EnumTracker()
        while True:
            tracker.open("Shape", 1)
            variant = tracker.next_variant_index()
            ...  # build the payload of that variant
            tracker.close()
            if tracker.all_complete():
                break
    """

    def __init__(self, config: TrackerConfig | None = None) -> None:
        self._config = config if config is not None else TrackerConfig()
        self._nodes: list[Node] = []
        self._ids: dict[str, int] = {}
        self._roots: list[int] = []
        self._frames: list[_Frame] = []

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> TrackerConfig:
        return self._config

    @property
    def nodes(self) -> tuple[Node, ...]:
        """All nodes in creation order.  Index == node id."""
        return tuple(self._nodes)

    @property
    def roots(self) -> tuple[int, ...]:
        return tuple(self._roots)

    @property
    def open_stack(self) -> tuple[int, ...]:
        """Node ids of the currently open occurrences, outermost first."""
        return tuple(frame.node_id for frame in self._frames)

    @property
    def depth(self) -> int:
        return len(self._frames)

    @property
    def in_pass(self) -> bool:
        return bool(self._frames)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, name: object) -> bool:
        return name in self._ids

    def node_id(self, name: str) -> int | None:
        """Return the id of the node tracking ``name``, or None if unseen."""
        return self._ids.get(name)

    def node(self, name: str) -> Node:
        """Return the node tracking ``name``.

        Raises:
            KeyError: If no enum with that name has been opened.
        """
        return self._nodes[self._ids[name]]

    def snapshot(self) -> tuple[Node, ...]:
        """Return a deep copy of the node table, safe to keep across passes."""
        return tuple(copy.deepcopy(self._nodes))

    def pending(self) -> list[str]:
        """Names of nodes that do not yet satisfy the completeness predicate."""
        return [n.name for n in self._nodes if not n.is_complete(self._nodes)]

    # ------------------------------------------------------------------
    # Open / close protocol
    # ------------------------------------------------------------------

    def open(self, name: str, max_index: int) -> int:
        """Begin an occurrence of enum ``name`` and return its node id.

        Args:
            name:      Enum name.  Occurrences with equal names share a node.
            max_index: Highest variant index (variant count - 1).

        Returns:
            Id of the node tracking ``name``.

        Raises:
            ValueError: If ``max_index`` is negative.
            VariantCountMismatchError: If ``name`` was seen with another
                ``max_index`` (strict mode only).
            UnboundedRecursionError: If the open stack would exceed
                ``config.max_depth``, or a re-entered enum has no variant that
                avoids recursion.
        """
        if len(self._frames) >= self._config.max_depth:
            raise UnboundedRecursionError(
                f"opening {name!r} would exceed max_depth={self._config.max_depth}"
            )

        node_id = self._ids.get(name)
        if node_id is None:
            node_id = self._create(name, max_index)
        else:
            self._check_max_index(self._nodes[node_id], max_index)

        node = self._nodes[node_id]
        if any(frame.node_id == node_id for frame in self._frames):
            frame = self._reenter(node)
        else:
            frame = _Frame(node_id=node_id, variant=node.cursor)

        self._frames.append(frame)
        logger.debug(
            "open %s (id=%d) variant=%d phase=%s depth=%d%s",
            name,
            node_id,
            frame.variant,
            node.phase,
            len(self._frames),
            " pinned" if frame.pinned else "",
        )
        return node_id

    def next_variant_index(self) -> int:
        """Return the variant index the innermost open occurrence must build.

        Raises:
            ProtocolMisuseError: If no occurrence is open.
        """
        if not self._frames:
            raise ProtocolMisuseError("next_variant_index() called with nothing open")
        return self._frames[-1].variant

    def close(self) -> None:
        """Finish the innermost open occurrence and update its coverage.

        Raises:
            ProtocolMisuseError: If no occurrence is open.
        """
        if not self._frames:
            raise ProtocolMisuseError("close() called with nothing open")

        frame = self._frames[-1]
        node = self._nodes[frame.node_id]
        if not (frame.settled or frame.pinned) and self._variant_finished(node):
            before = (node.phase, node.cursor)
            node.advance()
            if node.phase is not before[0]:
                logger.debug("%s: %s -> %s", node.name, before[0], node.phase)

        self._frames.pop()
        logger.debug(
            "close %s cursor=%d phase=%s depth=%d",
            node.name,
            node.cursor,
            node.phase,
            len(self._frames),
        )

    def all_complete(self) -> bool:
        """Return True when no further pass can uncover anything new.

        True for a tracker that never saw an enum, otherwise when every root
        satisfies the completeness predicate.
        """
        return all(self._nodes[root].is_complete(self._nodes) for root in self._roots)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _create(self, name: str, max_index: int) -> int:
        node_id = len(self._nodes)
        self._nodes.append(Node(self_index=node_id, name=name, max_index=max_index))
        self._ids[name] = node_id

        if self._frames:
            frame = self._frames[-1]
            parent = self._nodes[frame.node_id]
            parent.children[frame.variant] = node_id
            logger.debug(
                "new enum %s (id=%d) under %s variant %d",
                name,
                node_id,
                parent.name,
                frame.variant,
            )
        else:
            self._roots.append(node_id)
            logger.debug("new root enum %s (id=%d)", name, node_id)
        return node_id

    def _check_max_index(self, node: Node, max_index: int) -> None:
        if max_index == node.max_index:
            return
        if self._config.strict:
            raise VariantCountMismatchError(node.name, node.max_index, max_index)
        logger.warning(
            "enum %s reopened with max_index=%d, keeping %d",
            node.name,
            max_index,
            node.max_index,
        )

    def _reenter(self, node: Node) -> _Frame:
        """Build the frame for an enum that is already open further out.

        Raises UnboundedRecursionError before touching the node or the outer
        frame when no variant is left that avoids recursion.
        """
        outer = next(f for f in reversed(self._frames) if f.node_id == node.self_index)
        variant = outer.variant
        marked = None if node.completed else variant

        if (
            not (outer.settled or outer.pinned)
            and node.phase is not Phase.COMPLETED
            and node.cursor == variant
            and self._can_pass(node, variant)
        ):
            phase, cursor = node.next_position()
            repeats = cursor == variant or cursor in node.recursive_variants
            pinned = repeats and (cursor == variant or phase is Phase.COMPLETED)
            if pinned:
                fallback = node.terminating_variant(marked)

            node.skip_recursive_variant()
            outer.settled = True
            logger.debug(
                "%s re-entered at variant %d, sweep moves to %d (%s)",
                node.name,
                variant,
                node.cursor,
                node.phase,
            )
            if not pinned:
                return _Frame(node_id=node.self_index, variant=node.cursor)
        else:
            fallback = node.terminating_variant(marked)
            node.mark_recursive(variant)

        logger.debug(
            "%s re-entered at variant %d, pinned to variant %d",
            node.name,
            variant,
            fallback,
        )
        return _Frame(node_id=node.self_index, variant=fallback, pinned=True)

    def _can_pass(self, node: Node, variant: int) -> bool:
        """Whether the sweep may leave ``variant`` behind without closing it."""
        if node.phase is Phase.DISCOVERY:
            return True
        child = node.children.get(variant)
        return (
            child is None
            or child == node.self_index
            or self._nodes[child].is_complete(self._nodes)
        )

    def _variant_finished(self, node: Node) -> bool:
        """Whether closing ``node`` on its current cursor may advance it."""
        if (
            node.is_complete(self._nodes)
            or node.phase is Phase.DISCOVERY
            or not node.children
        ):
            return True
        child = node.children.get(node.cursor)
        if child is None or child == node.self_index:
            return True
        return self._nodes[child].is_complete(self._nodes)
