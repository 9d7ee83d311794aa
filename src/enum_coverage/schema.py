"""Reference sampler: builds sample values from a small type schema.

Types are declared as EnumType / StructType values and registered by name in
a TypeRegistry.  Field types are referenced by *name*, which is what makes
self-referential and mutually recursive types expressible::

    registry = TypeRegistry()
    registry.add(EnumType("Expr", (
        Variant("Lit", ("int",)),
        Variant("Neg", ("Expr",)),
        Variant("Add", ("Expr", "Expr")),
    )))
    result = trace_type(registry, "Expr")
    # result.samples[0] == {"Lit": [0]}

Sample values are plain Python data:
- STRUCT    -> dict of field name to sample
- ENUM      -> {variant_name: [payload samples]}
- primitive -> a fixed default (None, False, 0, 0.0, "", b"")
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from enum_coverage.driver import TraceResult, trace_variants
from enum_coverage.errors import UnknownTypeError

if TYPE_CHECKING:
    from enum_coverage.config import TrackerConfig
    from enum_coverage.tracker import EnumTracker

__all__ = [
    "PRIMITIVES",
    "EnumType",
    "SchemaSampler",
    "StructType",
    "TypeRegistry",
    "Variant",
    "trace_type",
]

PRIMITIVES: dict[str, Any] = {
    "unit": None,
    "bool": False,
    "int": 0,
    "float": 0.0,
    "str": "",
    "bytes": b"",
}


@dataclass(frozen=True, slots=True)
class Variant:
    """One alternative of an enum, with positional payload field types."""

    name: str
    fields: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class EnumType:
    """A sum type.  Must declare at least one variant."""

    name: str
    variants: tuple[Variant, ...]

    def __post_init__(self) -> None:
        if not self.variants:
            msg = f"enum {self.name!r} must have at least one variant"
            raise ValueError(msg)

    @property
    def max_index(self) -> int:
        return len(self.variants) - 1


@dataclass(frozen=True, slots=True)
class StructType:
    """A product type with named fields."""

    name: str
    fields: tuple[tuple[str, str], ...] = ()


@dataclass
class TypeRegistry:
    """Named user types; primitives are always available."""

    types: dict[str, EnumType | StructType] = field(default_factory=dict)

    def add(self, *types: EnumType | StructType) -> TypeRegistry:
        for t in types:
            if t.name in PRIMITIVES:
                msg = f"{t.name!r} shadows a primitive type"
                raise ValueError(msg)
            self.types[t.name] = t
        return self

    def __getitem__(self, name: str) -> EnumType | StructType:
        try:
            return self.types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.types or name in PRIMITIVES

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def enums(self) -> list[EnumType]:
        return [t for t in self.types.values() if isinstance(t, EnumType)]

    def reachable_enums(self, root: str) -> list[EnumType]:
        """Enums reachable from ``root`` through struct fields and payloads."""
        seen: set[str] = set()
        found: list[EnumType] = []
        pending = [root]
        while pending:
            name = pending.pop()
            if name in seen or name in PRIMITIVES:
                continue
            seen.add(name)
            ty = self[name]
            if isinstance(ty, StructType):
                pending.extend(ftype for _, ftype in ty.fields)
            else:
                found.append(ty)
                for variant in ty.variants:
                    pending.extend(variant.fields)
        return found


class SchemaSampler:
    """Builds one sample of ``root`` per pass, as directed by the tracker.

    Satisfies the ``PassSampler`` Protocol.  ``realized`` accumulates, per
    enum name, the variant names produced so far across all passes.
    """

    def __init__(self, registry: TypeRegistry, root: str) -> None:
        if root not in registry:
            raise UnknownTypeError(root)
        self._registry = registry
        self.root = root
        self.realized: dict[str, set[str]] = {}

    def sample(self, tracker: EnumTracker) -> Any:
        return self._build(self.root, tracker)

    def missing(self) -> dict[str, list[str]]:
        """Variant names never produced, per enum reachable from the root."""
        out: dict[str, list[str]] = {}
        for enum in self._registry.reachable_enums(self.root):
            seen = self.realized.get(enum.name, set())
            absent = [v.name for v in enum.variants if v.name not in seen]
            if absent:
                out[enum.name] = absent
        return out

    def _build(self, name: str, tracker: EnumTracker) -> Any:
        if name in PRIMITIVES:
            return PRIMITIVES[name]

        ty = self._registry[name]
        if isinstance(ty, StructType):
            return {fname: self._build(ftype, tracker) for fname, ftype in ty.fields}
        return self._build_enum(ty, tracker)

    def _build_enum(self, enum: EnumType, tracker: EnumTracker) -> dict[str, list[Any]]:
        tracker.open(enum.name, enum.max_index)
        variant = enum.variants[tracker.next_variant_index()]
        self.realized.setdefault(enum.name, set()).add(variant.name)
        payload = [self._build(ftype, tracker) for ftype in variant.fields]
        tracker.close()
        return {variant.name: payload}


def trace_type(
    registry: TypeRegistry,
    root: str,
    config: TrackerConfig | None = None,
) -> TraceResult:
    """Sample ``root`` until every reachable enum variant has been produced."""
    return trace_variants(SchemaSampler(registry, root), config=config)
