"""PassSampler Protocol: the sampler side of the tracking contract.

A sampler builds one sample value per call, consulting the tracker for every
enum it meets.  Any class with a conformant ``sample`` method passes
``isinstance`` checks; no inheritance is required.

Example::

    from enum_coverage.protocols import PassSampler

    class ColorSampler:
        def sample(self, tracker):
            tracker.open("Color", 2)
            value = ["Red", "Green", "Blue"][tracker.next_variant_index()]
            tracker.close()
            return value

    assert isinstance(ColorSampler(), PassSampler)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from enum_coverage.tracker import EnumTracker


@runtime_checkable
class PassSampler(Protocol):
    """Structural protocol for one-pass samplers.

    The ``sample`` method must:
    - Call ``tracker.open(name, max_index)`` when it starts building an enum
      value and ``tracker.close()`` when that value is done, in properly
      nested pairs.
    - Build the variant returned by ``tracker.next_variant_index()``.
    - Return with no occurrence left open.
    """

    def sample(self, tracker: EnumTracker) -> Any: ...
