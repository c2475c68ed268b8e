"""Per-invocation render state."""

from __future__ import annotations

import copy
import itertools
from dataclasses import dataclass, field

from .shorthand import ShorthandDictionary
from .values import Value


class SideChannelTable:
    """Decoded array elements, indexed by ``(array_nr, element_nr)``."""

    def __init__(self) -> None:
        self._values: dict[tuple[int, int], Value] = {}

    def __contains__(self, key: tuple[int, int]) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def put(self, array_nr: int, element_nr: int, value: Value) -> None:
        self._values[(array_nr, element_nr)] = value

    def get(self, array_nr: int, element_nr: int) -> Value:
        """Return a private deep copy of the stored element."""
        return copy.deepcopy(self._values[(array_nr, element_nr)])


@dataclass
class RenderContext:
    """State threaded through every stage of one conversion.

    The shorthand dictionary is read-only and may be shared between contexts;
    the array counter and side-channel table never are.
    """

    shorthand: ShorthandDictionary = field(default_factory=ShorthandDictionary)
    include_paths: list[str] = field(default_factory=list)
    side_channel: SideChannelTable = field(default_factory=SideChannelTable)

    def __post_init__(self) -> None:
        self._array_counter = itertools.count()

    def next_array_nr(self) -> int:
        return next(self._array_counter)
