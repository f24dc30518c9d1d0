from __future__ import annotations

from bisect import bisect_left
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from .directions import Direction
from .geometry import Rect

# Rank 0 is the rectangle a sweep coming from that direction meets first.
_EDGE_KEYS: Dict[Direction, Callable[[Rect], int]] = {
    Direction.LEFT: lambda r: -r.right,
    Direction.RIGHT: lambda r: r.left,
    Direction.UP: lambda r: -r.bottom,
    Direction.DOWN: lambda r: r.top,
}


class SortedRectangles:
    """Placed rectangles kept in four orders, one per sweep direction.

    Equal edges are ranked newest first: the key is (edge, -sequence), so
    every order is strict and bisect insertion is well defined.
    """

    def __init__(self) -> None:
        self._keys: Dict[Direction, List[Tuple[int, int]]] = {d: [] for d in _EDGE_KEYS}
        self._rects: Dict[Direction, List[Rect]] = {d: [] for d in _EDGE_KEYS}
        self._inserted: List[Rect] = []

    def __len__(self) -> int:
        return len(self._inserted)

    def __iter__(self) -> Iterator[Rect]:
        return iter(self._inserted)

    def add(self, rect: Rect) -> None:
        seq = len(self._inserted)
        for direction, edge in _EDGE_KEYS.items():
            key = (edge(rect), -seq)
            keys = self._keys[direction]
            idx = bisect_left(keys, key)
            keys.insert(idx, key)
            self._rects[direction].insert(idx, rect)
        self._inserted.append(rect)

    def _order(self, direction: Direction) -> List[Rect]:
        try:
            return self._rects[direction]
        except KeyError:
            raise ValueError(f"Unsupported sorting direction: {direction}.") from None

    def ordered(self, direction: Direction) -> List[Rect]:
        return list(self._order(direction))

    def get(self, direction: Direction, index: int) -> Rect:
        rects = self._order(direction)
        if index < 0 or index >= len(rects):
            raise IndexError(f"Index was out of range: {index}.")
        return rects[index]

    def has_intersection(self, rect: Rect, direction: Direction, start_index: int) -> Optional[int]:
        """Rank of the first stored rectangle at or after start_index that rect overlaps."""
        rects = self._order(direction)
        if start_index < 0:
            raise IndexError(f"Index was out of range: {start_index}.")
        for i in range(start_index, len(rects)):
            if rect.intersects(rects[i]):
                return i
        return None
