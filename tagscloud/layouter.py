from __future__ import annotations

from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple

from .directions import Direction, revert, rotate_counterclockwise
from .geometry import Point, Rect, Size
from .sorted_rects import SortedRectangles

# one pass over the four sides plus the first side again from its far corner
SIDE_PASSES = 5


class PlacementError(RuntimeError):
    """No free spot was found even after unwinding the spiral history."""


class SpiralEntry(NamedTuple):
    rect: Rect
    direction_to_previous: Direction


def _target(size: Size, anchor: Rect, direction: Direction) -> Point:
    if direction is Direction.LEFT:
        return anchor.location - size
    if direction is Direction.RIGHT:
        return anchor.location + anchor.size
    if direction is Direction.UP:
        return Point(anchor.right, anchor.y - size.height)
    if direction is Direction.DOWN:
        return Point(anchor.x - size.width, anchor.bottom)
    raise ValueError(f"Unsupported moving direction: {direction}.")


def _overshot(position: Point, target: Point, direction: Direction) -> bool:
    if direction is Direction.LEFT:
        return position.x < target.x
    if direction is Direction.RIGHT:
        return position.x > target.x
    if direction is Direction.UP:
        return position.y < target.y
    if direction is Direction.DOWN:
        return position.y > target.y
    raise ValueError(f"Unsupported moving direction: {direction}.")


def _attach(size: Size, default: Point, other: Rect, direction: Direction) -> Rect:
    """Rect of `size` touching the `direction` side of `other`; the free axis keeps `default`."""
    x = default.x
    y = default.y
    if direction is Direction.LEFT:
        x = other.left - size.width
    elif direction is Direction.RIGHT:
        x = other.right
    elif direction is Direction.UP:
        y = other.top - size.height
    elif direction is Direction.DOWN:
        y = other.bottom
    return Rect.at(Point(x, y), size)


def _first_rect(size: Size, center: Point) -> Rect:
    return Rect.at(center - size // 2, size)


def _second_rect(size: Size, first: Rect) -> Tuple[Rect, Direction]:
    c = first.location + first.size // 2
    dist_left = size.width + first.width // 2
    dist_up = size.height + first.height // 2
    if dist_left < dist_up:
        return Rect.at(Point(c.x - dist_left, c.y - size.height // 2), size), Direction.RIGHT
    return Rect.at(Point(c.x - size.width // 2, c.y - dist_up), size), Direction.DOWN


class SpiralCloudLayouter:
    """Places rectangles one by one in a spiral around a fixed center.

    Every new rectangle is walked around the perimeter of the most recently
    placed one until it finds a gap touching existing geometry. When all
    sides of that rectangle are blocked the spiral history is unwound and the
    search continues around an older rectangle. Popped rectangles stay in the
    index and keep acting as obstacles.

    Not thread safe; placement is deterministic for a given center and
    sequence of sizes.
    """

    def __init__(self, center: Point | Sequence[int] = Point(0, 0)) -> None:
        self._center = Point.of(center)
        self._index = SortedRectangles()
        self._spiral: List[SpiralEntry] = []
        self.stats: Dict[str, int] = {"placed": 0, "attempts": 0, "slides": 0, "backtracks": 0}

    @property
    def center(self) -> Point:
        return self._center

    @property
    def rectangles(self) -> List[Rect]:
        return list(self._index)

    @property
    def history_depth(self) -> int:
        return len(self._spiral)

    def __len__(self) -> int:
        return len(self._index)

    def put_next_rectangle(self, size: Size | Sequence[int]) -> Rect:
        size = Size.of(size)
        if size.width <= 0:
            raise ValueError(f"width must be positive, got {size.width}")
        if size.height <= 0:
            raise ValueError(f"height must be positive, got {size.height}")

        rect, direction = self._next_rect(size)
        self._index.add(rect)
        self._spiral.append(SpiralEntry(rect, direction))
        self.stats["placed"] += 1
        return rect

    def _next_rect(self, size: Size) -> Tuple[Rect, Direction]:
        if not self._spiral:
            return _first_rect(size, self._center), Direction.NONE
        if len(self._spiral) == 1:
            return _second_rect(size, self._spiral[0].rect)

        while len(self._spiral) >= 2:
            found = self._attach_to_top(size)
            if found is not None:
                return found
            self._spiral.pop()
            self.stats["backtracks"] += 1

        raise PlacementError("Unable to find a suitable location for the rectangle.")

    def _attach_to_top(self, size: Size) -> Optional[Tuple[Rect, Direction]]:
        top = self._spiral[-1]
        below = self._spiral[-2]
        direction = top.direction_to_previous
        rect = _attach(size, below.rect.location, top.rect, direction)

        for _ in range(SIDE_PASSES):
            self.stats["attempts"] += 1
            target = _target(size, top.rect, direction)
            hit = self._index.has_intersection(rect, direction, 0)
            overshot = False

            while hit is not None and not overshot:
                rect = _attach(size, rect.location, self._index.get(direction, hit), direction)
                self.stats["slides"] += 1
                hit = self._index.has_intersection(rect, direction, hit + 1)
                overshot = _overshot(rect.location, target, direction)

            if hit is None and not overshot:
                return rect, revert(direction)

            rect = rect.moved_to(target)
            direction = rotate_counterclockwise(direction)

        return None
