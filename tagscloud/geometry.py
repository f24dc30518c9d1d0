from __future__ import annotations

import math
import numbers
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Sequence, Tuple

import shapely
from shapely.geometry import Polygon, box
from shapely.ops import unary_union
from shapely.strtree import STRtree


def _as_int(value: Any, what: str) -> int:
    # accepts numpy integers; bool is Integral too and is refused
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return int(value)


def _int_pair(value: Any, what: str) -> Tuple[int, int]:
    if isinstance(value, (str, bytes)):
        raise ValueError(f"{what} must be a pair of integers, got {value!r}")
    try:
        a, b = value
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{what} must be a pair of integers, got {value!r}") from exc
    return _as_int(a, what), _as_int(b, what)


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    @classmethod
    def of(cls, value: Point | Sequence[int]) -> Point:
        if isinstance(value, Point):
            return cls(_as_int(value.x, "x"), _as_int(value.y, "y"))
        return cls(*_int_pair(value, "point"))

    def __add__(self, other: Point | Size) -> Point:
        if isinstance(other, Size):
            return Point(self.x + other.width, self.y + other.height)
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point | Size) -> Point:
        if isinstance(other, Size):
            return Point(self.x - other.width, self.y - other.height)
        return Point(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Size:
    width: int
    height: int

    def __floordiv__(self, k: int) -> Size:
        return Size(self.width // k, self.height // k)

    @classmethod
    def of(cls, value: Size | Sequence[int]) -> Size:
        """Normalise a Size or a ``(w, h)`` pair to a Size of plain ints.

        Raises ValueError for strings, wrong arity and non-integer
        components (floats and bools included).
        """
        if isinstance(value, Size):
            return cls(_as_int(value.width, "width"), _as_int(value.height, "height"))
        return cls(*_int_pair(value, "size"))


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle; y grows downward."""

    x: int
    y: int
    width: int
    height: int

    @classmethod
    def at(cls, location: Point, size: Size) -> Rect:
        return cls(location.x, location.y, size.width, size.height)

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def location(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    def moved_to(self, location: Point) -> Rect:
        return replace(self, x=location.x, y=location.y)

    def intersects(self, other: Rect) -> bool:
        # touching edges do not count
        return (
            other.x < self.x + self.width
            and self.x < other.x + other.width
            and other.y < self.y + self.height
            and self.y < other.y + other.height
        )

    def to_polygon(self) -> Polygon:
        return box(self.left, self.top, self.right, self.bottom)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def bounding_box(rects: Iterable[Rect]) -> Tuple[int, int, int, int]:
    rects = list(rects)
    if not rects:
        return (0, 0, 0, 0)
    return (
        min(r.left for r in rects),
        min(r.top for r in rects),
        max(r.right for r in rects),
        max(r.bottom for r in rects),
    )


def overlapping_pairs(rects: Sequence[Rect]) -> List[Tuple[int, int]]:
    """Index pairs (i < j) whose rectangles share a positive area."""
    if len(rects) < 2:
        return []
    polys = [r.to_polygon() for r in rects]
    tree = STRtree(polys)
    src, dst = tree.query(polys, predicate="intersects")
    out: List[Tuple[int, int]] = []
    for i, j in zip(src.tolist(), dst.tolist()):
        if i >= j:
            continue
        if polys[i].intersection(polys[j]).area > 0:
            out.append((i, j))
    return sorted(out)


def cloud_stats(rects: Sequence[Rect], center: Point) -> Dict[str, float]:
    if not rects:
        return {
            "count": 0,
            "area": 0.0,
            "bbox": (0, 0, 0, 0),
            "radius": 0.0,
            "enclosing_radius": 0.0,
            "density": 0.0,
        }
    merged = unary_union([r.to_polygon() for r in rects])
    area = float(merged.area)
    radius = 0.0
    for r in rects:
        for cx, cy in ((r.left, r.top), (r.right, r.top), (r.left, r.bottom), (r.right, r.bottom)):
            radius = max(radius, math.hypot(cx - center.x, cy - center.y))
    enclosing = float(shapely.minimum_bounding_radius(merged))
    density = area / (math.pi * enclosing * enclosing) if enclosing > 0 else 0.0
    return {
        "count": len(rects),
        "area": area,
        "bbox": bounding_box(rects),
        "radius": radius,
        "enclosing_radius": enclosing,
        "density": density,
    }
