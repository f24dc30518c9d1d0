from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from .geometry import Point, Rect, Size, cloud_stats
from .layouter import SpiralCloudLayouter
from .sizes import SizeParser


@dataclass
class LayoutResult:
    center: Point
    rectangles: List[Rect]
    skipped: List[Dict[str, Any]] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "center": [self.center.x, self.center.y],
            "rectangles": [r.to_dict() for r in self.rectangles],
            "skipped": self.skipped,
            "stats": self.stats,
        }


def parse_sizes(lines: Iterable[str]) -> Tuple[List[Size], List[str]]:
    parser = SizeParser()
    sizes: List[Size] = []
    rejected: List[str] = []
    for line in lines:
        if not line.strip():
            continue
        size = parser.try_parse(line)
        if size is None:
            rejected.append(line)
        else:
            sizes.append(size)
    return sizes, rejected


def layout_sizes(sizes: Iterable[Size], center: Point = Point(0, 0)) -> LayoutResult:
    """Feed sizes to a fresh layouter in order.

    Non-positive sizes are recorded in `skipped` and do not stop the run;
    PlacementError propagates.
    """
    layouter = SpiralCloudLayouter(center)
    rects: List[Rect] = []
    skipped: List[Dict[str, Any]] = []
    for idx, size in enumerate(sizes):
        size = Size.of(size)
        try:
            rects.append(layouter.put_next_rectangle(size))
        except ValueError as exc:
            skipped.append({"index": idx, "width": size.width, "height": size.height, "error": str(exc)})
    stats: Dict[str, Any] = dict(layouter.stats)
    stats.update(cloud_stats(rects, layouter.center))
    return LayoutResult(layouter.center, rects, skipped, stats)
