from __future__ import annotations

import io
import json
from pathlib import Path
from typing import Iterable, List, Tuple

import cv2
import numpy as np
from PIL import Image

from . import config
from .geometry import Point, Rect, bounding_box
from .pipeline import LayoutResult


def _random_bgr(rng: np.random.Generator) -> Tuple[int, int, int]:
    b, g, r = rng.integers(config.COLOR_MIN, config.COLOR_MAX, size=3)
    return (int(b), int(g), int(r))


class RectanglesVisualizer:
    """Collects placed rectangles and draws them as coloured outlines.

    The image is sized so the cloud center lands in the middle of it.
    """

    def __init__(self, pen_width: int | None = None, rng: np.random.Generator | None = None) -> None:
        self.pen_width = int(pen_width if pen_width is not None else config.PEN_WIDTH)
        self._rng = rng if rng is not None else np.random.default_rng(config.COLOR_SEED)
        self._rects: List[Rect] = []

    def __len__(self) -> int:
        return len(self._rects)

    def add_rectangle(self, rect: Rect) -> None:
        self._rects.append(rect)

    def add_rectangles(self, rects: Iterable[Rect]) -> None:
        for rect in rects:
            self.add_rectangle(rect)

    def image_size(self, center: Point = Point(0, 0)) -> Tuple[int, int]:
        if not self._rects:
            return (1, 1)
        min_x, min_y, max_x, max_y = bounding_box(self._rects)
        w = 2 * max(abs(min_x - center.x), max_x - center.x)
        h = 2 * max(abs(min_y - center.y), max_y - center.y)
        return (max(1, w), max(1, h))

    def _random_color(self) -> Tuple[int, int, int]:
        return _random_bgr(self._rng)

    def get_image(self, center: Point = Point(0, 0)) -> np.ndarray:
        w, h = self.image_size(center)
        img = np.full((h, w, 3), config.BACKGROUND, dtype=np.uint8)
        if not self._rects:
            return img
        ox = w // 2 - center.x
        oy = h // 2 - center.y
        pen = self.pen_width
        for rect in self._rects:
            x0 = rect.x + ox
            y0 = rect.y + oy
            # shrink by the pen so adjacent outlines don't share pixels
            x1 = x0 + max(0, rect.width - pen)
            y1 = y0 + max(0, rect.height - pen)
            cv2.rectangle(img, (x0, y0), (x1, y1), self._random_color(), pen)
        return img


def scale_image(img: np.ndarray, scale: float) -> np.ndarray:
    if scale == 1.0:
        return img
    h, w = img.shape[:2]
    size = (max(1, int(round(w * scale))), max(1, int(round(h * scale))))
    return cv2.resize(img, size, interpolation=cv2.INTER_NEAREST)


def write_png(img: np.ndarray, out_path: Path) -> None:
    if not cv2.imwrite(str(out_path), img):
        raise OSError(f"Failed to write {out_path}")


def encode_png(img: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(img[:, :, ::-1].copy()).save(buf, format="PNG")
    return buf.getvalue()


def read_png(path: Path) -> np.ndarray:
    with Image.open(path) as im:
        im = im.convert("RGB")
        arr = np.array(im)
        return arr[:, :, ::-1].copy()


def write_svg(rects: List[Rect], center: Point, out_path: Path) -> None:
    vis = RectanglesVisualizer(pen_width=1)
    vis.add_rectangles(rects)
    w, h = vis.image_size(center)
    rng = np.random.default_rng(config.COLOR_SEED)
    ox = w // 2 - center.x
    oy = h // 2 - center.y
    sw = config.SVG_STROKE_WIDTH
    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{w}" height="{h}" viewBox="0 0 {w} {h}">'
    ]
    parts.append(f'<rect x="0" y="0" width="{w}" height="{h}" fill="#000"/>')
    for idx, r in enumerate(rects):
        b, g, rr = _random_bgr(rng)
        parts.append(
            f'<rect id="tag{idx}" x="{r.x + ox}" y="{r.y + oy}" width="{r.width}" height="{r.height}" '
            f'fill="none" stroke="rgb({rr},{g},{b})" stroke-width="{sw}"/>'
        )
    parts.append("</svg>")
    out_path.write_text("".join(parts), encoding="utf-8")


def write_layout_json(result: LayoutResult, out_path: Path) -> None:
    out_path.write_text(json.dumps(result.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")


def write_layout_log(result: LayoutResult, out_path: Path, rejected_lines: List[str] | None = None) -> None:
    lines = [f"count={len(result.rectangles)} center=({result.center.x},{result.center.y})"]
    for idx, r in enumerate(result.rectangles):
        lines.append(f"tag={idx} x={r.x} y={r.y} w={r.width} h={r.height}")
    for item in result.skipped:
        lines.append(
            f"skipped index={item['index']} w={item['width']} h={item['height']} error={item['error']}"
        )
    for line in rejected_lines or []:
        lines.append(f"rejected line={line!r}")
    st = result.stats
    if st:
        lines.append(
            f"placed={st.get('placed', 0)} attempts={st.get('attempts', 0)} "
            f"slides={st.get('slides', 0)} backtracks={st.get('backtracks', 0)}"
        )
        lines.append(
            f"area={st.get('area', 0.0):.1f} bbox={tuple(st.get('bbox', (0, 0, 0, 0)))} "
            f"radius={st.get('radius', 0.0):.2f} enclosing_radius={st.get('enclosing_radius', 0.0):.2f} "
            f"density={st.get('density', 0.0):.3f}"
        )
    out_path.write_text("\n".join(lines), encoding="utf-8")
