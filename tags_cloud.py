from __future__ import annotations

import time
from pathlib import Path
from typing import List

import numpy as np

from tagscloud import config
from tagscloud import render
from tagscloud.geometry import Point, Size
from tagscloud.layouter import PlacementError
from tagscloud.pipeline import LayoutResult, layout_sizes, parse_sizes
from tagscloud.sizes import SizesGenerationSettings, generate_sizes, read_size_lines


def _log_step(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}")


def load_sizes() -> tuple[List[Size], List[str]]:
    if config.SIZES_GEN:
        try:
            settings = SizesGenerationSettings.parse(config.SIZES_GEN)
        except ValueError as exc:
            raise SystemExit(f"[layout] bad SIZES_GEN: {exc}") from exc
        rng = np.random.default_rng(config.SIZES_SEED)
        _log_step(f"generating {settings.count} sizes (seed={config.SIZES_SEED})")
        return list(generate_sizes(settings, rng)), []
    if not config.SIZES_PATH.exists():
        raise SystemExit(f"Missing {config.SIZES_PATH}")
    _log_step(f"reading sizes from {config.SIZES_PATH}")
    return parse_sizes(read_size_lines(config.SIZES_PATH))


def run(out_png: Path | None = None) -> LayoutResult:
    sizes, rejected = load_sizes()
    for line in rejected:
        print(f"[layout] Unable to parse line '{line}'")

    center = Point(config.CENTER_X, config.CENTER_Y)
    try:
        result = layout_sizes(sizes, center)
    except PlacementError as exc:
        raise SystemExit(f"[layout] {exc}") from exc
    for item in result.skipped:
        print(f"[layout] skipped size {item['width']}x{item['height']}: {item['error']}")
    _log_step(
        f"placed {len(result.rectangles)} rectangles "
        f"(backtracks={result.stats.get('backtracks', 0)})"
    )

    vis = render.RectanglesVisualizer()
    vis.add_rectangles(result.rectangles)
    img = render.scale_image(vis.get_image(center), config.DRAW_SCALE)
    out_png = out_png or config.OUT_PNG
    render.write_png(img, out_png)
    render.write_svg(result.rectangles, center, config.OUT_SVG)
    render.write_layout_json(result, config.OUT_JSON)
    render.write_layout_log(result, config.OUT_LOG, rejected)
    return result


def main() -> None:
    config._apply_env()
    result = run()
    print(
        f"Wrote {config.OUT_PNG}, {config.OUT_SVG}, {config.OUT_JSON}, {config.OUT_LOG} "
        f"with {len(result.rectangles)} rectangles and {len(result.skipped)} skipped"
    )


if __name__ == "__main__":
    main()
