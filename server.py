from __future__ import annotations

from typing import Any, Dict, List, Tuple

import numpy as np
from flask import Flask, Response, jsonify, request

from tagscloud import config
from tagscloud import render
from tagscloud.geometry import Point, Size
from tagscloud.layouter import PlacementError
from tagscloud.pipeline import LayoutResult, layout_sizes, parse_sizes
from tagscloud.sizes import SizesGenerationSettings, generate_sizes

app = Flask(__name__)


class PayloadError(ValueError):
    pass


def _center_from(payload: Dict[str, Any]) -> Point:
    raw = payload.get("center")
    if raw is None:
        return Point(config.CENTER_X, config.CENTER_Y)
    try:
        return Point.of(raw)
    except ValueError as exc:
        raise PayloadError(f"bad center: {raw!r}") from exc


def _rng_from(payload: Dict[str, Any], key: str, default: int | None = None) -> np.random.Generator:
    raw = payload.get(key, default)
    try:
        return np.random.default_rng(None if raw is None else _as_seed(raw))
    except (TypeError, ValueError) as exc:
        raise PayloadError(f"bad {key}: {raw!r}") from exc


def _as_seed(raw: Any) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise TypeError(f"seed must be an integer, got {type(raw).__name__}")
    return raw


def _sizes_from(payload: Dict[str, Any]) -> Tuple[List[Size], List[str]]:
    if payload.get("generate"):
        settings = SizesGenerationSettings.parse(str(payload["generate"]))
        rng = _rng_from(payload, "seed")
        return list(generate_sizes(settings, rng)), []
    if "text" in payload:
        return parse_sizes(str(payload["text"]).splitlines())
    raw = payload.get("sizes", [])
    if not isinstance(raw, list):
        raise PayloadError(f"sizes must be a list, got {raw!r}")
    sizes: List[Size] = []
    for item in raw:
        try:
            sizes.append(Size.of(item))
        except ValueError as exc:
            raise PayloadError(f"bad size: {item!r}") from exc
    return sizes, []


def _build(payload: Any) -> Tuple[LayoutResult, List[str]]:
    if not isinstance(payload, dict):
        raise PayloadError("payload must be a JSON object")
    center = _center_from(payload)
    sizes, rejected = _sizes_from(payload)
    for line in rejected:
        print(f"[api] Unable to parse line '{line}'")
    return layout_sizes(sizes, center), rejected


@app.post("/api/layout")
def api_layout():
    payload = request.get_json(silent=True) or {}
    try:
        result, rejected = _build(payload)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    except PlacementError as exc:
        print(f"[api] placement failed: {exc}")
        return jsonify({"ok": False, "error": str(exc)}), 500
    data = result.to_dict()
    data["ok"] = True
    data["rejected_lines"] = rejected
    return jsonify(data)


@app.post("/api/render")
def api_render():
    payload = request.get_json(silent=True) or {}
    try:
        result, _ = _build(payload)
        rng = _rng_from(payload, "color_seed", config.COLOR_SEED)
    except ValueError as exc:
        return jsonify({"ok": False, "error": str(exc)}), 400
    except PlacementError as exc:
        print(f"[api] placement failed: {exc}")
        return jsonify({"ok": False, "error": str(exc)}), 500
    vis = render.RectanglesVisualizer(rng=rng)
    vis.add_rectangles(result.rectangles)
    img = vis.get_image(result.center)
    return Response(render.encode_png(img), mimetype="image/png")


if __name__ == "__main__":
    config._apply_env()
    app.run(host="127.0.0.1", port=5000, debug=True)
