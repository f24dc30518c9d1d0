from __future__ import annotations

import os
import re
from pathlib import Path

SIZES_PATH = Path(os.getenv("SIZES_PATH", "in.txt"))
OUT_PNG = Path("out.png")
OUT_SVG = Path("out.svg")
OUT_LOG = Path("layout_log.txt")
OUT_JSON = Path("layout.json")
FAILED_TESTS_DIR = Path("failed_tests")
# sanitised by set_output_prefix; empty keeps the plain names
OUT_PREFIX = ""

_BASE_OUTPUTS = {
    "OUT_PNG": OUT_PNG,
    "OUT_SVG": OUT_SVG,
    "OUT_LOG": OUT_LOG,
    "OUT_JSON": OUT_JSON,
}

CENTER_X = 0
CENTER_Y = 0
# "count minW maxW minH maxH"; empty means read SIZES_PATH
SIZES_GEN = os.getenv("SIZES_GEN", "")
SIZES_SEED: int | None = None
COLOR_SEED: int | None = None
COLOR_MIN = 64
COLOR_MAX = 256
PEN_WIDTH = 1
DRAW_SCALE = 1.0
BACKGROUND = (0, 0, 0)
SVG_STROKE_WIDTH = 1


def _apply_env() -> None:
    global SIZES_PATH, CENTER_X, CENTER_Y, SIZES_GEN, SIZES_SEED, COLOR_SEED
    global PEN_WIDTH, DRAW_SCALE
    if "SIZES_PATH" in os.environ:
        SIZES_PATH = Path(os.environ["SIZES_PATH"])
    if "CENTER_X" in os.environ:
        CENTER_X = int(float(os.environ["CENTER_X"]))
    if "CENTER_Y" in os.environ:
        CENTER_Y = int(float(os.environ["CENTER_Y"]))
    if "SIZES_GEN" in os.environ:
        SIZES_GEN = str(os.environ["SIZES_GEN"]).strip()
    if "SIZES_SEED" in os.environ:
        SIZES_SEED = int(os.environ["SIZES_SEED"])
    if "COLOR_SEED" in os.environ:
        COLOR_SEED = int(os.environ["COLOR_SEED"])
    if "PEN_WIDTH" in os.environ:
        PEN_WIDTH = max(1, int(float(os.environ["PEN_WIDTH"])))
    if "DRAW_SCALE" in os.environ:
        DRAW_SCALE = float(os.environ["DRAW_SCALE"])
    if "OUT_PREFIX" in os.environ:
        set_output_prefix(os.environ["OUT_PREFIX"])


def _safe_prefix(value: str) -> str:
    return re.sub(r"[^\w-]", "_", value.strip()).strip("_")


def set_output_prefix(prefix: str) -> None:
    """Prefix every output file name; an empty prefix restores the defaults."""
    global OUT_PREFIX, OUT_PNG, OUT_SVG, OUT_LOG, OUT_JSON
    OUT_PREFIX = _safe_prefix(prefix or "")
    named = {
        key: path.with_name(f"{OUT_PREFIX}_{path.name}") if OUT_PREFIX else path
        for key, path in _BASE_OUTPUTS.items()
    }
    OUT_PNG = named["OUT_PNG"]
    OUT_SVG = named["OUT_SVG"]
    OUT_LOG = named["OUT_LOG"]
    OUT_JSON = named["OUT_JSON"]
