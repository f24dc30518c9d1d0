"""Shared fixtures for the tags cloud tests."""
import numpy as np
import pytest

from tagscloud import config
from tagscloud import render
from tagscloud.geometry import Point
from tagscloud.layouter import SpiralCloudLayouter


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)


@pytest.fixture
def layouter(request):
    """Layouter at the origin; its cloud is saved as a PNG if the test fails."""
    lay = SpiralCloudLayouter(Point(0, 0))
    yield lay
    rep = getattr(request.node, "rep_call", None)
    if rep is None or not rep.failed or not len(lay):
        return
    config.FAILED_TESTS_DIR.mkdir(parents=True, exist_ok=True)
    out = config.FAILED_TESTS_DIR / f"{request.node.name}.png"
    vis = render.RectanglesVisualizer(rng=np.random.default_rng(0))
    vis.add_rectangles(lay.rectangles)
    try:
        render.write_png(vis.get_image(lay.center), out)
        print(f"Tag cloud visualization saved to file '{out}'.")
    except OSError as exc:
        print(f"Unable to save tag cloud visualization for failed test '{request.node.name}': {exc}")


@pytest.fixture
def rng():
    return np.random.default_rng(20240229)


def overlaps(rects):
    """Pairs (i, j), i < j, of rectangles sharing a positive area."""
    if len(rects) < 2:
        return []
    arr = np.array([(r.x, r.y, r.x + r.width, r.y + r.height) for r in rects], dtype=np.int64)
    x0, y0, x1, y1 = arr.T
    out = []
    for i in range(len(arr) - 1):
        hit = (
            (x0[i + 1:] < x1[i]) & (x0[i] < x1[i + 1:])
            & (y0[i + 1:] < y1[i]) & (y0[i] < y1[i + 1:])
        )
        for j in np.nonzero(hit)[0]:
            out.append((i, i + 1 + int(j)))
    return out
