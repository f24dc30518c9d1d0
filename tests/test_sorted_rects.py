"""Tests for tagscloud/sorted_rects.py."""
import pytest

from tagscloud.directions import REAL_DIRECTIONS, Direction
from tagscloud.geometry import Rect
from tagscloud.sorted_rects import SortedRectangles


def _random_rects(rng, n):
    rects = []
    for _ in range(n):
        x, y = (int(v) for v in rng.integers(-50, 50, size=2))
        w, h = (int(v) for v in rng.integers(1, 20, size=2))
        rects.append(Rect(x, y, w, h))
    return rects


@pytest.fixture
def filled(rng):
    rects = _random_rects(rng, 200)
    index = SortedRectangles()
    for r in rects:
        index.add(r)
    return index, rects


class TestOrdering:
    def test_same_multiset_in_every_order(self, filled):
        index, rects = filled
        assert len(index) == len(rects)
        expected = sorted(rects, key=lambda r: (r.x, r.y, r.width, r.height))
        for d in REAL_DIRECTIONS:
            got = sorted(index.ordered(d), key=lambda r: (r.x, r.y, r.width, r.height))
            assert got == expected

    def test_edges_monotonic(self, filled):
        index, _ = filled
        n = len(index)
        right = [index.get(Direction.RIGHT, i).left for i in range(n)]
        left = [index.get(Direction.LEFT, i).right for i in range(n)]
        down = [index.get(Direction.DOWN, i).top for i in range(n)]
        up = [index.get(Direction.UP, i).bottom for i in range(n)]
        assert right == sorted(right)
        assert left == sorted(left, reverse=True)
        assert down == sorted(down)
        assert up == sorted(up, reverse=True)

    def test_ties_newest_first(self):
        index = SortedRectangles()
        older = Rect(0, 0, 5, 5)
        newer = Rect(0, 10, 5, 5)
        index.add(older)
        index.add(newer)
        assert index.get(Direction.RIGHT, 0) == newer
        assert index.get(Direction.RIGHT, 1) == older
        assert index.get(Direction.LEFT, 0) == newer
        # different keys on the other axis
        assert index.get(Direction.DOWN, 0) == older
        assert index.get(Direction.UP, 0) == newer

    def test_iter_insertion_order(self, filled):
        index, rects = filled
        assert list(index) == rects


class TestGet:
    def test_out_of_range(self, filled):
        index, _ = filled
        with pytest.raises(IndexError):
            index.get(Direction.RIGHT, len(index))
        with pytest.raises(IndexError):
            index.get(Direction.UP, -1)

    def test_empty(self):
        with pytest.raises(IndexError):
            SortedRectangles().get(Direction.LEFT, 0)

    def test_bad_direction(self, filled):
        index, _ = filled
        with pytest.raises(ValueError):
            index.get(Direction.NONE, 0)


class TestHasIntersection:
    def test_matches_brute_force(self, filled, rng):
        index, _ = filled
        probes = _random_rects(rng, 60)
        for d in REAL_DIRECTIONS:
            order = index.ordered(d)
            for probe in probes:
                for start in (0, 1, 17, 150, len(order), len(order) + 3):
                    expected = next(
                        (i for i in range(start, len(order)) if probe.intersects(order[i])),
                        None,
                    )
                    assert index.has_intersection(probe, d, start) == expected

    def test_touching_is_not_intersection(self):
        index = SortedRectangles()
        index.add(Rect(0, 0, 10, 10))
        for probe in (Rect(10, 0, 5, 5), Rect(-5, 0, 5, 5), Rect(0, 10, 5, 5), Rect(0, -5, 5, 5)):
            assert index.has_intersection(probe, Direction.RIGHT, 0) is None
        assert index.has_intersection(Rect(9, 9, 5, 5), Direction.RIGHT, 0) == 0

    def test_negative_start(self, filled):
        index, _ = filled
        with pytest.raises(IndexError):
            index.has_intersection(Rect(0, 0, 1, 1), Direction.DOWN, -1)

    def test_bad_direction(self, filled):
        index, _ = filled
        with pytest.raises(ValueError):
            index.has_intersection(Rect(0, 0, 1, 1), Direction.NONE, 0)
