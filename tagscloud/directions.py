from __future__ import annotations

from enum import Enum
from typing import Iterator


class Direction(Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


REAL_DIRECTIONS = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)

_CCW = {
    Direction.LEFT: Direction.DOWN,
    Direction.DOWN: Direction.RIGHT,
    Direction.RIGHT: Direction.UP,
    Direction.UP: Direction.LEFT,
}

_OPPOSITE = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
}


def rotate_counterclockwise(direction: Direction) -> Direction:
    return _CCW.get(direction, direction)


def revert(direction: Direction) -> Direction:
    return _OPPOSITE.get(direction, Direction.NONE)


def rotation_sequence(start: Direction) -> Iterator[Direction]:
    """Endless counterclockwise walk from start; take a prefix with islice."""
    direction = start
    while True:
        yield direction
        direction = rotate_counterclockwise(direction)
