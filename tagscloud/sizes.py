from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

import numpy as np

from .geometry import Size


class SizeParser:
    """Reads a size from a line holding exactly two integers: "width height"."""

    def try_parse(self, line: str) -> Optional[Size]:
        parts = line.split()
        if len(parts) != 2:
            return None
        try:
            width = int(parts[0])
            height = int(parts[1])
        except ValueError:
            return None
        return Size(width, height)


@dataclass(frozen=True)
class SizesGenerationSettings:
    count: int
    min_width: int
    max_width: int
    min_height: int
    max_height: int

    @classmethod
    def parse(cls, text: str) -> SizesGenerationSettings:
        parts = text.split()
        if len(parts) != 5:
            raise ValueError(f"Expected 5 integers (count minW maxW minH maxH), got {text!r}")
        count, min_w, max_w, min_h, max_h = (int(p) for p in parts)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        if min_w >= max_w or min_h >= max_h:
            raise ValueError(f"Empty size range in {text!r}")
        return cls(count, min_w, max_w, min_h, max_h)


def generate_sizes(settings: SizesGenerationSettings, rng: np.random.Generator | None = None) -> Iterator[Size]:
    """Widths in [min_width, max_width), heights in [min_height, max_height)."""
    if rng is None:
        rng = np.random.default_rng()
    for _ in range(settings.count):
        w = int(rng.integers(settings.min_width, settings.max_width))
        h = int(rng.integers(settings.min_height, settings.max_height))
        yield Size(w, h)


def read_size_lines(path: Path) -> List[str]:
    text = Path(path).read_text(encoding="utf-8")
    return [line for line in text.splitlines() if line.strip()]
