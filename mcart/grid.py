"""
Row-major grid of matched pixels for one image.
"""

from typing import Iterator, List, NamedTuple, Tuple
import numpy as np
from PIL import Image

from mcart.color_match import DistanceMetric, map_image_to_palette
from mcart.palette import Palette


class PixelCell(NamedTuple):
    row: int
    col: int
    source_rgb: Tuple[int, int, int]
    block_name: str


class Grid:
    """Immutable height x width arrangement of PixelCells, top-to-bottom, left-to-right."""

    def __init__(self, width: int, height: int, cells):
        cells = tuple(cells)
        if len(cells) != width * height:
            raise ValueError(f"Grid of {width}x{height} needs {width * height} cells, got {len(cells)}.")
        self.width = width
        self.height = height
        self._cells = cells

    def cell(self, row: int, col: int) -> PixelCell:
        if not (0 <= row < self.height and 0 <= col < self.width):
            raise IndexError(f"Cell ({row}, {col}) outside {self.width}x{self.height} grid.")
        return self._cells[row * self.width + col]

    def rows(self) -> Iterator[Tuple[PixelCell, ...]]:
        for row in range(self.height):
            yield self._cells[row * self.width:(row + 1) * self.width]

    def cells(self) -> Tuple[PixelCell, ...]:
        return self._cells

    def block_names(self) -> List[List[str]]:
        return [[c.block_name for c in row] for row in self.rows()]

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"


def build_grid(image: Image.Image, palette: Palette, metric: DistanceMetric = DistanceMetric.CIE76) -> Grid:
    """
    Match every pixel of ``image`` against ``palette``.

    The grid has exactly the image's dimensions; resize beforehand to bound it.
    """
    rgb = np.array(image.convert("RGB"), dtype=np.uint8).reshape((image.height, image.width, 3))
    indices = map_image_to_palette(rgb, palette, metric)
    names = palette.names

    cells = []
    for y in range(image.height):
        for x in range(image.width):
            r, g, b = (int(c) for c in rgb[y, x])
            cells.append(PixelCell(y, x, (r, g, b), names[indices[y, x]]))
    return Grid(image.width, image.height, cells)
