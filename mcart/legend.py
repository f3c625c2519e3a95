from collections import Counter
from typing import List, NamedTuple, Tuple

from mcart.palette import Palette, PaletteEntry

STACK_SIZE = 64


class LegendRow(NamedTuple):
    entry: PaletteEntry
    count: int


def count_blocks(grid, palette: Palette) -> List[LegendRow]:
    """
    Builds the materials list for a grid.

    Args:
        grid (Grid): Matched pixel grid.
        palette (Palette): Palette the grid was matched against.

    Returns:
        list[LegendRow]: One row per block that appears in the grid, most used
        first; equal counts keep palette order.
    """
    counts = Counter(cell.block_name for cell in grid.cells())
    rows = [LegendRow(entry, counts[entry.name]) for entry in palette if counts[entry.name] > 0]
    # sorted() is stable, so palette order survives among equal counts
    return sorted(rows, key=lambda r: r.count, reverse=True)


def stack_count(count: int) -> Tuple[int, int]:
    """Split a block count into (full stacks, leftover blocks)."""
    return divmod(count, STACK_SIZE)


def format_stacks(count: int) -> str:
    stacks, rest = stack_count(count)
    if not stacks:
        return f"{rest}"
    if not rest:
        return f"{stacks} x {STACK_SIZE}"
    return f"{stacks} x {STACK_SIZE} + {rest}"
