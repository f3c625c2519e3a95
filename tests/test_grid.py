# tests/test_grid.py
import pytest
from PIL import Image
from mcart import grid as grid_mod
from mcart.color_match import DistanceMetric
from mcart.grid import Grid, PixelCell, build_grid
from mcart.palette import CONCRETE_PALETTE, Palette

BLACK_WHITE = Palette("bw", [("Black", (0, 0, 0)), ("White", (255, 255, 255))])


@pytest.mark.parametrize("metric", [DistanceMetric.CIE76, DistanceMetric.EUCLIDEAN])
def test_two_pixel_image_maps_in_order(metric):
    img = Image.new("RGB", (2, 1))
    img.putpixel((0, 0), (0, 0, 0))
    img.putpixel((1, 0), (255, 255, 255))

    grid = build_grid(img, BLACK_WHITE, metric)

    assert (grid.width, grid.height) == (2, 1)
    assert len(grid) == 2
    assert grid.block_names() == [["Black", "White"]]


def test_grid_dimensions_follow_image():
    img = Image.new("RGB", (7, 3), color=(120, 30, 30))
    grid = build_grid(img, CONCRETE_PALETTE)
    assert grid.width == img.width
    assert grid.height == img.height
    assert [len(row) for row in grid.rows()] == [7, 7, 7]


def test_cells_are_row_major_with_source_colors():
    img = Image.new("RGB", (2, 2))
    pixels = {(0, 0): (255, 255, 255), (1, 0): (0, 0, 0), (0, 1): (10, 10, 10), (1, 1): (250, 250, 250)}
    for xy, rgb in pixels.items():
        img.putpixel(xy, rgb)

    grid = build_grid(img, BLACK_WHITE)

    coords = [(c.row, c.col) for c in grid.cells()]
    assert coords == [(0, 0), (0, 1), (1, 0), (1, 1)]
    assert grid.cell(1, 0).source_rgb == (10, 10, 10)
    assert grid.cell(1, 0).block_name == "Black"
    assert grid.block_names() == [["White", "Black"], ["Black", "White"]]


def test_every_cell_names_a_palette_entry():
    img = Image.linear_gradient("L").convert("RGB").resize((16, 16))
    grid = build_grid(img, CONCRETE_PALETTE)
    assert all(cell.block_name in CONCRETE_PALETTE for cell in grid.cells())


def test_rgba_input_is_converted():
    img = Image.new("RGBA", (3, 2), color=(255, 255, 255, 128))
    grid = build_grid(img, BLACK_WHITE)
    assert grid.block_names() == [["White"] * 3] * 2


def test_cell_out_of_range():
    grid = Grid(1, 1, [PixelCell(0, 0, (0, 0, 0), "Black")])
    with pytest.raises(IndexError):
        grid.cell(0, 1)


def test_grid_rejects_wrong_cell_count():
    with pytest.raises(ValueError):
        grid_mod.Grid(2, 2, [PixelCell(0, 0, (0, 0, 0), "Black")])
