"""
HTML block-placement guide rendering.

The document is assembled as an ElementTree and serialised as HTML, so the
output is self-contained and every attribute is escaped by the serializer.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union
import xml.etree.ElementTree as ET

from mcart import file_utils
from mcart.grid import Grid
from mcart.legend import count_blocks, format_stacks
from mcart.palette import Palette

GENERATOR = "mcartgen"


class Layout(str, Enum):
    TABLE = "table"
    FLEX = "flex"


class ColorSource(str, Enum):
    PALETTE = "palette"
    SOURCE = "source"


@dataclass(frozen=True)
class RenderOptions:
    layout: Layout = Layout.TABLE
    color_source: ColorSource = ColorSource.PALETTE
    cell_size_px: int = 10
    title: str = "Minecraft Pixel Art"
    show_legend: bool = True
    metadata: Dict[str, str] = field(default_factory=dict)


def flex_cell_size(grid: Grid) -> float:
    """Cell edge in vmin so the longer grid side spans the viewport."""
    return 100 / max(grid.width, grid.height, 1)


def _stylesheet(grid: Grid, options: RenderOptions) -> str:
    rules = ["body { margin: 0; font-family: sans-serif; }"]
    if options.layout == Layout.TABLE:
        size = options.cell_size_px
        rules += [
            "table.grid { border-collapse: collapse; }",
            f"table.grid td {{ width: {size}px; height: {size}px; padding: 0; }}",
        ]
    else:
        size = f"{flex_cell_size(grid):.6g}vmin"
        rules += [
            ".grid { display: flex; flex-direction: column; }",
            ".grid .row { display: flex; }",
            f".grid .cell {{ width: {size}; height: {size}; flex: none; }}",
        ]
    if options.show_legend:
        rules += [
            "table.legend { border-collapse: collapse; margin: 1em; }",
            "table.legend td, table.legend th { padding: 2px 8px; text-align: left; }",
            ".swatch { display: inline-block; width: 1em; height: 1em; border: 1px solid #000; }",
        ]
    return "\n".join(rules)


def _cell_color(cell, palette: Palette, options: RenderOptions) -> str:
    if options.color_source == ColorSource.SOURCE:
        r, g, b = cell.source_rgb
        return f"rgb({r},{g},{b})"
    return palette.lookup(cell.block_name).css


def _build_grid(parent: ET.Element, grid: Grid, palette: Palette, options: RenderOptions):
    if options.layout == Layout.TABLE:
        container = ET.SubElement(parent, "table", {"class": "grid"})
        row_tag, row_attrs, cell_tag, cell_class = "tr", {}, "td", None
    else:
        container = ET.SubElement(parent, "div", {"class": "grid"})
        row_tag, row_attrs, cell_tag, cell_class = "div", {"class": "row"}, "div", "cell"

    for row in grid.rows():
        row_el = ET.SubElement(container, row_tag, dict(row_attrs))
        for cell in row:
            attrs = {"title": cell.block_name, "style": f"background-color:{_cell_color(cell, palette, options)}"}
            if cell_class:
                attrs = {"class": cell_class, **attrs}
            ET.SubElement(row_el, cell_tag, attrs)


def _build_legend(parent: ET.Element, grid: Grid, palette: Palette):
    table = ET.SubElement(parent, "table", {"class": "legend"})
    caption = ET.SubElement(table, "caption")
    caption.text = f"Materials ({grid.width} x {grid.height}, {len(grid)} blocks)"
    header = ET.SubElement(table, "tr")
    for heading in ("", "Block", "Count", "Stacks"):
        ET.SubElement(header, "th").text = heading

    for row in count_blocks(grid, palette):
        tr = ET.SubElement(table, "tr")
        swatch_td = ET.SubElement(tr, "td")
        ET.SubElement(swatch_td, "span", {"class": "swatch", "style": f"background-color:{row.entry.css}"})
        ET.SubElement(tr, "td").text = row.entry.name
        ET.SubElement(tr, "td").text = str(row.count)
        ET.SubElement(tr, "td").text = format_stacks(row.count)


def render_document(grid: Grid, palette: Palette, options: Optional[RenderOptions] = None) -> str:
    """
    Render a matched grid as a standalone HTML document.

    Every cell carries its block name as a ``title`` tooltip. The output only
    depends on the arguments, so rendering the same grid twice gives identical text.
    """
    options = options or RenderOptions()
    for cell in grid.cells():
        # A name outside the palette means the grid was built against another palette.
        assert cell.block_name in palette, f"'{cell.block_name}' is not in palette '{palette.name}'"

    html = ET.Element("html", {"lang": "en"})
    head = ET.SubElement(html, "head")
    ET.SubElement(head, "meta", {"charset": "utf-8"})
    ET.SubElement(head, "meta", {"name": "generator", "content": GENERATOR})
    for key, value in file_utils.clean_metadata(options.metadata).items():
        ET.SubElement(head, "meta", {"name": f"{GENERATOR}:{key}", "content": value})
    ET.SubElement(head, "title").text = options.title
    ET.SubElement(head, "style").text = _stylesheet(grid, options)

    body = ET.SubElement(html, "body")
    _build_grid(body, grid, palette, options)
    if options.show_legend:
        _build_legend(body, grid, palette)

    ET.indent(html, space="  ")
    return "<!DOCTYPE html>\n" + ET.tostring(html, encoding="unicode", method="html") + "\n"


def write_html(
    grid: Grid,
    palette: Palette,
    output_path: Union[str, Path],
    options: Optional[RenderOptions] = None,
) -> Path:
    """
    Render ``grid`` and write it to ``output_path``, replacing any existing file.

    Raises:
        OSError: If the file cannot be created or written.
    """
    return file_utils.save_html(render_document(grid, palette, options), output_path)
