import sys
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Set

import rich.traceback
import typer

from mcart import file_utils
from mcart.color_match import DistanceMetric
from mcart.grid import build_grid
from mcart.image_ops import ImageLoadError, load_image, resize_to_bound
from mcart.palette import PALETTES, PaletteError, get_palette
from mcart.render import ColorSource, Layout, RenderOptions, write_html

DEFAULT_INPUT_DIR = Path("Input Images")
DEFAULT_OUTPUT_DIR = Path("Ascii Art")

class Mode(str, Enum):
    TABLE = "table"
    FLEX = "flex"


# Rendering modes: palette + distance metric + layout + resize bound.
MODES: Dict[Mode, Dict] = {
    Mode.TABLE: {"palette": "concrete", "metric": DistanceMetric.CIE76, "layout": Layout.TABLE, "max_dimension": 128},
    Mode.FLEX: {"palette": "extended", "metric": DistanceMetric.EUCLIDEAN, "layout": Layout.FLEX, "max_dimension": 128},
}

app = typer.Typer(add_completion=False)


@app.command()
def mcart_cli(
    input_dir: Path = typer.Option(
        DEFAULT_INPUT_DIR, "--input-dir", help="Directory of images to convert. Default: 'Input Images'."
    ),
    output_dir: Path = typer.Option(
        DEFAULT_OUTPUT_DIR, "--output-dir",
        help="Directory for the generated HTML guides. Created if missing. Default: 'Ascii Art'.",
        file_okay=False, dir_okay=True,
    ),
    mode: Mode = typer.Option(
        Mode.TABLE, "--mode", case_sensitive=False, help="Rendering mode preset: table (concrete, CIE76, fixed cells) or flex (extended, Euclidean, viewport cells)."
    ),
    palette_name: Optional[str] = typer.Option(
        None, "--palette", help=f"Block palette: {', '.join(PALETTES)}. Default: from --mode."
    ),
    metric: Optional[DistanceMetric] = typer.Option(
        None, "--metric", case_sensitive=False, help="Color distance used for matching. Default: from --mode."
    ),
    layout: Optional[Layout] = typer.Option(
        None, "--layout", case_sensitive=False, help="HTML layout for the grid. Default: from --mode."
    ),
    color_source: ColorSource = typer.Option(
        ColorSource.PALETTE, "--color-source", case_sensitive=False,
        help="Color cells by the matched block (palette) or by the sampled pixel (source). Default: palette."
    ),
    max_dimension: Optional[int] = typer.Option(
        None, "--max-dimension", min=0, help="Shrink images so neither side exceeds this many pixels. 0 disables resizing. Default: 128."
    ),
    cell_size: int = typer.Option(10, "--cell-size", min=1, help="Cell edge in pixels for the table layout. Default: 10."),
    legend: bool = typer.Option(True, "--legend/--no-legend", help="Append a materials list to each guide. Default: True."),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print converted/failed/skipped counts at the end."),
):
    """
    Converts every image in the input directory into an HTML Minecraft block guide.
    """
    command_line_str = " ".join(sys.argv)

    preset = MODES[mode]

    effective_palette_name = palette_name or preset["palette"]
    effective_metric = metric or preset["metric"]
    effective_layout = layout or preset["layout"]
    effective_max_dimension = preset["max_dimension"] if max_dimension is None else max_dimension

    try:
        palette = get_palette(effective_palette_name)
    except PaletteError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        input_files = file_utils.list_input_files(input_dir)
    except OSError as e:
        typer.secho(f"Error: failed to list images in '{input_dir}': {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    try:
        file_utils.ensure_output_dir(output_dir)
    except OSError as e:
        typer.secho(f"Error: failed to create output directory '{output_dir}': {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(f"Using palette '{palette.name}' ({len(palette)} blocks), {effective_metric.value} distance, "
               f"{effective_layout.value} layout, coloring by {color_source.value}.")
    if effective_max_dimension:
        typer.echo(f"Images larger than {effective_max_dimension}px will be resized.")
    typer.echo(f"Found {len(input_files)} file(s) in '{input_dir}'.")

    converted, failed, skipped = 0, 0, 0
    claimed_outputs: Set[Path] = set()
    for image_path in input_files:
        try:
            img = load_image(image_path)
        except ImageLoadError as e:
            if e.not_an_image:
                skipped += 1
                continue
            typer.secho(f"Error: failed to load image {image_path.name}: {e.reason}", fg=typer.colors.RED, err=True)
            failed += 1
            continue

        source_size = img.size
        img = resize_to_bound(img, effective_max_dimension)
        grid = build_grid(img, palette, effective_metric)

        output_path = file_utils.claim_output_path(image_path, output_dir, claimed_outputs)
        options = RenderOptions(
            layout=effective_layout,
            color_source=color_source,
            cell_size_px=cell_size,
            title=f"Minecraft Pixel Art - {image_path.stem}",
            show_legend=legend,
            metadata={
                "command_line": command_line_str,
                "Source Image": image_path.name,
                "Source Size": f"{source_size[0]}x{source_size[1]}",
                "Grid Size": f"{grid.width}x{grid.height}",
                "Palette": palette.name,
                "Metric": effective_metric.value,
                "Color Source": color_source.value,
            },
        )
        try:
            write_html(grid, palette, output_path, options)
        except OSError as e:
            typer.secho(f"Error: failed to write HTML for {image_path.name} to {output_path}: {e}", fg=typer.colors.RED, err=True)
            failed += 1
            continue

        converted += 1
        typer.echo(f"{image_path.name} -> {output_path} ({grid.width}x{grid.height} blocks)")

    if summary:
        color = typer.colors.GREEN if not failed else typer.colors.YELLOW
        typer.secho(f"\nConverted {converted}, failed {failed}, skipped {skipped} non-image file(s).", fg=color)
    typer.echo(f"Outputs in: {output_dir.resolve()}")


def main():
    rich.traceback.install(show_locals=False, suppress=[typer])
    app()


if __name__ == "__main__":
    main()
