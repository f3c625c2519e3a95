"""
Nearest-color matching of pixels against a block palette.
"""

from enum import Enum
import numpy as np
from skimage import color as skcolor

from mcart.palette import Palette

# Pixels per distance-matrix slice; keeps memory flat for unresized photos.
_CHUNK_PIXELS = 1 << 16


class DistanceMetric(str, Enum):
    CIE76 = "cie76"
    EUCLIDEAN = "euclidean"


def _to_rgb_array(colors) -> np.ndarray:
    arr = np.asarray(colors, dtype=np.float64)
    if arr.shape[-1] < 3:
        raise ValueError(f"Expected RGB color data, got shape {arr.shape}.")
    return arr[..., :3].reshape(-1, 3)


def _to_lab(rgb: np.ndarray) -> np.ndarray:
    return skcolor.rgb2lab(rgb / 255.0)


def _pairwise_distances(pixels: np.ndarray, palette_colors: np.ndarray, metric: DistanceMetric) -> np.ndarray:
    """(P, 3) x (N, 3) -> (P, N) distance matrix."""
    if metric == DistanceMetric.CIE76:
        return skcolor.deltaE_cie76(pixels[:, None, :], palette_colors[None, :, :])
    return np.linalg.norm(pixels[:, None, :] - palette_colors[None, :, :], axis=2)


def _prepare(colors: np.ndarray, metric: DistanceMetric) -> np.ndarray:
    return _to_lab(colors) if metric == DistanceMetric.CIE76 else colors


def color_distance(a, b, metric: DistanceMetric = DistanceMetric.CIE76) -> float:
    """
    Distance between two RGB colors (0-255 channels).

    Symmetric and non-negative; zero when both colors are equal.
    """
    metric = DistanceMetric(metric)
    first = _prepare(_to_rgb_array([a]), metric)
    second = _prepare(_to_rgb_array([b]), metric)
    return float(_pairwise_distances(first, second, metric)[0, 0])


def nearest_indices(colors, palette: Palette, metric: DistanceMetric = DistanceMetric.CIE76) -> np.ndarray:
    """
    Index of the nearest palette entry for each color in a flat (P, 3) batch.

    Ties go to the earliest palette entry, since argmin returns the first minimum.
    """
    metric = DistanceMetric(metric)
    flat = _to_rgb_array(colors)
    palette_colors = _prepare(palette.as_array().astype(np.float64), metric)

    nearest = np.empty(len(flat), dtype=np.intp)
    for start in range(0, len(flat), _CHUNK_PIXELS):
        chunk = _prepare(flat[start:start + _CHUNK_PIXELS], metric)
        dists = _pairwise_distances(chunk, palette_colors, metric)
        nearest[start:start + len(chunk)] = np.argmin(dists, axis=1)
    return nearest


def match_color(target, palette: Palette, metric: DistanceMetric = DistanceMetric.CIE76) -> str:
    """Return the name of the palette entry closest to ``target``."""
    index = int(nearest_indices([target], palette, metric)[0])
    return palette.entries()[index].name


def map_image_to_palette(image_array, palette: Palette, metric: DistanceMetric = DistanceMetric.CIE76) -> np.ndarray:
    """
    Map every pixel in the image to the nearest color in the palette.

    Args:
        image_array (np.ndarray): HxWx3 (or HxWx4, alpha ignored) RGB image data
        palette (Palette): palette to match against
        metric (DistanceMetric): distance used for matching

    Returns:
        np.ndarray: HxW array of palette indices
    """
    image_array = np.asarray(image_array)
    if image_array.ndim != 3:
        raise ValueError(f"Expected an HxWxC image array, got shape {image_array.shape}.")
    h, w = image_array.shape[:2]
    if h == 0 or w == 0:
        return np.zeros((h, w), dtype=np.intp)
    return nearest_indices(image_array, palette, metric).reshape((h, w))
