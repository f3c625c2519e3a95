"""
Image decoding and bounded resizing.
"""

from pathlib import Path
from typing import Optional, Tuple, Union
from PIL import Image, UnidentifiedImageError

IMAGE_EXTENSIONS = frozenset({".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"})


class ImageLoadError(Exception):
    """Raised when an input file cannot be opened or decoded as an image."""

    def __init__(self, path, reason, unidentified=False):
        self.path = Path(path)
        self.reason = reason
        self.unidentified = unidentified
        super().__init__(f"{self.path.name}: {reason}")

    @property
    def not_an_image(self) -> bool:
        """True for a file no decoder recognises that also lacks an image extension."""
        return self.unidentified and not is_image_file(self.path)


def is_image_file(path: Union[str, Path]) -> bool:
    return Path(path).suffix.lower() in IMAGE_EXTENSIONS


def load_image(image_path: Union[str, Path]) -> Image.Image:
    """
    Decode an image file into an RGB PIL Image.

    Transparent pixels are flattened onto a white background. For animated
    formats only the first frame is used.

    Raises:
        ImageLoadError: If the file cannot be opened or is not a decodable image.
    """
    try:
        img = Image.open(image_path)
    except UnidentifiedImageError:
        raise ImageLoadError(image_path, "not a supported image format", unidentified=True) from None
    except (OSError, Image.DecompressionBombError) as e:
        raise ImageLoadError(image_path, f"cannot open file ({getattr(e, 'strerror', None) or e})") from e

    try:
        with img:
            img.load()
            if img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info:
                rgba = img.convert("RGBA")
                flattened = Image.new("RGB", rgba.size, (255, 255, 255))
                flattened.paste(rgba, (0, 0), mask=rgba)
                return flattened
            return img.convert("RGB")
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageLoadError(image_path, f"cannot decode image ({e})") from e


def fit_within(size: Tuple[int, int], max_dimension: Optional[int]) -> Tuple[int, int]:
    """
    Size that fits ``size`` inside a max_dimension square, keeping aspect ratio.

    The longer side becomes ``max_dimension`` and the shorter side is scaled
    with integer arithmetic. Sizes already within the bound, and a bound of
    None or 0, are returned unchanged.
    """
    width, height = size
    if not max_dimension or (width <= max_dimension and height <= max_dimension):
        return width, height

    if width > height:
        new_width, new_height = max_dimension, max_dimension * height // width
    else:
        new_width, new_height = max_dimension * width // height, max_dimension
    return max(1, new_width), max(1, new_height)


def resize_to_bound(img: Image.Image, max_dimension: Optional[int]) -> Image.Image:
    """Lanczos-resize ``img`` so neither side exceeds ``max_dimension``."""
    target = fit_within(img.size, max_dimension)
    if target == img.size:
        return img
    return img.resize(target, Image.Resampling.LANCZOS)
