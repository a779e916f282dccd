import io
import os
from typing import Tuple

from PIL import Image


def image_size(data: bytes) -> Tuple[int, int]:
    """Read just the image header and return (width, height)."""
    with Image.open(io.BytesIO(data)) as img:
        return img.width, img.height


def decode(data: bytes) -> Image.Image:
    """Decode raw bytes into a fully loaded RGBA image."""
    with Image.open(io.BytesIO(data)) as img:
        # Palette images keep their transparency only through an explicit convert
        return img.convert("RGBA")


def create_canvas(width: int, height: int) -> Image.Image:
    """Create a blank, fully transparent canvas."""
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def draw(canvas: Image.Image, img: Image.Image, x: int, y: int):
    """Copy `img` onto `canvas` unscaled with its top-left corner at (x, y)."""
    canvas.paste(img, (x, y))


def encode_png(canvas: Image.Image, path: str):
    """Save the canvas as a PNG file, creating the parent directory if needed."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    canvas.save(path, format="PNG")
