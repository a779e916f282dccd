from typing import Dict, Sequence, Tuple

from PIL import Image

from . import codec
from .catalog import PADDING, SourceEntry
from .geometry import Rectangle


def interior_rectangles(entries: Sequence[SourceEntry]) -> Dict[int, Rectangle]:
    """Map each entry index to its un-padded rectangle; duplicates share their canonical entry's."""
    rects = {}
    for entry in entries:
        if entry.is_canonical:
            rects[entry.index] = entry.interior_rect()

    for entry in entries:
        if not entry.is_canonical:
            rects[entry.index] = rects[entry.duplicate_of]

    return rects


def release(img: Image.Image):
    """Close an image, reporting rather than raising on failure."""
    try:
        img.close()
    except Exception as e:
        print(f"Warning: could not release image: {e}")


def paint(canvas: Image.Image, entries: Sequence[SourceEntry], archive):
    """Decode and draw every canonical entry once, inside its padding border."""
    for entry in entries:
        if not entry.is_canonical:
            continue
        img = codec.decode(archive.read(entry.source))
        try:
            codec.draw(canvas, img, entry.x + PADDING, entry.y + PADDING)
        finally:
            release(img)


def composite(entries: Sequence[SourceEntry], width: int, height: int,
              archive) -> Tuple[Image.Image, Dict[int, Rectangle]]:
    """Create the canvas, draw all canonical entries and return it with the interior rectangles."""
    rects = interior_rectangles(entries)
    canvas = codec.create_canvas(width, height)
    try:
        paint(canvas, entries, archive)
    except Exception:
        release(canvas)
        raise
    return canvas, rects
