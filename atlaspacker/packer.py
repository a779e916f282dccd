"""
Greedy first-fit placement of padded entries onto a canvas of fixed width.

Entries are placed one at a time in the order given. Each one starts at the
top-left corner and, on every collision, skips past the right edge of the
entry it hit; when it runs out of room it moves down one pixel row and starts
again at the left. Processing order changes the result, so callers pick it
with one of the sort keys below.
"""

from typing import List, Optional, Sequence, Tuple

from .catalog import SourceEntry
from .geometry import Rectangle


def by_index(entry: SourceEntry) -> int:
    """Sort key for archive enumeration order."""
    return entry.index


def by_size(entry: SourceEntry) -> Tuple[int, int]:
    """Height-major, width-minor sort key. Use with reverse=True for largest first."""
    return entry.height, entry.width


def find_intersecting(placed: Sequence[SourceEntry], rect: Rectangle) -> Optional[SourceEntry]:
    """Return the first already placed entry whose padded rectangle overlaps `rect`, or None."""
    for other in placed:
        if other.padded_rect().intersects(rect):
            return other
    return None


def position_entry(placed: Sequence[SourceEntry], entry: SourceEntry, output_width: int):
    """Work out where to put a single entry, given everything placed so far."""
    x = 0
    y = 0

    while True:
        # Is this position free for us to use?
        other = find_intersecting(placed, Rectangle(x, y, entry.width, entry.height))
        if other is None:
            entry.x = x
            entry.y = y
            return

        # Skip past the existing entry that we collided with.
        x = other.x + other.width

        # If we ran out of room to move to the right, try the next line down instead.
        if x + entry.width > output_width:
            x = 0
            y += 1


def pack(entries: Sequence[SourceEntry], output_width: int) -> int:
    """
    Place every canonical entry in `entries` order and return the canvas height.

    Duplicates are skipped; they share the placement of their canonical entry.
    """
    canonical = [entry for entry in entries if entry.is_canonical]

    for entry in canonical:
        if entry.width > output_width:
            raise ValueError(f"{entry!r} is wider than the canvas ({output_width}px)")

    placed: List[SourceEntry] = []
    output_height = 0

    for entry in canonical:
        position_entry(placed, entry, output_width)
        placed.append(entry)
        output_height = max(output_height, entry.y + entry.height)

    return output_height
