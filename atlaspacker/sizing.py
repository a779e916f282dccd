import math
from typing import Iterable


def guess_output_width(widths: Iterable[int]) -> int:
    """
    Heuristic guess at a good canvas width for a list of padded widths.

    Assumes a roughly square grid of median sized images, and never returns
    less than the widest image so that one always fits on a row.
    """
    # Sort the widths into ascending order.
    widths = sorted(widths)
    if not widths:
        raise ValueError("Cannot size a canvas for zero images")

    # Extract the maximum and median widths.
    max_width = widths[-1]
    median_width = widths[len(widths) // 2]

    # Heuristic assumes an NxN grid of median sized images; halves round up.
    width = int(math.floor(median_width * math.sqrt(len(widths)) + 0.5))

    return max(width, max_width)
