import posixpath
from typing import Dict, List, Optional

from . import codec
from .archive import ArchiveEntry
from .geometry import Rectangle

# One pixel of padding on every side keeps filtering from bleeding between neighbours
PADDING = 1


class SourceEntry:
    """A source image found in the archive, with its padded size and placement."""
    def __init__(self, index: int, name: str, width: int, height: int, source: ArchiveEntry,
                 duplicate_of: Optional[int] = None):
        self.index = index
        self.name = name
        self.width = width  # padded
        self.height = height  # padded
        self.source = source  # handle for re-reading the bytes
        self.duplicate_of = duplicate_of
        self.x: Optional[int] = None
        self.y: Optional[int] = None

    def __repr__(self):
        dup = f" dup of {self.duplicate_of}" if self.duplicate_of is not None else ""
        return f"SourceEntry(#{self.index} {self.name} {self.width}×{self.height}{dup})"

    @property
    def path(self) -> str:
        return self.source.path

    @property
    def is_canonical(self) -> bool:
        return self.duplicate_of is None

    @property
    def is_placed(self) -> bool:
        return self.x is not None and self.y is not None

    @property
    def original_width(self) -> int:
        return self.width - PADDING * 2

    @property
    def original_height(self) -> int:
        return self.height - PADDING * 2

    def padded_rect(self) -> Rectangle:
        """The placed rectangle including the padding border."""
        if not self.is_placed:
            raise ValueError(f"{self!r} has not been placed")
        return Rectangle(self.x, self.y, self.width, self.height)

    def interior_rect(self) -> Rectangle:
        """The placed rectangle without the padding border, i.e. the original image bounds."""
        return self.padded_rect().shrink(PADDING)


def parse_path(path: str) -> str:
    """Strip directory and extension from an archive path: 'Sprites/12_3_1.png' -> '12_3_1'."""
    return posixpath.splitext(posixpath.basename(path))[0]


def build_catalog(archive, prefix: str) -> List[SourceEntry]:
    """
    Collect every archive file under `prefix` in enumeration order.

    Each entry gets its padded size from the image header. The first file seen
    with a given checksum is canonical; later files with the same checksum point
    back at it through `duplicate_of`.
    """
    entries = []
    first_by_checksum: Dict[int, int] = {}

    for item in archive.entries():
        if not item.path.startswith(prefix):
            continue

        width, height = codec.image_size(archive.read(item))

        duplicate_of = first_by_checksum.get(item.checksum)
        if duplicate_of is None:
            first_by_checksum[item.checksum] = item.index

        entries.append(SourceEntry(
            item.index,
            parse_path(item.path),
            width + PADDING * 2,
            height + PADDING * 2,
            item,
            duplicate_of,
        ))

    return entries
