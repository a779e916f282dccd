import io
import os
import random
import zipfile
from typing import Iterable, Tuple

from PIL import Image

from atlaspacker.archive import ArchiveEntry
from atlaspacker.catalog import SourceEntry

RED = (255, 0, 0, 255)
GREEN = (0, 255, 0, 255)
BLUE = (0, 0, 255, 255)


def png_bytes(width: int, height: int, color=RED) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def truncated_png_bytes(width: int = 64, height: int = 64) -> bytes:
    """A PNG whose header reads fine but whose pixel data stops halfway."""
    rng = random.Random(width * height)
    noise = bytes(rng.getrandbits(8) for _ in range(width * height * 4))
    buffer = io.BytesIO()
    Image.frombytes("RGBA", (width, height), noise).save(buffer, format="PNG")
    data = buffer.getvalue()
    return data[:len(data) // 2]


def write_zip(path: str, files: Iterable[Tuple[str, bytes]]) -> str:
    """Write (archive path, bytes) pairs in order. A path ending in '/' becomes a directory record."""
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in files:
            if name.endswith("/"):
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, data)
    return path


def write_tree(root: str, files: Iterable[Tuple[str, bytes]]) -> str:
    for name, data in files:
        full_path = os.path.join(root, *name.split("/"))
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "wb") as f:
            f.write(data)
    return root


def entry(index: int, width: int, height: int, duplicate_of=None) -> SourceEntry:
    """A padded entry that never touches an archive, for geometry-only tests."""
    path = f"Tiles/{index}.png"
    return SourceEntry(index, str(index), width, height, ArchiveEntry(index, path, 0, path), duplicate_of)
