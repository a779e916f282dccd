"""
Tile and sprite atlases.

Both variants run the same pipeline (catalog, size, pack, composite, encode)
and differ only in the order entries are packed in and in how an entry's file
name turns into its lookup key.
"""

import json
import os
import re
from typing import Any, Dict, List, NamedTuple, Optional, Sequence

from . import codec
from .catalog import SourceEntry, build_catalog
from .compositor import composite, release
from .geometry import Rectangle
from .packer import by_index, by_size, pack
from .sizing import guess_output_width

TILES_PREFIX = "Tiles/"
SPRITES_PREFIX = "Sprites/"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class SpriteKey(NamedTuple):
    """Lookup key for a sprite. Plain sprites have no model and no remap."""
    sprite: int
    model: Optional[int] = None
    remap: Optional[int] = None


def parse_tile_name(name: str) -> Optional[int]:
    """'42' -> 42. Returns None for anything that is not a plain integer."""
    if not _INTEGER.fullmatch(name):
        return None
    return int(name)


def parse_sprite_name(name: str) -> Optional[SpriteKey]:
    """'12' -> SpriteKey(12), '12_3_1' -> SpriteKey(12, 3, 1). Returns None for any other shape."""
    parts = name.split("_")
    if len(parts) not in (1, 3) or not all(_INTEGER.fullmatch(part) for part in parts):
        return None
    numbers = [int(part) for part in parts]
    if len(numbers) == 1:
        return SpriteKey(numbers[0])
    return SpriteKey(*numbers)


class TextureAtlas:
    """Holds where each tile or sprite was put on the atlas image."""

    kind = ""
    default_prefix = ""

    def __init__(self, image_path: str, prefix: Optional[str] = None):
        self.image_path = image_path
        self.prefix = self.default_prefix if prefix is None else prefix
        self.width = 0
        self.height = 0
        self.mapping: Dict[Any, Rectangle] = {}
        self.skipped: List[str] = []
        self.image = None
        self._used_area = 0

    def __repr__(self):
        return f"{type(self).__name__}({self.image_path!r}, {len(self.mapping)} entries, {self.width}×{self.height})"

    # Variant hooks

    def packing_order(self, entries: Sequence[SourceEntry]) -> List[SourceEntry]:
        return list(entries)

    def emission_order(self, entries: Sequence[SourceEntry]) -> List[SourceEntry]:
        return list(entries)

    def parse_name(self, name: str):
        raise NotImplementedError

    def frames_to_json(self):
        raise NotImplementedError

    @classmethod
    def frames_from_json(cls, frames) -> Dict[Any, Rectangle]:
        raise NotImplementedError

    # Build

    def build(self, archive):
        """Pack every image under the prefix, draw the atlas and save it to `image_path`."""
        entries = build_catalog(archive, self.prefix)
        if not entries:
            raise ValueError(f"No images found under '{self.prefix}' in {archive.path}")

        duplicates = sum(1 for entry in entries if not entry.is_canonical)
        print(f"Packing {len(entries)} images from '{self.prefix}' ({duplicates} duplicates)")

        self.width = guess_output_width(entry.width for entry in entries)
        self.height = pack(self.packing_order(entries), self.width)
        print(f"Atlas dimensions: {self.width}×{self.height}")

        entries = self.emission_order(entries)

        self.close()
        self.image, rects = composite(entries, self.width, self.height, archive)
        self._used_area = sum(entry.original_width * entry.original_height
                              for entry in entries if entry.is_canonical)

        self.mapping = {}
        self.skipped = []
        for entry in entries:
            key = self.parse_name(entry.name)
            if key is None:
                self.skipped.append(entry.name)
                continue
            if key in self.mapping:
                print(f"Warning: {entry.path} repeats key {key}, keeping the first")
                self.skipped.append(entry.name)
                continue
            self.mapping[key] = rects[entry.index]

        if self.skipped:
            print(f"Skipped {len(self.skipped)} images without a usable name")

        codec.encode_png(self.image, self.image_path)
        print(f"Saved atlas image: {self.image_path}")

    def efficiency(self) -> float:
        """Percentage of the canvas covered by drawn image pixels."""
        total_pixels = self.width * self.height
        return (self._used_area / total_pixels) * 100 if total_pixels > 0 else 0

    # Persistence

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frames": self.frames_to_json(),
            "meta": {
                "image": self.image_path,
                "kind": self.kind,
                "size": {"w": self.width, "h": self.height},
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextureAtlas':
        """Rebuild an atlas from `to_dict` output. Any malformed document raises ValueError."""
        try:
            meta = data["meta"]
            if meta.get("kind") != cls.kind:
                raise ValueError(f"Expected a '{cls.kind}' atlas, got '{meta.get('kind')}'")
            atlas = cls(meta["image"])
            atlas.width = meta["size"]["w"]
            atlas.height = meta["size"]["h"]
            atlas.mapping = cls.frames_from_json(data["frames"])
        except (AttributeError, KeyError, TypeError) as e:
            raise ValueError(f"Malformed {cls.kind} mapping: {e!r}") from e
        return atlas

    def mapping_path(self) -> str:
        return os.path.splitext(self.image_path)[0] + ".json"

    def save(self, path: Optional[str] = None) -> str:
        path = path or self.mapping_path()
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        return path

    @classmethod
    def load(cls, path: str) -> 'TextureAtlas':
        with open(path, 'r') as f:
            data = json.load(f)
        return cls.from_dict(data)

    # Resources

    def close(self):
        """Release the atlas image. Never raises."""
        if self.image is None:
            return
        release(self.image)
        self.image = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class TileAtlas(TextureAtlas):
    """Tiles keep archive order and are keyed by their tile number."""

    kind = "tiles"
    default_prefix = TILES_PREFIX

    def parse_name(self, name: str) -> Optional[int]:
        return parse_tile_name(name)

    def frames_to_json(self):
        return {str(index): rect.to_dict() for index, rect in self.mapping.items()}

    @classmethod
    def frames_from_json(cls, frames) -> Dict[int, Rectangle]:
        return {int(index): Rectangle.from_dict(rect) for index, rect in frames.items()}


class SpriteAtlas(TextureAtlas):
    """Sprites are packed largest first, then emitted in archive order keyed by SpriteKey."""

    kind = "sprites"
    default_prefix = SPRITES_PREFIX

    def packing_order(self, entries: Sequence[SourceEntry]) -> List[SourceEntry]:
        # Sort so the largest sprites get arranged first.
        return sorted(entries, key=by_size, reverse=True)

    def emission_order(self, entries: Sequence[SourceEntry]) -> List[SourceEntry]:
        # Sort the sprites back into index order.
        return sorted(entries, key=by_index)

    def parse_name(self, name: str) -> Optional[SpriteKey]:
        return parse_sprite_name(name)

    def frames_to_json(self):
        return [
            {"sprite": key.sprite, "model": key.model, "remap": key.remap, "frame": rect.to_dict()}
            for key, rect in self.mapping.items()
        ]

    @classmethod
    def frames_from_json(cls, frames) -> Dict[SpriteKey, Rectangle]:
        return {
            SpriteKey(item["sprite"], item["model"], item["remap"]): Rectangle.from_dict(item["frame"])
            for item in frames
        }
