import argparse
import sys
import zipfile
from typing import List, Optional

from PIL import UnidentifiedImageError

from .archive import open_archive
from .atlas import SpriteAtlas, TileAtlas

ATLAS_TYPES = {
    'tiles': TileAtlas,
    'sprites': SpriteAtlas,
}


def build_command(args) -> int:
    atlas_type = ATLAS_TYPES[args.command]

    print(f"Reading archive: {args.archive}")
    with open_archive(args.archive) as archive, atlas_type(args.output, args.prefix) as atlas:
        atlas.build(archive)
        mapping_path = atlas.save(args.mapping)
        print(f"Saved mapping: {mapping_path} with {len(atlas.mapping)} entries")
        print(f"\nPacking efficiency: {atlas.efficiency():.2f}%")

    print("Done!")
    return 0


def inspect_command(args) -> int:
    # Try each atlas type; the file's own 'kind' decides which one accepts it
    atlas = None
    for atlas_type in ATLAS_TYPES.values():
        try:
            atlas = atlas_type.load(args.mapping)
            break
        except ValueError:
            continue
    if atlas is None:
        print(f"Error: {args.mapping} is not a tile or sprite mapping")
        return 1

    print(f"Image: {atlas.image_path} ({atlas.width}×{atlas.height})")
    print(f"Kind: {atlas.kind}, {len(atlas.mapping)} entries")
    for key, rect in atlas.mapping.items():
        print(f"  {key}: {rect}")
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='atlaspacker',
                                     description='Pack tiles or sprites from an archive into a texture atlas')
    subparsers = parser.add_subparsers(dest='command', required=True)

    for name, atlas_type in ATLAS_TYPES.items():
        sub = subparsers.add_parser(name, help=f'Build a {name} atlas')
        sub.add_argument('archive', help='Zip archive or directory holding the source images')
        sub.add_argument('output', help='Path of the PNG atlas to write')
        sub.add_argument('--mapping', default=None,
                         help='Path of the JSON mapping to write (default: next to the PNG)')
        sub.add_argument('--prefix', default=atlas_type.default_prefix,
                         help=f'Only pack files whose archive path starts with this (default: {atlas_type.default_prefix})')
        sub.set_defaults(func=build_command)

    inspect = subparsers.add_parser('inspect', help='Print the contents of a mapping file')
    inspect.add_argument('mapping', help='JSON mapping written by a previous build')
    inspect.set_defaults(func=inspect_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    try:
        return args.func(args)
    except (OSError, ValueError, zipfile.BadZipFile, UnidentifiedImageError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
