from .atlas import SpriteAtlas, SpriteKey, TextureAtlas, TileAtlas
from .geometry import Rectangle

__version__ = "1.0.0"

__all__ = ["Rectangle", "SpriteAtlas", "SpriteKey", "TextureAtlas", "TileAtlas"]
