from typing import Dict


class Rectangle:
    """Represents a rectangle with position (x, y), width and height."""
    def __init__(self, x: int, y: int, width: int, height: int):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def __repr__(self):
        return f"Rectangle({self.width}×{self.height} at ({self.x},{self.y}))"

    def __eq__(self, other):
        if not isinstance(other, Rectangle):
            return NotImplemented
        return (self.x, self.y, self.width, self.height) == (other.x, other.y, other.width, other.height)

    def __hash__(self):
        return hash((self.x, self.y, self.width, self.height))

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def intersects(self, other: 'Rectangle') -> bool:
        """Check if this rectangle intersects with another. Touching edges do not count."""
        return not (
            self.x + self.width <= other.x or
            self.y + self.height <= other.y or
            self.x >= other.x + other.width or
            self.y >= other.y + other.height
        )

    def shrink(self, amount: int) -> 'Rectangle':
        """Return a copy inset by `amount` pixels on every side."""
        return Rectangle(self.x + amount, self.y + amount, self.width - amount * 2, self.height - amount * 2)

    def area(self) -> int:
        """Get the area of the rectangle."""
        return self.width * self.height

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "w": self.width, "h": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, int]) -> 'Rectangle':
        return cls(int(data["x"]), int(data["y"]), int(data["w"]), int(data["h"]))
