"""
Grid primitives - lattice addresses, tile shapes and glyph shape codes
"""
from typing import Dict, Tuple
from enum import Enum
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class GridAddress:
    """
    Integer (column, row) coordinate on the lattice.

    Addresses compare and hash by value, so they can be used directly as
    dictionary keys and set members. Ordering is column-major (gx, then gy).
    """
    gx: int
    gy: int

    def translated(self, dx: int, dy: int) -> 'GridAddress':
        """Return the address moved by (dx, dy) grid units"""
        return GridAddress(self.gx + dx, self.gy + dy)

    @property
    def north(self) -> 'GridAddress':
        return GridAddress(self.gx, self.gy - 1)

    @property
    def east(self) -> 'GridAddress':
        return GridAddress(self.gx + 1, self.gy)

    @property
    def south(self) -> 'GridAddress':
        return GridAddress(self.gx, self.gy + 1)

    @property
    def west(self) -> 'GridAddress':
        return GridAddress(self.gx - 1, self.gy)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.gx, self.gy)

    def __repr__(self):
        return f"GridAddress({self.gx}, {self.gy})"


class Shape(Enum):
    """Tile shape enumeration"""
    SQUARE = "square"
    CIRCLE = "circle"
    CORNER_NE = "cornerNE"  # Quarter disc filling the north-east of the tile
    CORNER_SE = "cornerSE"
    CORNER_SW = "cornerSW"
    CORNER_NW = "cornerNW"
    PEN = "pen"             # Freehand stamp, rendered square until smoothed


# Glyph pixel code -> shape (0 = empty)
GLYPH_SHAPES: Dict[int, Shape] = {
    1: Shape.SQUARE,
    2: Shape.CIRCLE,
    3: Shape.CORNER_NE,
    4: Shape.CORNER_SE,
    5: Shape.CORNER_SW,
    6: Shape.CORNER_NW,
}

# Shape -> glyph pixel code. Pen has no code of its own and exports as a square.
SHAPE_CODES: Dict[Shape, int] = {shape: code for code, shape in GLYPH_SHAPES.items()}
SHAPE_CODES[Shape.PEN] = 1

EMPTY_CODE = 0
