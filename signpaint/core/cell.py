"""
Cell - a single coloured tile at one grid address
"""
from typing import Dict, List, Optional, Tuple

from .grid import GridAddress, Shape
from .config import DEFAULT_PALETTE


class InvalidColorError(ValueError):
    """Raised when a colour index falls outside the palette"""


def validate_color(color: int, palette_size: int = len(DEFAULT_PALETTE)) -> int:
    """
    Check a colour index against the palette.

    Args:
        color: Palette index
        palette_size: Number of palette entries

    Returns:
        The colour index, unchanged

    Raises:
        InvalidColorError: If the index is not an int in [0, palette_size)
    """
    if isinstance(color, bool) or not isinstance(color, int):
        raise InvalidColorError(f"colour index must be an int, got {color!r}")
    if not 0 <= color < palette_size:
        raise InvalidColorError(f"colour index {color} outside palette of size {palette_size}")
    return color


class Cell:
    """
    One tile owned by a Layer.

    The committed address only changes through finalize_offset(); a staged
    offset is a pending translation used for drag previews.
    """

    def __init__(self, address: GridAddress, color: int, shape: Shape,
                 palette_size: int = len(DEFAULT_PALETTE)):
        """
        Initialize a cell.

        Args:
            address: Committed grid address
            color: Palette index
            shape: Tile shape
            palette_size: Palette size used to validate the colour

        Raises:
            InvalidColorError: If the colour index is out of range
        """
        self.address = address
        self.color = validate_color(color, palette_size)
        self.shape = shape
        self.staged_offset: Optional[Tuple[int, int]] = None

    def draw(self, renderer, palette: List[str]):
        """
        Hand this cell to the rendering collaborator.

        Args:
            renderer: Object providing draw_shape(position, shape, color)
            palette: Colour values indexed by colour index
        """
        renderer.draw_shape(self.preview_position(), self.shape, palette[self.color])

    def preview_position(self) -> GridAddress:
        """Address the cell is shown at, including any staged offset"""
        if self.staged_offset is None:
            return self.address
        return self.address.translated(*self.staged_offset)

    def stage_offset(self, dx: int, dy: int):
        """Record a pending translation without touching the address"""
        self.staged_offset = (int(round(dx)), int(round(dy)))

    def finalize_offset(self):
        """Commit the staged translation into the address and clear it"""
        if self.staged_offset is None:
            return
        dx, dy = self.staged_offset
        self.address = self.address.translated(dx, dy)
        self.staged_offset = None

    def copy(self) -> 'Cell':
        """Create an independent cell with the same address, colour and shape"""
        new_cell = Cell.__new__(Cell)
        new_cell.address = self.address
        new_cell.color = self.color
        new_cell.shape = self.shape
        new_cell.staged_offset = None
        return new_cell

    def to_json(self) -> Dict:
        return {
            'gx': self.address.gx,
            'gy': self.address.gy,
            'color': self.color,
            'shape': self.shape.value,
        }

    @classmethod
    def from_json(cls, data: Dict, palette_size: int = len(DEFAULT_PALETTE)) -> 'Cell':
        return cls(GridAddress(int(data['gx']), int(data['gy'])), data['color'],
                   Shape(data['shape']), palette_size)

    def __repr__(self):
        return f"Cell({self.address.gx}, {self.address.gy}, color={self.color}, shape={self.shape.name})"
