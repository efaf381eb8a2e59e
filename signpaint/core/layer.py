"""
Layer - an ordered, address-deduplicated collection of cells

A layer owns its cells exclusively. The address index always mirrors the cell
list: every cell is reachable by its committed address and no two cells share
one.
"""
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .grid import GridAddress, Shape, SHAPE_CODES, EMPTY_CODE
from .cell import Cell, validate_color
from .config import DEFAULT_PALETTE
from . import autotile


class Layer:
    """
    Editable group of cells with name, visibility and lock state.

    Locked layers (the background) are always rendered and ignore
    visibility changes.
    """

    def __init__(self, name: str, cells: Optional[Iterable[Cell]] = None,
                 visible: bool = True, locked: bool = False):
        """
        Initialize a layer.

        Args:
            name: Layer name (used as the debug export key)
            cells: Initial cells; later duplicates of an address are dropped
            visible: Whether the layer is rendered and hit-testable
            locked: Locked layers are always rendered and never tool targets
        """
        self.name = name
        self.locked = locked
        self._visible = visible
        self._cells: List[Cell] = []
        self._index: Dict[GridAddress, Cell] = {}

        for cell in cells or []:
            self.push(cell)

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def visible(self) -> bool:
        return self._visible or self.locked

    @visible.setter
    def visible(self, value: bool):
        if self.locked:
            return
        self._visible = bool(value)

    @property
    def cells(self) -> List[Cell]:
        """Cells in insertion order (a copy of the list, not of the cells)"""
        return list(self._cells)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._cells

    def has(self, address: GridAddress) -> bool:
        """Check if a cell occupies the address"""
        return address in self._index

    def cell_at(self, address: GridAddress) -> Optional[Cell]:
        return self._index.get(address)

    def addresses(self) -> frozenset:
        """Snapshot of the occupied addresses"""
        return frozenset(self._index)

    # =========================================================================
    # MUTATION
    # =========================================================================

    def push(self, cell: Cell, smooth: bool = False) -> bool:
        """
        Add a cell unless its address is already taken.

        The first cell at an address wins; stamping over existing content
        while dragging does nothing.

        Args:
            cell: Cell to add (the layer takes ownership)
            smooth: Re-run corner smoothing over the whole layer afterwards

        Returns:
            True if the cell was added
        """
        if cell.address in self._index:
            return False

        self._cells.append(cell)
        self._index[cell.address] = cell

        if smooth:
            # A new cell can change its neighbours' corners as well
            self.smooth()
        return True

    def remove(self, address: GridAddress) -> bool:
        """
        Remove the cell at an address.

        Neighbours keep their current shapes; removal does not re-smooth.

        Returns:
            True if a cell was removed
        """
        cell = self._index.pop(address, None)
        if cell is None:
            return False
        self._cells.remove(cell)
        return True

    def offset(self, dx: int, dy: int):
        """Stage a translation on every cell (preview only)"""
        for cell in self._cells:
            cell.stage_offset(dx, dy)

    def finalize(self):
        """Commit staged translations and rebuild the address index"""
        for cell in self._cells:
            cell.finalize_offset()

        index: Dict[GridAddress, Cell] = {}
        kept: List[Cell] = []
        for cell in self._cells:
            if cell.address in index:
                continue
            index[cell.address] = cell
            kept.append(cell)
        self._cells = kept
        self._index = index

    def fill(self, color: int, palette_size: int = len(DEFAULT_PALETTE)):
        """
        Recolour every cell; shapes and addresses are unchanged.

        Raises:
            InvalidColorError: If the colour index is out of range
        """
        validate_color(color, palette_size)
        for cell in self._cells:
            cell.color = color

    def smooth(self):
        """Re-classify every cell's shape from this layer's occupancy"""
        occupied = frozenset(self._index)
        for cell in self._cells:
            cell.shape = autotile.classify(cell.address, occupied)

    def clone(self, name: Optional[str] = None) -> 'Layer':
        """
        Copy this layer with brand new cells.

        Args:
            name: Name for the copy, defaults to "<name>-copy"

        Returns:
            Unlocked, visible layer sharing no cells with this one
        """
        return Layer(name or f"{self.name}-copy", [cell.copy() for cell in self._cells])

    # =========================================================================
    # EXPORT
    # =========================================================================

    def bounds(self) -> Optional[Tuple[int, int, int, int]]:
        """Bounding box (min_x, min_y, max_x, max_y) of the addresses, or None if empty"""
        if not self._cells:
            return None
        xs = [address.gx for address in self._index]
        ys = [address.gy for address in self._index]
        return (min(xs), min(ys), max(xs), max(ys))

    def colors(self) -> List[int]:
        """Distinct colour indices present, ascending"""
        return sorted({cell.color for cell in self._cells})

    def to_pixel_planes(self) -> List[List[List[int]]]:
        """
        Pack the layer into one dense matrix per colour.

        All planes share the layer's bounding box; planes are ordered by
        ascending colour index.

        Returns:
            List of row-major matrices of glyph shape codes
        """
        box = self.bounds()
        if box is None:
            return []
        min_x, min_y, max_x, max_y = box
        width = max_x - min_x + 1
        height = max_y - min_y + 1

        planes = []
        for color in self.colors():
            matrix = [[EMPTY_CODE] * width for _ in range(height)]
            for cell in self._cells:
                if cell.color == color:
                    matrix[cell.address.gy - min_y][cell.address.gx - min_x] = SHAPE_CODES[cell.shape]
            planes.append(matrix)
        return planes

    def to_pixel_matrix(self):
        """
        Pack the layer into glyph pixels.

        Returns:
            Tuple (pixels, plane_count). A single-colour layer gives one flat
            matrix; several colours give a list of matrices. An empty layer
            gives ([], 0).
        """
        planes = self.to_pixel_planes()
        if len(planes) == 1:
            return planes[0], 1
        return planes, len(planes)

    def to_json(self) -> Dict:
        return {
            'name': self.name,
            'visible': self._visible,
            'locked': self.locked,
            'cells': [cell.to_json() for cell in self._cells],
        }

    @classmethod
    def from_json(cls, data: Dict, palette_size: int = len(DEFAULT_PALETTE)) -> 'Layer':
        cells = [Cell.from_json(cell, palette_size) for cell in data.get('cells', [])]
        return cls(data['name'], cells, data.get('visible', True), data.get('locked', False))

    def __repr__(self):
        return f"Layer(name='{self.name}', cells={len(self._cells)}, visible={self.visible}, locked={self.locked})"
