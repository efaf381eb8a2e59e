"""
Layer Stack - z-ordered layers composing the artwork

Index 0 is the locked background, index 1 the border outline. Both are
created with the stack and are never targets for tool edits. Everything
above them is user content, last = topmost for rendering and hit-testing.
"""
from typing import Dict, Iterator, List, Optional

from .grid import GridAddress, Shape
from .cell import Cell
from .config import EditorConfig
from .layer import Layer
from .logging import log_stack


BACKGROUND_INDEX = 0
BORDER_INDEX = 1
PROTECTED_INDICES = frozenset({BACKGROUND_INDEX, BORDER_INDEX})


def make_background(config: EditorConfig) -> Layer:
    """Create the locked full-panel backplate layer"""
    cells = []
    for gx in range(config.grid_width):
        for gy in range(config.grid_height):
            cells.append(Cell(GridAddress(gx, gy), config.backplate_color, Shape.SQUARE,
                              config.palette_size))
    return Layer("background", cells, locked=True)


def make_border(config: EditorConfig) -> Layer:
    """Create the perimeter outline layer"""
    width, height = config.grid_width, config.grid_height
    addresses = []
    for gx in range(width):
        addresses.append(GridAddress(gx, height - 1))
        addresses.append(GridAddress(gx, 0))
    for gy in range(height):
        addresses.append(GridAddress(0, gy))
        addresses.append(GridAddress(width - 1, gy))

    # Corners appear twice; the layer keeps the first
    cells = [Cell(address, config.border_color, Shape.SQUARE, config.palette_size)
             for address in addresses]
    return Layer("border", cells)


class LayerStack:
    """
    Ordered sequence of layers.

    Use LayerStack.create() to get a stack with the background and border
    already in place.
    """

    def __init__(self, layers: List[Layer]):
        if len(layers) < len(PROTECTED_INDICES):
            raise ValueError("a layer stack needs at least the background and border layers")
        self._layers: List[Layer] = list(layers)

    @classmethod
    def create(cls, config: EditorConfig) -> 'LayerStack':
        return cls([make_background(config), make_border(config)])

    def __len__(self) -> int:
        return len(self._layers)

    def __getitem__(self, index: int) -> Layer:
        return self._layers[index]

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    @property
    def layers(self) -> List[Layer]:
        return list(self._layers)

    @property
    def topmost(self) -> Layer:
        return self._layers[-1]

    def has_user_layers(self) -> bool:
        return len(self._layers) > len(PROTECTED_INDICES)

    def index_of(self, layer: Layer) -> Optional[int]:
        for i, candidate in enumerate(self._layers):
            if candidate is layer:
                return i
        return None

    # =========================================================================
    # STRUCTURAL EDITS
    # =========================================================================

    def add(self, layer: Layer) -> int:
        """
        Append a layer on top of the stack.

        Returns:
            Index of the new topmost layer
        """
        self._layers.append(layer)
        return len(self._layers) - 1

    def remove_at(self, index: int) -> Optional[Layer]:
        """
        Remove the layer at an index.

        The background and border can never be removed.

        Returns:
            The removed layer, or None if the removal was refused
        """
        if index in PROTECTED_INDICES:
            log_stack(f"Refusing to remove protected layer {index} ({self._layers[index].name})")
            return None
        if not 0 < index < len(self._layers):
            log_stack(f"Refusing to remove layer {index}: out of range (size {len(self._layers)})")
            return None
        return self._layers.pop(index)

    def pop_user_layer(self) -> Optional[Layer]:
        """Remove the topmost layer if it is user content"""
        if not self.has_user_layers():
            return None
        return self._layers.pop()

    def unique_name(self, base: str) -> str:
        """Return base, or base-2, base-3, ... if a layer already uses the name"""
        names = {layer.name for layer in self._layers}
        if base not in names:
            return base
        n = 2
        while f"{base}-{n}" in names:
            n += 1
        return f"{base}-{n}"

    def toggle_visibility(self, index: int) -> bool:
        """
        Flip the visibility of a layer. Locked layers stay visible.

        Returns:
            The layer's visibility after the toggle
        """
        layer = self._layers[index]
        layer.visible = not layer.visible
        return layer.visible

    # =========================================================================
    # HIT-TESTING
    # =========================================================================

    def topmost_hit_at(self, address: GridAddress) -> Optional[int]:
        """
        Find the topmost visible layer holding a cell at the address.

        Returns:
            Layer index, or None if no visible layer has the address
        """
        for i in range(len(self._layers) - 1, -1, -1):
            layer = self._layers[i]
            if layer.visible and layer.has(address):
                return i
        return None

    def target_at(self, address: GridAddress) -> Optional[int]:
        """
        Hit-test for tool targets.

        Returns:
            Index of the topmost visible hit, or None if nothing was hit or
            the hit is the background or border
        """
        index = self.topmost_hit_at(address)
        if index is None or index in PROTECTED_INDICES:
            return None
        return index

    def draw_order(self) -> List[Layer]:
        """Snapshot of the rendered layers, bottom to top"""
        return [layer for layer in self._layers if layer.visible]

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_json(self) -> Dict:
        return {'layers': [layer.to_json() for layer in self._layers]}

    @classmethod
    def from_json(cls, data: Dict, palette_size: int) -> 'LayerStack':
        return cls([Layer.from_json(layer, palette_size) for layer in data['layers']])

    def __repr__(self):
        return f"LayerStack(layers={len(self._layers)})"
