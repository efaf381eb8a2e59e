"""
Auto-tiling - corner smoothing from the 4-neighbour configuration

Uses bitmasking over the orthogonal neighbours:
- Bit 0 (0x01) = north
- Bit 1 (0x02) = east
- Bit 2 (0x04) = south
- Bit 3 (0x08) = west

Only the four "two adjacent neighbours" masks round off into a corner; every
other configuration (isolated, straight run, T-junction, cross) stays square.
"""
from typing import AbstractSet, Dict

from .grid import GridAddress, Shape


NORTH = 0x01
EAST = 0x02
SOUTH = 0x04
WEST = 0x08

CORNER_SHAPES: Dict[int, Shape] = {
    NORTH | EAST: Shape.CORNER_SW,   # 3
    EAST | SOUTH: Shape.CORNER_NW,   # 6
    NORTH | WEST: Shape.CORNER_SE,   # 9
    SOUTH | WEST: Shape.CORNER_NE,   # 12
}


def neighbor_mask(address: GridAddress, occupied: AbstractSet[GridAddress]) -> int:
    """
    Compute the 4-bit neighbour mask for an address.

    Args:
        address: Address to inspect
        occupied: Addresses occupied in the same layer

    Returns:
        Bitmask of occupied orthogonal neighbours
    """
    flag = 0
    if address.north in occupied: flag |= NORTH
    if address.east in occupied: flag |= EAST
    if address.south in occupied: flag |= SOUTH
    if address.west in occupied: flag |= WEST
    return flag


def classify(address: GridAddress, occupied: AbstractSet[GridAddress]) -> Shape:
    """
    Pick the smoothed shape for an address.

    Only addresses are consulted, never the shapes already assigned, so
    re-running over a classified layer gives the same answer.
    """
    return CORNER_SHAPES.get(neighbor_mask(address, occupied), Shape.SQUARE)
