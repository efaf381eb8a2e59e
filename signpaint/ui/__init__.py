"""
Qt presentation collaborators for Signpaint
"""

from .renderer import QtCellRenderer, render_layers, render_to_image
from .canvas import LatticeCanvas

__all__ = [
    'QtCellRenderer',
    'render_layers',
    'render_to_image',
    'LatticeCanvas',
]
