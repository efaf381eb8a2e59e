"""
Signpaint - layered pixel-grid editor for LED-panel signage artwork.
"""

from .core.controller import EditorState, ToolController, EditorMode
from .core.glyphs import GlyphCodec

__version__ = '1.0.0'
__all__ = [
    'EditorState',
    'ToolController',
    'EditorMode',
    'GlyphCodec',
]
