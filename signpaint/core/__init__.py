"""
Core lattice and tool logic for Signpaint
"""

from .grid import GridAddress, Shape, GLYPH_SHAPES, SHAPE_CODES
from .config import EditorConfig, DEFAULT_PALETTE, load_config
from .cell import Cell, InvalidColorError, validate_color
from .autotile import classify, neighbor_mask
from .layer import Layer
from .stack import (
    LayerStack, make_background, make_border, PROTECTED_INDICES
)
from .glyphs import Glyph, GlyphCodec, GlyphFormatError, SPACE_GLYPH
from .controller import EditorMode, EditorState, ToolController, DRAW_TOOLS
from .tool_manager import ToolManager

__all__ = [
    'GridAddress',
    'Shape',
    'GLYPH_SHAPES',
    'SHAPE_CODES',
    'EditorConfig',
    'DEFAULT_PALETTE',
    'load_config',
    'Cell',
    'InvalidColorError',
    'validate_color',
    'classify',
    'neighbor_mask',
    'Layer',
    'LayerStack',
    'make_background',
    'make_border',
    'PROTECTED_INDICES',
    'Glyph',
    'GlyphCodec',
    'GlyphFormatError',
    'SPACE_GLYPH',
    'EditorMode',
    'EditorState',
    'ToolController',
    'DRAW_TOOLS',
    'ToolManager',
]
