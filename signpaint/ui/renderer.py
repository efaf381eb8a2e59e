"""
Cell Renderer - QPainter rasterization of cells and layer snapshots
"""
from typing import Iterable
from PyQt6 import QtCore, QtGui

from signpaint.core.grid import GridAddress, Shape
from signpaint.core.config import EditorConfig
from signpaint.core.layer import Layer


# Canvas colour outside the panel
BACKDROP_COLOR = "#3f3f3e"
OUTLINE_COLOR = "#000000"

# Quarter pies: (ellipse origin relative to the tile in tile units, start angle in degrees).
# Qt angles run counter-clockwise from 3 o'clock; every pie spans 90 degrees.
_CORNER_PIES = {
    Shape.CORNER_NE: ((-1, 0), 0),
    Shape.CORNER_SE: ((-1, -1), 270),
    Shape.CORNER_SW: ((0, -1), 180),
    Shape.CORNER_NW: ((0, 0), 90),
}


class QtCellRenderer:
    """
    Rendering collaborator for Cell.draw().

    Converts grid positions to pixels with the zoom and draws the shape
    with a thin black outline.
    """

    def __init__(self, painter: QtGui.QPainter, zoom: int):
        self.painter = painter
        self.zoom = zoom
        self._pen = QtGui.QPen(QtGui.QColor(OUTLINE_COLOR))
        self._pen.setWidth(1)

    def draw_shape(self, position: GridAddress, shape: Shape, color: str):
        """
        Draw one tile.

        Args:
            position: Grid address to draw at (staged offset already applied)
            shape: Tile shape
            color: Colour value understood by QColor (e.g. '#fd5d5d')
        """
        size = self.zoom
        x = position.gx * size
        y = position.gy * size

        self.painter.setPen(self._pen)
        self.painter.setBrush(QtGui.QColor(color))

        if shape in (Shape.SQUARE, Shape.PEN):
            self.painter.drawRect(QtCore.QRectF(x, y, size, size))
        elif shape == Shape.CIRCLE:
            self.painter.drawEllipse(QtCore.QRectF(x, y, size, size))
        else:
            (ox, oy), start = _CORNER_PIES[shape]
            rect = QtCore.QRectF(x + ox * size, y + oy * size, size * 2, size * 2)
            self.painter.drawPie(rect, start * 16, 90 * 16)


def render_layers(painter: QtGui.QPainter, layers: Iterable[Layer], config: EditorConfig):
    """Draw layers bottom to top"""
    renderer = QtCellRenderer(painter, config.grid_zoom)
    for layer in layers:
        for cell in layer:
            cell.draw(renderer, config.palette)


def render_to_image(state) -> QtGui.QImage:
    """
    Rasterize the current frame of an editor state.

    Args:
        state: EditorState to render

    Returns:
        ARGB32 image the size of the panel
    """
    width, height = state.config.pixel_size
    image = QtGui.QImage(width, height, QtGui.QImage.Format.Format_ARGB32)
    image.fill(QtGui.QColor(BACKDROP_COLOR))

    painter = QtGui.QPainter(image)
    try:
        render_layers(painter, state.render_layers(), state.config)
    finally:
        painter.end()
    return image
