"""
Lattice Canvas - QWidget hosting the editor

Forwards Qt mouse and key events to the ToolController and repaints from the
editor state. Holds no editing logic of its own.
"""
from typing import Mapping, Optional
from PyQt6 import QtWidgets, QtCore, QtGui

from signpaint.core.controller import ToolController
from signpaint.core.glyphs import GlyphLike
from .renderer import BACKDROP_COLOR, render_layers


class LatticeCanvas(QtWidgets.QWidget):
    """
    Drawing surface for the layer stack.

    Left mouse button drives the pointer commands, Shift is the extend
    modifier and U removes the topmost layer.

    Signals:
        stack_changed: Emitted after layers were added or removed
    """

    stack_changed = QtCore.pyqtSignal()

    def __init__(self, controller: Optional[ToolController] = None, parent=None):
        super().__init__(parent)
        self.controller = controller if controller is not None else ToolController()
        self.controller.on_stack_changed = self._on_stack_changed

        self.setFixedSize(*self.controller.config.pixel_size)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

    def _on_stack_changed(self):
        self.stack_changed.emit()
        self.update()

    def submit_text(self, text: str, font: Mapping[str, GlyphLike]):
        """Place text from the type form"""
        indices = self.controller.on_submit_text(text, font)
        self.update()
        return indices

    def mousePressEvent(self, event: QtGui.QMouseEvent):
        if event.button() != QtCore.Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.controller.on_pointer_down(pos.x(), pos.y())

    def mouseMoveEvent(self, event: QtGui.QMouseEvent):
        if not event.buttons() & QtCore.Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        if self.controller.on_pointer_move(pos.x(), pos.y()):
            self.update()

    def mouseReleaseEvent(self, event: QtGui.QMouseEvent):
        if event.button() != QtCore.Qt.MouseButton.LeftButton:
            super().mouseReleaseEvent(event)
            return
        pos = event.position()
        self.controller.on_pointer_up(pos.x(), pos.y())
        self.update()

    def keyPressEvent(self, event: QtGui.QKeyEvent):
        if event.key() == QtCore.Qt.Key.Key_Shift:
            self.controller.set_extend_modifier(True)
        elif event.key() == QtCore.Qt.Key.Key_U:
            self.controller.undo_last_layer()
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event: QtGui.QKeyEvent):
        if event.key() == QtCore.Qt.Key.Key_Shift:
            self.controller.set_extend_modifier(False)
        else:
            super().keyReleaseEvent(event)

    def paintEvent(self, event: QtGui.QPaintEvent):
        painter = QtGui.QPainter(self)
        try:
            painter.fillRect(self.rect(), QtGui.QColor(BACKDROP_COLOR))
            render_layers(painter, self.controller.state.render_layers(), self.controller.config)
        finally:
            painter.end()
