"""
Tool Manager - Tracks and announces the active mode, draw tool and colour.

Wraps an EditorState so menus, toolbars and the canvas share one selection
and get notified through Qt signals when it changes.
"""
from typing import Callable, Dict
from PyQt6 import QtCore

from .grid import Shape
from .cell import InvalidColorError
from .controller import EditorMode, EditorState
from .logging import log


class ToolManager(QtCore.QObject):
    """
    Manager for the editor's tool selection.

    Signals:
        mode_changed: Emitted when the mode changes (new_mode, old_mode)
        draw_tool_changed: Emitted when the draw shape changes (new_tool)
        color_changed: Emitted when the drawing colour changes (color index)
    """

    # Signals
    mode_changed = QtCore.pyqtSignal(object, object)  # new_mode, old_mode
    draw_tool_changed = QtCore.pyqtSignal(object)
    color_changed = QtCore.pyqtSignal(int)

    def __init__(self, state: EditorState, parent=None):
        super().__init__(parent)
        self._state = state

        # Callbacks for mode activation/deactivation
        self._on_activate_callbacks: Dict[EditorMode, Callable] = {}
        self._on_deactivate_callbacks: Dict[EditorMode, Callable] = {}

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def mode(self) -> EditorMode:
        return self._state.mode

    @property
    def draw_tool(self) -> Shape:
        return self._state.draw_tool

    @property
    def color(self) -> int:
        return self._state.color

    def is_active(self, mode: EditorMode) -> bool:
        return self._state.mode == mode

    def activate_mode(self, mode: EditorMode) -> bool:
        """
        Switch to a mode, deactivating the previous one.

        Args:
            mode: The mode to activate

        Returns:
            True if activation succeeded
        """
        if mode == self._state.mode:
            return True  # Already active

        old_mode = self._state.mode
        self._call_callback(self._on_deactivate_callbacks, old_mode)
        self._state.set_mode(mode)
        self._call_callback(self._on_activate_callbacks, mode)

        self.mode_changed.emit(mode, old_mode)
        log(f"Mode changed: {old_mode.name} -> {mode.name}", "[ToolManager]")
        return True

    def set_draw_tool(self, tool: Shape) -> bool:
        """Select the shape stamped in Draw mode"""
        if tool == self._state.draw_tool:
            return True
        try:
            self._state.set_draw_tool(tool)
        except ValueError as e:
            log(f"Rejected draw tool: {e}", "[ToolManager]")
            return False
        self.draw_tool_changed.emit(tool)
        return True

    def set_color(self, color: int) -> bool:
        """
        Select the drawing colour.

        Returns:
            False if the colour index is outside the palette
        """
        try:
            self._state.set_color(color)
        except InvalidColorError as e:
            log(f"Rejected colour: {e}", "[ToolManager]")
            return False
        self.color_changed.emit(color)
        return True

    def register_activate_callback(self, mode: EditorMode, callback: Callable):
        """Register a callback for when a mode is activated"""
        self._on_activate_callbacks[mode] = callback

    def register_deactivate_callback(self, mode: EditorMode, callback: Callable):
        """Register a callback for when a mode is deactivated"""
        self._on_deactivate_callbacks[mode] = callback

    def _call_callback(self, callbacks: Dict[EditorMode, Callable], mode: EditorMode):
        if mode in callbacks:
            try:
                callbacks[mode]()
            except Exception as e:
                log(f"Error in callback for {mode.name}: {e}", "[ToolManager]")

    # =========================================================================
    # DISPLAY NAME
    # =========================================================================

    def get_mode_display_name(self) -> str:
        """Get a human-readable name for the current mode and tool"""
        names = {
            EditorMode.DRAW: f"Draw: {self._state.draw_tool.value}",
            EditorMode.FILL: "Fill Layer",
            EditorMode.MOVE: "Move Layer",
            EditorMode.COPY: "Copy Layer",
            EditorMode.PULL: "Pull Cells",
        }
        return names.get(self._state.mode, "Unknown")
