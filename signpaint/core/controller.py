"""
Tool Controller - pointer-driven interaction state machine

This module turns pointer events into edits of the layer stack:
- Draw: stamp cells into a working layer, commit it on release
- Fill: recolour the layer under the pointer
- Move: drag the layer under the pointer (staged offset, committed on release)
- Copy: like Move, but a clone is dragged and the original stays put
- Pull: remove single cells from the layer under the pointer

Pointer positions are canvas pixels; they are converted to grid addresses
with the configured zoom. A drag always commits on release, there is no
cancel path.
"""
from typing import Callable, List, Mapping, Optional, Tuple
from enum import Enum
from dataclasses import dataclass, field

from .grid import GridAddress, Shape
from .cell import Cell, validate_color
from .config import EditorConfig
from .layer import Layer
from .stack import LayerStack
from .glyphs import GlyphCodec, GlyphLike
from .logging import log_controller


class EditorMode(Enum):
    """Interaction mode enumeration"""
    DRAW = "draw"
    FILL = "fill"
    MOVE = "move"
    COPY = "copy"
    PULL = "pull"


# Shapes that can be stamped in Draw mode
DRAW_TOOLS = (
    Shape.PEN,
    Shape.SQUARE,
    Shape.CIRCLE,
    Shape.CORNER_NE,
    Shape.CORNER_SE,
    Shape.CORNER_SW,
    Shape.CORNER_NW,
)


@dataclass
class EditorState:
    """
    Everything an editing session mutates.

    The state is passed to the ToolController explicitly; UI collaborators
    change mode, tool and colour through the setters below.
    """
    config: EditorConfig = field(default_factory=EditorConfig)
    stack: Optional[LayerStack] = None
    mode: EditorMode = EditorMode.DRAW
    draw_tool: Shape = Shape.PEN
    color: Optional[int] = None
    working_layer: Optional[Layer] = None
    drag_target: Optional[int] = None
    drag_anchor: Optional[Tuple[float, float]] = None
    extend_modifier: bool = False  # Held key: draw into the topmost committed layer
    pointer_down: bool = False
    layer_counter: int = 0

    def __post_init__(self):
        if self.stack is None:
            self.stack = LayerStack.create(self.config)
        if self.color is None:
            self.color = self.config.default_color
        validate_color(self.color, self.config.palette_size)

    def set_mode(self, mode: EditorMode):
        self.mode = mode

    def set_draw_tool(self, tool: Shape):
        if tool not in DRAW_TOOLS:
            raise ValueError(f"{tool} is not a draw tool")
        self.draw_tool = tool

    def set_color(self, color: int):
        """
        Select the drawing colour.

        Raises:
            InvalidColorError: If the index is outside the palette
        """
        self.color = validate_color(color, self.config.palette_size)

    def is_dragging(self) -> bool:
        return self.drag_target is not None

    def next_layer_name(self) -> str:
        self.layer_counter += 1
        return self.stack.unique_name(f"layer-{self.layer_counter}")

    def render_layers(self) -> List[Layer]:
        """Layers to draw this frame: the visible stack plus the in-progress layer"""
        layers = self.stack.draw_order()
        if self.working_layer is not None and not self.working_layer.is_empty():
            layers.append(self.working_layer)
        return layers


class ToolController:
    """
    Command interface for UI collaborators.

    Call on_pointer_down / on_pointer_move / on_pointer_up with canvas
    pixel positions, on_submit_text for typed text. Each command returns
    True if it changed or started something.
    """

    def __init__(self, state: Optional[EditorState] = None):
        """
        Initialize the controller.

        Args:
            state: Editor state to operate on, a fresh default session if None
        """
        self.state = state if state is not None else EditorState()

        # Called after the stack changed structurally (layer added or removed)
        self.on_stack_changed: Optional[Callable[[], None]] = None

    @property
    def stack(self) -> LayerStack:
        return self.state.stack

    @property
    def config(self) -> EditorConfig:
        return self.state.config

    def set_extend_modifier(self, held: bool):
        """Track the key that makes Draw append to the last committed layer"""
        self.state.extend_modifier = held

    # =========================================================================
    # POINTER COMMANDS
    # =========================================================================

    def on_pointer_down(self, px: float, py: float) -> bool:
        """
        Handle pointer press.

        Drags start on the first move, not on the press, so a press only
        arms the state machine and always returns False.
        """
        self.state.pointer_down = True
        return False

    def on_pointer_move(self, px: float, py: float) -> bool:
        """
        Handle pointer movement. Only drags (pointer held) do anything.

        Args:
            px: X position in canvas pixels
            py: Y position in canvas pixels

        Returns:
            True if the drag tick changed something
        """
        if not self.state.pointer_down:
            return False

        mode = self.state.mode
        if mode == EditorMode.DRAW:
            return self._stamp(px, py)
        if mode in (EditorMode.MOVE, EditorMode.COPY):
            return self._drag(px, py, copy=(mode == EditorMode.COPY))
        if mode == EditorMode.PULL:
            return self._pull(px, py)
        return False

    def on_pointer_up(self, px: float, py: float) -> bool:
        """
        Handle pointer release.

        Drag state is cleared first; a dragged layer is then committed.
        Otherwise the mode's release action runs.
        """
        target = self.state.drag_target
        self.state.drag_target = None
        self.state.drag_anchor = None
        self.state.pointer_down = False

        if target is not None:
            self.stack[target].finalize()
            log_controller(f"Committed drag of layer {target} ({self.stack[target].name})")
            return True

        mode = self.state.mode
        if mode == EditorMode.DRAW:
            return self._commit_drawing(px, py)
        if mode == EditorMode.FILL:
            return self._fill(px, py)
        if mode == EditorMode.PULL:
            return self._pull(px, py)
        return False

    # =========================================================================
    # OTHER COMMANDS
    # =========================================================================

    def on_submit_text(self, text: str, font: Mapping[str, GlyphLike]) -> List[int]:
        """
        Place text centred on the panel, one layer per glyph plane.

        Args:
            text: Text to place
            font: Parsed font asset {char: glyph record}

        Returns:
            Indices of the layers added to the stack
        """
        if not text:
            return []

        cursor = GlyphCodec.layout_text(font, text, self.config)
        layers = GlyphCodec.import_text(font, text, cursor, self.state.color,
                                        self.config.palette_size)
        indices = []
        for layer in layers:
            layer.name = self.stack.unique_name(layer.name)
            indices.append(self.stack.add(layer))

        log_controller(f"Placed text {text!r} at {cursor} as {len(indices)} layer(s)")
        if indices:
            self._notify_stack_changed()
        return indices

    def undo_last_layer(self) -> bool:
        """Drop the topmost user layer, if any"""
        if self.state.is_dragging():
            return False
        layer = self.stack.pop_user_layer()
        if layer is None:
            return False
        log_controller(f"Removed layer {layer.name}")
        self._notify_stack_changed()
        return True

    def export_layers(self):
        """Debug export of the user layers in font asset format"""
        return GlyphCodec.export_stack(self.stack)

    # =========================================================================
    # MODE HANDLERS
    # =========================================================================

    def _stamp(self, px: float, py: float) -> bool:
        """Stamp one cell of the current tool and colour at a pointer position"""
        state = self.state
        address = self.config.to_grid(px, py)
        cell = Cell(address, state.color, state.draw_tool, self.config.palette_size)
        smooth = state.draw_tool == Shape.PEN

        if state.extend_modifier and self.stack.has_user_layers():
            return self.stack.topmost.push(cell, smooth=smooth)

        if state.working_layer is None:
            state.working_layer = Layer(state.next_layer_name())
        return state.working_layer.push(cell)

    def _commit_drawing(self, px: float, py: float) -> bool:
        state = self.state
        working = state.working_layer

        if (working is None or working.is_empty()) and self.config.in_bounds(self.config.to_grid(px, py)):
            # A click without drag places a single cell
            stamped = self._stamp(px, py)
            working = state.working_layer
            if working is None or working.is_empty():
                # Extend modifier: the cell went into the topmost layer
                return stamped

        if working is None or working.is_empty():
            return False

        if state.draw_tool == Shape.PEN:
            working.smooth()

        index = self.stack.add(working)
        state.working_layer = None
        log_controller(f"Committed {working.name} with {len(working)} cells at index {index}")
        self._notify_stack_changed()
        return True

    def _target_at(self, px: float, py: float) -> Tuple[GridAddress, Optional[int]]:
        """Hit-test for a tool target, rejecting the background and border"""
        address = self.config.to_grid(px, py)
        index = self.stack.target_at(address)
        if index is None and self.stack.topmost_hit_at(address) is not None:
            log_controller(f"Ignoring protected layer at {address}")
        return address, index

    def _fill(self, px: float, py: float) -> bool:
        _, index = self._target_at(px, py)
        if index is None:
            return False
        self.stack[index].fill(self.state.color, self.config.palette_size)
        return True

    def _pull(self, px: float, py: float) -> bool:
        address, index = self._target_at(px, py)
        if index is None:
            return False
        return self.stack[index].remove(address)

    def _drag(self, px: float, py: float, copy: bool) -> bool:
        """
        One drag tick of Move or Copy.

        The first tick picks the target (cloning it first for Copy); later
        ticks stage the grid-unit delta from the anchor.
        """
        state = self.state

        if state.drag_target is None:
            _, index = self._target_at(px, py)
            if index is None:
                return False
            if copy:
                source = self.stack[index]
                index = self.stack.add(source.clone(self.stack.unique_name(f"{source.name}-copy")))
                self._notify_stack_changed()
            state.drag_target = index
            state.drag_anchor = (px, py)
            log_controller(f"{'Copy' if copy else 'Move'} drag started on layer {index}")
            return True

        anchor_x, anchor_y = state.drag_anchor
        zoom = self.config.grid_zoom
        dx = int((px - anchor_x) // zoom)
        dy = int((py - anchor_y) // zoom)
        self.stack[state.drag_target].offset(dx, dy)
        return True

    def _notify_stack_changed(self):
        if self.on_stack_changed:
            self.on_stack_changed()
