"""Tests for cells: colour validation and staged offsets."""

import pytest

from signpaint.core.cell import Cell, InvalidColorError, validate_color
from signpaint.core.grid import GridAddress, Shape


class _RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw_shape(self, position, shape, color):
        self.calls.append((position, shape, color))


class TestColorValidation:
    def test_in_range(self):
        assert validate_color(0) == 0
        assert validate_color(6) == 6

    @pytest.mark.parametrize("color", [-1, 7, 100])
    def test_out_of_range(self, color):
        with pytest.raises(InvalidColorError):
            validate_color(color)

    def test_not_an_int(self):
        with pytest.raises(InvalidColorError):
            validate_color("2")
        with pytest.raises(InvalidColorError):
            validate_color(True)

    def test_custom_palette_size(self):
        assert validate_color(9, palette_size=10) == 9
        with pytest.raises(InvalidColorError):
            validate_color(3, palette_size=3)

    def test_cell_construction_rejects(self):
        with pytest.raises(InvalidColorError):
            Cell(GridAddress(0, 0), 7, Shape.SQUARE)


class TestStagedOffset:
    def test_stage_does_not_move_address(self):
        cell = Cell(GridAddress(3, 3), 2, Shape.SQUARE)
        cell.stage_offset(1, -2)
        assert cell.address == GridAddress(3, 3)
        assert cell.preview_position() == GridAddress(4, 1)

    def test_finalize_commits_and_clears(self):
        cell = Cell(GridAddress(3, 3), 2, Shape.SQUARE)
        cell.stage_offset(1, -2)
        cell.finalize_offset()
        assert cell.address == GridAddress(4, 1)
        assert cell.staged_offset is None
        assert cell.preview_position() == GridAddress(4, 1)

    def test_restage_replaces(self):
        cell = Cell(GridAddress(0, 0), 2, Shape.SQUARE)
        cell.stage_offset(5, 5)
        cell.stage_offset(1, 0)
        cell.finalize_offset()
        assert cell.address == GridAddress(1, 0)

    def test_finalize_without_stage(self):
        cell = Cell(GridAddress(2, 2), 2, Shape.SQUARE)
        cell.finalize_offset()
        assert cell.address == GridAddress(2, 2)


class TestDraw:
    def test_draw_resolves_position_and_colour(self):
        palette = ["#000000", "#111111", "#222222"]
        cell = Cell(GridAddress(1, 1), 2, Shape.CIRCLE, palette_size=3)
        cell.stage_offset(2, 0)
        renderer = _RecordingRenderer()
        cell.draw(renderer, palette)
        assert renderer.calls == [(GridAddress(3, 1), Shape.CIRCLE, "#222222")]
        # Drawing never commits the staged offset
        assert cell.address == GridAddress(1, 1)


class TestCellJson:
    def test_round_trip(self):
        cell = Cell(GridAddress(4, 7), 5, Shape.CORNER_SW)
        data = cell.to_json()
        assert data == {"gx": 4, "gy": 7, "color": 5, "shape": "cornerSW"}
        restored = Cell.from_json(data)
        assert restored.address == cell.address
        assert restored.color == 5
        assert restored.shape is Shape.CORNER_SW
