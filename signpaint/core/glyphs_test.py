"""Tests for glyph import/export and text layout."""

import pytest

from signpaint.core.cell import Cell
from signpaint.core.config import EditorConfig
from signpaint.core.glyphs import SPACE_GLYPH, Glyph, GlyphCodec, GlyphFormatError
from signpaint.core.grid import GridAddress, Shape
from signpaint.core.layer import Layer
from signpaint.core.stack import LayerStack


def _font():
    return {
        "A": {"offset": 0, "pixels": [[1, 1]]},
        "b": {"offset": 1, "pixels": [[2], [2]]},
        "x": {"offset": 0, "pixels": [[3, 0], [0, 6]], "layers": None},
    }


def _two_plane():
    return {
        "offset": 0,
        "layers": 2,
        "pixels": [
            [[1, 0], [0, 0]],
            [[0, 0], [0, 2]],
        ],
    }


def _cells(layer):
    return sorted((c.address.gx, c.address.gy, c.color, c.shape) for c in layer)


class TestGlyphRecord:
    def test_parse_single_plane(self):
        glyph = Glyph.from_json({"offset": 2, "pixels": [[1, 0, 2]]})
        assert glyph.offset == 2
        assert glyph.width == 3
        assert glyph.height == 1
        assert glyph.planes == [[[1, 0, 2]]]

    def test_parse_multi_plane(self):
        glyph = Glyph.from_json(_two_plane())
        assert glyph.layers == 2
        assert len(glyph.planes) == 2
        assert glyph.width == 2
        assert glyph.height == 2

    def test_offset_defaults_to_zero(self):
        assert Glyph.from_json({"pixels": [[1]]}).offset == 0

    @pytest.mark.parametrize(
        "record",
        [
            {"offset": 0},
            {"offset": 0, "pixels": [[7]]},
            {"offset": 0, "pixels": [[1, 0], [1]]},
            {"offset": "1", "pixels": [[1]]},
            {"offset": 0, "layers": 2, "pixels": [[[1]]]},
            {"offset": 0, "layers": 2, "pixels": [[[1]], [[1, 1]]]},
            {"offset": 0, "layers": 0, "pixels": []},
        ],
    )
    def test_malformed(self, record):
        with pytest.raises(GlyphFormatError):
            Glyph.from_json(record)

    def test_to_json(self):
        assert Glyph(0, [[1]]).to_json() == {"offset": 0, "pixels": [[1]]}
        assert Glyph.from_json(_two_plane()).to_json() == _two_plane()

    def test_space_is_empty(self):
        assert SPACE_GLYPH.width == 0
        assert SPACE_GLYPH.height == 0


class TestImportGlyph:
    def test_round_trip_example(self):
        glyph = Glyph.from_json({"offset": 0, "pixels": [[1, 0], [0, 2]]})
        layers = GlyphCodec.import_glyph(glyph, GridAddress(0, 0), 3, 7)
        assert len(layers) == 1
        assert _cells(layers[0]) == sorted([
            (0, 0, 3, Shape.SQUARE),
            (1, 1, 3, Shape.CIRCLE),
        ])
        exported = GlyphCodec.export_layer(layers[0])
        assert exported.pixels == [[1, 0], [0, 2]]
        assert exported.layers is None

    def test_cursor_and_offset(self):
        glyph = Glyph.from_json({"offset": 2, "pixels": [[4]]})
        (layer,) = GlyphCodec.import_glyph(glyph, GridAddress(10, 3), 2, 7)
        assert _cells(layer) == [(10, 5, 2, Shape.CORNER_SE)]

    def test_multi_plane_colours_wrap(self):
        glyph = Glyph.from_json(_two_plane())
        layers = GlyphCodec.import_glyph(glyph, GridAddress(0, 0), 6, 7, name="glyph-Q")
        assert [layer.name for layer in layers] == ["glyph-Q-0", "glyph-Q-1"]
        assert _cells(layers[0]) == [(0, 0, 6, Shape.SQUARE)]
        assert _cells(layers[1]) == [(1, 1, 0, Shape.CIRCLE)]


class TestResolve:
    def test_exact(self):
        assert GlyphCodec.resolve_glyph(_font(), "A").pixels == [[1, 1]]

    def test_upper_case_fallback(self):
        assert GlyphCodec.resolve_glyph(_font(), "a").pixels == [[1, 1]]

    def test_lower_case_fallback(self):
        assert GlyphCodec.resolve_glyph(_font(), "B").pixels == [[2], [2]]

    def test_missing(self):
        assert GlyphCodec.resolve_glyph(_font(), "?") is None

    def test_space_always_empty(self):
        font = dict(_font())
        font[" "] = {"offset": 0, "pixels": [[1]]}
        assert GlyphCodec.resolve_glyph(font, " ") is SPACE_GLYPH

    def test_accepts_parsed_glyphs(self):
        glyph = Glyph(0, [[5]])
        assert GlyphCodec.resolve_glyph({"z": glyph}, "z") is glyph


class TestImportText:
    def test_cursor_advances_width_plus_one(self):
        layers = GlyphCodec.import_text(_font(), "Ab", GridAddress(0, 0), 2, 7)
        assert [layer.name for layer in layers] == ["glyph-A", "glyph-b"]
        assert _cells(layers[0]) == [(0, 0, 2, Shape.SQUARE), (1, 0, 2, Shape.SQUARE)]
        assert _cells(layers[1]) == [(3, 1, 2, Shape.CIRCLE), (3, 2, 2, Shape.CIRCLE)]

    def test_unknown_character_has_no_width(self):
        layers = GlyphCodec.import_text(_font(), "A?A", GridAddress(0, 0), 2, 7)
        assert len(layers) == 2
        assert layers[1].addresses() == {GridAddress(3, 0), GridAddress(4, 0)}

    def test_space_advances_one(self):
        layers = GlyphCodec.import_text(_font(), "A A", GridAddress(0, 0), 2, 7)
        assert len(layers) == 2
        assert layers[1].addresses() == {GridAddress(4, 0), GridAddress(5, 0)}

    def test_empty_planes_produce_no_layer(self):
        font = {"o": {"offset": 0, "pixels": [[0]]}}
        assert GlyphCodec.import_text(font, "o", GridAddress(0, 0), 2, 7) == []


class TestLayout:
    def test_measure(self):
        glyphs = GlyphCodec.resolve_text(_font(), "Ab")
        # -1 + (2 + 1) + (1 + 1) = 4; height max(0 + 1, 1 + 2) = 3
        assert GlyphCodec.measure(glyphs) == (4, 3)

    def test_centred_cursor(self):
        config = EditorConfig()
        cursor = GlyphCodec.layout_text(_font(), "AA", config)
        assert cursor == GridAddress((64 - 5) // 2, (16 - 1) // 2)


class TestExport:
    def test_multi_colour_layer(self):
        layer = Layer("two", [
            Cell(GridAddress(0, 0), 3, Shape.SQUARE),
            Cell(GridAddress(1, 1), 4, Shape.CIRCLE),
        ])
        glyph = GlyphCodec.export_layer(layer)
        assert glyph.layers == 2
        assert glyph.to_json() == {
            "offset": 0,
            "layers": 2,
            "pixels": [[[1, 0], [0, 0]], [[0, 0], [0, 2]]],
        }

    def test_multi_colour_round_trip(self):
        layer = Layer("two", [
            Cell(GridAddress(4, 4), 3, Shape.CORNER_NE),
            Cell(GridAddress(5, 4), 4, Shape.CORNER_SW),
        ])
        glyph = Glyph.from_json(GlyphCodec.export_layer(layer).to_json())
        planes = GlyphCodec.import_glyph(glyph, GridAddress(4, 4), 3, 7)
        merged = sorted(cell for plane in planes for cell in _cells(plane))
        assert merged == _cells(layer)

    def test_export_stack_skips_protected_and_empty(self):
        stack = LayerStack.create(EditorConfig(grid_width=4, grid_height=4))
        stack.add(Layer("heart", [Cell(GridAddress(1, 1), 2, Shape.CIRCLE)]))
        stack.add(Layer("blank"))
        records = GlyphCodec.export_stack(stack)
        assert records == {"heart": {"offset": 0, "pixels": [[2]]}}
