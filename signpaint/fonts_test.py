"""Tests for font asset loading."""

import json

import pytest

from signpaint.core.glyphs import Glyph, GlyphFormatError
from signpaint.fonts import FontLibrary


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")


class TestFontLibrary:
    def test_loads_fonts_by_stem(self, tmp_path):
        _write(tmp_path / "albers.json", {"A": {"offset": 0, "pixels": [[1]]}})
        _write(tmp_path / "sevenplus.json", {"a": {"offset": 1, "pixels": [[2, 2]]}})
        library = FontLibrary(str(tmp_path))
        assert library.font_names() == ["albers", "sevenplus"]
        glyph = library.get_font("sevenplus")["a"]
        assert isinstance(glyph, Glyph)
        assert glyph.offset == 1

    def test_bad_font_skipped(self, tmp_path):
        _write(tmp_path / "good.json", {"A": {"offset": 0, "pixels": [[1]]}})
        _write(tmp_path / "bad.json", {"A": {"offset": 0, "pixels": [[9]]}})
        (tmp_path / "broken.json").write_text("{", encoding="utf-8")
        library = FontLibrary(str(tmp_path))
        assert library.font_names() == ["good"]
        assert library.get_font("bad") is None

    def test_missing_directory(self, tmp_path):
        assert FontLibrary(str(tmp_path / "none")).load_fonts() == {}

    def test_cached_until_reload(self, tmp_path):
        library = FontLibrary(str(tmp_path))
        assert library.font_names() == []
        _write(tmp_path / "late.json", {"A": {"offset": 0, "pixels": [[1]]}})
        assert library.font_names() == []
        library.reload()
        assert library.font_names() == ["late"]

    def test_parse_font_rejects_multi_char_keys(self):
        with pytest.raises(GlyphFormatError):
            FontLibrary.parse_font({"AB": {"offset": 0, "pixels": [[1]]}})
