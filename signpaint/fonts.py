"""
Font library - Load and cache bitmap font assets

Fonts are JSON files mapping single characters to glyph records; the file
stem is the font name (e.g. 'albers.json' -> 'albers').
"""
import json
from typing import Dict, List, Optional
from pathlib import Path

from .core.glyphs import Glyph, GlyphFormatError
from .core.logging import log


class FontLibrary:
    """
    Loads every *.json font in a directory on first use.

    Glyph records are validated while loading; a font with a malformed
    glyph is skipped as a whole.
    """

    def __init__(self, font_dir: str):
        """
        Initialize the font library.

        Args:
            font_dir: Directory holding the font JSON files
        """
        self.font_dir = Path(font_dir)

        # Cache for loaded fonts
        self._cache: Dict[str, Dict[str, Glyph]] = {}
        self._loaded = False

    @staticmethod
    def parse_font(data: Dict, name: str = "font") -> Dict[str, Glyph]:
        """
        Validate a parsed font asset.

        Raises:
            GlyphFormatError: If a key is not a single character or a glyph is malformed
        """
        if not isinstance(data, dict):
            raise GlyphFormatError(f"{name}: font must be a JSON object")
        font = {}
        for char, record in data.items():
            if len(char) != 1:
                raise GlyphFormatError(f"{name}: key {char!r} is not a single character")
            font[char] = Glyph.from_json(record, f"{name}[{char!r}]")
        return font

    def load_fonts(self) -> Dict[str, Dict[str, Glyph]]:
        """
        Load all fonts from the font directory.

        Returns:
            Dictionary mapping font names to {char: Glyph}
        """
        if self._loaded:
            return self._cache

        fonts = {}

        if self.font_dir.exists():
            for json_file in sorted(self.font_dir.glob('*.json')):
                try:
                    with open(json_file, 'r', encoding='utf-8') as f:
                        fonts[json_file.stem] = self.parse_font(json.load(f), json_file.stem)
                except (OSError, ValueError) as e:
                    log(f"Error loading font {json_file}: {e}", "[FontLibrary]")

        self._cache = fonts
        self._loaded = True
        return fonts

    def reload(self) -> Dict[str, Dict[str, Glyph]]:
        self._loaded = False
        self._cache = {}
        return self.load_fonts()

    def font_names(self) -> List[str]:
        return sorted(self.load_fonts())

    def get_font(self, name: str) -> Optional[Dict[str, Glyph]]:
        """
        Get a font by name.

        Returns:
            {char: Glyph} or None if no such font was loaded
        """
        return self.load_fonts().get(name)
