"""
Glyph Codec - converts between font glyph pixel matrices and layers

Font asset format (already parsed JSON):

    { "<char>": { "offset": <int>, "pixels": <matrix|matrix[]>, "layers"?: <int> } }

Pixel codes are 0 (empty) or 1-6 for square, circle, cornerNE, cornerSE,
cornerSW and cornerNW. With "layers" present, "pixels" holds that many
same-shaped matrices, one per colour plane; plane i is drawn in colour
(base + i) mod palette size.

The debug export produces the same structure from drawn layers so new glyphs
can be authored in the editor and pasted into a font file.
"""
from typing import Dict, List, Mapping, Optional, Tuple, Union
from dataclasses import dataclass, field

from .grid import GridAddress, GLYPH_SHAPES, EMPTY_CODE
from .cell import Cell
from .config import EditorConfig
from .layer import Layer
from .stack import LayerStack, PROTECTED_INDICES
from .logging import log_codec


Matrix = List[List[int]]


class GlyphFormatError(ValueError):
    """Raised when a glyph record does not follow the font asset format"""


def _check_matrix(matrix, where: str) -> Tuple[int, int]:
    """Validate one pixel plane and return its (width, height)"""
    if not isinstance(matrix, list):
        raise GlyphFormatError(f"{where}: pixels must be a list of rows")
    width = None
    for y, row in enumerate(matrix):
        if not isinstance(row, list):
            raise GlyphFormatError(f"{where}: row {y} is not a list")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise GlyphFormatError(f"{where}: row {y} has {len(row)} entries, expected {width}")
        for x, code in enumerate(row):
            if isinstance(code, bool) or not isinstance(code, int) or \
                    (code != EMPTY_CODE and code not in GLYPH_SHAPES):
                raise GlyphFormatError(f"{where}: invalid pixel code {code!r} at ({x}, {y})")
    return (width or 0, len(matrix))


@dataclass(frozen=True)
class Glyph:
    """One character of a font: baseline offset plus one or more pixel planes"""
    offset: int = 0
    pixels: list = field(default_factory=list)
    layers: Optional[int] = None

    @property
    def planes(self) -> List[Matrix]:
        """The pixel planes, one matrix per colour"""
        if self.layers is None:
            return [self.pixels]
        return list(self.pixels)

    @property
    def width(self) -> int:
        first = self.planes[0]
        return len(first[0]) if first else 0

    @property
    def height(self) -> int:
        return len(self.planes[0])

    @classmethod
    def from_json(cls, data: Mapping, name: str = "glyph") -> 'Glyph':
        """
        Parse and validate a glyph record.

        Args:
            data: Dictionary with 'offset', 'pixels' and optionally 'layers'
            name: Label used in error messages

        Raises:
            GlyphFormatError: If the record is malformed
        """
        if not isinstance(data, Mapping) or 'pixels' not in data:
            raise GlyphFormatError(f"{name}: glyph record needs a 'pixels' entry")

        offset = data.get('offset', 0)
        if isinstance(offset, bool) or not isinstance(offset, int):
            raise GlyphFormatError(f"{name}: offset must be an int, got {offset!r}")

        pixels = data['pixels']
        layers = data.get('layers')

        if layers is None:
            _check_matrix(pixels, name)
        else:
            if isinstance(layers, bool) or not isinstance(layers, int) or layers < 1:
                raise GlyphFormatError(f"{name}: layers must be a positive int, got {layers!r}")
            if not isinstance(pixels, list) or len(pixels) != layers:
                raise GlyphFormatError(f"{name}: expected {layers} pixel planes")
            sizes = {_check_matrix(plane, f"{name} plane {i}") for i, plane in enumerate(pixels)}
            if len(sizes) > 1:
                raise GlyphFormatError(f"{name}: pixel planes differ in size")

        return cls(offset, pixels, layers)

    def to_json(self) -> Dict:
        d: Dict = {'offset': self.offset, 'pixels': self.pixels}
        if self.layers is not None:
            d['layers'] = self.layers
        return d


# The space character is always an empty glyph
SPACE_GLYPH = Glyph(offset=0, pixels=[])

GlyphLike = Union[Glyph, Mapping]


def _as_glyph(value: GlyphLike, name: str) -> Glyph:
    if isinstance(value, Glyph):
        return value
    return Glyph.from_json(value, name)


class GlyphCodec:
    """
    Import/export between glyphs and layers.

    Works only through the public Layer/Cell/LayerStack operations.
    """

    @staticmethod
    def resolve_glyph(font: Mapping[str, GlyphLike], char: str) -> Optional[Glyph]:
        """
        Look up the glyph for a character.

        Resolution order: space, exact match, upper case, lower case.

        Returns:
            Glyph, or None if the font has no match
        """
        if char == " ":
            return SPACE_GLYPH
        for candidate in (char, char.upper(), char.lower()):
            if candidate in font:
                return _as_glyph(font[candidate], repr(candidate))
        return None

    @staticmethod
    def import_glyph(glyph: Glyph, cursor: GridAddress, color: int,
                     palette_size: int, name: str = "glyph") -> List[Layer]:
        """
        Place a glyph's cells at a cursor position.

        Args:
            glyph: Glyph to place
            cursor: Grid address of the glyph's top-left corner (before offset)
            color: Base colour index
            palette_size: Palette size for multi-plane colour wrapping
            name: Base name for the created layers

        Returns:
            One layer for a single-plane glyph, one per plane otherwise
        """
        multi_plane = glyph.layers is not None
        layers = []
        for plane_index, matrix in enumerate(glyph.planes):
            plane_color = (color + plane_index) % palette_size if multi_plane else color
            layer_name = f"{name}-{plane_index}" if multi_plane else name
            cells = []
            for y, row in enumerate(matrix):
                for x, code in enumerate(row):
                    if code == EMPTY_CODE:
                        continue
                    address = GridAddress(cursor.gx + x, cursor.gy + y + glyph.offset)
                    cells.append(Cell(address, plane_color, GLYPH_SHAPES[code], palette_size))
            layers.append(Layer(layer_name, cells))
        return layers

    @staticmethod
    def resolve_text(font: Mapping[str, GlyphLike], text: str) -> List[Tuple[str, Glyph]]:
        """Resolve every character of a text, dropping characters the font lacks"""
        glyphs = []
        for char in text:
            glyph = GlyphCodec.resolve_glyph(font, char)
            if glyph is None:
                log_codec(f"No glyph for {char!r}, skipping")
                continue
            glyphs.append((char, glyph))
        return glyphs

    @staticmethod
    def measure(glyphs: List[Tuple[str, Glyph]]) -> Tuple[int, int]:
        """
        Measure a run of glyphs.

        Returns:
            (width, height) with one grid unit of spacing between glyphs
        """
        width = -1
        height = 0
        for _, glyph in glyphs:
            width += glyph.width + 1
            height = max(height, glyph.offset + glyph.height)
        return (width, height)

    @staticmethod
    def layout_text(font: Mapping[str, GlyphLike], text: str, config: EditorConfig) -> GridAddress:
        """Cursor at which the text has to start to be centred on the panel"""
        width, height = GlyphCodec.measure(GlyphCodec.resolve_text(font, text))
        return GridAddress((config.grid_width - width) // 2, (config.grid_height - height) // 2)

    @staticmethod
    def import_text(font: Mapping[str, GlyphLike], text: str, cursor: GridAddress,
                    color: int, palette_size: int) -> List[Layer]:
        """
        Place a run of text, one layer per glyph (or per glyph plane).

        The cursor advances by each glyph's width plus one grid unit.
        Characters the font cannot resolve contribute nothing and planes
        without any set pixel produce no layer.
        """
        layers = []
        for char, glyph in GlyphCodec.resolve_text(font, text):
            placed = GlyphCodec.import_glyph(glyph, cursor, color, palette_size, f"glyph-{char}")
            layers.extend(layer for layer in placed if not layer.is_empty())
            cursor = cursor.translated(glyph.width + 1, 0)
        return layers

    @staticmethod
    def export_layer(layer: Layer) -> Glyph:
        """
        Pack a layer into a glyph record.

        Single-colour layers give a flat matrix; several colours give one
        plane per colour with the plane count in 'layers'.
        """
        pixels, plane_count = layer.to_pixel_matrix()
        return Glyph(offset=0, pixels=pixels, layers=plane_count if plane_count > 1 else None)

    @staticmethod
    def export_stack(stack: LayerStack) -> Dict[str, Dict]:
        """
        Debug export of every user layer.

        Returns:
            {layer name: glyph record} for each non-empty layer above the border
        """
        records = {}
        for index, layer in enumerate(stack):
            if index in PROTECTED_INDICES or layer.is_empty():
                continue
            records[layer.name] = GlyphCodec.export_layer(layer).to_json()
        return records
