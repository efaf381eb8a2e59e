"""
Editor configuration - panel geometry, zoom and palette

Configuration is a plain dataclass with a JSON round-trip so deployments can
ship their own panel size and palette next to the font assets.
"""
from typing import Dict, List, Optional
from dataclasses import dataclass, field
from pathlib import Path
import json

from .grid import GridAddress
from .logging import log


DEFAULT_PALETTE = [
    "#002c80",  # backplate blue
    "#0074a4",  # border blue
    "#fd5d5d",  # pink
    "#f3bd10",  # yellow
    "#9e82b6",  # purple
    "#0f8a44",  # green
    "#eaeae0",  # white
]


@dataclass
class EditorConfig:
    """Panel geometry and palette for one editing session"""
    grid_width: int = 64
    grid_height: int = 16
    grid_zoom: int = 24  # px to render each grid square
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    backplate_color: int = 0
    border_color: int = 1
    default_color: int = 1

    @property
    def palette_size(self) -> int:
        return len(self.palette)

    @property
    def pixel_size(self):
        """Canvas size in pixels (width, height)"""
        return (self.grid_width * self.grid_zoom, self.grid_height * self.grid_zoom)

    def in_bounds(self, address: GridAddress) -> bool:
        """Check if an address lies on the panel"""
        return 0 <= address.gx < self.grid_width and 0 <= address.gy < self.grid_height

    def to_grid(self, px: float, py: float) -> GridAddress:
        """
        Convert a pixel position to the grid address under it.

        Args:
            px: X position in canvas pixels
            py: Y position in canvas pixels

        Returns:
            GridAddress containing the pixel (floor division by the zoom)
        """
        return GridAddress(int(px // self.grid_zoom), int(py // self.grid_zoom))

    def to_json(self) -> Dict:
        return {
            'grid_width': self.grid_width,
            'grid_height': self.grid_height,
            'grid_zoom': self.grid_zoom,
            'palette': list(self.palette),
            'backplate_color': self.backplate_color,
            'border_color': self.border_color,
            'default_color': self.default_color,
        }

    def to_json_string(self) -> str:
        return json.dumps(self.to_json(), indent=2)

    @classmethod
    def from_json(cls, data: Dict) -> 'EditorConfig':
        """
        Build a config from a JSON dictionary.

        Missing keys fall back to defaults and unknown keys are ignored.
        Sizes are clamped to at least 1.

        Raises:
            ValueError: If the palette is empty or a colour index is out of range
        """
        defaults = cls()
        palette = data.get('palette', defaults.palette)
        if not palette:
            raise ValueError("palette must contain at least one colour")

        config = cls(
            grid_width=max(1, int(data.get('grid_width', defaults.grid_width))),
            grid_height=max(1, int(data.get('grid_height', defaults.grid_height))),
            grid_zoom=max(1, int(data.get('grid_zoom', defaults.grid_zoom))),
            palette=[str(color) for color in palette],
            backplate_color=int(data.get('backplate_color', defaults.backplate_color)),
            border_color=int(data.get('border_color', defaults.border_color)),
            default_color=int(data.get('default_color', defaults.default_color)),
        )

        for key in ('backplate_color', 'border_color', 'default_color'):
            value = getattr(config, key)
            if not 0 <= value < config.palette_size:
                raise ValueError(f"{key}={value} is outside the palette (size {config.palette_size})")

        return config

    @classmethod
    def from_json_string(cls, json_str: str) -> 'EditorConfig':
        return cls.from_json(json.loads(json_str))


def load_config(path: Optional[str]) -> EditorConfig:
    """
    Load an editor config from a JSON file.

    A missing or unreadable file is logged and the defaults are returned.

    Args:
        path: Path to the JSON config file, or None for defaults

    Returns:
        EditorConfig instance
    """
    if path is None:
        return EditorConfig()

    config_path = Path(path)
    if not config_path.exists():
        log(f"Config file {config_path} not found, using defaults")
        return EditorConfig()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return EditorConfig.from_json(json.load(f))
    except (OSError, ValueError, TypeError) as e:
        log(f"Error loading config {config_path}: {e}")
        return EditorConfig()
