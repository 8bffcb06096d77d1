"""
Color value types shared across extraction, harmony and scoring.

All records are immutable and created fresh for each analysis.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, NamedTuple, Tuple


class RGB(NamedTuple):
    """8-bit RGB triple."""
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    """HSL triple: hue in degrees [0, 360), saturation/lightness in percent."""
    h: int
    s: int
    l: int


@dataclass(frozen=True)
class DominantColor:
    """One bucket of a dominant-color breakdown."""
    rgb: RGB
    hsl: HSL
    hex: str
    frequency: float  # bucket share of sampled pixels [0, 1]


@dataclass(frozen=True)
class ColorRecord:
    """Representative color of one garment."""
    rgb: RGB
    hsl: HSL
    hex: str
    name: str
    confidence: float = 1.0
    dominant_colors: Tuple[DominantColor, ...] = field(default_factory=tuple)
    is_pattern: bool = False
    pixel_count: int = 0
    filtered_count: int = 0

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int, **kwargs) -> "ColorRecord":
        """Build a record from an RGB triple, deriving HSL, hex and name."""
        from .color_model import rgb_to_hsl, rgb_to_hex, get_color_description

        rgb = RGB(int(r), int(g), int(b))
        hsl = rgb_to_hsl(*rgb)
        return cls(
            rgb=rgb,
            hsl=hsl,
            hex=rgb_to_hex(*rgb),
            name=get_color_description(hsl),
            **kwargs
        )

    @classmethod
    def from_hex(cls, hex_color: str, **kwargs) -> "ColorRecord":
        """Build a record from a #RRGGBB string."""
        from .color_model import hex_to_rgb

        return cls.from_rgb(*hex_to_rgb(hex_color), **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-dict view with nested rgb/hsl mappings."""
        data = asdict(self)
        data["rgb"] = self.rgb._asdict()
        data["hsl"] = self.hsl._asdict()
        data["dominant_colors"] = [
            {
                "rgb": dc.rgb._asdict(),
                "hsl": dc.hsl._asdict(),
                "hex": dc.hex,
                "frequency": dc.frequency,
            }
            for dc in self.dominant_colors
        ]
        return data


def color_record_from_rgb(r: int, g: int, b: int) -> ColorRecord:
    """Record for a manually chosen color: full confidence, no breakdown."""
    return ColorRecord.from_rgb(r, g, b, confidence=1.0)


def color_record_from_hex(hex_color: str) -> ColorRecord:
    """Record for a manually entered #RRGGBB color."""
    return ColorRecord.from_hex(hex_color, confidence=1.0)
