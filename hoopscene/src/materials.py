"""
Materials + color management for the court scene.
- Material descriptor attached to every primitive
- ColorPolicy: one place that decides the working color space
- Display transform (exposure, ACES filmic, sRGB encode) for the renderer
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

import numpy as np

RGB = Tuple[float, float, float]


class Shading(str, Enum):
    BASIC = "basic"        # unlit (lines)
    PHONG = "phong"        # lit, shininess driven
    STANDARD = "standard"  # PBR, metalness/roughness driven


class ColorPolicy(str, Enum):
    RAW = "raw"
    LINEARIZED = "linearized"

    @classmethod
    def parse(cls, value) -> "ColorPolicy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(p.value for p in cls)
            raise ValueError(f"Unknown color policy {value!r} (expected one of: {names})") from None


# --- sRGB transfer functions (IEC 61966-2-1)
def srgb_to_linear(c):
    c = np.asarray(c, dtype=float)
    return np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)

def linear_to_srgb(c):
    c = np.clip(np.asarray(c, dtype=float), 0.0, None)
    return np.where(c <= 0.0031308, c * 12.92, 1.055 * np.power(c, 1 / 2.4) - 0.055)

def aces_filmic(c):
    """Narkowicz fit of the ACES filmic curve, input/output linear."""
    c = np.asarray(c, dtype=float)
    return np.clip((c * (2.51 * c + 0.03)) / (c * (2.43 * c + 0.59) + 0.14), 0.0, 1.0)


def hex_to_rgb(color: str) -> RGB:
    """'#c68642' / 'c68642' / '#fff' -> (r, g, b) in [0, 1]."""
    s = str(color).strip().lstrip("#")
    if len(s) == 3:
        s = "".join(ch * 2 for ch in s)
    if len(s) != 6:
        raise ValueError(f"Not a hex color: {color!r}")
    try:
        r, g, b = (int(s[i:i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise ValueError(f"Not a hex color: {color!r}") from None
    return (r / 255.0, g / 255.0, b / 255.0)

def rgb_to_css(rgb) -> str:
    r, g, b = (int(round(float(v) * 255)) for v in np.clip(rgb, 0.0, 1.0))
    return f"rgb({r},{g},{b})"


@dataclass(frozen=True)
class Material:
    """Color is stored in the working space of the policy that built it."""
    color: RGB
    shading: Shading = Shading.BASIC
    opacity: float = 1.0
    transparent: bool = False
    shininess: float = 30.0
    metalness: float = 0.0
    roughness: float = 1.0


def to_working_space(color: str, policy: ColorPolicy) -> RGB:
    rgb = hex_to_rgb(color)
    if ColorPolicy.parse(policy) is ColorPolicy.LINEARIZED:
        rgb = tuple(float(v) for v in srgb_to_linear(rgb))
    return rgb


def display_rgb(rgb, policy: ColorPolicy, exposure: float = 1.0, tone_mapping: bool = True):
    """
    Working-space color(s) -> display sRGB in [0, 1].
    RAW passes through. LINEARIZED applies exposure, optional ACES, then sRGB encode.
    Accepts a single (r, g, b) or an (N, 3) array.
    """
    c = np.asarray(rgb, dtype=float)
    if ColorPolicy.parse(policy) is ColorPolicy.RAW:
        return np.clip(c, 0.0, 1.0)
    c = c * exposure
    if tone_mapping:
        c = aces_filmic(c)
    return np.clip(linear_to_srgb(c), 0.0, 1.0)


def make_material(
    color: str,
    policy: ColorPolicy = ColorPolicy.RAW,
    shading: Shading = Shading.BASIC,
    **kw,
) -> Material:
    return Material(color=to_working_space(color, policy), shading=Shading(shading), **kw)


# --- Court palette (nominal sRGB hex constants)
COURT_COLOR      = "#c68642"
LINE_COLOR       = "#ffffff"
SUPPORT_COLOR    = "#888888"
BACKBOARD_COLOR  = "#ffffff"
RIM_COLOR        = "#ff8c00"
NET_COLOR        = "#ffffff"

COURT_SHININESS     = 50.0
BACKBOARD_OPACITY   = 0.6


@dataclass(frozen=True)
class CourtPalette:
    court: Material
    line: Material
    support: Material
    backboard: Material
    rim: Material
    net: Material


def court_palette(policy: ColorPolicy = ColorPolicy.RAW) -> CourtPalette:
    policy = ColorPolicy.parse(policy)
    return CourtPalette(
        court=make_material(COURT_COLOR, policy, Shading.PHONG, shininess=COURT_SHININESS),
        line=make_material(LINE_COLOR, policy),
        support=make_material(SUPPORT_COLOR, policy, Shading.PHONG),
        backboard=make_material(
            BACKBOARD_COLOR, policy, Shading.PHONG,
            transparent=True, opacity=BACKBOARD_OPACITY,
        ),
        rim=make_material(RIM_COLOR, policy, Shading.PHONG),
        net=make_material(NET_COLOR, policy),
    )


__all__ = [
    "Shading", "ColorPolicy", "Material", "CourtPalette",
    "srgb_to_linear", "linear_to_srgb", "aces_filmic",
    "hex_to_rgb", "rgb_to_css", "to_working_space", "display_rgb",
    "make_material", "court_palette",
]
