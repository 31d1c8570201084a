"""
Configuration for the 3D court scene.

Court measurements are fixed constants in court_geometry; this holds the
render-time settings: color management, camera, lights, ball textures and
page options.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from .materials import ColorPolicy

ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"


@dataclass(frozen=True)
class SceneConfig:
    """Configuration dataclass for the court scene."""

    # Color management
    color_policy: ColorPolicy = ColorPolicy.LINEARIZED
    tone_mapping: bool = True
    exposure: float = 1.2
    background_color: str = "#000000"

    # Camera (perspective, looking at the court center)
    camera_position: Tuple[float, float, float] = (0.0, 15.0, 30.0)
    camera_target: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    camera_fov: float = 75.0

    # Lights
    ambient_color: str = "#ffffff"
    ambient_intensity: float = 0.5
    directional_color: str = "#ffffff"
    directional_intensity: float = 0.8
    directional_position: Tuple[float, float, float] = (10.0, 20.0, 15.0)
    shadows: bool = True

    # Ball
    show_ball: bool = True
    ball_radius: float = 0.123
    ball_segments: int = 64
    ball_clearance: float = 0.1           # gap between slab center plane and the ball
    ball_metalness: float = 0.0
    ball_fallback_color: str = "#ffffff"
    texture_dir: Path = ASSETS_DIR / "basketball-classic-ball" / "Tex_Metal_Rough"
    base_color_map: str = "basketballball_bball_Mat_BaseColor.jpg"
    normal_map: str = "basketballball_bball_Mat_Normal.jpg"
    roughness_map: str = "basketballball_bball_Mat_Roughness.jpg"

    # Controls / page
    orbit_enabled: bool = True
    orbit_key: str = "o"
    height: int = 720

    def __post_init__(self):
        object.__setattr__(self, "color_policy", ColorPolicy.parse(self.color_policy))
        object.__setattr__(self, "texture_dir", Path(self.texture_dir))
        if self.ball_segments < 3:
            raise ValueError(f"ball_segments must be >= 3, got {self.ball_segments}")
        if self.exposure <= 0:
            raise ValueError(f"exposure must be positive, got {self.exposure}")

    # Derived properties
    @property
    def ball_position(self) -> Tuple[float, float, float]:
        return (0.0, self.ball_radius + self.ball_clearance, 0.0)

    @property
    def texture_paths(self) -> dict:
        return {
            "base_color": self.texture_dir / self.base_color_map,
            "normal": self.texture_dir / self.normal_map,
            "roughness": self.texture_dir / self.roughness_map,
        }


def get_default_config() -> SceneConfig:
    """Return default configuration."""
    return SceneConfig()
