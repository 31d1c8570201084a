"""
Pytest fixtures for court scene tests.
"""
import numpy as np
import pytest
from PIL import Image
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import SceneConfig
from src.court_geometry import build_court_layout
from src.materials import ColorPolicy, court_palette


@pytest.fixture
def palette_raw():
    return court_palette(ColorPolicy.RAW)


@pytest.fixture
def palette_linear():
    return court_palette(ColorPolicy.LINEARIZED)


@pytest.fixture
def layout(palette_raw):
    return build_court_layout(palette_raw)


@pytest.fixture
def config_raw():
    """Plain colors, no tone mapping: display colors equal the hex constants."""
    return SceneConfig(color_policy=ColorPolicy.RAW, tone_mapping=False, exposure=1.0)


def _write_image(path: Path, rgb, size=(16, 8)):
    img = np.zeros((size[1], size[0], 3), dtype=np.uint8)
    img[:] = rgb
    Image.fromarray(img).save(path)
    return path


@pytest.fixture
def texture_dir(tmp_path):
    """Directory holding uniform base color / normal / roughness maps."""
    _write_image(tmp_path / "base.png", (255, 0, 0))
    _write_image(tmp_path / "normal.png", (128, 128, 255))
    _write_image(tmp_path / "rough.png", (128, 128, 128))
    return tmp_path


@pytest.fixture
def textured_config(texture_dir):
    return SceneConfig(
        color_policy=ColorPolicy.RAW,
        tone_mapping=False,
        exposure=1.0,
        texture_dir=texture_dir,
        base_color_map="base.png",
        normal_map="normal.png",
        roughness_map="rough.png",
        ball_segments=8,
    )


@pytest.fixture
def missing_texture_config(tmp_path):
    return SceneConfig(texture_dir=tmp_path / "nope", ball_segments=8)
