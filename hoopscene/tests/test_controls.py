"""
Tests for the orbit toggle, page overlay and config.
"""
import logging

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config import SceneConfig, get_default_config
from src.controls import OrbitControls, instructions_html, keyboard_script, scene_page_html
from src.logging_config import LOGGER_NAME, setup_logging
from src.materials import ColorPolicy


class TestOrbitControls:

    def test_enabled_by_default(self):
        controls = OrbitControls()
        assert controls.enabled is True
        assert controls.dragmode == "orbit"

    def test_toggle(self):
        controls = OrbitControls().handle_key("o")
        assert controls.enabled is False
        assert controls.dragmode is False
        assert controls.handle_key("o").enabled is True

    @pytest.mark.parametrize("key", ["O", "p", "Escape", ""])
    def test_other_keys_ignored(self, key):
        controls = OrbitControls()
        assert controls.handle_key(key) is controls


class TestPage:

    def test_instructions(self):
        html = instructions_html(OrbitControls())
        assert "<h3>Controls:</h3>" in html
        assert "O - Toggle orbit camera" in html
        assert "bottom: 20px" in html and "left: 20px" in html

    def test_keyboard_script(self):
        js = keyboard_script(OrbitControls(enabled=False), "court-scene")
        assert '"divId": "court-scene"' in js
        assert '"key": "o"' in js
        assert '"enabled": false' in js
        assert "__CONTROLS_JSON__" not in js

    def test_page_wraps_figure(self):
        page = scene_page_html("<div id='court-scene'></div>", OrbitControls(), "court-scene")
        assert page.index("court-scene") < page.index("instructions") < page.index("<script>")


class TestConfig:

    def test_defaults(self):
        cfg = get_default_config()
        assert cfg.color_policy is ColorPolicy.LINEARIZED
        assert cfg.exposure == 1.2
        assert cfg.camera_position == (0.0, 15.0, 30.0)
        assert cfg.directional_position == (10.0, 20.0, 15.0)
        assert set(cfg.texture_paths) == {"base_color", "normal", "roughness"}
        assert cfg.texture_paths["base_color"].name == "basketballball_bball_Mat_BaseColor.jpg"

    def test_policy_from_string(self):
        assert SceneConfig(color_policy="raw").color_policy is ColorPolicy.RAW

    @pytest.mark.parametrize("kw", [dict(color_policy="srgb"), dict(exposure=0.0), dict(ball_segments=2)])
    def test_invalid(self, kw):
        with pytest.raises(ValueError):
            SceneConfig(**kw)


class TestLogging:

    def test_setup_is_idempotent(self, tmp_path):
        log_file = tmp_path / "scene.log"
        setup_logging(logging.DEBUG, str(log_file))
        logger = setup_logging(logging.INFO)
        assert logger.name == LOGGER_NAME
        assert len(logger.handlers) == 1
        logger.handlers.clear()
