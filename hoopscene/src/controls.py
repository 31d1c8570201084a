"""
Orbit camera toggle + on-screen instructions.
The page script mirrors OrbitControls.handle_key(): pressing the toggle key
flips Plotly's scene.dragmode between "orbit" and disabled.
"""

import json
from dataclasses import dataclass, replace

ORBIT_DRAGMODE = "orbit"

INSTRUCTIONS_STYLE = {
    "position": "absolute",
    "bottom": "20px",
    "left": "20px",
    "color": "white",
    "font-size": "16px",
    "font-family": "Arial, sans-serif",
    "pointer-events": "none",
}


@dataclass(frozen=True)
class OrbitControls:
    enabled: bool = True
    toggle_key: str = "o"

    def handle_key(self, key: str) -> "OrbitControls":
        if key == self.toggle_key:
            return replace(self, enabled=not self.enabled)
        return self

    @property
    def dragmode(self):
        return ORBIT_DRAGMODE if self.enabled else False


def instructions_html(controls: OrbitControls) -> str:
    style = "; ".join(f"{k}: {v}" for k, v in INSTRUCTIONS_STYLE.items())
    return (
        f'<div id="instructions" style="{style}">'
        "<h3>Controls:</h3>"
        f"<p>{controls.toggle_key.upper()} - Toggle orbit camera</p>"
        "</div>"
    )


_KEY_SCRIPT = r"""
<script>
(function () {
  const cfg = __CONTROLS_JSON__;
  let isOrbitEnabled = cfg.enabled;
  const gd = document.getElementById(cfg.divId);
  const apply = () => Plotly.relayout(gd, {"scene.dragmode": isOrbitEnabled ? cfg.orbitMode : false});

  // keys only reach the iframe once it has focus
  gd.addEventListener("mouseenter", () => window.focus());

  document.addEventListener("keydown", (e) => {
    if (e.key === cfg.key) {
      isOrbitEnabled = !isOrbitEnabled;
      apply();
    }
  });
})();
</script>
"""


def keyboard_script(controls: OrbitControls, div_id: str) -> str:
    cfg = {
        "enabled": controls.enabled,
        "key": controls.toggle_key,
        "orbitMode": ORBIT_DRAGMODE,
        "divId": div_id,
    }
    return _KEY_SCRIPT.replace("__CONTROLS_JSON__", json.dumps(cfg))


def scene_page_html(figure_html: str, controls: OrbitControls, div_id: str, background: str = "black") -> str:
    """Figure + instructions overlay + keyboard wiring as one embeddable page."""
    return (
        f'<div style="position: relative; background: {background};">'
        f"{figure_html}"
        f"{instructions_html(controls)}"
        "</div>"
        f"{keyboard_script(controls, div_id)}"
    )
