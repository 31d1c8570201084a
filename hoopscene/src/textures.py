"""
Texture loading for the ball.
- Images are read with Pillow on a small thread pool
- load() never raises: failures go to the error callback and resolve to None
"""

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)


class ColorSpace(str, Enum):
    SRGB = "srgb"      # color data (base color maps)
    LINEAR = "linear"  # non-color data (normal, roughness)


class TextureLoadError(Exception):
    def __init__(self, path, cause: Exception):
        super().__init__(f"Could not load texture {path}: {cause}")
        self.path = Path(path)
        self.cause = cause


@dataclass
class Texture:
    path: Path
    pixels: np.ndarray                 # (H, W, 3) float in [0, 1]
    color_space: ColorSpace = ColorSpace.LINEAR

    @property
    def size(self):
        h, w = self.pixels.shape[:2]
        return w, h

    def sample(self, uv: np.ndarray) -> np.ndarray:
        """Nearest-texel lookup. uv: (N, 2) in [0, 1], v = 0 at the top row."""
        h, w = self.pixels.shape[:2]
        uv = np.clip(np.asarray(uv, dtype=float), 0.0, 1.0)
        cols = np.rint(uv[:, 0] * (w - 1)).astype(int)
        rows = np.rint(uv[:, 1] * (h - 1)).astype(int)
        return self.pixels[rows, cols]


def read_texture(path, color_space: ColorSpace = ColorSpace.LINEAR) -> Texture:
    path = Path(path)
    try:
        with Image.open(path) as img:
            pixels = np.asarray(img.convert("RGB"), dtype=float) / 255.0
    except (OSError, UnidentifiedImageError) as e:
        raise TextureLoadError(path, e) from e
    return Texture(path=path, pixels=pixels, color_space=ColorSpace(color_space))


def _log_loaded(texture: Texture):
    logger.info("Texture loaded: %s (%dx%d)", texture.path.name, *texture.size)

def _log_error(error: TextureLoadError):
    logger.error("Error loading texture: %s", error)


class TextureLoader:
    """
    Loads textures in the background.

    With cache=True successful reads are kept per (path, color space) and
    reused by later loads; failures are never kept, so a map that appears
    on disk later is picked up by the next load.

    >>> loader = TextureLoader()
    >>> fut = loader.load("ball.jpg", on_error=print)
    >>> fut.result()   # Texture, or None after on_error fired
    """

    def __init__(self, max_workers: int = 3, cache: bool = False):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="texture")
        self._cache: Optional[Dict[Tuple[Path, ColorSpace], Texture]] = {} if cache else None
        self._lock = threading.Lock()

    def load(
        self,
        path,
        on_load: Optional[Callable[[Texture], None]] = _log_loaded,
        on_error: Optional[Callable[[TextureLoadError], None]] = _log_error,
        color_space: ColorSpace = ColorSpace.LINEAR,
    ) -> "Future[Optional[Texture]]":
        return self._executor.submit(self._load, Path(path), on_load, on_error, ColorSpace(color_space))

    def _cached(self, key) -> Optional[Texture]:
        if self._cache is None:
            return None
        with self._lock:
            return self._cache.get(key)

    def _load(self, path, on_load, on_error, color_space) -> Optional[Texture]:
        key = (path, color_space)
        texture = self._cached(key)
        if texture is None:
            try:
                texture = read_texture(path, color_space)
            except TextureLoadError as e:
                if on_error:
                    on_error(e)
                return None
            if self._cache is not None:
                with self._lock:
                    self._cache[key] = texture
        if on_load:
            on_load(texture)
        return texture

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()
        return False
