"""Pillow-backed Canvas/Texture Host."""
from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import Iterable, Optional

from PIL import Image, ImageDraw

from render.colors import to_rgba
from render.host import Point, Surface, TextureHost

logger = logging.getLogger(__name__)


class PillowSurface(Surface):
    """RGBA image with alpha-blended drawing."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.image = Image.new("RGBA", (width, height), (0, 0, 0, 0))
        self._draw = ImageDraw.Draw(self.image, "RGBA")

    def _rect(self, x, y, w, h, color, alpha):
        x0, y0 = round(x), round(y)
        x1 = max(x0, round(x + w) - 1)
        y1 = max(y0, round(y + h) - 1)
        self._draw.rectangle([x0, y0, x1, y1], fill=to_rgba(color, alpha))

    def _ellipse(self, cx, cy, rx, ry, color, alpha):
        box = [cx - rx, cy - ry, max(cx - rx, cx + rx - 1), max(cy - ry, cy + ry - 1)]
        self._draw.ellipse(box, fill=to_rgba(color, alpha))

    def _polygon(self, points: list[Point], color, alpha):
        self._draw.polygon(points, fill=to_rgba(color, alpha))

    def _line(self, x1, y1, x2, y2, color, alpha, width):
        self._draw.line([(x1, y1), (x2, y2)], fill=to_rgba(color, alpha),
                        width=max(1, int(round(width))))


class PillowTextureHost(TextureHost):
    """Keeps finished textures as Pillow images keyed by asset key."""

    def __init__(self):
        self._textures: dict[str, Image.Image] = {}

    def create_surface(self, width: int, height: int) -> PillowSurface:
        return PillowSurface(width, height)

    def register_texture(self, key: str, surface: Surface, width: int, height: int) -> None:
        if not isinstance(surface, PillowSurface):
            raise TypeError(f"PillowTextureHost cannot store {type(surface).__name__}")
        image = surface.image
        if image.size != (width, height):
            image = image.crop((0, 0, width, height))
        self._textures[key] = image.copy()

    def texture_exists(self, key: str) -> bool:
        return key in self._textures

    def remove_texture(self, key: str) -> None:
        self._textures.pop(key, None)

    def texture_keys(self) -> list[str]:
        return list(self._textures)

    def clear(self) -> None:
        self._textures.clear()

    # ── Export ────────────────────────────────────────────────────────────────

    def get_image(self, key: str) -> Optional[Image.Image]:
        return self._textures.get(key)

    def to_png(self, key: str) -> Optional[bytes]:
        image = self._textures.get(key)
        if image is None:
            return None
        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return buf.getvalue()

    def save_all(self, directory: Path, keys: Optional[Iterable[str]] = None) -> int:
        """Write textures as <key>.png, all of them unless `keys` narrows it.

        Keys without a texture are skipped. Returns the file count.
        """
        directory.mkdir(parents=True, exist_ok=True)
        count = 0
        for key in self.texture_keys() if keys is None else keys:
            image = self._textures.get(key)
            if image is None:
                continue
            image.save(str(directory / png_filename(key)))
            count += 1
        logger.info(f"Saved {count} textures to {directory}")
        return count


_UNSAFE = re.compile(r"[^A-Za-z0-9_.-]")


def png_filename(key: str) -> str:
    """Keys are free-form; file names keep only [A-Za-z0-9_.-]."""
    return f"{_UNSAFE.sub('-', key) or 'unnamed'}.png"
