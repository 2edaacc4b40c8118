"""Abstract Canvas/Texture Host: the surface the rigs draw onto and the
texture table finished assets are registered with."""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Sequence

Point = tuple[float, float]


def _check_finite(*values: float) -> None:
    for v in values:
        if not math.isfinite(v):
            raise ValueError(f"non-finite geometry value: {v}")


class Surface(ABC):
    """A drawing target of fixed size.

    Public draw_* calls apply the current translation and layer tag, then
    delegate to the backend hooks. Layer tags ("face", "body", ...) carry no
    pixels; they let recording backends attribute each primitive to a part
    of the figure.
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"surface size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._origin: Point = (0.0, 0.0)
        self._layers: list[str] = []

    @property
    def current_layer(self) -> str:
        return self._layers[-1] if self._layers else ""

    @contextmanager
    def layer(self, name: str) -> Iterator["Surface"]:
        self._layers.append(name)
        try:
            yield self
        finally:
            self._layers.pop()

    @contextmanager
    def translated(self, dx: float, dy: float) -> Iterator["Surface"]:
        saved = self._origin
        self._origin = (saved[0] + dx, saved[1] + dy)
        try:
            yield self
        finally:
            self._origin = saved

    # ── Public primitives ─────────────────────────────────────────────────────

    def draw_rect(self, x: float, y: float, w: float, h: float,
                  color: int, alpha: float = 1.0) -> None:
        _check_finite(x, y, w, h)
        if w <= 0 or h <= 0 or alpha <= 0:
            return
        ox, oy = self._origin
        self._rect(x + ox, y + oy, w, h, color, alpha)

    def draw_ellipse(self, cx: float, cy: float, rx: float, ry: float,
                     color: int, alpha: float = 1.0) -> None:
        _check_finite(cx, cy, rx, ry)
        if rx <= 0 or ry <= 0 or alpha <= 0:
            return
        ox, oy = self._origin
        self._ellipse(cx + ox, cy + oy, rx, ry, color, alpha)

    def draw_polygon(self, points: Sequence[Point], color: int, alpha: float = 1.0) -> None:
        if len(points) < 3 or alpha <= 0:
            return
        ox, oy = self._origin
        moved = []
        for x, y in points:
            _check_finite(x, y)
            moved.append((x + ox, y + oy))
        self._polygon(moved, color, alpha)

    def draw_line(self, x1: float, y1: float, x2: float, y2: float,
                  color: int, alpha: float = 1.0, width: float = 1) -> None:
        _check_finite(x1, y1, x2, y2, width)
        if alpha <= 0 or width <= 0:
            return
        ox, oy = self._origin
        self._line(x1 + ox, y1 + oy, x2 + ox, y2 + oy, color, alpha, width)

    # ── Backend hooks ─────────────────────────────────────────────────────────

    @abstractmethod
    def _rect(self, x: float, y: float, w: float, h: float, color: int, alpha: float) -> None:
        """Fill an axis-aligned rectangle."""

    @abstractmethod
    def _ellipse(self, cx: float, cy: float, rx: float, ry: float, color: int, alpha: float) -> None:
        """Fill an ellipse given its center and radii."""

    @abstractmethod
    def _polygon(self, points: list[Point], color: int, alpha: float) -> None:
        """Fill a closed polygon."""

    @abstractmethod
    def _line(self, x1: float, y1: float, x2: float, y2: float,
              color: int, alpha: float, width: float) -> None:
        """Stroke a straight segment."""


class TextureHost(ABC):
    """Owns pixel buffers; the engine only refers to them by key."""

    @abstractmethod
    def create_surface(self, width: int, height: int) -> Surface:
        """Return a blank, fully transparent surface."""

    @abstractmethod
    def register_texture(self, key: str, surface: Surface, width: int, height: int) -> None:
        """Store the surface's pixels under `key`."""

    @abstractmethod
    def texture_exists(self, key: str) -> bool:
        """True when a texture is registered under `key`."""

    @abstractmethod
    def remove_texture(self, key: str) -> None:
        """Drop one texture; unknown keys are ignored."""

    @abstractmethod
    def texture_keys(self) -> list[str]:
        """All registered keys in registration order."""

    def clear(self) -> None:
        for key in self.texture_keys():
            self.remove_texture(key)
