#!/usr/bin/env python3
"""Test doubles: a surface that records primitives with their layer, and a
texture host that keeps those surfaces by key."""

from __future__ import annotations

from render.host import Surface, TextureHost


class RecordingSurface(Surface):
    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.calls: list[tuple[str, str, tuple]] = []

    def _record(self, kind: str, *args) -> None:
        self.calls.append((kind, self.current_layer, args))

    def _rect(self, x, y, w, h, color, alpha):
        self._record("rect", x, y, w, h, color, alpha)

    def _ellipse(self, cx, cy, rx, ry, color, alpha):
        self._record("ellipse", cx, cy, rx, ry, color, alpha)

    def _polygon(self, points, color, alpha):
        self._record("polygon", tuple(points), color, alpha)

    def _line(self, x1, y1, x2, y2, color, alpha, width):
        self._record("line", x1, y1, x2, y2, color, alpha, width)

    def layers(self) -> set[str]:
        return {layer for _, layer, _ in self.calls}

    def calls_in(self, layer: str) -> list[tuple[str, str, tuple]]:
        return [call for call in self.calls if call[1] == layer]


class RecordingHost(TextureHost):
    def __init__(self):
        self.textures: dict[str, tuple[RecordingSurface, int, int]] = {}
        self.created = 0

    def create_surface(self, width: int, height: int) -> RecordingSurface:
        self.created += 1
        return RecordingSurface(width, height)

    def register_texture(self, key, surface, width, height):
        self.textures[key] = (surface, width, height)

    def texture_exists(self, key):
        return key in self.textures

    def remove_texture(self, key):
        self.textures.pop(key, None)

    def texture_keys(self):
        return list(self.textures)

    def size_of(self, key: str) -> tuple[int, int]:
        _, w, h = self.textures[key]
        return w, h


class CountingDrawer:
    """Wraps a drawer and counts how often it runs."""

    def __init__(self, inner=None):
        self.inner = inner
        self.calls = 0

    def __call__(self, surface, spec):
        self.calls += 1
        if self.inner is not None:
            self.inner(surface, spec)
        else:
            surface.draw_rect(0, 0, spec.width, spec.height, spec.color)


def failing_drawer(surface, spec):
    raise RuntimeError(f"broken rig for {spec.archetype.value}")
