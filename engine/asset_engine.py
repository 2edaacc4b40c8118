"""AssetEngine: cache lookup, generation, fallback ladder and registry.

Usage:
    engine = AssetEngine(PillowTextureHost())
    key = engine.get_or_create("enemy_skeleton_walk_left_sheet")

Every public call returns a key that exists in the host, or None when no
host is attached.
"""
from __future__ import annotations

import itertools
import logging
import random
import time
import zlib
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Union

import config
from anim.overlays import draw_action_overlay
from anim.poses import synthesize_frame, synthesize_sheet
from engine import palette
from engine.errors import CyclicKeyError, GenerationError, HostUnavailable
from engine.fallback import FallbackLadder, GenerationResult, attempt
from engine.registry import AssetRegistry
from engine.resolver import infer_placeholder, parse_key, resolve
from engine.types import CREATURE_ARCHETYPES, Archetype, AssetKey, DrawSpec
from render.colors import darken
from render.host import Surface, TextureHost
from rigs import Drawer, default_drawers

logger = logging.getLogger(__name__)

DEFAULT_ACTIONS = ("idle", "walk")
DEFAULT_DIRECTIONS = ("down", "left", "right", "up")


class AssetEngine:
    def __init__(
        self,
        host: Optional[TextureHost] = None,
        *,
        drawers: Optional[Mapping[Archetype, Drawer]] = None,
        seed: Optional[int] = config.ASSET_SEED,
    ):
        self._host = host
        self._drawers: dict[Archetype, Drawer] = dict(drawers if drawers is not None else default_drawers())
        self._seed = seed
        self._rng = random.Random()
        self._in_progress: set[str] = set()
        self._emergency_ids = itertools.count(1)
        self.registry = AssetRegistry()

    # ── Host lifecycle ────────────────────────────────────────────────────────

    @property
    def host(self) -> TextureHost:
        if self._host is None:
            raise HostUnavailable("no texture host attached")
        return self._host

    @property
    def host_available(self) -> bool:
        return isinstance(self._host, TextureHost)

    def attach_host(self, host: TextureHost) -> None:
        if self._host is not None and self._host is not host:
            self.registry.clear()
        self._host = host

    def detach_host(self) -> None:
        """Scene teardown: forget the host and every entry that pointed into it."""
        self._host = None
        self.registry.clear()
        self._in_progress.clear()

    def reset(self) -> None:
        self.registry.clear()
        self._in_progress.clear()
        if self.host_available:
            self._host.clear()

    def _unavailable(self, what: str) -> None:
        logger.error(f"AssetEngine: {what} requested with no texture host attached")
        return None

    # ── Core request ──────────────────────────────────────────────────────────

    def get_or_create(self, key: Union[str, AssetKey, None], params: Optional[Mapping[str, Any]] = None) -> Optional[str]:
        """Return a key that exists in the host; None only without a host."""
        if not self.host_available:
            return self._unavailable(f"'{key}'")
        if isinstance(key, AssetKey):
            asset_key, text = key, key.to_string()
        else:
            text = key if isinstance(key, str) else ("" if key is None else str(key))
            asset_key = parse_key(text)
        if not text:
            return self.get_fallback_texture("tile")

        if self._host.texture_exists(text):
            logger.debug(f"Cache hit: {text}")
            return text
        if text in self._in_progress:
            logger.error(f"Cyclic request for '{text}' during its own generation")
            return self._emergency(asset_key.category).key

        ladder = FallbackLadder(asset_key.category)
        ladder.add("requested", text, lambda: self._generate(text, asset_key, params, "requested"))
        default_key = palette.FALLBACK_KEYS.get(asset_key.category, palette.DEFAULT_FALLBACK_KEY)
        if default_key != text:
            ladder.add("category_default", default_key, lambda: self._category_default(default_key))
        ladder.add("emergency", "", lambda: self._emergency(asset_key.category))

        result, _ = ladder.walk()
        return result.key

    def _seed_for(self, key: str) -> int:
        if self._seed is None:
            return self._rng.randrange(2 ** 31)
        return zlib.crc32(f"{self._seed}:{key}".encode())

    def _generate(self, text: str, asset_key: AssetKey, params: Optional[Mapping[str, Any]],
                  rung: str) -> GenerationResult:
        if text in self._in_progress:
            return GenerationResult.failure(CyclicKeyError(text, rung))
        self._in_progress.add(text)
        try:
            return attempt(text, rung, lambda: self._build(text, asset_key, params))
        finally:
            self._in_progress.discard(text)

    def _category_default(self, default_key: str) -> GenerationResult:
        if self._host.texture_exists(default_key):
            return GenerationResult.success(default_key, "category_default")
        return self._generate(default_key, parse_key(default_key), None, "category_default")

    def _build(self, text: str, asset_key: AssetKey, params: Optional[Mapping[str, Any]]) -> None:
        spec = resolve(asset_key, params, seed=self._seed_for(text))
        drawer = self._drawers.get(spec.archetype)
        if drawer is None:
            raise GenerationError(text, "requested", LookupError(f"no drawer for {spec.archetype.value}"))
        surface = self._render_sheet(spec, drawer) if spec.sheet else self._render_single(spec, drawer)
        self._commit(text, spec, surface, params)

    # ── Rendering ─────────────────────────────────────────────────────────────

    def _render_single(self, spec: DrawSpec, drawer: Drawer) -> Surface:
        surface = self._host.create_surface(spec.width, spec.height)
        if spec.archetype in CREATURE_ARCHETYPES:
            spec = replace(spec, pose=synthesize_frame(spec, spec.frame_index))
        drawer(surface, spec)
        draw_action_overlay(surface, spec)
        return surface

    def _render_sheet(self, spec: DrawSpec, drawer: Drawer) -> Surface:
        poses = synthesize_sheet(spec, spec.frame_count)
        surface = self._host.create_surface(spec.width * len(poses), spec.height)
        for i, pose in enumerate(poses):
            frame = replace(spec, frame_index=i, pose=pose, seed=spec.seed + i)
            with surface.translated(i * spec.width, 0):
                drawer(surface, frame)
                draw_action_overlay(surface, frame)
        return surface

    def _commit(self, key: str, spec: DrawSpec, surface: Surface,
                params: Optional[Mapping[str, Any]]) -> None:
        self._host.register_texture(key, surface, surface.width, surface.height)
        if spec.sheet:
            meta = {
                "type": "character_sheet",
                "action": spec.action,
                "direction": spec.direction,
                "frame_count": spec.frame_count,
                "frame_width": spec.width,
                "frame_height": spec.height,
                "frame_rate": (params or {}).get("frame_rate", config.FRAME_RATE),
            }
        else:
            meta = {"type": spec.archetype.value, "direction": spec.direction}
        meta.update({
            "width": surface.width,
            "height": surface.height,
            "category": spec.category,
            "subtype": spec.subtype,
            "variant": spec.variant,
            "color": spec.color,
        })
        self.registry.record(key, meta)
        logger.debug(f"Generated {key} ({surface.width}x{surface.height}, {spec.archetype.value})")

    # ── Terminal rungs ────────────────────────────────────────────────────────

    def _emergency_key(self, category: str) -> str:
        base = f"emergency_{category}_{int(time.time() * 1000)}"
        key = base
        while self._host.texture_exists(key):
            key = f"{base}_{next(self._emergency_ids)}"
        return key

    def _emergency(self, category: str) -> GenerationResult:
        """Flat magenta square: one fill, one registration, no drawers."""
        key = self._emergency_key(category)
        size = config.EMERGENCY_SIZE
        result = attempt(key, "emergency", lambda: self._commit_flat(
            key, size, size, config.EMERGENCY_COLOR, kind="emergency", border=False))
        if result.ok:
            logger.error(f"Emergency asset {key} served for category '{category}'")
        return result

    def _commit_flat(self, key: str, width: int, height: int, color: int,
                     kind: str = "rect", border: bool = True) -> None:
        surface = self._host.create_surface(width, height)
        surface.draw_rect(0, 0, width, height, color)
        if border:
            edge = darken(color, 30)
            surface.draw_rect(0, 0, width, 1, edge)
            surface.draw_rect(0, height - 1, width, 1, edge)
            surface.draw_rect(0, 0, 1, height, edge)
            surface.draw_rect(width - 1, 0, 1, height, edge)
        self._host.register_texture(key, surface, width, height)
        self.registry.record(key, {"type": kind, "width": width, "height": height, "color": color, "alpha": 1.0})

    # ── Public synthesis API ──────────────────────────────────────────────────

    def get_texture(
        self,
        key: Optional[str],
        fallback_width: int = 32,
        fallback_height: int = 32,
        fallback_color: int = config.DEFAULT_FALLBACK_COLOR,
    ) -> Optional[str]:
        if not self.host_available:
            return self._unavailable(f"texture '{key}'")
        if not key:
            return self.get_fallback_texture("tile")
        return self.get_or_create(key, {
            "fallback_width": fallback_width,
            "fallback_height": fallback_height,
            "fallback_color": fallback_color,
        })

    def get_fallback_texture(self, category: str) -> Optional[str]:
        if not self.host_available:
            return self._unavailable(f"fallback for '{category}'")
        return self.get_or_create(palette.FALLBACK_KEYS.get(category, palette.DEFAULT_FALLBACK_KEY))

    def create_character_animation_set(
        self,
        base_key: str,
        color: Optional[int] = None,
        actions: Iterable[str] = DEFAULT_ACTIONS,
        directions: Iterable[str] = DEFAULT_DIRECTIONS,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[dict[str, dict[str, Optional[str]]]]:
        """Generate one sheet per (action, direction); returns {action: {direction: key}}."""
        if not self.host_available:
            return self._unavailable(f"animation set '{base_key}'")
        opts = dict(options or {})
        params = {
            "color": color,
            "width": opts.get("frame_width", config.FRAME_WIDTH),
            "height": opts.get("frame_height", config.FRAME_HEIGHT),
            "frame_rate": opts.get("frame_rate", config.FRAME_RATE),
            "variant": opts.get("variant"),
            "features": opts.get("features"),
            "archetype": opts.get("archetype"),
        }
        directions = tuple(directions)
        sets: dict[str, dict[str, Optional[str]]] = {}
        for action in actions:
            sets[action] = {}
            for direction in directions:
                sheet_key = config.KEY_SEPARATOR.join([base_key, action, direction, "sheet"])
                # pin action and direction in case base_key does not parse cleanly
                sets[action][direction] = self.get_or_create(
                    sheet_key, {**params, "action": action, "direction": direction})
        logger.info(f"Animation set '{base_key}': {len(sets)} actions x {len(directions)} directions")
        return sets

    def create_enhanced_character(
        self,
        key: str,
        color: Optional[int] = None,
        character_type: str = "humanoid",
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Single-frame figure with an explicit archetype, variant and features."""
        opts = dict(options or {})
        return self.get_or_create(key, {
            "archetype": character_type,
            "color": color,
            "width": opts.get("width"),
            "height": opts.get("height"),
            "variant": opts.get("variant"),
            "direction": opts.get("direction"),
            "details": opts.get("details", True),
            "alpha": opts.get("alpha", 1.0),
            "features": opts.get("custom_features"),
        })

    def placeholder_for_file(self, filename: str) -> Optional[str]:
        """Stand-in for an image file that could not be loaded."""
        key = infer_placeholder(filename)
        if key is not None:
            return self.get_or_create(key)
        stem = filename.rsplit("/", 1)[-1].rsplit(".", 1)[0]
        return self.get_texture(stem)

    # ── Bulk generation ───────────────────────────────────────────────────────

    def ensure_required_placeholders(self) -> list[str]:
        """Tiles, the chest and every wall type; failures become flat rects."""
        if not self.host_available:
            self._unavailable("required placeholders")
            return []
        created = []
        for key in palette.REQUIRED_KEYS:
            if self._host.texture_exists(key):
                continue
            result = self._generate(key, parse_key(key), None, "required")
            if not result.ok:
                logger.warning(f"Required placeholder {key} degraded to flat rect: {result.error}")
                spec = resolve(key)
                flat = attempt(key, "required_flat", lambda: self._commit_flat(key, spec.width, spec.height, spec.color))
                if not flat.ok:
                    logger.error(f"Required placeholder {key} unavailable: {flat.error}")
                    continue
            created.append(key)
        return created

    def initialize(self) -> list[str]:
        """Required placeholders plus the full default pack."""
        keys = self.ensure_required_placeholders()
        for key in palette.DEFAULT_PACK:
            resolved = self.get_or_create(key)
            if resolved is not None and resolved not in keys:
                keys.append(resolved)
        logger.info(f"Placeholder pack ready: {len(keys)} textures")
        return keys

    # ── Introspection ─────────────────────────────────────────────────────────

    def snapshot(self) -> dict:
        return {
            "host_attached": self.host_available,
            "textures": len(self._host.texture_keys()) if self.host_available else 0,
            "registry": self.registry.snapshot(),
        }
