"""FastAPI entry point: HTTP preview of placeholder assets for debug tooling.

Run with an ASGI server, e.g. `uvicorn main:app --reload`.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field

import config
from engine.asset_engine import DEFAULT_ACTIONS, DEFAULT_DIRECTIONS, AssetEngine
from engine.errors import HostUnavailable
from render.pillow_host import PillowTextureHost

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Placeholder Assets")
engine = AssetEngine(PillowTextureHost())


class AnimationSetRequest(BaseModel):
    base_key: str
    color: Optional[str] = Field(default=None, description="'#rrggbb' or '0xrrggbb'")
    actions: list[str] = Field(default_factory=lambda: list(DEFAULT_ACTIONS))
    directions: list[str] = Field(default_factory=lambda: list(DEFAULT_DIRECTIONS))
    frame_width: int = Field(default=config.FRAME_WIDTH, ge=1, le=512)
    frame_height: int = Field(default=config.FRAME_HEIGHT, ge=1, le=512)
    variant: Optional[str] = None


def _host() -> PillowTextureHost:
    try:
        return engine.host
    except HostUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@app.get("/")
async def index():
    return JSONResponse({"status": "ok", "textures": engine.snapshot()["textures"]})


# ── Settings API ──────────────────────────────────────────────────────────────

@app.get("/api/settings")
async def get_settings():
    return JSONResponse({
        "frame_width": config.FRAME_WIDTH,
        "frame_height": config.FRAME_HEIGHT,
        "tile_size": config.TILE_SIZE,
        "item_size": config.ITEM_SIZE,
        "effect_size": config.EFFECT_SIZE,
        "frame_rate": config.FRAME_RATE,
        "emergency_color": f"#{config.EMERGENCY_COLOR:06x}",
        "asset_seed": config.ASSET_SEED,
    })


# ── Assets API ────────────────────────────────────────────────────────────────

@app.get("/api/assets/{key}")
async def get_asset(key: str):
    host = _host()
    resolved = engine.get_texture(key)
    png = host.to_png(resolved) if resolved else None
    if png is None:
        raise HTTPException(status_code=503, detail="texture host unavailable")
    return Response(content=png, media_type="image/png", headers={"X-Asset-Key": resolved})


@app.get("/api/registry")
async def get_registry():
    _host()
    return JSONResponse({"entries": engine.registry.snapshot()})


@app.post("/api/animation-sets")
async def post_animation_set(req: AnimationSetRequest):
    _host()
    sets = engine.create_character_animation_set(
        req.base_key,
        color=req.color,
        actions=req.actions,
        directions=req.directions,
        options={
            "frame_width": req.frame_width,
            "frame_height": req.frame_height,
            "variant": req.variant,
        },
    )
    return JSONResponse({"ok": True, "sheets": sets})


@app.post("/api/reset")
async def post_reset():
    engine.reset()
    logger.info("Engine reset via API")
    return JSONResponse({"ok": True})

