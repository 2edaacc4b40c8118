import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name, "").strip()
    return int(raw, 0) if raw else None


# ── Geometry ──────────────────────────────────────────────────────────────────

FRAME_WIDTH: int = int(os.getenv("FRAME_WIDTH", "32"))
FRAME_HEIGHT: int = int(os.getenv("FRAME_HEIGHT", "32"))
TILE_SIZE: int = int(os.getenv("TILE_SIZE", "32"))
ITEM_SIZE: int = int(os.getenv("ITEM_SIZE", "16"))
EFFECT_SIZE: int = int(os.getenv("EFFECT_SIZE", "64"))
PARTICLE_SIZE: int = int(os.getenv("PARTICLE_SIZE", "8"))
FRAME_RATE: int = int(os.getenv("FRAME_RATE", "8"))

# ── Fallback ──────────────────────────────────────────────────────────────────

# Colors are RGB-packed ints (0xRRGGBB); env values accept "0x..." notation
DEFAULT_FALLBACK_COLOR: int = int(os.getenv("DEFAULT_FALLBACK_COLOR", "0xFFFF00"), 0)
EMERGENCY_COLOR: int = int(os.getenv("EMERGENCY_COLOR", "0xFF00FF"), 0)
EMERGENCY_SIZE: int = int(os.getenv("EMERGENCY_SIZE", "32"))

# Pin decorative noise for reproducible output; empty = fresh seed per asset
ASSET_SEED: Optional[int] = _optional_int("ASSET_SEED")

# ── Key grammar ───────────────────────────────────────────────────────────────

KEY_SEPARATOR: str = os.getenv("KEY_SEPARATOR", "_")
DEFAULT_DIRECTION: str = os.getenv("DEFAULT_DIRECTION", "down")
DEFAULT_ACTION: str = os.getenv("DEFAULT_ACTION", "idle")

# ── Outer surfaces ────────────────────────────────────────────────────────────

ASSET_OUTPUT_DIR: str = os.getenv("ASSET_OUTPUT_DIR", "resources/placeholders")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
