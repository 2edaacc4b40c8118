"""Placeholder Asset Pack Generator.

Run once to render every default placeholder (tiles, walls, characters,
animation sheets, items, UI, effects) into PNG files, grouped by category.
Uses the asset engine with the Pillow texture host.

Usage:
    python tools/generate_assets.py [output_dir]
"""

import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

import config  # noqa: E402
from engine.asset_engine import AssetEngine  # noqa: E402
from engine.palette import ENEMY_COLORS, NPC_COLORS, PLAYER_COLORS  # noqa: E402
from render.pillow_host import PillowTextureHost  # noqa: E402

ALL_ACTIONS = ("idle", "walk", "attack", "hurt", "death", "cast")


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def generate_pack(engine: AssetEngine) -> list[str]:
    return engine.initialize()


def generate_animation_sheets(engine: AssetEngine) -> int:
    count = 0
    for name in PLAYER_COLORS:
        sets = engine.create_character_animation_set(f"player_{name}", actions=ALL_ACTIONS)
        count += sum(len(d) for d in sets.values())
    for name in ENEMY_COLORS:
        sets = engine.create_character_animation_set(f"enemy_{name}", actions=("idle", "walk", "attack", "death"))
        count += sum(len(d) for d in sets.values())
    for name in NPC_COLORS:
        sets = engine.create_character_animation_set(f"npc_{name}")
        count += sum(len(d) for d in sets.values())
    return count


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def save_by_category(engine: AssetEngine, host: PillowTextureHost, out_dir: Path) -> dict[str, int]:
    """Write <out_dir>/<category>/<key>.png; returns files per category."""
    groups: dict[str, list[str]] = {}
    for key in engine.registry.keys():
        category = key.split(config.KEY_SEPARATOR, 1)[0] or "generic"
        groups.setdefault(category, []).append(key)
    return {category: host.save_all(out_dir / category, keys) for category, keys in groups.items()}


# ===================================================================
# MAIN
# ===================================================================

def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    out_dir = Path(argv[0]) if argv else ROOT / config.ASSET_OUTPUT_DIR
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    host = PillowTextureHost()
    engine = AssetEngine(host, seed=config.ASSET_SEED if config.ASSET_SEED is not None else 42)

    print("=" * 50)
    print("Placeholder Asset Pack Generator")
    print("=" * 50)
    print(f"Output directory: {out_dir}\n")

    print("Generating default pack...")
    keys = generate_pack(engine)
    print(f"  {len(keys)} textures")

    print("Generating animation sheets...")
    sheets = generate_animation_sheets(engine)
    print(f"  {sheets} sheets")

    counts = save_by_category(engine, host, out_dir)
    print(f"\nDone! Generated {sum(counts.values())} PNG files in {out_dir}")
    for label, count in sorted(counts.items()):
        print(f"  {label:12s}: {count} files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
