from render.colors import brighten, darken, parse_color
from render.host import Surface, TextureHost
from render.pillow_host import PillowSurface, PillowTextureHost

__all__ = [
    "brighten", "darken", "parse_color",
    "Surface", "TextureHost",
    "PillowSurface", "PillowTextureHost",
]
