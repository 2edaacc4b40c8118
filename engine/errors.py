"""Error taxonomy for asset synthesis.

Malformed keys are never errors: they resolve to the generic category.
GenerationError values travel inside GenerationResult through the fallback
ladder; only HostUnavailable reaches callers, as a None key.
"""
from __future__ import annotations

from typing import Optional


class AssetError(Exception):
    """Base class for asset engine errors."""


class GenerationError(AssetError):
    def __init__(self, key: str, rung: str, cause: Optional[BaseException] = None):
        self.key = key
        self.rung = rung
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"generation of '{key}' failed at {rung}{detail}")


class CyclicKeyError(GenerationError):
    """A key was requested again while its own generation was running."""


class HostUnavailable(AssetError):
    """No Canvas/Texture Host is attached to the engine."""
