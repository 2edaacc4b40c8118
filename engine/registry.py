"""In-memory registry of generated assets."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegistryEntry:
    """Read-only once recorded; `meta` is a mapping proxy."""

    key: str
    kind: str
    width: int
    height: int
    meta: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "type": self.kind,
            "width": self.width,
            "height": self.height,
            **self.meta,
        }


class AssetRegistry:
    """Metadata for every asset generated in one rendering context.

    Pixel buffers stay with the texture host; entries only describe them.
    Entries are written once and dropped only by clear().
    """

    def __init__(self):
        self._entries: dict[str, RegistryEntry] = {}

    def has(self, key: str) -> bool:
        return key in self._entries

    __contains__ = has

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, key: str, meta: dict[str, Any]) -> RegistryEntry:
        """Store metadata for `key`. `type`, `width` and `height` are lifted
        out of `meta`; the rest is kept as auxiliary metadata."""
        existing = self._entries.get(key)
        if existing is not None:
            logger.debug(f"Registry: '{key}' already recorded, keeping first entry")
            return existing
        aux = dict(meta)
        entry = RegistryEntry(
            key=key,
            kind=str(aux.pop("type", "unknown")),
            width=int(aux.pop("width", 0)),
            height=int(aux.pop("height", 0)),
            meta=MappingProxyType(aux),
        )
        self._entries[key] = entry
        return entry

    def get(self, key: str) -> Optional[RegistryEntry]:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Registry cleared ({count} entries)")

    def snapshot(self) -> list[dict]:
        return [entry.to_dict() for entry in self._entries.values()]
