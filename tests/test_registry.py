#!/usr/bin/env python3

from __future__ import annotations

import unittest
from dataclasses import FrozenInstanceError

from engine.errors import CyclicKeyError, GenerationError
from engine.fallback import FallbackLadder, GenerationResult, attempt
from engine.registry import AssetRegistry


class RegistryTests(unittest.TestCase):
    def test_record_lifts_core_fields(self) -> None:
        registry = AssetRegistry()
        entry = registry.record("tile_grass", {"type": "tile", "width": 32, "height": 32, "color": 0x228B22})
        self.assertEqual((entry.kind, entry.width, entry.height), ("tile", 32, 32))
        self.assertEqual(entry.meta, {"color": 0x228B22})
        self.assertEqual(entry.to_dict()["type"], "tile")
        self.assertIn("tile_grass", registry)
        self.assertEqual(len(registry), 1)

    def test_first_write_wins(self) -> None:
        registry = AssetRegistry()
        registry.record("a", {"type": "rect", "width": 1, "height": 1})
        registry.record("a", {"type": "tile", "width": 9, "height": 9})
        self.assertEqual(registry.get("a").kind, "rect")

    def test_clear(self) -> None:
        registry = AssetRegistry()
        registry.record("a", {})
        with self.assertLogs("engine.registry", level="INFO"):
            registry.clear()
        self.assertFalse(registry.has("a"))
        self.assertEqual(registry.snapshot(), [])

    def test_entries_are_read_only(self) -> None:
        registry = AssetRegistry()
        meta = {"type": "tile", "width": 32, "height": 32, "color": 0x228B22}
        entry = registry.record("tile_grass", meta)
        meta["color"] = 0
        with self.assertRaises(FrozenInstanceError):
            entry.width = 64
        with self.assertRaises(TypeError):
            entry.meta["color"] = 0
        self.assertEqual(registry.get("tile_grass").meta["color"], 0x228B22)
        self.assertEqual(registry.keys(), ["tile_grass"])

    def test_missing_fields_default(self) -> None:
        entry = AssetRegistry().record("x", {})
        self.assertEqual((entry.kind, entry.width, entry.height), ("unknown", 0, 0))


class FallbackTests(unittest.TestCase):
    def test_attempt_converts_exceptions(self) -> None:
        def boom() -> None:
            raise KeyError("missing")

        result = attempt("k", "requested", boom)
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, GenerationError)
        self.assertIsInstance(result.error.cause, KeyError)
        self.assertEqual(result.rung, "requested")

    def test_attempt_keeps_generation_errors(self) -> None:
        def cyclic() -> None:
            raise CyclicKeyError("k", "requested")

        result = attempt("k", "requested", cyclic)
        self.assertIsInstance(result.error, CyclicKeyError)

    def test_attempt_success(self) -> None:
        result = attempt("k", "requested", lambda: None)
        self.assertTrue(result.ok)
        self.assertEqual(result.key, "k")

    def test_ladder_stops_at_first_success(self) -> None:
        calls = []

        def rung(name, ok):
            def run():
                calls.append(name)
                if ok:
                    return GenerationResult.success(name, name)
                return GenerationResult.failure(GenerationError(name, name))
            return run

        ladder = FallbackLadder("enemy")
        ladder.add("a", "a", rung("a", False)).add("b", "b", rung("b", True)).add("c", "c", rung("c", True))
        with self.assertLogs("engine.fallback", level="WARNING"):
            result, failures = ladder.walk()
        self.assertEqual(result.key, "b")
        self.assertEqual(len(failures), 1)
        self.assertEqual(calls, ["a", "b"])

    def test_exhausted_ladder_reports_failure(self) -> None:
        ladder = FallbackLadder("tile")
        ladder.add("only", "x", lambda: GenerationResult.failure(GenerationError("x", "only")))
        with self.assertLogs("engine.fallback", level="WARNING"):
            result, failures = ladder.walk()
        self.assertFalse(result.ok)
        self.assertEqual(result.rung, "ladder")
        self.assertEqual(len(failures), 1)


if __name__ == "__main__":
    unittest.main()
