"""Asset synthesis engine: key resolution, generation, fallback and registry.

Import AssetEngine from engine.asset_engine; this package stays import-light
so the rigs can depend on engine.types without a cycle.
"""
