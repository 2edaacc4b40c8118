"""Generation results and the fallback ladder walk."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

from engine.errors import GenerationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """Either a committed key (ok) or the error that stopped a rung."""
    key: Optional[str] = None
    error: Optional[GenerationError] = None
    rung: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None and self.key is not None

    @classmethod
    def success(cls, key: str, rung: str) -> "GenerationResult":
        return cls(key=key, rung=rung)

    @classmethod
    def failure(cls, error: GenerationError) -> "GenerationResult":
        return cls(error=error, rung=error.rung)


def attempt(key: str, rung: str, work: Callable[[], None]) -> GenerationResult:
    """Run one unit of drawing work and report it as a result.

    This is the only place drawer exceptions are caught.
    """
    try:
        work()
    except GenerationError as e:
        return GenerationResult.failure(e)
    except Exception as e:
        return GenerationResult.failure(GenerationError(key, rung, e))
    return GenerationResult.success(key, rung)


@dataclass(frozen=True)
class FallbackRung:
    name: str
    key: str
    generate: Callable[[], GenerationResult]


@dataclass
class FallbackLadder:
    """Ordered alternatives for one request, walked top to bottom."""
    category: str
    rungs: list[FallbackRung] = field(default_factory=list)

    def add(self, name: str, key: str, generate: Callable[[], GenerationResult]) -> "FallbackLadder":
        self.rungs.append(FallbackRung(name, key, generate))
        return self

    def walk(self) -> tuple[GenerationResult, list[GenerationResult]]:
        """Return the first successful result and the failures before it."""
        failures: list[GenerationResult] = []
        for rung in self.rungs:
            result = rung.generate()
            if result.ok:
                if failures:
                    logger.info(f"Fallback: '{self.category}' served by {rung.name} ({result.key})")
                return result, failures
            logger.warning(f"Fallback: {result.error}")
            failures.append(result)
        last = failures[-1].error if failures else None
        exhausted = GenerationError(self.category, "ladder", last)
        return GenerationResult.failure(exhausted), failures
