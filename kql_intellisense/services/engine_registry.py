"""Per-workspace engine registry for the HTTP service.

Each workspace gets its own SuggestionEngine (and so its own schema).
Engines are kept in least-recently-used order and the oldest is evicted
once ``max_engines`` is exceeded.
"""

from collections import OrderedDict
from collections.abc import Callable

import structlog

from kql_intellisense.core.metrics import engines_active
from kql_intellisense.services.suggestion_engine import SuggestionEngine

logger = structlog.stdlib.get_logger(__name__)


class EngineRegistry:
    def __init__(
        self,
        max_engines: int = 100,
        engine_factory: Callable[[], SuggestionEngine] = SuggestionEngine,
    ):
        if max_engines < 1:
            raise ValueError("max_engines must be at least 1")
        self._max_engines = max_engines
        self._engine_factory = engine_factory
        self._engines: OrderedDict[str, SuggestionEngine] = OrderedDict()

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, workspace_id: str) -> bool:
        return workspace_id in self._engines

    def get(self, workspace_id: str) -> SuggestionEngine:
        """Return the workspace's engine, creating it on first use."""
        engine = self._engines.get(workspace_id)
        if engine is not None:
            self._engines.move_to_end(workspace_id)
            return engine

        engine = self._engine_factory()
        self._engines[workspace_id] = engine
        while len(self._engines) > self._max_engines:
            evicted_id, evicted = self._engines.popitem(last=False)
            evicted.registry.clear()
            logger.info("engine_evicted", workspace_id=evicted_id)
        engines_active.set(len(self._engines))
        return engine

    def discard(self, workspace_id: str) -> bool:
        engine = self._engines.pop(workspace_id, None)
        if engine is None:
            return False
        engine.registry.clear()
        engines_active.set(len(self._engines))
        return True
