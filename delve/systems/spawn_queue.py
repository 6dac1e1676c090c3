"""
Spawn command buffer.

Systems never add or remove entities while another system is iterating over
them. They queue requests here instead; the world applies the whole queue
once the tick's iteration is finished.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class SpawnRequest:
    """Ask for a new entity of `kind` at a world position."""
    kind: str
    position: Tuple[float, float]
    velocity: Tuple[float, float] = (0.0, 0.0)


class SpawnQueue:
    """Collects spawn and despawn requests until `apply` is called."""

    def __init__(self):
        self._spawns: List[SpawnRequest] = []
        self._despawns: list = []

    def __len__(self) -> int:
        return len(self._spawns) + len(self._despawns)

    def request(self, request: SpawnRequest) -> None:
        self._spawns.append(request)

    def extend(self, requests) -> None:
        self._spawns.extend(requests)

    def despawn(self, entity) -> None:
        """Queue an existing entity for removal. Duplicates are ignored."""
        if not any(queued is entity for queued in self._despawns):
            self._despawns.append(entity)

    @property
    def pending_spawns(self) -> List[SpawnRequest]:
        return list(self._spawns)

    def clear(self) -> None:
        self._spawns.clear()
        self._despawns.clear()

    def apply(self, entities: List[E], factory: Callable[[SpawnRequest], E]) -> List[E]:
        """
        Remove queued despawns from `entities`, then build and append queued
        spawns with `factory`. The queue is empty afterwards.

        Returns:
            The newly created entities, in request order.
        """
        if self._despawns:
            doomed = {id(entity) for entity in self._despawns}
            entities[:] = [entity for entity in entities if id(entity) not in doomed]

        created = [factory(request) for request in self._spawns]
        entities.extend(created)

        if created or self._despawns:
            logger.debug("Applied spawn queue: +%d -%d", len(created), len(self._despawns))
        self.clear()
        return created
