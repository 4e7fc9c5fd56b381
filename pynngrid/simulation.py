# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import random
import threading
from logging import getLogger
from typing import Iterator, List, Optional, Tuple

from .batch import BatchQueryRunner, BatchResult, Pairing
from .config import SimulationConfig
from .grid import Grid
from .protocols import Cell, Position
from .store import MetadataFactory, Point, PointStore

logger = getLogger("pynngrid.simulation")


class Simulation:
    """Simulation ties a :py:class:`Grid`, a :py:class:`PointStore` and
    a :py:class:`BatchQueryRunner` together, keeping the state required by an
    interactive front-end: the points, the found pairings (drawn as lines)
    and the duration of the last batch.

    The front-end is expected to call :py:meth:`run_queries`, :py:meth:`clear_pairings`
    and :py:meth:`reset` in response to user input, and to draw the state returned by
    :py:meth:`points`, :py:meth:`segments` and :py:meth:`cell_bounds`.

    Resets and query batches are serialized, so that a batch never observes
    a partially-respawned store.
    """

    config: SimulationConfig
    grid: Grid[Point]
    store: PointStore
    rng: random.Random
    metadata: Optional[MetadataFactory]

    pairings: List[Pairing]
    """pairings accumulated by all :py:meth:`run_queries` calls since the last reset or clear."""

    last_result: Optional[BatchResult]

    _lock: threading.Lock

    def __init__(
        self,
        config: SimulationConfig,
        metadata: Optional[MetadataFactory] = None,
    ) -> None:
        self.config = config
        self.grid = Grid[Point](config.grid)
        self.store = PointStore(self.grid)
        self.rng = random.Random(config.seed)
        self.metadata = metadata
        self.pairings = []
        self.last_result = None
        self._lock = threading.Lock()
        self.store.reset_and_spawn(config.point_count, self.rng, metadata)

    def run_queries(self) -> BatchResult:
        """Finds the nearest neighbor of every point, and remembers the result."""
        with self._lock:
            result = BatchQueryRunner(self.store).run()
            self.pairings.extend(result.pairings)
            self.last_result = result
            return result

    def clear_pairings(self) -> None:
        """Forgets all found pairings, keeping the points intact."""
        with self._lock:
            logger.info("Clearing %d pairings", len(self.pairings))
            self.pairings.clear()

    def reset(self) -> None:
        """Replaces all points by a freshly spawned set, forgetting all found pairings."""
        with self._lock:
            logger.info("Respawning %d points", self.config.point_count)
            self.store.reset_and_spawn(self.config.point_count, self.rng, self.metadata)
            self.pairings.clear()

    def points(self) -> Iterator[Point]:
        return iter(self.store)

    def segments(self) -> Iterator[Tuple[Position, Position]]:
        for pairing in self.pairings:
            segment = pairing.segment()
            if segment is not None:
                yield segment

    def cells(self) -> Iterator[Cell]:
        return self.grid.cells()

    def cell_bounds(self) -> Iterator[Tuple[float, float, float, float]]:
        """Iterates over the rectangles (left, top, width, height) of all grid cells."""
        for column, row in self.grid.cells():
            yield self.grid.cell_bounds(column, row)

    def elapsed_text(self) -> Optional[str]:
        """Returns the duration of the last batch formatted for display,
        or ``None`` if no batch was run yet."""
        return self.last_result.format_elapsed() if self.last_result else None
