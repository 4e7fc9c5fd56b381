# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from concurrent.futures import Executor
from dataclasses import dataclass, field
from logging import getLogger
from time import perf_counter_ns
from typing import Iterator, List, Optional, Tuple

from .distance import euclidean_distance
from .protocols import DistanceFunction, Position
from .store import Point, PointStore

logger = getLogger("pynngrid.batch")


@dataclass(frozen=True)
class Pairing:
    """Pairing connects a :py:class:`Point` with its nearest neighbor,
    or ``None`` if the point has no neighbors."""

    point: Point
    nearest: Optional[Point]

    def segment(self) -> Optional[Tuple[Position, Position]]:
        if self.nearest is None:
            return None
        return self.point.position, self.nearest.position


@dataclass
class BatchResult:
    """BatchResult holds the outcome of a :py:meth:`BatchQueryRunner.run` call."""

    pairings: List[Pairing] = field(default_factory=list)

    elapsed_ns: int = 0
    """elapsed_ns is the time taken by the whole batch, in nanoseconds."""

    def segments(self) -> Iterator[Tuple[Position, Position]]:
        """Iterates over (point, nearest) position pairs, skipping points without neighbors."""
        for pairing in self.pairings:
            segment = pairing.segment()
            if segment is not None:
                yield segment

    def format_elapsed(self) -> str:
        return f"{self.elapsed_ns}ns"


class BatchQueryRunner:
    """BatchQueryRunner finds the nearest neighbor of every point in a :py:class:`PointStore`.

    The store must not be modified while :py:meth:`run` is in progress.

    If an ``executor`` is provided, the searches are distributed with
    `Executor.map <https://docs.python.org/3/library/concurrent.futures.html#concurrent.futures.Executor.map>`_.
    The grid is only read during a batch, so the searches don't interfere with each other;
    however, callers should not depend on the order of the returned pairings.
    """

    store: PointStore
    distance: DistanceFunction
    executor: Optional[Executor]

    def __init__(
        self,
        store: PointStore,
        distance: DistanceFunction = euclidean_distance,
        executor: Optional[Executor] = None,
    ) -> None:
        self.store = store
        self.distance = distance
        self.executor = executor

    def query(self, point: Point) -> Pairing:
        return Pairing(point, self.store.find_nearest(point, self.distance))

    def run(self) -> BatchResult:
        start = perf_counter_ns()

        points = list(self.store)
        if self.executor is None:
            pairings = [self.query(point) for point in points]
        else:
            pairings = list(self.executor.map(self.query, points))

        elapsed = perf_counter_ns() - start
        logger.debug("Found nearest neighbors of %d points in %d ns", len(pairings), elapsed)
        return BatchResult(pairings, elapsed)
