# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import random
from dataclasses import dataclass
from enum import Enum
from itertools import count
from logging import getLogger
from math import isfinite
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .distance import euclidean_distance
from .grid import Grid
from .protocols import DistanceFunction, Position
from .search import find_nearest_neighbor

logger = getLogger("pynngrid.store")

MetadataFactory = Callable[[random.Random], Any]
"""MetadataFactory generates the metadata of a spawned :py:class:`Point`,
for example a random color. Receives the random number generator used for spawning."""


@dataclass(frozen=True)
class Point:
    """Point is a single immutable point held by a :py:class:`PointStore`.

    ``metadata`` is an arbitrary payload (e.g. a color) carried alongside the point,
    never inspected by the search.
    """

    id: int
    position: Position
    metadata: Any = None


class StoreState(Enum):
    """StoreState describes whether a :py:class:`PointStore` holds any points."""

    EMPTY = 0
    POPULATED = 1


class PointStore:
    """PointStore holds the authoritative :py:class:`Point` records
    and mirrors their placement in a :py:class:`Grid`.

    Points are created all at once (by :py:meth:`replace` or :py:meth:`reset_and_spawn`)
    and replaced all at once. There is no way to add or remove a single point.

    Point ids come from a counter owned by the store, and are never reused -
    not even after the store is repopulated.
    """

    grid: Grid[Point]

    _points: Dict[int, Point]
    _ids: Iterator[int]

    def __init__(self, grid: Grid[Point]) -> None:
        self.grid = grid
        self._points = {}
        self._ids = count(1)

    @property
    def state(self) -> StoreState:
        return StoreState.POPULATED if self._points else StoreState.EMPTY

    def replace(self, items: Iterable[Tuple[Position, Any]]) -> List[Point]:
        """Replaces all points in the store (and the grid) by new points
        with the provided positions and metadata. Returns the new points.

        The new points are validated before the current ones are removed;
        if any of the positions is invalid, ValueError is raised and the store
        (and the grid) is left untouched.
        """
        points = [self._make_point(position, metadata) for position, metadata in items]
        for point in points:
            self.grid.cell_for(point.position)

        self.grid.clear()
        self._points.clear()
        for point in points:
            self.grid.insert(point.id, point)
            self._points[point.id] = point

        logger.info("Store populated with %d points", len(points))
        return points

    def reset_and_spawn(
        self,
        count: int,
        rng: random.Random,
        metadata: Optional[MetadataFactory] = None,
    ) -> List[Point]:
        """Replaces all points in the store by ``count`` new points, placed uniformly
        at random in the world rectangle of the grid. Returns the new points.

        ``metadata``, if provided, is called once per point to generate its metadata.
        """
        if count < 0:
            raise ValueError(f"count must not be negative, got {count}")

        width = self.grid.config.world_width
        height = self.grid.config.world_height
        return self.replace(
            (
                (rng.random() * width, rng.random() * height),
                metadata(rng) if metadata else None,
            )
            for _ in range(count)
        )

    def find_nearest(
        self,
        point: Union[Point, int],
        distance: DistanceFunction = euclidean_distance,
    ) -> Optional[Point]:
        """Finds the point closest to the provided one (given either directly or by id),
        or ``None`` if there are no other points in the store.

        Raises KeyError if the point is given by an unknown id.
        """
        if not isinstance(point, Point):
            point = self._points[point]

        found = find_nearest_neighbor(self.grid, point.position, point.id, distance)
        return found[1] if found else None

    def get(self, id: int) -> Point:
        """Returns the point with the provided id. Raises KeyError if it doesn't exist."""
        return self._points[id]

    def _make_point(self, position: Position, metadata: Any) -> Point:
        x, y = position
        if not isfinite(x) or not isfinite(y):
            raise ValueError(f"point position must be finite, got {position}")
        return Point(next(self._ids), (float(x), float(y)), metadata)

    def __len__(self) -> int:
        return len(self._points)

    def __contains__(self, id: object) -> bool:
        return id in self._points

    def __iter__(self) -> Iterator[Point]:
        return iter(sorted(self._points.values(), key=lambda pt: pt.id))
