# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterable, Optional, Tuple

from .distance import euclidean_distance
from .grid import Grid, Window
from .protocols import DistanceFunction, Position, WithPositionT


def find_nearest_neighbor(
    grid: Grid[WithPositionT],
    position: Position,
    exclude: Optional[int] = None,
    distance: DistanceFunction = euclidean_distance,
) -> Optional[Tuple[int, WithPositionT]]:
    """Finds the object in ``grid`` closest to ``position``, skipping the object
    with id ``exclude`` (usually the object whose neighbor is being searched for).

    Returns an (id, object) pair, or ``None`` if the grid holds no other objects.
    Equidistant objects are resolved in favor of the lowest id.

    The search inspects cells in square layers growing around the cell of ``position``,
    until a layer yields any candidate. As the distance to cells of a square layer
    is not uniform, the closest candidate only bounds the search radius - all cells
    within that radius which haven't been inspected are scanned afterwards.

    Expansion deliberately stops at the first layer with any candidate, instead of
    waiting for a layer which adds nothing. Waiting would scan the whole grid
    for evenly spread points, and the rescan already guarantees the closest object
    is found.

    ``distance`` must never be smaller than the Chebyshev distance between two positions,
    which holds for :py:func:`euclidean_distance` and :py:func:`taxicab_distance`.
    """
    return _RingSearch(grid, position, exclude, distance).run()


def brute_force_nearest_neighbor(
    objects: Iterable[Tuple[int, WithPositionT]],
    position: Position,
    exclude: Optional[int] = None,
    distance: DistanceFunction = euclidean_distance,
) -> Optional[Tuple[int, WithPositionT]]:
    """Finds the object closest to ``position`` by checking every provided (id, object) pair.
    Follows the same rules as :py:func:`find_nearest_neighbor`, but takes time
    proportional to the number of objects.
    """
    return min(
        ((id, obj) for id, obj in objects if id != exclude),
        key=lambda item: (distance(position, item[1].position), item[0]),
        default=None,
    )


@dataclass
class _RingSearch(Generic[WithPositionT]):
    """_RingSearch holds the state of a single :py:func:`find_nearest_neighbor` call.

    Usage::
        _RingSearch(grid, position, exclude, distance).run()
    """

    grid: Grid[WithPositionT]
    position: Position
    exclude: Optional[int]
    distance: DistanceFunction

    candidates: Dict[int, WithPositionT] = field(default_factory=dict)

    def run(self) -> Optional[Tuple[int, WithPositionT]]:
        scanned = self.expand_rings()
        if not self.candidates:
            return None

        _, provisional = self.closest()
        radius = self.distance(self.position, provisional.position)
        self.verify(scanned, radius)
        return self.closest()

    def expand_rings(self) -> Window:
        """Scans layers of cells around the starting cell, until a layer leaves
        a non-empty candidate set, or there are no more cells to scan.
        Returns the window of all scanned cells.
        """
        center = self.grid.cell_for(self.position)
        previous: Optional[Window] = None
        layer = 0

        while True:
            current = self.grid.window(center, layer)
            self.scan_window(current, skip=previous)

            if self.candidates or self.grid.covers_everything(current):
                return current

            previous = current
            layer += 1

    def verify(self, scanned: Window, radius: float) -> None:
        """Scans all unscanned cells which may contain objects within ``radius``."""
        self.scan_window(self.grid.window_around(self.position, radius), skip=scanned)

    def scan_window(self, window: Window, skip: Optional[Window] = None) -> None:
        """Adds objects from all cells of ``window`` outside of ``skip`` to the candidate set."""
        min_column, min_row, max_column, max_row = window
        for row in range(min_row, max_row + 1):
            for column in range(min_column, max_column + 1):
                if skip is not None and _window_contains(skip, column, row):
                    continue
                for id, obj in self.grid.bucket(column, row):
                    if id != self.exclude:
                        self.candidates[id] = obj

    def closest(self) -> Tuple[int, WithPositionT]:
        return min(
            self.candidates.items(),
            key=lambda item: (self.distance(self.position, item[1].position), item[0]),
        )


def _window_contains(window: Window, column: int, row: int) -> bool:
    min_column, min_row, max_column, max_row = window
    return min_column <= column <= max_column and min_row <= row <= max_row
