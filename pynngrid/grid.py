# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from logging import getLogger
from math import floor, isfinite
from typing import Dict, Generic, Iterator, List, Tuple

from .config import GridConfig
from .protocols import Cell, Position, WithPositionT

logger = getLogger("pynngrid.grid")

Window = Tuple[int, int, int, int]
"""Window is an inclusive, rectangular range of cells:
(min_column, min_row, max_column, max_row)."""


class Grid(Generic[WithPositionT]):
    """Grid implements a uniform spatial partition of the world rectangle
    described by a :py:class:`GridConfig`. Every cell (bucket) maps ids to objects
    with a :py:obj:`Position`.

    Positions outside of the world rectangle are clamped to the closest cell,
    both when inserting and when looking up cells. Searches over the grid remain
    correct for such positions, as clamping never reorders cells.

    Note that the type-complaint usage of generic classes requires
    explicitly providing the type argument, e.g.::

        grid = Grid[Point](GridConfig.from_aspect_ratio(1920.0, 1080.0, 10))
    """

    config: GridConfig

    _buckets: List[List[Dict[int, WithPositionT]]]
    """_buckets holds the contents of every cell, indexed by row and then column."""

    _cells: Dict[int, Cell]
    """_cells maps every contained id to its cell, used to reject duplicate ids."""

    def __init__(self, config: GridConfig) -> None:
        self.config = config
        self._buckets = [[{} for _ in range(config.columns)] for _ in range(config.rows)]
        self._cells = {}

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def cell_width(self) -> float:
        return self.config.cell_width

    @property
    def cell_height(self) -> float:
        return self.config.cell_height

    def cell_for(self, position: Position) -> Cell:
        """Returns the (column, row) of the cell containing ``position``,
        clamped to the valid range of cells.

        Raises ValueError if any of the coordinates is not finite.
        """
        x, y = position
        if not isfinite(x) or not isfinite(y):
            raise ValueError(f"position must be finite, got {position}")

        return self._column_for(x), self._row_for(y)

    def _column_for(self, x: float) -> int:
        return _clamped_index(x / self.config.cell_width, self.config.columns)

    def _row_for(self, y: float) -> int:
        return _clamped_index(y / self.config.cell_height, self.config.rows)

    def is_inside(self, position: Position) -> bool:
        """Checks whether ``position`` lies within the world rectangle, [0, width] × [0, height]."""
        x, y = position
        return 0.0 <= x <= self.config.world_width and 0.0 <= y <= self.config.world_height

    def insert(self, id: int, obj: WithPositionT) -> Cell:
        """Adds ``obj`` under ``id`` to the bucket containing its position,
        and returns that bucket's cell.

        Raises ValueError if ``id`` is already present in the grid.
        """
        if id in self._cells:
            raise ValueError(f"id {id} is already present in the grid, at cell {self._cells[id]}")

        cell = self.cell_for(obj.position)
        if not self.is_inside(obj.position):
            logger.warning(
                "Object %d at %r lies outside of the %gx%g world - clamping to cell %r",
                id,
                obj.position,
                self.config.world_width,
                self.config.world_height,
                cell,
            )

        self._buckets[cell[1]][cell[0]][id] = obj
        self._cells[id] = cell
        return cell

    def clear(self) -> None:
        """Empties every bucket. Bucket objects are reused."""
        for row in self._buckets:
            for bucket in row:
                bucket.clear()
        self._cells.clear()

    def bucket(self, column: int, row: int) -> Iterator[Tuple[int, WithPositionT]]:
        """Iterates over all (id, object) pairs in the provided cell.

        Raises IndexError if the cell is outside of the grid.
        """
        if not (0 <= column < self.config.columns and 0 <= row < self.config.rows):
            raise IndexError(
                f"cell ({column}, {row}) is outside of the "
                f"{self.config.columns}x{self.config.rows} grid"
            )
        return iter(self._buckets[row][column].items())

    def cell_of(self, id: int) -> Cell:
        """Returns the cell holding the object with the provided id. Raises KeyError if not present."""
        return self._cells[id]

    def cells(self) -> Iterator[Cell]:
        """Iterates over the (column, row) of every cell, in row-major order."""
        for row in range(self.config.rows):
            for column in range(self.config.columns):
                yield column, row

    def cell_bounds(self, column: int, row: int) -> Tuple[float, float, float, float]:
        """Returns the rectangle covered by the provided cell as (left, top, width, height)."""
        w = self.config.cell_width
        h = self.config.cell_height
        return column * w, row * h, w, h

    def window(self, center: Cell, layer: int) -> Window:
        """Returns the square window of cells spanning ``layer`` cells in every
        direction from ``center``, clamped to the grid."""
        return (
            max(center[0] - layer, 0),
            max(center[1] - layer, 0),
            min(center[0] + layer, self.config.columns - 1),
            min(center[1] + layer, self.config.rows - 1),
        )

    def window_around(self, position: Position, radius: float) -> Window:
        """Returns the window of cells overlapping the axis-aligned box
        ``[x - radius, x + radius] × [y - radius, y + radius]``, clamped to the grid.

        A radius too large to be represented covers the whole grid.
        """
        x, y = position
        if not isfinite(x) or not isfinite(y):
            raise ValueError(f"position must be finite, got {position}")
        if not isfinite(radius):
            return 0, 0, self.config.columns - 1, self.config.rows - 1

        return (
            self._column_for(x - radius),
            self._row_for(y - radius),
            self._column_for(x + radius),
            self._row_for(y + radius),
        )

    def covers_everything(self, window: Window) -> bool:
        return window == (0, 0, self.config.columns - 1, self.config.rows - 1)

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, id: object) -> bool:
        return id in self._cells

    def __iter__(self) -> Iterator[Tuple[int, WithPositionT]]:
        for row in self._buckets:
            for bucket in row:
                yield from bucket.items()


def _clamped_index(quotient: float, count: int) -> int:
    """Floors ``quotient`` into [0, count - 1]. Infinite quotients, coming from
    huge coordinates divided by the cell size, are clamped like any other."""
    if quotient < 0:
        return 0
    if quotient >= count:
        return count - 1
    return floor(quotient)
