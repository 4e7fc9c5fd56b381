# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from dataclasses import dataclass
from math import isfinite
from typing import Optional

from typing_extensions import Self

DEFAULT_WORLD_WIDTH = 1920.0
DEFAULT_WORLD_HEIGHT = 1080.0
DEFAULT_ROWS = 10
DEFAULT_POINT_COUNT = 1000


class ConfigError(ValueError):
    """Exception used when a grid or simulation configuration is unusable,
    for example when it would result in a grid without any cells.

    Configuration errors are detected when the configuration object is created,
    before any point is inserted into a :py:class:`Grid`.
    """

    pass


@dataclass(frozen=True)
class GridConfig:
    """GridConfig describes the immutable geometry of a :py:class:`Grid`:
    a ``world_width`` × ``world_height`` rectangle anchored at (0, 0),
    split into ``rows`` × ``columns`` equally-sized cells.

    Changing the resolution of a grid is done by creating a new GridConfig
    (and a new :py:class:`Grid` from it).
    """

    world_width: float
    world_height: float
    rows: int
    columns: int

    def __post_init__(self) -> None:
        if not isfinite(self.world_width) or self.world_width <= 0:
            raise ConfigError(f"world_width must be positive and finite, got {self.world_width}")
        if not isfinite(self.world_height) or self.world_height <= 0:
            raise ConfigError(f"world_height must be positive and finite, got {self.world_height}")
        if self.rows < 1:
            raise ConfigError(f"grid must have at least one row, got {self.rows}")
        if self.columns < 1:
            raise ConfigError(f"grid must have at least one column, got {self.columns}")

    @property
    def cell_width(self) -> float:
        return self.world_width / self.columns

    @property
    def cell_height(self) -> float:
        return self.world_height / self.rows

    @classmethod
    def from_aspect_ratio(cls, world_width: float, world_height: float, rows: int) -> Self:
        """Creates a GridConfig with the column count derived from the row count
        and the world's aspect ratio, so that cells are roughly square.

        The derived column count is truncated towards zero, but never falls below 1.
        """
        if rows < 1:
            raise ConfigError(f"grid must have at least one row, got {rows}")
        if not isfinite(world_width) or world_width <= 0:
            raise ConfigError(f"world_width must be positive and finite, got {world_width}")
        if not isfinite(world_height) or world_height <= 0:
            raise ConfigError(f"world_height must be positive and finite, got {world_height}")
        columns = max(1, int(rows * (world_width / world_height)))
        return cls(world_width, world_height, rows, columns)


@dataclass(frozen=True)
class SimulationConfig:
    """SimulationConfig describes everything needed to set up a :py:class:`Simulation`."""

    grid: GridConfig
    point_count: int = DEFAULT_POINT_COUNT
    seed: Optional[int] = None
    """seed for the random number generator used to spawn points. ``None``
    seeds from system entropy."""

    def __post_init__(self) -> None:
        if self.point_count < 0:
            raise ConfigError(f"point_count must not be negative, got {self.point_count}")

    @classmethod
    def default(cls, point_count: int = DEFAULT_POINT_COUNT, seed: Optional[int] = None) -> Self:
        """Creates a SimulationConfig over a 1920 × 1080 world split into 10 rows."""
        return cls(
            GridConfig.from_aspect_ratio(DEFAULT_WORLD_WIDTH, DEFAULT_WORLD_HEIGHT, DEFAULT_ROWS),
            point_count,
            seed,
        )
