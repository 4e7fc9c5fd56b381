# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

"""Nearest-neighbor search over 2D points partitioned into a uniform grid"""

__title__ = "pynngrid"
__description__ = "Nearest-neighbor search over 2D points partitioned into a uniform grid"
__author__ = "Mikołaj Kuranowski"
__copyright__ = "© Copyright 2024 Mikołaj Kuranowski"
__license__ = "GPL-3.0-or-later"
__version__ = "1.0.0"

from . import protocols
from .batch import BatchQueryRunner, BatchResult, Pairing
from .config import ConfigError, GridConfig, SimulationConfig
from .distance import chebyshev_distance, euclidean_distance, taxicab_distance
from .grid import Grid
from .search import brute_force_nearest_neighbor, find_nearest_neighbor
from .simulation import Simulation
from .store import Point, PointStore, StoreState

__all__ = [
    "BatchQueryRunner",
    "BatchResult",
    "brute_force_nearest_neighbor",
    "chebyshev_distance",
    "ConfigError",
    "euclidean_distance",
    "find_nearest_neighbor",
    "Grid",
    "GridConfig",
    "Pairing",
    "Point",
    "PointStore",
    "protocols",
    "Simulation",
    "SimulationConfig",
    "StoreState",
    "taxicab_distance",
]
