# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

from typing import Callable, Protocol, Tuple, TypeVar

Position = Tuple[float, float]
"""Position describes the location of a point on the plane, first x, then y.
Both coordinates are expressed in the same units as the world dimensions
of :py:class:`GridConfig`.
"""

Cell = Tuple[int, int]
"""Cell identifies a single bucket of a :py:class:`Grid`, first column, then row."""

DistanceFunction = Callable[[Position, Position], float]
"""DistanceFunction describes a callable for determining the distance between two points.

Grid searches require the returned distance to be at least the
`Chebyshev distance <https://en.wikipedia.org/wiki/Chebyshev_distance>`_ between
the points, which holds for both :py:func:`euclidean_distance` and
:py:func:`taxicab_distance`.
"""


class WithPosition(Protocol):
    """WithPosition describes any object with a ``position`` property of :py:obj:`Position` type."""

    @property
    def position(self) -> Position: ...


WithPositionT = TypeVar("WithPositionT", bound=WithPosition)
