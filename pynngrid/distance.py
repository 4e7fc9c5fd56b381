# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import math

from .protocols import DistanceFunction, Position

euclidean_distance: DistanceFunction = math.dist
"""Straight-line (`Euclidean <https://en.wikipedia.org/wiki/Euclidean_distance>`_)
distance between two points on the plane. This is the default distance of all searches.
"""


def taxicab_distance(a: Position, b: Position) -> float:
    """Sum of the absolute x and y differences between two points on the plane,
    also known as the `Manhattan distance <https://en.wikipedia.org/wiki/Taxicab_geometry>`_."""
    return abs(b[0] - a[0]) + abs(b[1] - a[1])


def chebyshev_distance(a: Position, b: Position) -> float:
    """Calculates the `Chebyshev distance <https://en.wikipedia.org/wiki/Chebyshev_distance>`_
    between two points. This is the lower bound every :py:obj:`DistanceFunction`
    used with a :py:class:`Grid` search must respect."""
    return max(abs(b[0] - a[0]), abs(b[1] - a[1]))
