# © Copyright 2024 Mikołaj Kuranowski
# SPDX-License-Identifier: GPL-3.0-or-later

import random
from typing import Dict, List
from unittest import TestCase

from .config import GridConfig
from .distance import taxicab_distance
from .grid import Grid
from .protocols import Position
from .search import brute_force_nearest_neighbor, find_nearest_neighbor
from .store import Point, PointStore


def make_store(width: float, height: float, rows: int, positions: List[Position]) -> PointStore:
    store = PointStore(Grid[Point](GridConfig.from_aspect_ratio(width, height, rows)))
    store.replace((pos, None) for pos in positions)
    return store


class TestFindNearestNeighbor(TestCase):
    def test_collinear(self) -> None:
        store = make_store(1000.0, 1000.0, 10, [(0.0, 0.0), (10.0, 0.0), (100.0, 0.0)])
        by_position = {pt.position: pt for pt in store}

        def nearest(position: Position) -> Position:
            found = store.find_nearest(by_position[position])
            assert found is not None
            return found.position

        self.assertEqual(nearest((0.0, 0.0)), (10.0, 0.0))
        self.assertEqual(nearest((100.0, 0.0)), (10.0, 0.0))
        self.assertEqual(nearest((10.0, 0.0)), (0.0, 0.0))

    def test_closer_point_in_diagonally_exposed_cell(self) -> None:
        # 10x10 cells, each 10x10. The query point sits in cell (1, 1).
        # Cell (2, 2) is in the first non-empty layer, but the truly closest
        # point is in cell (3, 1), one layer further out.
        store = make_store(100.0, 100.0, 10, [(19.9, 15.0), (29.9, 29.9), (31.0, 15.0)])
        query, diagonal, further = list(store)

        self.assertEqual(store.grid.cell_of(query.id), (1, 1))
        self.assertEqual(store.grid.cell_of(diagonal.id), (2, 2))
        self.assertEqual(store.grid.cell_of(further.id), (3, 1))

        self.assertEqual(store.find_nearest(query), further)

    def test_closer_point_in_adjacent_cell(self) -> None:
        # The home cell is not empty, but the closest point is in the neighboring cell
        store = make_store(100.0, 100.0, 10, [(19.0, 15.0), (11.0, 19.0), (21.0, 15.0)])
        query, same_cell, adjacent = list(store)

        self.assertEqual(store.grid.cell_of(same_cell.id), (1, 1))
        self.assertEqual(store.grid.cell_of(adjacent.id), (2, 1))

        self.assertEqual(store.find_nearest(query), adjacent)

    def test_single_point(self) -> None:
        store = make_store(100.0, 100.0, 10, [(55.0, 45.0)])
        self.assertIsNone(store.find_nearest(next(iter(store))))

    def test_empty_grid(self) -> None:
        grid = Grid[Point](GridConfig.from_aspect_ratio(100.0, 100.0, 4))
        self.assertIsNone(find_nearest_neighbor(grid, (50.0, 50.0)))

    def test_far_apart(self) -> None:
        store = make_store(1000.0, 1000.0, 50, [(1.0, 1.0), (999.0, 999.0)])
        a, b = list(store)
        self.assertEqual(store.find_nearest(a), b)
        self.assertEqual(store.find_nearest(b), a)

    def test_ties_resolved_by_lowest_id(self) -> None:
        store = make_store(100.0, 100.0, 10, [(60.0, 50.0), (40.0, 50.0), (50.0, 50.0)])
        right, left, middle = list(store)
        self.assertEqual(store.find_nearest(middle), right)

        store = make_store(100.0, 100.0, 10, [(40.0, 50.0), (60.0, 50.0), (50.0, 50.0)])
        left, right, middle = list(store)
        self.assertEqual(store.find_nearest(middle), left)

    def test_ties_across_cells(self) -> None:
        # Four equidistant points in four different cells
        store = make_store(
            100.0,
            100.0,
            10,
            [(55.0, 65.0), (65.0, 55.0), (45.0, 55.0), (55.0, 45.0), (55.0, 55.0)],
        )
        points = list(store)
        self.assertEqual(store.find_nearest(points[-1]), points[0])

    def test_without_exclusion(self) -> None:
        store = make_store(100.0, 100.0, 10, [(10.0, 10.0), (80.0, 80.0)])
        found = find_nearest_neighbor(store.grid, (75.0, 70.0))
        assert found is not None
        self.assertEqual(found[1].position, (80.0, 80.0))

    def test_distance_too_large_to_represent(self) -> None:
        with self.assertLogs("pynngrid.grid", level="WARNING"):
            store = make_store(100.0, 100.0, 10, [(-1e308, 0.0), (1e308, 0.0)])
        a, b = list(store)

        self.assertEqual(store.find_nearest(a), b)
        self.assertEqual(store.find_nearest(b), a)

    def test_query_outside_world(self) -> None:
        store = make_store(100.0, 100.0, 10, [(5.0, 95.0), (95.0, 5.0), (50.0, 50.0)])
        for position in [(-500.0, -500.0), (300.0, 0.0), (50.0, 1e6), (-1.0, 101.0)]:
            with self.subTest(position=position):
                self.assertEqual(
                    find_nearest_neighbor(store.grid, position),
                    brute_force_nearest_neighbor(store.grid, position),
                )

    def test_idempotent(self) -> None:
        rng = random.Random(5)
        store = make_store(
            500.0,
            300.0,
            6,
            [(rng.random() * 500.0, rng.random() * 300.0) for _ in range(100)],
        )
        for point in store:
            self.assertEqual(store.find_nearest(point), store.find_nearest(point))


class TestAgainstBruteForce(TestCase):
    WIDTH = 1000.0
    HEIGHT = 700.0

    def check(self, positions: List[Position], rows: int) -> Dict[Position, Position]:
        store = make_store(self.WIDTH, self.HEIGHT, rows, positions)
        found: Dict[Position, Position] = {}

        for point in store:
            expected = brute_force_nearest_neighbor(store.grid, point.position, point.id)
            got = find_nearest_neighbor(store.grid, point.position, point.id)
            self.assertEqual(got, expected, f"rows={rows} point={point}")
            assert got is not None
            found[point.position] = got[1].position

        return found

    def test_uniform(self) -> None:
        rng = random.Random(42)
        positions = [(rng.random() * self.WIDTH, rng.random() * self.HEIGHT) for _ in range(300)]
        results = [self.check(positions, rows) for rows in (1, 5, 17, 50)]

        # Grid resolution must not affect the results
        for other in results[1:]:
            self.assertDictEqual(other, results[0])

    def test_clustered(self) -> None:
        rng = random.Random(7)
        positions = [(rng.random() * 20.0, rng.random() * 20.0) for _ in range(40)]
        positions += [(self.WIDTH - rng.random() * 5.0, self.HEIGHT - rng.random() * 5.0)]
        self.check(positions, 50)

    def test_taxicab(self) -> None:
        rng = random.Random(99)
        store = make_store(
            self.WIDTH,
            self.HEIGHT,
            20,
            [(rng.random() * self.WIDTH, rng.random() * self.HEIGHT) for _ in range(200)],
        )
        for point in store:
            self.assertEqual(
                find_nearest_neighbor(store.grid, point.position, point.id, taxicab_distance),
                brute_force_nearest_neighbor(store.grid, point.position, point.id, taxicab_distance),
            )


class TestBruteForceNearestNeighbor(TestCase):
    def test(self) -> None:
        items = [
            (1, Point(1, (0.0, 0.0))),
            (2, Point(2, (3.0, 4.0))),
            (3, Point(3, (1.0, 1.0))),
        ]
        self.assertEqual(brute_force_nearest_neighbor(items, (0.5, 0.0)), items[0])
        self.assertEqual(brute_force_nearest_neighbor(items, (0.0, 0.0), exclude=1), items[2])
        self.assertIsNone(brute_force_nearest_neighbor(items[:1], (0.0, 0.0), exclude=1))
        self.assertIsNone(brute_force_nearest_neighbor([], (0.0, 0.0)))
