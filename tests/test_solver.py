import unittest
import sys
import os

import numpy as np

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from hexmaze.core.codec import decode
from hexmaze.core.errors import InvalidEncoding, NoPathFound, OutOfBounds
from hexmaze.core.grid import Grid, OPPOSITE
from hexmaze.algo.dfs import generate
from hexmaze.algo.solvers import PROBE_ORDER, DepthFirstSolver, Trace, TraceMode, solve
from hexmaze.io.serializer import MazeSerializer

# 3x3 serpentine: right along row 0, left along row 1, right along row 2
SERPENTINE = "b35\n936\na37\n"
# 2x2 with a dead end at (1,0) hanging off the start
DEAD_END = "95\nee\n"

def recursive_dfs(grid, cell, goal, out):
    # Plain recursive form of the search, used to check the stack-based ordering
    out.append(cell.coords)
    if cell.coords == goal:
        return True
    cell.visited = True
    for d in PROBE_ORDER:
        nb = grid.neighbor(cell, d)
        if nb is not None and cell.is_open(d) and not nb.visited:
            if recursive_dfs(grid, nb, goal, out):
                return True
            out.append(cell.coords)
    return False

class TestSolvers(unittest.TestCase):
    def assertValidPath(self, grid, path, start, goal):
        self.assertEqual(path[0], start)
        self.assertEqual(path[-1], goal)
        self.assertEqual(len(path), len(set(path)), "Path repeats a cell")
        for (r1, c1), (r2, c2) in zip(path, path[1:]):
            cell = grid.cell(r1, c1)
            moved = [d for d in PROBE_ORDER
                     if grid.neighbor(cell, d) is not None and grid.neighbor(cell, d).coords == (r2, c2)]
            self.assertEqual(len(moved), 1, f"{(r1, c1)} -> {(r2, c2)} is not a step")
            self.assertTrue(cell.is_open(moved[0]))
            self.assertTrue(grid.cell(r2, c2).is_open(OPPOSITE[moved[0]]))

    def test_serpentine_pruned(self):
        grid = MazeSerializer.loads(SERPENTINE)
        trace = solve(grid, (0, 0), (2, 2))
        self.assertEqual(trace.mode, TraceMode.PRUNED)
        self.assertEqual(trace.cells, [
            (0, 0), (0, 1), (0, 2),
            (1, 2), (1, 1), (1, 0),
            (2, 0), (2, 1), (2, 2),
        ])
        self.assertValidPath(grid, trace.cells, (0, 0), (2, 2))

    def test_dead_end_full_trace(self):
        grid = MazeSerializer.loads(DEAD_END)
        trace = solve(grid, (0, 0), (1, 1), TraceMode.FULL)
        # South is probed before East, so the dead end is explored and backed out of
        self.assertEqual(trace.cells, [(0, 0), (1, 0), (0, 0), (0, 1), (1, 1)])

    def test_dead_end_pruned(self):
        grid = MazeSerializer.loads(DEAD_END)
        trace = solve(grid, (0, 0), (1, 1), TraceMode.PRUNED)
        self.assertEqual(trace.cells, [(0, 0), (0, 1), (1, 1)])

    def test_single_cell(self):
        grid = decode([[15]])
        self.assertEqual(solve(grid, (0, 0), (0, 0)).cells, [(0, 0)])
        self.assertEqual(solve(grid, (0, 0), (0, 0), TraceMode.FULL).cells, [(0, 0)])

    def test_start_equals_goal(self):
        grid = generate(4, 4, seed=8)
        self.assertEqual(solve(grid, (2, 3), (2, 3)).cells, [(2, 3)])

    def test_no_path(self):
        grid = decode(np.full((3, 4), 15, dtype=np.uint8)) # All walls
        with self.assertRaises(NoPathFound):
            solve(grid, (0, 0), (2, 3))
        with self.assertRaises(NoPathFound) as ctx:
            solve(grid, (1, 1), (0, 0), TraceMode.FULL)
        self.assertEqual(ctx.exception.trace, [(1, 1)])
        self.assertEqual(ctx.exception.goal, (0, 0))

    def test_no_path_all_pairs(self):
        grid = decode(np.full((2, 3), 15, dtype=np.uint8))
        coords = [c.coords for c in grid.cells]
        for start in coords:
            for goal in coords:
                if start == goal:
                    continue
                with self.assertRaises(NoPathFound):
                    solve(grid, start, goal)

    def test_out_of_bounds(self):
        grid = generate(3, 3, seed=1)
        for start, goal in [((-1, 0), (2, 2)), ((0, 0), (3, 0)), ((0, 3), (1, 1)), ((0, 0), (2, -1))]:
            with self.assertRaises(OutOfBounds):
                solve(grid, start, goal)

    def test_incomplete_grid(self):
        with self.assertRaises(InvalidEncoding):
            solve(Grid(2, 2), (0, 0), (1, 1))

    def test_generated_all_pairs(self):
        grid = generate(5, 5, seed=31)
        coords = [c.coords for c in grid.cells]
        for start in coords:
            for goal in coords:
                trace = solve(grid, start, goal)
                self.assertValidPath(grid, trace.cells, start, goal)

    def test_full_matches_recursive_order(self):
        for seed in range(4):
            grid = generate(8, 8, seed=seed)
            trace = solve(grid, (0, 0), (7, 7), TraceMode.FULL)

            grid.reset_traversal()
            expected = []
            self.assertTrue(recursive_dfs(grid, grid.cell(0, 0), (7, 7), expected))
            self.assertEqual(trace.cells, expected)

    def test_full_trace_is_a_walk(self):
        grid = generate(10, 10, seed=4)
        trace = solve(grid, (0, 9), (9, 0), TraceMode.FULL)
        self.assertEqual(trace.cells[0], (0, 9))
        self.assertEqual(trace.cells[-1], (9, 0))
        for (r1, c1), (r2, c2) in zip(trace.cells, trace.cells[1:]):
            self.assertEqual(abs(r1 - r2) + abs(c1 - c2), 1)
        pruned = solve(grid, (0, 9), (9, 0), TraceMode.PRUNED)
        self.assertLessEqual(len(pruned), len(trace))
        self.assertTrue(set(pruned.cells) <= set(trace.cells))

    def test_solver_is_repeatable(self):
        grid = generate(6, 6, seed=2)
        first = solve(grid, (0, 0), (5, 5))
        second = solve(grid, (0, 0), (5, 5))
        self.assertEqual(first, second)

    def test_solver_status(self):
        grid = MazeSerializer.loads(SERPENTINE)
        solver = DepthFirstSolver(grid)
        messages = list(solver.run((0, 0), (2, 2)))
        self.assertEqual(messages[-1], "Solved")
        self.assertTrue(solver.found)
        self.assertEqual(solver.visited_count, 8)

    def test_trace_length(self):
        self.assertEqual(len(Trace(TraceMode.PRUNED, [(0, 0), (0, 1)])), 2)

if __name__ == '__main__':
    unittest.main()
