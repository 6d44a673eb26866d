import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple
from hexmaze.core.errors import InvalidEncoding, NoPathFound
from hexmaze.core.grid import Direction, Grid
from hexmaze.algo.base import PROGRESS_INTERVAL

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Neighbors are probed in this order; it decides which path is found first.
PROBE_ORDER = (Direction.NORTH, Direction.SOUTH, Direction.EAST, Direction.WEST)


class TraceMode(Enum):
    FULL = "full"
    PRUNED = "pruned"


@dataclass
class Trace:
    mode: TraceMode
    cells: List[Coord] = field(default_factory=list)

    def __len__(self):
        return len(self.cells)


class Solver(ABC):
    def __init__(self, grid: Grid):
        self.grid = grid
        self.path: List[Coord] = []
        self.visited_count = 0
        self.found = False

    @abstractmethod
    def run(self, start: Coord, end: Coord) -> Iterator[str]:
        pass


class DepthFirstSolver(Solver):
    """
    Depth-first search over a decoded grid.

    In FULL mode every cell is recorded when it is entered (before the goal
    test) and again each time a child branch fails, so `trace` reads as a walk
    with backtracking. In PRUNED mode only the final chain of `path_next`
    links from start to goal is kept in `path`.
    """

    def __init__(self, grid: Grid, mode: TraceMode = TraceMode.PRUNED):
        super().__init__(grid)
        self.mode = mode
        self.trace: List[Coord] = []

    def run(self, start: Coord, end: Coord) -> Iterator[str]:
        grid = self.grid
        full = self.mode is TraceMode.FULL
        goal_idx = grid.get_index(*end)
        start_idx = grid.get_index(*start)
        grid.reset_traversal()

        # Frame: [cell_index, next probe position]
        stack: List[list] = []

        def enter(idx: int) -> bool:
            cell = grid.cells[idx]
            if full:
                self.trace.append(cell.coords)
            if idx == goal_idx:
                return True
            cell.visited = True
            self.visited_count += 1
            stack.append([idx, 0])
            return False

        self.found = enter(start_idx)

        while stack and not self.found:
            frame = stack[-1]
            idx, pos = frame

            if pos == len(PROBE_ORDER):
                # Dead end: the parent shows up again in the trace
                stack.pop()
                if full and stack:
                    self.trace.append(grid.cells[stack[-1][0]].coords)
                continue
            frame[1] = pos + 1

            cell = grid.cells[idx]
            direction = PROBE_ORDER[pos]
            neighbor = grid.neighbor(cell, direction)
            if neighbor is not None and cell.is_open(direction) and not neighbor.visited:
                n_idx = grid.index_of(neighbor)
                # Tentative; a later sibling overwrites it if this branch fails
                cell.path_next = n_idx
                self.found = enter(n_idx)

                if self.visited_count % PROGRESS_INTERVAL == 0:
                    yield f"Visited: {self.visited_count}"

        if self.found:
            self.reconstruct_path(start_idx, goal_idx)
            yield "Solved"
        else:
            yield "No Path"

    def reconstruct_path(self, start_idx: int, goal_idx: int):
        curr: Optional[int] = start_idx
        while curr is not None:
            cell = self.grid.cells[curr]
            self.path.append(cell.coords)
            if curr == goal_idx:
                break
            curr = cell.path_next


def solve(grid: Grid, start: Coord, goal: Coord, mode: TraceMode = TraceMode.PRUNED) -> Trace:
    """
    Finds the first depth-first path from start to goal.

    Raises OutOfBounds for coordinates outside the grid, InvalidEncoding if
    the grid still has undecided sides, and NoPathFound if the goal cannot be
    reached.
    """
    grid.get_index(*start)
    grid.get_index(*goal)
    if not grid.is_complete():
        raise InvalidEncoding("Cannot solve a maze with undecided connections")

    solver = DepthFirstSolver(grid, mode=mode)
    for _ in solver.run(start, goal):
        pass

    if not solver.found:
        logger.debug("Search from %s exhausted after %d cells", start, solver.visited_count)
        raise NoPathFound(start, goal, trace=solver.trace if mode is TraceMode.FULL else None)

    if mode is TraceMode.FULL:
        return Trace(mode, solver.trace)
    return Trace(mode, solver.path)
