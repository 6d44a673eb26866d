import logging
import random
from typing import Iterator, List, Optional
from hexmaze.core.grid import Direction, Grid, OPPOSITE
from hexmaze.algo.base import Generator, PROGRESS_INTERVAL

logger = logging.getLogger(__name__)

class DrunkenWalk(Generator):
    """
    Randomized recursive backtracker that decides every side of every cell.

    Runs on an explicit stack but keeps the visiting order of the recursive
    form: a cell's directions are shuffled when the cell is entered, and an
    unvisited neighbor is descended into before the next direction is tried.
    Back-edges copy the neighbor's decision for the shared side, or become a
    wall while the neighbor (an ancestor) has not reached that side yet.
    """

    def run(self) -> Iterator[str]:
        grid = self.grid

        # Frame: [cell_index, shuffled directions, next position]
        stack: List[list] = [self._enter(grid.get_index(0, 0))]

        while stack:
            frame = stack[-1]
            idx, dirs, pos = frame

            if pos == len(dirs):
                # Backtrack
                stack.pop()
                continue
            frame[2] = pos + 1

            cell = grid.cells[idx]
            direction = dirs[pos]
            neighbor = grid.neighbor(cell, direction)

            if neighbor is None:
                cell.connections[direction] = Grid.WALL
            elif not neighbor.visited:
                # Carve
                cell.connections[direction] = Grid.OPEN
                stack.append(self._enter(grid.index_of(neighbor)))
                self.step_count += 1

                # Yield every N steps to keep callers responsive without spamming
                if self.step_count % PROGRESS_INTERVAL == 0:
                    yield f"Carving... Stack: {len(stack)}"
            else:
                mirrored = neighbor.connections[OPPOSITE[direction]]
                cell.connections[direction] = Grid.WALL if mirrored is Grid.UNSET else mirrored

        logger.debug("Drunken walk finished after %d carves", self.step_count)
        yield "Done"

    def _enter(self, idx: int) -> list:
        self.grid.cells[idx].visited = True
        dirs = list(Direction)
        self.rng.shuffle(dirs)
        return [idx, dirs, 0]


def generate(rows: int, cols: int, seed: int = None, rng: Optional[random.Random] = None) -> Grid:
    """Builds a rows x cols perfect maze. The same seed yields the same maze."""
    grid = Grid(rows, cols)
    DrunkenWalk(grid, seed=seed, rng=rng).run_all()
    return grid
