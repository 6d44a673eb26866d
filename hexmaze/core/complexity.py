from typing import Dict, List
from hexmaze.core.grid import Direction, Grid, OPPOSITE

class MazeInspector:
    @staticmethod
    def calculate_stats(grid: Grid) -> Dict[str, int]:
        dead_ends = 0
        corridors = 0 # 2 exits
        junctions = 0 # 3 or 4 exits
        isolated = 0 # 0 exits
        passages = 0

        for cell in grid.cells:
            exits = sum(1 for _ in grid.get_open_neighbors(cell))
            if exits == 0:
                isolated += 1
            elif exits == 1:
                dead_ends += 1
            elif exits == 2:
                corridors += 1
            else:
                junctions += 1

            # Count each shared side once, from its north/west cell
            for direction in (Direction.SOUTH, Direction.EAST):
                nb = grid.neighbor(cell, direction)
                if nb is not None and cell.is_open(direction) and nb.is_open(OPPOSITE[direction]):
                    passages += 1

        return {
            "dead_ends": dead_ends,
            "corridors": corridors,
            "junctions": junctions,
            "isolated": isolated,
            "passages": passages,
        }

    @staticmethod
    def is_consistent(grid: Grid) -> bool:
        """
        True when both cells agree on every shared side and every side facing
        out of the grid is a wall.
        """
        for cell in grid.cells:
            for direction in Direction:
                flag = cell.connections[direction]
                if flag is Grid.UNSET:
                    return False
                nb = grid.neighbor(cell, direction)
                if nb is None:
                    if flag != Grid.WALL:
                        return False
                elif nb.connections[OPPOSITE[direction]] != flag:
                    return False
        return True

    @staticmethod
    def is_perfect(grid: Grid) -> bool:
        """
        Spanning-tree check with union-find, independent of any generator:
        rows*cols - 1 passages, no cycle, a single component.
        """
        if not MazeInspector.is_consistent(grid):
            return False

        parent: List[int] = list(range(grid.rows * grid.cols))

        def find(i):
            while parent[i] != i:
                parent[i] = parent[parent[i]]
                i = parent[i]
            return i

        passages = 0
        for idx, cell in enumerate(grid.cells):
            for direction in (Direction.SOUTH, Direction.EAST):
                nb = grid.neighbor(cell, direction)
                if nb is None or not cell.is_open(direction):
                    continue
                a, b = find(idx), find(grid.index_of(nb))
                if a == b:
                    return False # Cycle
                parent[a] = b
                passages += 1

        return passages == grid.rows * grid.cols - 1
