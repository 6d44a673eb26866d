import operator
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from hexmaze.core.errors import InvalidDimensions, OutOfBounds


class Direction(IntEnum):
    # Index into Cell.connections
    NORTH = 0
    SOUTH = 1
    EAST = 2
    WEST = 3

    @property
    def opposite(self) -> "Direction":
        return OPPOSITE[self]

    @property
    def weight(self) -> int:
        """Bit value of this direction in the hex encoding."""
        return WEIGHT[self]


# Direction Helpers
DR = {Direction.NORTH: -1, Direction.SOUTH: 1, Direction.EAST: 0, Direction.WEST: 0}
DC = {Direction.NORTH: 0, Direction.SOUTH: 0, Direction.EAST: 1, Direction.WEST: -1}
OPPOSITE = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}
WEIGHT = {Direction.NORTH: 1, Direction.SOUTH: 2, Direction.EAST: 4, Direction.WEST: 8}


def in_bounds(row: int, col: int, rows: int, cols: int) -> bool:
    return 0 <= row < rows and 0 <= col < cols


class Cell:
    __slots__ = ('row', 'col', 'connections', 'visited', 'path_next')

    def __init__(self, row: int, col: int):
        self.row = row
        self.col = col
        # Grid.UNSET = undecided, Grid.OPEN, Grid.WALL
        self.connections: List[Optional[int]] = [Grid.UNSET] * 4
        self.visited = False
        # Flat index of the next cell on the solver's path (never an object ref)
        self.path_next: Optional[int] = None

    @property
    def coords(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def is_open(self, direction: Direction) -> bool:
        return self.connections[direction] == Grid.OPEN

    def __repr__(self):
        return f"Cell({self.row}, {self.col}, con={self.connections})"


class Grid:
    # Connection flags
    UNSET = None
    OPEN = 0
    WALL = 1

    __slots__ = ('rows', 'cols', 'cells')

    def __init__(self, rows: int, cols: int):
        try:
            rows, cols = operator.index(rows), operator.index(cols)
        except TypeError as exc:
            raise InvalidDimensions(rows, cols, "Maze dimensions must be integers") from exc
        if rows <= 0 or cols <= 0:
            raise InvalidDimensions(rows, cols)
        self.rows = rows
        self.cols = cols
        # Row-major, index = row * cols + col
        self.cells = [Cell(r, c) for r in range(rows) for c in range(cols)]

    def in_bounds(self, row: int, col: int) -> bool:
        return in_bounds(row, col, self.rows, self.cols)

    def get_index(self, row: int, col: int) -> int:
        if self.in_bounds(row, col):
            return row * self.cols + col
        raise OutOfBounds(row, col, self.rows, self.cols)

    def cell(self, row: int, col: int) -> Cell:
        return self.cells[self.get_index(row, col)]

    def index_of(self, cell: Cell) -> int:
        return cell.row * self.cols + cell.col

    def neighbor(self, cell: Cell, direction: Direction) -> Optional[Cell]:
        """
        Returns the adjacent cell in 'direction', or None past the edge.
        Ignores walls.
        """
        r = cell.row + DR[direction]
        c = cell.col + DC[direction]
        if in_bounds(r, c, self.rows, self.cols):
            return self.cells[r * self.cols + c]
        return None

    def get_neighbors(self, cell: Cell) -> Iterator[Tuple[Cell, Direction]]:
        for direction in Direction:
            nb = self.neighbor(cell, direction)
            if nb is not None:
                yield (nb, direction)

    def get_open_neighbors(self, cell: Cell) -> Iterator[Cell]:
        for nb, direction in self.get_neighbors(cell):
            if cell.is_open(direction):
                yield nb

    def is_complete(self) -> bool:
        return all(flag is not self.UNSET for cell in self.cells for flag in cell.connections)

    def reset_traversal(self):
        for cell in self.cells:
            cell.visited = False
            cell.path_next = None


def new_grid(rows: int, cols: int) -> Grid:
    return Grid(rows, cols)
