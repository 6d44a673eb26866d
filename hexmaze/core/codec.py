import numpy as np

from hexmaze.core.errors import InvalidDimensions, InvalidEncoding
from hexmaze.core.grid import Cell, Direction, Grid, WEIGHT

MAX_VALUE = 15

# Bits are peeled off from the heaviest weight down
DECODE_ORDER = (Direction.WEST, Direction.EAST, Direction.SOUTH, Direction.NORTH)


def encode_cell(cell: Cell) -> int:
    """
    Packs the four connection flags of a cell into one nibble:
    8*West + 4*East + 2*South + 1*North (1 = wall, 0 = open).
    """
    value = 0
    for direction in Direction:
        flag = cell.connections[direction]
        if flag is Grid.UNSET:
            raise InvalidEncoding(
                f"Cell ({cell.row}, {cell.col}) has no decision for {direction.name}"
            )
        value += WEIGHT[direction] * flag
    return value


def decode_cell(cell: Cell, value: int):
    if not 0 <= value <= MAX_VALUE:
        raise InvalidEncoding(f"Encoded value {value} at ({cell.row}, {cell.col}) not in [0, 15]")
    for direction in DECODE_ORDER:
        w = WEIGHT[direction]
        cell.connections[direction] = (value & w) // w


def encode(grid: Grid) -> np.ndarray:
    """Returns a (rows, cols) uint8 matrix with one nibble per cell."""
    result = np.zeros((grid.rows, grid.cols), dtype=np.uint8)
    for cell in grid.cells:
        result[cell.row, cell.col] = encode_cell(cell)
    return result


def decode(matrix) -> Grid:
    try:
        arr = np.asarray(matrix)
    except ValueError as exc:
        # Ragged rows
        raise InvalidEncoding(f"Encoded maze is not rectangular: {exc}") from exc
    if arr.ndim != 2:
        raise InvalidEncoding(f"Encoded maze must be 2-D, got {arr.ndim} dimension(s)")
    rows, cols = arr.shape
    if rows == 0 or cols == 0:
        raise InvalidDimensions(rows, cols)
    if not np.issubdtype(arr.dtype, np.integer):
        raise InvalidEncoding(f"Encoded maze must hold integers, got {arr.dtype}")

    # Validate the whole matrix before building anything
    bad = np.argwhere((arr < 0) | (arr > MAX_VALUE))
    if len(bad):
        r, c = bad[0]
        raise InvalidEncoding(f"Encoded value {arr[r, c]} at ({r}, {c}) not in [0, 15]")

    grid = Grid(int(rows), int(cols))
    for cell in grid.cells:
        decode_cell(cell, int(arr[cell.row, cell.col]))
    return grid
