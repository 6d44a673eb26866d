class MazeError(Exception):
    """Base class for every error raised by hexmaze."""


class InvalidDimensions(MazeError, ValueError):
    def __init__(self, rows, cols, reason="Maze dimensions must be positive"):
        super().__init__(f"{reason}, got {rows!r}x{cols!r}")
        self.rows = rows
        self.cols = cols


class OutOfBounds(MazeError, IndexError):
    def __init__(self, row, col, rows, cols):
        super().__init__(f"Coordinate ({row}, {col}) out of bounds for {rows}x{cols} maze")
        self.row = row
        self.col = col


class InvalidEncoding(MazeError, ValueError):
    pass


class MalformedMazeFile(InvalidEncoding):
    pass


class NoPathFound(MazeError):
    def __init__(self, start, goal, trace=None):
        super().__init__(f"No path from {start} to {goal}")
        self.start = start
        self.goal = goal
        # Visitation events recorded before the search gave up (FULL mode only)
        self.trace = trace


class IoFailure(MazeError, OSError):
    pass
