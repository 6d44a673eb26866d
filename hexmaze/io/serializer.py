import logging
from typing import List, Tuple
import numpy as np
from hexmaze.core.codec import decode, encode
from hexmaze.core.errors import InvalidDimensions, IoFailure, MalformedMazeFile
from hexmaze.core.grid import Grid
from hexmaze.algo.solvers import Trace, TraceMode

logger = logging.getLogger(__name__)

HEX_DIGITS = "0123456789abcdefABCDEF"


def _read_text(filepath: str) -> str:
    try:
        with open(filepath, "r") as f:
            return f.read()
    except OSError as exc:
        raise IoFailure(f"Could not read {filepath}: {exc}") from exc


def _write_text(filepath: str, text: str):
    try:
        with open(filepath, "w") as f:
            f.write(text)
    except OSError as exc:
        raise IoFailure(f"Could not write {filepath}: {exc}") from exc


class MazeSerializer:
    """
    Text format:
    - one line per row, `cols` lowercase hex digits per line
    - each digit is the encoded nibble of that cell
    - every line is newline-terminated, no separators
    """

    @staticmethod
    def dumps(grid: Grid) -> str:
        matrix = encode(grid)
        return "".join("".join(format(v, "x") for v in row) + "\n" for row in matrix.tolist())

    @staticmethod
    def loads(text: str, rows: int = None, cols: int = None) -> Grid:
        if (rows is not None and rows <= 0) or (cols is not None and cols <= 0):
            raise InvalidDimensions(rows, cols)
        lines = text.splitlines()
        # A blank trailing line is just the last terminator
        while lines and lines[-1] == "":
            lines.pop()

        if not lines:
            raise MalformedMazeFile("Maze file is empty")
        if rows is None:
            rows = len(lines)
        if cols is None:
            cols = len(lines[0])

        if len(lines) != rows:
            raise MalformedMazeFile(f"Expected {rows} rows, found {len(lines)}")

        values: List[List[int]] = []
        for r, line in enumerate(lines):
            if len(line) != cols:
                raise MalformedMazeFile(f"Row {r}: expected {cols} digits, found {len(line)}")
            for c, ch in enumerate(line):
                if ch not in HEX_DIGITS:
                    raise MalformedMazeFile(f"Row {r}, column {c}: {ch!r} is not a hex digit")
            values.append([int(ch, 16) for ch in line])

        return decode(np.array(values, dtype=np.uint8))

    @staticmethod
    def save(grid: Grid, filepath: str):
        _write_text(filepath, MazeSerializer.dumps(grid))
        logger.debug("Wrote %dx%d maze to %s", grid.rows, grid.cols, filepath)

    @staticmethod
    def load(filepath: str, rows: int = None, cols: int = None) -> Grid:
        return MazeSerializer.loads(_read_text(filepath), rows, cols)


class TraceSerializer:
    """
    Text format:
    - header line: FULL or PRUNED
    - one `row, col` line per cell, in order
    """

    HEADERS = {TraceMode.FULL: "FULL", TraceMode.PRUNED: "PRUNED"}

    @staticmethod
    def dumps(trace: Trace) -> str:
        lines = [TraceSerializer.HEADERS[trace.mode]]
        lines.extend(f"{r}, {c}" for r, c in trace.cells)
        return "\n".join(lines) + "\n"

    @staticmethod
    def loads(text: str) -> Trace:
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines:
            raise MalformedMazeFile("Path file is empty")

        header = lines[0].strip()
        modes = {v: k for k, v in TraceSerializer.HEADERS.items()}
        if header not in modes:
            raise MalformedMazeFile(f"Unknown path file header {header!r}")

        cells: List[Tuple[int, int]] = []
        for line in lines[1:]:
            parts = line.split(",")
            if len(parts) != 2:
                raise MalformedMazeFile(f"Bad path line {line!r}")
            try:
                cells.append((int(parts[0]), int(parts[1])))
            except ValueError as exc:
                raise MalformedMazeFile(f"Bad path line {line!r}") from exc
        return Trace(modes[header], cells)

    @staticmethod
    def save(trace: Trace, filepath: str):
        _write_text(filepath, TraceSerializer.dumps(trace))

    @staticmethod
    def load(filepath: str) -> Trace:
        return TraceSerializer.loads(_read_text(filepath))
