# sudoku.py

import sys
import time
import numpy as np
from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple

SIZE = 9
CELLS = SIZE * SIZE
ROTATIONS = 4

class SolveStatus(Enum):
    SOLVED = "solved"
    UNSOLVABLE = "unsolvable"

@dataclass
class SolveResult:
    status: SolveStatus
    solution: Optional[np.ndarray]
    rotation: int = 0
    nodes: int = 0
    duration_ms: int = 0

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.SOLVED

@dataclass
class SolverConfig:
    canonicalize: bool = True
    verbose: bool = False

# --- Grid ---

def cell_to_index(row, col):
    return row * SIZE + col

def index_to_cell(index):
    return index // SIZE, index % SIZE

def empty_grid():
    return np.zeros(CELLS, dtype=int)

def as_grid(values):
    """
    Coerces a flat 81-sequence or a 9x9 board into a flat grid copy.
    Raises ValueError on the wrong number of cells or a value outside 0..9.
    """
    grid = np.array(values, dtype=int).reshape(-1)
    if grid.shape != (CELLS,):
        raise ValueError(f"grid must have {CELLS} cells, got {grid.size}")
    if grid.min() < 0 or grid.max() > 9:
        raise ValueError("grid values must lie in 0..9")
    return grid

# --- Topology ---

def neighbours(cell):
    """Row, then column, then box of `cell`; 27 indices, the cell itself included."""
    row, col = index_to_cell(cell)
    ns = [cell_to_index(row, c) for c in range(SIZE)]
    ns += [cell_to_index(r, col) for r in range(SIZE)]
    r0, c0 = 3 * (row // 3), 3 * (col // 3)
    ns += [cell_to_index(r, c) for r in range(r0, r0 + 3) for c in range(c0, c0 + 3)]
    return ns

NEIGHBOURS = np.array([neighbours(i) for i in range(CELLS)], dtype=int)

def is_valid(grid, digit, cell):
    return not np.any(grid[NEIGHBOURS[cell]] == digit)

def givens_consistent(grid):
    work = grid.copy()
    for cell in np.flatnonzero(work):
        digit = work[cell]
        work[cell] = 0
        ok = is_valid(work, digit, cell)
        work[cell] = digit
        if not ok:
            return False
    return True

def _houses():
    rows = [[cell_to_index(r, c) for c in range(SIZE)] for r in range(SIZE)]
    cols = [[cell_to_index(r, c) for r in range(SIZE)] for c in range(SIZE)]
    boxes = [neighbours(cell_to_index(r, c))[18:] for r in (0, 3, 6) for c in (0, 3, 6)]
    return np.array(rows + cols + boxes, dtype=int)

HOUSES = _houses()

def is_complete_solution(grid):
    houses = np.sort(grid[HOUSES], axis=1)
    return bool(np.all(houses == np.arange(1, SIZE + 1)))

# --- Difficulty ---

def build_weights():
    # Fibonacci-like, growing from the last cell towards the first.
    weights = np.zeros(CELLS, dtype=np.uint64)
    a, b = 0, 1
    for i in range(CELLS - 1, -1, -1):
        weights[i] = a + b
        a, b = b, int(weights[i])
    return weights

WEIGHTS = build_weights()

def difficulty(grid, weights=WEIGHTS):
    return int(weights[grid == 0].sum(dtype=np.uint64))

# --- Rotation ---

def rotate_cell(cell):
    """One quarter turn clockwise: (row, col) -> (col, 8 - row)."""
    row, col = index_to_cell(cell)
    return cell_to_index(col, SIZE - 1 - row)

def _rotation_targets(times):
    targets = np.arange(CELLS)
    for _ in range(times % ROTATIONS):
        targets = np.array([rotate_cell(c) for c in targets])
    return targets

ROTATION_TARGETS = [_rotation_targets(k) for k in range(ROTATIONS)]

def rotate_times(grid, times):
    rotated = np.empty_like(grid)
    rotated[ROTATION_TARGETS[times % ROTATIONS]] = grid
    return rotated

def best_rotation(grid, weights=WEIGHTS) -> Tuple[int, np.ndarray]:
    """
    Picks the quarter-turn count whose grid has the lowest difficulty.
    Later rotations replace the current best only on a strictly lower score,
    so ties go to the lowest rotation count.
    """
    best, rotated = 0, grid.copy()
    best_score = difficulty(grid, weights)
    for times in range(1, ROTATIONS):
        candidate = rotate_times(grid, times)
        score = difficulty(candidate, weights)
        if score < best_score:
            best, best_score, rotated = times, score, candidate
    return best, rotated

# --- Search ---

def first_empty(grid):
    empty = np.flatnonzero(grid == 0)
    return int(empty[0]) if empty.size else None

def _search_recursive(grid, counter):
    counter[0] += 1
    cell = first_empty(grid)
    if cell is None:
        return True

    for digit in range(1, 10):
        if is_valid(grid, digit, cell):
            grid[cell] = digit
            if _search_recursive(grid, counter):
                return True
            grid[cell] = 0

    return False

def search(grid):
    """
    Depth-first search over empty cells in index order, digits ascending.
    Fills `grid` in place and returns (found, nodes visited). On failure
    the grid is left as it was given.
    """
    counter = [0]
    found = _search_recursive(grid, counter)
    return found, counter[0]

def solve(grid, config: Optional[SolverConfig] = None) -> SolveResult:
    config = config or SolverConfig()
    start = time.time()
    puzzle = as_grid(grid)

    if not givens_consistent(puzzle):
        if config.verbose:
            print("[solver] givens contradict each other", file=sys.stderr)
        return SolveResult(SolveStatus.UNSOLVABLE, None)

    rotation, work = 0, puzzle
    if config.canonicalize:
        rotation, work = best_rotation(puzzle)
    if config.verbose:
        print(f"[solver] rotation {rotation}; difficulty {difficulty(work)}; "
              f"{CELLS - np.count_nonzero(work)} empty cells", file=sys.stderr)

    found, nodes = search(work)
    duration_ms = int((time.time() - start) * 1000)
    if config.verbose:
        print(f"[solver] search end in {duration_ms} ms; {nodes} nodes; "
              f"{'solved' if found else 'no solution'}", file=sys.stderr)

    if not found:
        return SolveResult(SolveStatus.UNSOLVABLE, None, rotation, nodes, duration_ms)
    solution = rotate_times(work, (ROTATIONS - rotation) % ROTATIONS)
    return SolveResult(SolveStatus.SOLVED, solution, rotation, nodes, duration_ms)

# --- Text I/O ---

def parse_puzzle(data):
    """
    Reads the first 9 bytes of each of the first 9 lines (split on b"\\n" only).
    Bytes b"1".."9" become digits; every other byte is a blank.
    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    grid = empty_grid()
    for row, line in enumerate(data.split(b"\n")[:SIZE]):
        for col, byte in enumerate(line[:SIZE]):
            if ord("1") <= byte <= ord("9"):
                grid[cell_to_index(row, col)] = byte - ord("0")
    return grid

def load_puzzle(path):
    with open(path, "rb") as f:
        return parse_puzzle(f.read())

def _cell_char(value):
    return " " if value == 0 else str(int(value))

def format_plain(grid):
    rows = []
    for r in range(SIZE):
        cells = grid[r * SIZE:(r + 1) * SIZE]
        rows.append("".join(_cell_char(v) + " " for v in cells) + "\n")
    return "".join(rows)

def format_tex(grid):
    rows = []
    for r in range(SIZE):
        cells = grid[r * SIZE:(r + 1) * SIZE]
        rows.append("".join("|" + _cell_char(v) for v in cells) + "|.\n")
    return "".join(rows)

def sudoku_board_string(grid):
    board = np.asarray(grid).reshape(SIZE, SIZE)
    horizontal_line = "+-------+-------+-------+"
    result = horizontal_line + "\n"
    for i, row in enumerate(board):
        line = "|"
        for j, cell in enumerate(row):
            display_value = "." if cell == 0 else str(int(cell))
            line += f" {display_value}"
            if (j + 1) % 3 == 0:
                line += " |"
        result += line + "\n"
        if (i + 1) % 3 == 0:
            result += horizontal_line + "\n"
    return result.strip()
