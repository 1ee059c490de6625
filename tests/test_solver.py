# tests/test_solver.py
import numpy as np

from sudoku import (SolveStatus, SolverConfig, empty_grid, first_empty, is_complete_solution,
                    load_puzzle, search, solve)

from conftest import EASY_BLANKS, PUZZLES_DIR


def test_first_empty():
    assert first_empty(empty_grid()) == 0
    grid = empty_grid()
    grid[:10] = 1
    assert first_empty(grid) == 10


def test_first_empty_on_full_grid(solution):
    assert first_empty(solution) is None


def test_search_full_grid_visits_one_node(solution):
    grid = solution.copy()
    assert search(grid) == (True, 1)


def test_easy_puzzle_fills_blanks_only(solution, easy_puzzle):
    result = solve(easy_puzzle)
    assert result.status is SolveStatus.SOLVED
    assert result.solved
    assert np.array_equal(result.solution, solution)
    for r, c in EASY_BLANKS:
        assert result.solution[r * 9 + c] == solution[r * 9 + c]


def test_solve_does_not_mutate_input(easy_puzzle):
    before = easy_puzzle.copy()
    solve(easy_puzzle)
    assert np.array_equal(easy_puzzle, before)


def test_empty_grid_solves_to_valid_grid():
    result = solve(empty_grid())
    assert result.solved
    assert result.rotation == 0
    assert is_complete_solution(result.solution)


def test_duplicate_in_row_is_unsolvable():
    grid = empty_grid()
    grid[0] = 4
    grid[7] = 4
    result = solve(grid)
    assert result.status is SolveStatus.UNSOLVABLE
    assert not result.solved
    assert result.solution is None


def test_dead_cell_is_unsolvable():
    grid = empty_grid()
    grid[:8] = np.arange(1, 9)   # row 0 lacks only 9 at (0, 8)
    grid[17] = 9                 # and (1, 8) already holds 9
    result = solve(grid)
    assert result.status is SolveStatus.UNSOLVABLE
    assert result.rotation == 0
    assert result.nodes == 1


def test_failed_search_restores_grid():
    grid = empty_grid()
    grid[:8] = np.arange(1, 9)
    grid[17] = 9
    before = grid.copy()
    assert search(grid) == (False, 1)
    assert np.array_equal(grid, before)


def test_classic_puzzle(solution):
    puzzle = load_puzzle(PUZZLES_DIR / "classic.txt")
    result = solve(puzzle)
    assert result.solved
    assert np.array_equal(result.solution, solution)


def test_solution_rotated_back(solution):
    grid = solution.copy()
    grid[[0, 1, 2, 10]] = 0
    result = solve(grid)
    assert result.rotation == 2
    assert np.array_equal(result.solution, solution)


def test_without_canonicalization(solution):
    grid = solution.copy()
    grid[[0, 1, 2, 10]] = 0
    result = solve(grid, SolverConfig(canonicalize=False))
    assert result.rotation == 0
    assert np.array_equal(result.solution, solution)


def test_repeated_solves_are_independent(solution, easy_puzzle):
    first = solve(easy_puzzle)
    second = solve(easy_puzzle)
    assert np.array_equal(first.solution, second.solution)
    assert first.nodes == second.nodes


def test_verbose_prints_progress(easy_puzzle, capsys):
    solve(easy_puzzle, SolverConfig(verbose=True))
    err = capsys.readouterr().err
    assert "[solver] rotation" in err
    assert "solved" in err
