import subprocess
import sys
import os
import argparse
import glob
from typing import Dict, List, Optional

import numpy as np

from main import EXIT_UNSOLVABLE
from sudoku import is_complete_solution, load_puzzle, parse_puzzle

# --- Configuration ---
MAIN_SCRIPT_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'main.py')
OUTCOMES = ['solved', 'unsolvable', 'failed']

def check_prerequisites(puzzle_dir: str) -> bool:
    """Checks if required files exist before running the evaluation."""
    if not os.path.exists(MAIN_SCRIPT_PATH):
        print(f"Error: The main script '{MAIN_SCRIPT_PATH}' was not found.")
        return False
    if not os.path.isdir(puzzle_dir):
        print(f"Error: The puzzle directory '{puzzle_dir}' was not found.")
        return False
    return True

def parse_solution(output: str) -> Optional[np.ndarray]:
    """Reads the plain-format grid printed by main.py back into a grid."""
    lines = output.splitlines()
    if len(lines) < 9:
        return None
    # Plain rows put each cell at an even column; keep only those characters.
    return parse_puzzle("\n".join(line[::2] for line in lines[:9]))

def check_solution(puzzle: np.ndarray, solution: np.ndarray) -> bool:
    givens = puzzle != 0
    return is_complete_solution(solution) and bool(np.all(solution[givens] == puzzle[givens]))

def run_single_solve(puzzle_path: str, no_rotate: bool) -> str:
    """
    Runs main.py in solve mode on one puzzle file and classifies the result
    as 'solved', 'unsolvable' or 'failed'.
    """
    command = [sys.executable, MAIN_SCRIPT_PATH, puzzle_path, '--mode', 'solve']
    if no_rotate:
        command.append('--no-rotate')

    process = subprocess.run(command, capture_output=True, text=True, encoding='utf-8')
    name = os.path.basename(puzzle_path)

    if process.returncode == EXIT_UNSOLVABLE:
        print(f"  {name}: no solution")
        return 'unsolvable'
    if process.returncode != 0:
        print(f"  {name}: Failed (return code {process.returncode})")
        print("--- Captured STDERR from script ---\n" + process.stderr)
        return 'failed'

    solution = parse_solution(process.stdout)
    if solution is None or not check_solution(load_puzzle(puzzle_path), solution):
        print(f"  {name}: Failed (invalid solution)")
        print("------------------------- DEBUG LOG: RAW STDOUT -------------------------")
        print(process.stdout)
        print("-----------------------------------------------------------------------")
        return 'failed'

    print(f"  {name}: Solved")
    return 'solved'

def evaluate_puzzles(puzzle_dir: str, no_rotate: bool = False) -> Dict[str, List[str]]:
    if not check_prerequisites(puzzle_dir):
        sys.exit(1)

    paths = sorted(glob.glob(os.path.join(puzzle_dir, '*.txt')))
    results: Dict[str, List[str]] = {outcome: [] for outcome in OUTCOMES}
    print(f"Evaluating {len(paths)} puzzle(s) from '{puzzle_dir}'\n")

    for path in paths:
        results[run_single_solve(path, no_rotate)].append(path)
    return results

def print_summary(results: Dict[str, List[str]]):
    total = sum(len(paths) for paths in results.values())
    print("="*40)
    print("        EVALUATION SUMMARY")
    print("="*40)
    for outcome in OUTCOMES:
        count = len(results[outcome])
        share = (count / total) * 100 if total > 0 else 0
        print(f"  {outcome:<12} | {count:>4} | {share:>6.2f}%")
    print("="*40)


if __name__ == '__main__':
    parser = argparse.ArgumentParser(
        description="Solve every puzzle in a directory and verify the printed solutions.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument("puzzle_dir", type=str, help="Directory containing *.txt puzzle files.")
    parser.add_argument("--no-rotate", action="store_true", help="Forwarded to main.py.")

    args = parser.parse_args()

    evaluation_results = evaluate_puzzles(args.puzzle_dir, args.no_rotate)
    print_summary(evaluation_results)
    sys.exit(1 if evaluation_results['failed'] else 0)
