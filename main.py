# main.py

import argparse
import os
import sys

from sudoku import (SolverConfig, load_puzzle, solve, format_plain, format_tex,
                    sudoku_board_string)

SOLVE_PROGRAM_NAME = "solve"
EXIT_MISSING_FILE = 1
# 2 is taken by argparse usage errors.
EXIT_UNSOLVABLE = 3

def mode_from_program_name(argv0):
    # Exactly `solve`, from any directory, solves; every other name only redisplays.
    name = os.path.basename(argv0)
    return "solve" if name == SOLVE_PROGRAM_NAME else "show"

def render(grid, style):
    if style == "tex":
        return format_tex(grid)
    if style == "board":
        return sudoku_board_string(grid) + "\n"
    return format_plain(grid)

def build_parser(prog=None):
    parser = argparse.ArgumentParser(prog=prog, description="Backtracking 9x9 Sudoku solver")
    parser.add_argument("puzzle", type=str, help="Path to the puzzle text file (9 lines of 9 characters)")
    parser.add_argument("--mode", choices=["solve", "show"], default=None,
                        help="Solve or only redisplay the puzzle (default: chosen from the program name)")

    styles = parser.add_mutually_exclusive_group()
    styles.add_argument("-tex", "--tex", dest="style", action="store_const", const="tex",
                        help="Print the grid as pipe-delimited table rows")
    styles.add_argument("--board", dest="style", action="store_const", const="board",
                        help="Print the grid with box separators")
    parser.set_defaults(style="plain")

    parser.add_argument("--no-rotate", action="store_true",
                        help="Search the puzzle as given instead of its least difficult rotation")
    parser.add_argument("-o", "--output", type=str, default=None, help="Also write the printed grid to this file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print solver progress to stderr")
    return parser

def main(argv=None, prog=None):
    prog = prog if prog is not None else os.path.basename(sys.argv[0])
    args = build_parser(prog).parse_args(argv)
    mode = args.mode or mode_from_program_name(prog)

    try:
        grid = load_puzzle(args.puzzle)
    except FileNotFoundError:
        print(f"{args.puzzle}: file not found.", file=sys.stderr)
        return EXIT_MISSING_FILE

    if mode == "solve":
        config = SolverConfig(canonicalize=not args.no_rotate, verbose=args.verbose)
        result = solve(grid, config)
        if not result.solved:
            print(f"{args.puzzle}: no solution.", file=sys.stderr)
            return EXIT_UNSOLVABLE
        grid = result.solution

    text = render(grid, args.style)
    print(text, end="")
    if args.output:
        with open(args.output, "w") as f:
            f.write(text)
    return 0

def solve_main():
    return main(prog=SOLVE_PROGRAM_NAME)

if __name__ == "__main__":
    sys.exit(main())
