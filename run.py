"""CLI entrypoint: load puzzle(s), run solver, and report metrics."""

import argparse
import csv
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from solver import solve_puzzle
from src.sudoku.grid import Grid
from src.sudoku.loader import list_puzzle_files, load_table
from src.utils.trace import get_tracer, reset_tracer

DATA_PATH_ENV = "SUDOKU_PUZZLE_PATH"


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Solve Sudoku puzzles by constraint propagation")
    parser.add_argument(
        "input",
        type=Path,
        nargs="?",
        default=os.environ.get(DATA_PATH_ENV),
        help=f"Path to a puzzle file or a directory of puzzles (default: ${DATA_PATH_ENV})",
    )
    parser.add_argument("--expected", type=Path, default=None, help="Solved puzzle to compare the result against")
    parser.add_argument("--output", type=Path, default=None, help="Optional path to write results as CSV")
    parser.add_argument("--trace", type=Path, default=None, help="Optional path to write the solver trace as CSV")
    parser.add_argument("--quiet", action="store_true", help="Do not print grids")
    args = parser.parse_args(argv)
    if args.input is None:
        parser.error(f"an input path is required (or set {DATA_PATH_ENV})")
    args.input = Path(args.input)
    return args


def format_result(puzzle_id: str, grid: Optional[Grid], result=None, error: Optional[str] = None) -> Dict[str, Any]:
    if grid is None or result is None:
        return {"id": puzzle_id, "status": "error", "solved_cells": 0, "passes": -1, "grid": "", "error": error}
    flat = "".join(str(v) if v is not None else "." for row in grid.values() for v in row)
    return {
        "id": puzzle_id,
        "status": result.status,
        "solved_cells": result.solved_cells,
        "passes": result.passes,
        "grid": flat,
        "error": error,
    }


def write_results_csv(results, output_path: Path):
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "status", "solved_cells", "passes", "grid"])
        for r in results:
            writer.writerow([r["id"], r["status"], r["solved_cells"], r["passes"], r["grid"]])


def report(puzzle_id: str, grid: Grid, result, quiet: bool = False) -> None:
    print(
        f"[{puzzle_id}] {result.status}: {result.solved_cells} of {result.total_cells} solved cells "
        f"({result.solved_percentage:.3f}%) after {result.passes} passes in {result.elapsed_seconds * 1e6:.0f} us"
    )
    if not result.is_solved:
        print(f"[{puzzle_id}] {result.unsolved_cells} cells left unsolved")
    if not quiet:
        print(grid)


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    files = list_puzzle_files(args.input)
    results = []
    solved_grids: Dict[str, Grid] = {}

    iterator = tqdm(files, desc="Solving", unit="puzzle") if len(files) > 1 else files
    for file_path in iterator:
        reset_tracer()
        tracer = get_tracer()
        puzzle_id = file_path.stem

        try:
            grid, result = solve_puzzle(Grid(load_table(file_path)), tracer=tracer)
        except Exception as e:
            print(f"ERROR: Failed to solve puzzle {file_path}: {e}")
            results.append(format_result(puzzle_id, None, error=str(e)))
            continue

        report(puzzle_id, grid, result, quiet=args.quiet)
        results.append(format_result(puzzle_id, grid, result))
        solved_grids[puzzle_id] = grid

        if args.trace and len(files) == 1:
            tracer.to_csv(args.trace)

    if args.expected and len(solved_grids) == 1:
        expected = Grid(load_table(args.expected))
        grid = next(iter(solved_grids.values()))
        print(f"Solved properly: {'Yes' if grid == expected else 'No'}")

    if args.output:
        write_results_csv(results, args.output)
    elif len(files) > 1:
        print(results)
    return results


if __name__ == "__main__":
    main()
