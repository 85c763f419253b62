"""Top-level solve interface.

Expose `solve_puzzle(puzzle)` that accepts a pre-built Grid, a table of
optional digits, or a path to a puzzle file readable by `src.sudoku.loader`.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from src.sudoku.grid import Grid
from src.sudoku.loader import load_table
from src.sudoku.solver_core import SolveResult, Solver
from src.sudoku.strategies import LastPossibleValue, RowExclusivity, Strategy
from src.utils.trace import Tracer


def default_strategies() -> List[Strategy]:
    return [RowExclusivity(), LastPossibleValue()]


def solve_puzzle(
    puzzle: Any,
    strategies: Optional[Iterable[Strategy]] = None,
    tracer: Optional[Tracer] = None,
) -> Tuple[Grid, SolveResult]:
    """
    Solve a puzzle in place and return the grid with the solver's result.
    Accepts:
      - Grid instances (mutated directly)
      - Tables: a list of rows of digits or None
      - Paths (str or Path) to a .csv/.json/.txt puzzle
    """
    if isinstance(puzzle, Grid):
        grid = puzzle
    elif isinstance(puzzle, (str, Path)):
        grid = Grid(load_table(puzzle))
    elif isinstance(puzzle, (list, tuple)):
        grid = Grid(puzzle)
    else:
        raise TypeError("solve_puzzle expects a Grid, a table of rows, or a puzzle file path")

    solver = Solver(grid, strategies if strategies is not None else default_strategies(), tracer=tracer)
    return grid, solver.solve()


__all__ = ["default_strategies", "solve_puzzle"]
