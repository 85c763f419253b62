"""Sudoku grid model, elimination strategies, and the fixed-point solver."""

from .model import (
    SUDOKU_9X9,
    Cell,
    DuplicateValueError,
    GridConfig,
    GridShapeError,
    Group,
    GroupKind,
    SudokuError,
)
from .grid import Grid, validate_shape
from .strategies import (
    BlockExclusivity,
    ColumnExclusivity,
    LastPossibleValue,
    RowExclusivity,
    Strategy,
)
from .solver_core import SolveResult, Solver
from .loader import load_table, load_puzzles

__all__ = [
    "SUDOKU_9X9",
    "Cell",
    "DuplicateValueError",
    "GridConfig",
    "GridShapeError",
    "Group",
    "GroupKind",
    "SudokuError",
    "Grid",
    "validate_shape",
    "Strategy",
    "RowExclusivity",
    "ColumnExclusivity",
    "BlockExclusivity",
    "LastPossibleValue",
    "Solver",
    "SolveResult",
    "load_table",
    "load_puzzles",
]
