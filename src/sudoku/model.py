"""Sudoku core data structures: geometry config, cells, and groups."""

import weakref
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Set, Tuple, Union

Digit = int
Table = List[List[Optional[Digit]]]


class SudokuError(ValueError):
    """Base class for contract violations raised by the core."""


class DuplicateValueError(SudokuError):
    """Two cells of one group already hold the same solved value."""


class GridShapeError(SudokuError):
    """The input table does not match the configured geometry."""


@dataclass(frozen=True)
class GridConfig:
    """
    Geometry of a grid. `length` is the number of rows, columns, and digits;
    blocks are `block_width` columns wide and `block_height` rows tall.
    """

    length: int = 9
    block_width: int = 3
    block_height: int = 3

    def __post_init__(self) -> None:
        if self.length <= 0 or self.block_width <= 0 or self.block_height <= 0:
            raise ValueError("Grid dimensions must be positive")
        if self.block_width * self.block_height != self.length:
            raise ValueError(
                f"Blocks of {self.block_width}x{self.block_height} do not tile a grid of {self.length}"
            )

    @property
    def digits(self) -> range:
        return range(1, self.length + 1)

    @property
    def total_cells(self) -> int:
        return self.length * self.length

    @property
    def cells_in_block(self) -> int:
        return self.block_width * self.block_height

    @property
    def blocks_per_row(self) -> int:
        return self.length // self.block_width

    @property
    def number_of_blocks(self) -> int:
        return (self.length // self.block_height) * self.blocks_per_row

    def block_index(self, row: int, col: int) -> int:
        """0-based block index of the cell at 0-based (row, col)."""
        return (row // self.block_height) * self.blocks_per_row + col // self.block_width


SUDOKU_9X9 = GridConfig()


class GroupKind(Enum):
    ROW = "Row"
    COLUMN = "Col"
    BLOCK = "Block"


@dataclass(eq=False)
class Cell:
    id: int
    value: Optional[Digit] = None
    candidates: Set[Digit] = field(default_factory=set)
    config: GridConfig = field(default=SUDOKU_9X9, repr=False)

    def __post_init__(self) -> None:
        if self.value is not None:
            self.candidates = {self.value}
        elif self.candidates:
            self.candidates = set(self.candidates)
        else:
            self.candidates = set(self.config.digits)
        self._row: Optional[weakref.ref] = None
        self._column: Optional[weakref.ref] = None
        self._block: Optional[weakref.ref] = None

    def is_solved(self) -> bool:
        return self.value is not None

    def set_value(self, value: Optional[Digit]) -> None:
        """Assign a value; a cell that is already solved keeps its value."""
        if self.value is not None:
            return
        self.value = value
        self.candidates = {value} if value is not None else set(self.config.digits)

    def exclude(self, values: Union[Digit, Iterable[Digit]]) -> bool:
        """
        Drop `values` from the candidates. Returns True when the removal left a
        single candidate and the cell became solved with it.
        """
        if self.value is not None:
            return False
        if isinstance(values, int):
            values = (values,)
        self.candidates.difference_update(values)
        if len(self.candidates) == 1:
            self.value = next(iter(self.candidates))
            return True
        return False

    def sorted_candidates(self) -> Tuple[Digit, ...]:
        return tuple(sorted(self.candidates))

    def attach(self, row: "Group", column: "Group", block: "Group") -> None:
        self._row = weakref.ref(row)
        self._column = weakref.ref(column)
        self._block = weakref.ref(block)

    @property
    def row(self) -> Optional["Group"]:
        return self._row() if self._row is not None else None

    @property
    def column(self) -> Optional["Group"]:
        return self._column() if self._column is not None else None

    @property
    def block(self) -> Optional["Group"]:
        return self._block() if self._block is not None else None

    def groups(self) -> List["Group"]:
        return [g for g in (self.row, self.column, self.block) if g is not None]

    def peers(self) -> List["Cell"]:
        """Other cells sharing a row, column, or block with this one, each listed once."""
        seen: Set[int] = {self.id}
        result: List[Cell] = []
        for group in self.groups():
            for other in group.cells:
                if other.id not in seen:
                    seen.add(other.id)
                    result.append(other)
        return result

    def describe(self) -> str:
        shown = self.value if self.value is not None else "*"
        return f"Cell {{id: {self.id}, value: {shown}}}"

    def __str__(self) -> str:
        return str(self.value) if self.value is not None else "*"


def has_duplicate_values(cells: Iterable[Cell]) -> bool:
    seen: Set[Digit] = set()
    for cell in cells:
        if cell.value is None:
            continue
        if cell.value in seen:
            return True
        seen.add(cell.value)
    return False


@dataclass(eq=False)
class Group:
    """
    A row, column, or block. Members are shared with the other two group kinds;
    the grid owns both the cells and the groups.
    """

    id: int
    kind: GroupKind
    cells: List[Cell]

    def __post_init__(self) -> None:
        self.cells = list(self.cells)
        expected = self.cells[0].config.length if self.cells else SUDOKU_9X9.length
        if len(self.cells) != expected:
            raise GridShapeError(f"{self.kind.value}-{self.id} needs {expected} cells, got {len(self.cells)}")
        if has_duplicate_values(self.cells):
            raise DuplicateValueError(f"{self.kind.value}-{self.id} has duplicates: {self}")

    def is_solved(self) -> bool:
        return all(cell.is_solved() for cell in self.cells)

    def solved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.is_solved()]

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if not cell.is_solved()]

    def solved_values(self) -> Set[Digit]:
        return {cell.value for cell in self.cells if cell.value is not None}

    def describe(self) -> str:
        ids = ", ".join(str(cell.id) for cell in self.cells)
        return f"{self.kind.value}-{self.id} [{ids}]"

    def __str__(self) -> str:
        values = " ".join(str(cell) for cell in self.cells)
        return f"{self.kind.value}-{self.id} [{values}]"
