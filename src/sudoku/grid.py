"""Grid: owns every cell and the row/column/block groups built over them."""

from typing import Any, List, Optional, Sequence

from .model import (
    SUDOKU_9X9,
    Cell,
    Digit,
    GridConfig,
    GridShapeError,
    Group,
    GroupKind,
    Table,
)


def validate_shape(table: Sequence[Sequence[Optional[Digit]]], config: GridConfig = SUDOKU_9X9) -> None:
    """Raise GridShapeError unless `table` is `length` rows of `length` digits or None."""
    if len(table) != config.length:
        raise GridShapeError(f"Expected {config.length} rows, got {len(table)}")
    for row_num, row in enumerate(table, start=1):
        if len(row) != config.length:
            raise GridShapeError(f"Row {row_num}: expected {config.length} values, got {len(row)}")
        for value in row:
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value not in config.digits:
                raise GridShapeError(f"Row {row_num}: {value!r} is not a digit in 1..{config.length}")


class Grid:
    """
    A puzzle instance. Cells are created once, then shared by exactly one row,
    one column, and one block; the topology never changes after construction.
    Building fails as a whole if any group already holds a duplicate value.
    """

    def __init__(self, table: Sequence[Sequence[Optional[Digit]]], config: GridConfig = SUDOKU_9X9):
        validate_shape(table, config)
        self.config = config
        self.cells: List[Cell] = self._populate_cells(table)
        self.rows: List[Group] = self._populate_rows()
        self.columns: List[Group] = self._populate_columns()
        self.blocks: List[Group] = self._populate_blocks()
        self._link_cells()

    def _populate_cells(self, table: Sequence[Sequence[Optional[Digit]]]) -> List[Cell]:
        n = self.config.length
        return [
            Cell(id=row * n + col + 1, value=table[row][col], config=self.config)
            for row in range(n)
            for col in range(n)
        ]

    def _populate_rows(self) -> List[Group]:
        n = self.config.length
        return [
            Group(row + 1, GroupKind.ROW, self.cells[row * n:(row + 1) * n])
            for row in range(n)
        ]

    def _populate_columns(self) -> List[Group]:
        n = self.config.length
        return [
            Group(col + 1, GroupKind.COLUMN, self.cells[col::n])
            for col in range(n)
        ]

    def _populate_blocks(self) -> List[Group]:
        cfg = self.config
        members: List[List[Cell]] = [[] for _ in range(cfg.number_of_blocks)]
        # Row-major scan keeps each block's members in reading order.
        for row in range(cfg.length):
            for col in range(cfg.length):
                members[cfg.block_index(row, col)].append(self.cells[row * cfg.length + col])
        return [Group(idx + 1, GroupKind.BLOCK, cells) for idx, cells in enumerate(members)]

    def _link_cells(self) -> None:
        n = self.config.length
        for row in range(n):
            for col in range(n):
                self.cells[row * n + col].attach(
                    self.rows[row],
                    self.columns[col],
                    self.blocks[self.config.block_index(row, col)],
                )

    def cell(self, row: int, col: int) -> Cell:
        """Cell at 0-based (row, col)."""
        return self.cells[row * self.config.length + col]

    def groups(self) -> List[Group]:
        return [*self.rows, *self.columns, *self.blocks]

    def is_solved(self) -> bool:
        return all(cell.is_solved() for cell in self.cells)

    def solved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if cell.is_solved()]

    def unsolved_cells(self) -> List[Cell]:
        return [cell for cell in self.cells if not cell.is_solved()]

    def count_solved_cells(self) -> int:
        return sum(1 for cell in self.cells if cell.is_solved())

    def solved_percentage(self) -> float:
        return self.count_solved_cells() * 100.0 / len(self.cells)

    def candidate_count(self) -> int:
        """Total size of all candidate sets; strictly decreases whenever a strategy changes anything."""
        return sum(len(cell.candidates) for cell in self.cells)

    def values(self) -> Table:
        n = self.config.length
        return [[cell.value for cell in self.cells[row * n:(row + 1) * n]] for row in range(n)]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        if self.config != other.config:
            return False
        return all(a.value == b.value for a, b in zip(self.cells, other.cells))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"Grid({self.count_solved_cells()}/{len(self.cells)} solved, "
            f"{self.config.length}x{self.config.length})"
        )

    def __str__(self) -> str:
        cfg = self.config
        # One dash segment per block column, e.g. "------+-------+------" for 9x9.
        if cfg.blocks_per_row == 1:
            widths = [2 * cfg.block_width - 1]
        else:
            edge, inner = 2 * cfg.block_width, 2 * cfg.block_width + 1
            widths = [edge] + [inner] * (cfg.blocks_per_row - 2) + [edge]
        separator = "+".join("-" * w for w in widths)
        lines = []
        for row in range(cfg.length):
            if row % cfg.block_height == 0 and row != 0:
                lines.append(separator)
            parts = []
            for col in range(cfg.length):
                if col % cfg.block_width == 0 and col != 0:
                    parts.append("|")
                parts.append(str(self.cell(row, col)))
            lines.append(" ".join(parts))
        return "\n".join(lines)
