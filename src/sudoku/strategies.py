"""Deterministic elimination rules applied to a grid until they stop making progress."""

from abc import ABC, abstractmethod
from typing import List, Optional, Set

from .grid import Grid
from .model import Cell, Group
from src.utils.trace import Tracer, get_tracer


class Strategy(ABC):
    """
    A stateless rule. `run` mutates candidate sets and values in place, loops
    to its own fixed point, and returns True if it changed anything.
    Rules only ever shrink candidate sets and never unsolve a cell.
    """

    name = "Strategy"

    @abstractmethod
    def run(self, grid: Grid, tracer: Optional[Tracer] = None) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class GroupExclusivity(Strategy):
    """
    Hidden single: within one group, if a digit that is not placed yet fits
    only one unsolved cell, that cell takes it.
    """

    name = "GroupExclusivity"

    @abstractmethod
    def groups(self, grid: Grid) -> List[Group]:
        raise NotImplementedError

    def run(self, grid: Grid, tracer: Optional[Tracer] = None) -> bool:
        tracer = tracer or get_tracer()
        changed = False
        iterations = 0
        while True:
            iterations += 1
            progress_made = False
            for group in self.groups(grid):
                placed = group.solved_values()
                for digit in grid.config.digits:
                    if digit in placed:
                        continue
                    possible = [c for c in group.unsolved_cells() if digit in c.candidates]
                    if len(possible) == 1:
                        cell = possible[0]
                        cell.set_value(digit)
                        placed.add(digit)
                        tracer.log_assign(
                            self.name, cell.id, digit, reason=f"Only place for {digit} in {group.kind.value}-{group.id}"
                        )
                        progress_made = True
            if not progress_made:
                break
            changed = True
        tracer.log_strategy_run(self.name, iterations, grid.count_solved_cells())
        return changed


class RowExclusivity(GroupExclusivity):
    name = "RowExclusivity"

    def groups(self, grid: Grid) -> List[Group]:
        return grid.rows


class ColumnExclusivity(GroupExclusivity):
    name = "ColumnExclusivity"

    def groups(self, grid: Grid) -> List[Group]:
        return grid.columns


class BlockExclusivity(GroupExclusivity):
    name = "BlockExclusivity"

    def groups(self, grid: Grid) -> List[Group]:
        return grid.blocks


def _peer_values(cell: Cell) -> Set[int]:
    """Digits already solved in the cell's row, column, and block, the cell itself excluded."""
    values: Set[int] = set()
    for other in cell.peers():
        if other.value is not None:
            values.add(other.value)
    return values


class LastPossibleValue(Strategy):
    """
    Naked single: strike every digit already solved among a cell's peers; a
    cell left with one candidate is solved.
    """

    name = "LastPossibleValue"

    def run(self, grid: Grid, tracer: Optional[Tracer] = None) -> bool:
        tracer = tracer or get_tracer()
        changed = False
        iterations = 0
        while True:
            iterations += 1
            progress_made = False
            for cell in grid.unsolved_cells():
                removed = _peer_values(cell) & cell.candidates
                if not removed:
                    continue
                changed = True
                became_solved = cell.exclude(removed)
                tracer.log_exclusion(self.name, cell.id, removed, cell.candidates)
                if became_solved:
                    tracer.log_cell_solved(self.name, cell.id, cell.value)
                    progress_made = True
            if not progress_made:
                break
        tracer.log_strategy_run(self.name, iterations, grid.count_solved_cells())
        return changed
