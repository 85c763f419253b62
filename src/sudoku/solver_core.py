"""Fixed-point solver: runs registered strategies until the grid is solved or stalls."""

import time
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .grid import Grid
from .strategies import Strategy
from src.utils.trace import Tracer, get_tracer

SOLVED = "solved"
STALLED = "stalled"


@dataclass
class SolveResult:
    status: str
    passes: int
    solved_cells: int
    total_cells: int
    elapsed_seconds: float = 0.0

    @property
    def is_solved(self) -> bool:
        return self.status == SOLVED

    @property
    def unsolved_cells(self) -> int:
        return self.total_cells - self.solved_cells

    @property
    def solved_percentage(self) -> float:
        return self.solved_cells * 100.0 / self.total_cells if self.total_cells else 0.0


class Solver:
    """
    Applies strategies in registration order, one outer pass at a time.
    Stops as soon as the grid is solved, or with status "stalled" once a whole
    pass leaves every candidate set untouched. `max_passes` (default: number of
    cells) caps the loop regardless.
    """

    def __init__(
        self,
        grid: Grid,
        strategies: Optional[Iterable[Strategy]] = None,
        max_passes: Optional[int] = None,
        tracer: Optional[Tracer] = None,
    ):
        self.grid = grid
        self.strategies: List[Strategy] = list(strategies or [])
        self.max_passes = max_passes if max_passes is not None else grid.config.total_cells
        self.tracer = tracer

    def add_strategy(self, strategy: Strategy) -> None:
        self.strategies.append(strategy)

    def solve(self) -> SolveResult:
        tracer = self.tracer or get_tracer()
        start = time.perf_counter()
        status, passes = self._run(tracer)

        solved_cells = self.grid.count_solved_cells()
        if status == SOLVED:
            tracer.log_solved(passes, solved_cells)
        return SolveResult(
            status=status,
            passes=passes,
            solved_cells=solved_cells,
            total_cells=len(self.grid.cells),
            elapsed_seconds=time.perf_counter() - start,
        )

    def _run(self, tracer: Tracer) -> Tuple[str, int]:
        if self.grid.is_solved():
            return SOLVED, 0
        if not self.strategies:
            tracer.log_stalled(0, self.grid.count_solved_cells(), reason="No strategies registered")
            return STALLED, 0

        passes = 0
        while passes < self.max_passes:
            passes += 1
            before = self.grid.candidate_count()
            for strategy in self.strategies:
                strategy.run(self.grid, tracer)
                if self.grid.is_solved():
                    tracer.log_pass(passes, self.grid.count_solved_cells())
                    return SOLVED, passes
            tracer.log_pass(passes, self.grid.count_solved_cells())
            if self.grid.candidate_count() == before:
                tracer.log_stalled(passes, self.grid.count_solved_cells())
                return STALLED, passes

        tracer.log_stalled(
            passes, self.grid.count_solved_cells(), reason=f"Reached the limit of {self.max_passes} passes"
        )
        return STALLED, passes
