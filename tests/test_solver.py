"""Integration-style tests for the fixed-point solver."""

import pytest

from solver import default_strategies, solve_puzzle
from src.sudoku.grid import Grid
from src.sudoku.model import DuplicateValueError, has_duplicate_values
from src.sudoku.solver_core import SOLVED, STALLED, Solver
from src.sudoku.strategies import LastPossibleValue, RowExclusivity, Strategy
from src.utils.trace import Tracer

from conftest import SOLUTION


def test_solver_solves_cleared_blocks_in_one_pass(diagonal_puzzle, solution):
    grid = Grid(diagonal_puzzle)
    solver = Solver(grid, tracer=Tracer())
    solver.add_strategy(RowExclusivity())
    solver.add_strategy(LastPossibleValue())

    result = solver.solve()

    assert result.status == SOLVED
    assert result.is_solved
    assert result.passes == 1
    assert result.solved_cells == result.total_cells == 81
    assert result.unsolved_cells == 0
    assert result.solved_percentage == pytest.approx(100.0)
    assert grid == Grid(solution)


def test_last_possible_alone_stalls_where_alternation_solves(alternating_puzzle, solution):
    grid = Grid(alternating_puzzle)
    result = Solver(grid, [LastPossibleValue()], tracer=Tracer()).solve()
    assert result.status == STALLED
    # the first pass prunes to a fixed point, the second changes nothing
    assert result.passes == 2
    assert result.unsolved_cells > 0

    grid = Grid(alternating_puzzle)
    tracer = Tracer()
    result = Solver(grid, [RowExclusivity(), LastPossibleValue()], tracer=tracer).solve()
    assert result.status == SOLVED
    assert 1 < result.passes <= 81
    assert grid.values() == solution
    assert tracer.summary()["num_assignments"] > 0


def test_solver_reports_stall_on_empty_grid(empty_table):
    grid = Grid(empty_table)
    tracer = Tracer()
    result = Solver(grid, default_strategies(), tracer=tracer).solve()

    assert result.status == STALLED
    assert not result.is_solved
    assert result.passes == 1
    assert result.unsolved_cells == 81
    assert tracer.summary()["action_counts"]["stalled"] == 1


def test_solver_solves_wiki_puzzle_soundly(wiki_puzzle):
    grid = Grid(wiki_puzzle)
    result = Solver(grid, default_strategies(), tracer=Tracer()).solve()

    assert result.status == SOLVED
    assert result.passes <= 81
    for row in range(9):
        for col in range(9):
            cell = grid.cell(row, col)
            if cell.is_solved():
                assert cell.value == SOLUTION[row][col]
            assert SOLUTION[row][col] in cell.candidates
    assert not any(has_duplicate_values(g.cells) for g in grid.groups())


def test_already_solved_grid_needs_no_pass(solution):
    result = Solver(Grid(solution), default_strategies(), tracer=Tracer()).solve()
    assert result.status == SOLVED
    assert result.passes == 0


def test_solver_without_strategies_stalls(diagonal_puzzle):
    result = Solver(Grid(diagonal_puzzle), tracer=Tracer()).solve()
    assert result.status == STALLED
    assert result.passes == 0
    assert result.solved_cells == 54


def test_max_passes_caps_the_loop(diagonal_puzzle):
    class _SlowPruner(Strategy):
        """Drops one wrong candidate per call and never solves a cell."""

        def run(self, grid, tracer=None):
            for cell in grid.unsolved_cells():
                if len(cell.candidates) > 2:
                    truth = SOLUTION[(cell.id - 1) // 9][(cell.id - 1) % 9]
                    cell.candidates.discard(max(cell.candidates - {truth}))
                    return True
            return False

    result = Solver(Grid(diagonal_puzzle), [_SlowPruner()], max_passes=3, tracer=Tracer()).solve()
    assert result.status == STALLED
    assert result.passes == 3


def test_invalid_puzzle_fails_before_solving(empty_table):
    empty_table[2][1] = 5
    empty_table[2][7] = 5
    with pytest.raises(DuplicateValueError):
        solve_puzzle(empty_table, tracer=Tracer())


def test_solve_puzzle_accepts_tables_grids_and_paths(diagonal_puzzle, tmp_path):
    grid, result = solve_puzzle(diagonal_puzzle, tracer=Tracer())
    assert result.is_solved

    prebuilt = Grid(diagonal_puzzle)
    same, result = solve_puzzle(prebuilt, tracer=Tracer())
    assert same is prebuilt
    assert result.is_solved

    path = tmp_path / "puzzle.txt"
    path.write_text("\n".join("".join(str(v) if v else "." for v in row) for row in diagonal_puzzle))
    grid, result = solve_puzzle(str(path), tracer=Tracer())
    assert result.is_solved
    assert grid.values() == SOLUTION


def test_solve_puzzle_rejects_unknown_input():
    with pytest.raises(TypeError):
        solve_puzzle(42)
