"""Shared puzzles for the test suite."""

import copy

import pytest

SOLUTION = [
    [5, 3, 4, 6, 7, 8, 9, 1, 2],
    [6, 7, 2, 1, 9, 5, 3, 4, 8],
    [1, 9, 8, 3, 4, 2, 5, 6, 7],
    [8, 5, 9, 7, 6, 1, 4, 2, 3],
    [4, 2, 6, 8, 5, 3, 7, 9, 1],
    [7, 1, 3, 9, 2, 4, 8, 5, 6],
    [9, 6, 1, 5, 3, 7, 2, 8, 4],
    [2, 8, 7, 4, 1, 9, 6, 3, 5],
    [3, 4, 5, 2, 8, 6, 1, 7, 9],
]

# Wikipedia's example puzzle; SOLUTION is its unique solution.
WIKI_PUZZLE = [
    [5, 3, None, None, 7, None, None, None, None],
    [6, None, None, 1, 9, 5, None, None, None],
    [None, 9, 8, None, None, None, None, 6, None],
    [8, None, None, None, 6, None, None, None, 3],
    [4, None, None, 8, None, 3, None, None, 1],
    [7, None, None, None, 2, None, None, None, 6],
    [None, 6, None, None, None, None, 2, 8, None],
    [None, None, None, 4, 1, 9, None, None, 5],
    [None, None, None, None, 8, None, None, 7, 9],
]


# Needs RowExclusivity: LastPossibleValue alone stalls on it.
ALTERNATING_PUZZLE = [
    [None if ch == "." else int(ch) for ch in line]
    for line in (
        ".3.6..9..",
        ".721.....",
        "1..34....",
        "8.97...2.",
        ".......91",
        "..3..48..",
        ".6..3.2.4",
        "2...196..",
        "..5..617.",
    )
]


def blank_blocks(table, blocks):
    """Copy of `table` with every cell of the given 0-based 3x3 blocks unknown."""
    result = copy.deepcopy(table)
    for row in range(9):
        for col in range(9):
            if (row // 3) * 3 + col // 3 in blocks:
                result[row][col] = None
    return result


@pytest.fixture
def solution():
    return copy.deepcopy(SOLUTION)


@pytest.fixture
def diagonal_puzzle():
    """The solution with the three diagonal blocks cleared (27 unknowns)."""
    return blank_blocks(SOLUTION, {0, 4, 8})


@pytest.fixture
def alternating_puzzle():
    return copy.deepcopy(ALTERNATING_PUZZLE)


@pytest.fixture
def wiki_puzzle():
    return copy.deepcopy(WIKI_PUZZLE)


@pytest.fixture
def empty_table():
    return [[None] * 9 for _ in range(9)]
