import random

from match3.components.grid import Grid
from match3.components.match import Axis, Match
from match3.components.token import Activity
from match3.systems.match import find_matches
from tests.helpers import load_layout


def _grid(rows):
    grid = Grid(len(rows), 3, rng=random.Random(0))
    load_layout(grid, rows)
    return grid


def test_run_of_five_is_a_single_match():
    grid = _grid([
        "ABCAB",
        "BCABC",
        "AAAAA",
        "ABCAB",
        "BCABC",
    ])
    scan = find_matches(grid)
    assert scan.rows == [Match(origin=(2, 0), axis=Axis.ROW, length=5)]
    assert scan.columns == []
    assert scan.count == 1


def test_run_reaching_end_of_line_is_reported():
    grid = _grid([
        "BCAAA",
        "CABCB",
        "ABCAC",
        "BCABA",
        "CABCB",
    ])
    scan = find_matches(grid)
    assert scan.rows == [Match(origin=(0, 2), axis=Axis.ROW, length=3)]


def test_column_match_origin_is_bottom_cell():
    grid = _grid([
        "ABCAB",
        "BCBBC",
        "CABCA",
        "ABBAB",
        "BCBBC",
    ])
    # Column 2 reads C,B,B,B,B bottom-up.
    scan = find_matches(grid)
    assert scan.rows == []
    assert scan.columns == [Match(origin=(1, 2), axis=Axis.COLUMN, length=4)]
    assert Match(origin=(1, 2), axis=Axis.COLUMN, length=4).cells() == [(1, 2), (2, 2), (3, 2), (4, 2)]


def test_two_separate_runs_in_one_row():
    grid = _grid([
        "AAABBBC",
        "BCABCAB",
        "CABCABC",
        "ABCABCA",
        "BCABCAB",
        "CABCABC",
        "ABCABCA",
    ])
    scan = find_matches(grid)
    assert scan.rows == [
        Match(origin=(0, 0), axis=Axis.ROW, length=3),
        Match(origin=(0, 3), axis=Axis.ROW, length=3),
    ]


def test_runs_of_two_do_not_match():
    grid = _grid([
        "AABBC",
        "BCABC",
        "CABCA",
        "ABCAB",
        "BCABC",
    ])
    assert not find_matches(grid)


def test_gaps_break_runs():
    grid = _grid([
        "AA.AA",
        "BCABC",
        "CABCA",
        "ABCAB",
        "BCABC",
    ])
    assert not find_matches(grid)


def test_wildcards_never_match():
    grid = _grid([
        "A*AAB",
        "BCABC",
        "CABCA",
        "ABCAB",
        "BCABC",
    ])
    scan = find_matches(grid)
    assert scan.rows == []


def test_busy_tokens_are_ignored():
    grid = _grid([
        "AAABC",
        "BCABC",
        "CABCA",
        "ABCAB",
        "BCABC",
    ])
    grid.get(0, 1).activity = Activity.FALLING
    assert not find_matches(grid)
    grid.get(0, 1).activity = Activity.IDLE
    assert find_matches(grid).rows == [Match(origin=(0, 0), axis=Axis.ROW, length=3)]


def test_scan_does_not_mutate_grid():
    grid = _grid([
        "AAABC",
        "BCABC",
        "CABCA",
        "ABCAB",
        "BCABC",
    ])
    before = [grid.get(r, c) for r, c in grid.positions()]
    find_matches(grid)
    find_matches(grid)
    assert [grid.get(r, c) for r, c in grid.positions()] == before
