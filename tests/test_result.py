# tests/test_result.py
import random

import pytest

from sudoku_core import MalformedGridError
from sudoku_difficulty import generate
from sudoku_result import (
    CellError,
    GameResult,
    ResultAnalyzer,
    classify,
    format_time,
    is_cell_correct,
    validate_solution,
)


def test_fully_correct_grid_is_won(solved):
    result = classify(solved, solved)
    assert result.status is GameResult.WON
    assert result.completion_pct == 100.0
    assert result.correct_count == 81
    assert result.incorrect_count == 0
    assert result.errors == []


def test_empty_grid_is_incomplete(blank, solved):
    result = classify(blank, solved)
    assert result.status is GameResult.INCOMPLETE
    assert result.completion_pct == 0.0
    assert result.total_moves == 0


def test_a_wrong_digit_loses_even_mid_puzzle(blank, solved):
    blank[0][0] = 9  # attendu : 5
    result = classify(blank, solved)
    assert result.status is GameResult.LOST
    assert result.errors == [CellError(0, 0, 9, 5)]
    assert result.completion_pct == pytest.approx(100 / 81)


def test_classify_is_idempotent(solved):
    user = [row[:] for row in solved]
    user[3][3] = 0
    user[8][8] = 1
    assert classify(user, solved) == classify(user, solved)


def test_flat_grids_are_accepted(solved):
    flat = [v for row in solved for v in row]
    assert classify(flat, solved).status is GameResult.WON


@pytest.mark.parametrize("bad", [
    [[0] * 9 for _ in range(8)],
    [[0] * 9 for _ in range(9)] + [[0] * 9],
    [0] * 82,
])
def test_malformed_grids_fail_loudly(bad, solved):
    with pytest.raises(MalformedGridError):
        classify(bad, solved)
    with pytest.raises(MalformedGridError):
        classify(solved, bad)


def test_round_trip_from_generated_puzzle():
    solution, puzzle, _mask = generate(3, rng=random.Random(5))
    for r in range(9):
        for c in range(9):
            if puzzle[r][c] == 0:
                puzzle[r][c] = solution[r][c]
    result = classify(puzzle, solution)
    assert result.status is GameResult.WON
    assert result.completion_pct == 100.0
    assert result.incorrect_count == 0


def test_fill_one_by_one_then_break_one_cell():
    gen = generate(0, rng=random.Random(11))
    solution, puzzle, mask = gen
    assert 50 <= gen.clue_count <= 55

    empties = [(r, c) for r in range(9) for c in range(9) if puzzle[r][c] == 0]
    for i, (r, c) in enumerate(empties):
        puzzle[r][c] = solution[r][c]
        result = classify(puzzle, solution)
        if i == len(empties) - 2:
            assert result.status is GameResult.INCOMPLETE
            assert result.incorrect_count == 0
    assert result.status is GameResult.WON
    assert result.completion_pct == 100.0

    r, c = empties[0]
    wrong = solution[r][c] % 9 + 1
    puzzle[r][c] = wrong
    result = classify(puzzle, solution)
    assert result.status is GameResult.LOST
    assert result.incorrect_count == 1
    assert CellError(r, c, wrong, solution[r][c]) in result.errors
    assert not mask[r][c]


def test_report(solved):
    analyzer = ResultAnalyzer()
    assert analyzer.report() == "No result analysed yet."
    analyzer.classify(solved, solved)
    text = analyzer.report(game_time=65, hints_used=2)
    assert "VICTORY" in text
    assert "Completion: 100.0%" in text
    assert "Time Taken: 01:05" in text
    assert "Hints Used: 2" in text
    assert "Perfect! All cells are correct!" in text

    user = [row[:] for row in solved]
    user[1][2] = 7
    text = analyzer.report(analyzer.classify(user, solved))
    assert "DEFEAT" in text
    assert "Position [1, 2]: You entered 7, correct is 2" in text
    assert "Time Taken: N/A" in text


def test_quick_checks(solved):
    assert validate_solution(solved, solved)
    user = [row[:] for row in solved]
    user[0][0] = 0
    assert not validate_solution(user, solved)
    assert is_cell_correct(0, 1, 3, solved)
    assert not is_cell_correct(0, 1, 4, solved)


def test_format_time():
    assert format_time(0) == "N/A"
    assert format_time(59.9) == "00:59"
    assert format_time(600) == "10:00"
