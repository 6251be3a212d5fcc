# sudoku_result.py
"""
Comparaison d'une grille joueur avec la solution : gagné / perdu / en cours.

Fonction pure : rien n'est gardé d'un appel à l'autre, deux appels sur les
mêmes grilles donnent exactement le même résultat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence
import logging

from sudoku_core import GRID_SIZE, Grid, as_grid

log = logging.getLogger(__name__)

TOTAL_CELLS = GRID_SIZE * GRID_SIZE


class GameResult(Enum):
    INCOMPLETE = "incomplete"
    WON = "won"
    LOST = "lost"


_RESULT_TEXT = {
    GameResult.WON: "VICTORY! Puzzle solved correctly!",
    GameResult.LOST: "DEFEAT! There are errors in your solution.",
    GameResult.INCOMPLETE: "Puzzle not completed yet.",
}


@dataclass(frozen=True)
class CellError:
    row: int
    col: int
    entered: int
    expected: int

    def __str__(self) -> str:
        return f"Error at [{self.row},{self.col}]: entered {self.entered}, expected {self.expected}"


@dataclass(frozen=True)
class ResultAnalysis:
    status: GameResult
    completion_pct: float
    correct_count: int
    incorrect_count: int
    total_moves: int
    errors: List[CellError] = field(default_factory=list)

    @property
    def is_won(self) -> bool:
        return self.status is GameResult.WON


def classify(user_grid: Sequence, solution_grid: Sequence) -> ResultAnalysis:
    """
    Chaque case non vide de la grille joueur compte un coup ; bonne valeur ->
    correcte, mauvaise -> erreur (ligne, colonne, saisie, attendue).

    Gagné ssi 81 coups sans erreur ; perdu dès qu'il y a une erreur, même en
    cours de partie ; sinon en cours.
    """
    user = as_grid(user_grid, "user_grid")
    solution = as_grid(solution_grid, "solution_grid")

    total_moves = 0
    correct = 0
    errors: List[CellError] = []
    for r in range(GRID_SIZE):
        for c in range(GRID_SIZE):
            v = user[r][c]
            if v == 0:
                continue
            total_moves += 1
            if v == solution[r][c]:
                correct += 1
            else:
                errors.append(CellError(r, c, v, solution[r][c]))

    if total_moves == TOTAL_CELLS and not errors:
        status = GameResult.WON
    elif errors:
        status = GameResult.LOST
    else:
        status = GameResult.INCOMPLETE

    return ResultAnalysis(
        status=status,
        completion_pct=total_moves / TOTAL_CELLS * 100.0,
        correct_count=correct,
        incorrect_count=len(errors),
        total_moves=total_moves,
        errors=errors,
    )


def validate_solution(user_grid: Sequence, solution_grid: Sequence) -> bool:
    """Vérification rapide : grilles identiques case par case."""
    return as_grid(user_grid, "user_grid") == as_grid(solution_grid, "solution_grid")


def is_cell_correct(r: int, c: int, value: int, solution_grid: Grid) -> bool:
    return value == solution_grid[r][c]


def format_time(seconds: float) -> str:
    if seconds <= 0:
        return "N/A"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class ResultAnalyzer:
    """Classement + rapport texte ; garde seulement le dernier résultat pour affichage."""

    def __init__(self):
        self.last: Optional[ResultAnalysis] = None

    def classify(self, user_grid: Sequence, solution_grid: Sequence) -> ResultAnalysis:
        self.last = classify(user_grid, solution_grid)
        log.debug(
            "Résultat : %s (%.1f%%, %d erreur(s))",
            self.last.status.value, self.last.completion_pct, self.last.incorrect_count,
        )
        return self.last

    def report(self, analysis: Optional[ResultAnalysis] = None,
               game_time: float = 0.0, hints_used: int = 0) -> str:
        analysis = analysis if analysis is not None else self.last
        if analysis is None:
            return "No result analysed yet."

        lines = [
            "=== SUDOKU RESULT ANALYSIS ===",
            "",
            f"Final Result: {_RESULT_TEXT[analysis.status]}",
            f"Completion: {analysis.completion_pct:.1f}%",
            f"Time Taken: {format_time(game_time)}",
            f"Hints Used: {hints_used}",
            "",
            "--- Cell Statistics ---",
            f"Total Moves: {analysis.total_moves}",
            f"Correct Cells: {analysis.correct_count}",
            f"Incorrect Cells: {analysis.incorrect_count}",
            "",
        ]
        if analysis.errors:
            lines.append("--- Errors Found ---")
            for e in analysis.errors:
                lines.append(
                    f"Position [{e.row}, {e.col}]: You entered {e.entered}, correct is {e.expected}"
                )
        elif analysis.is_won:
            lines.append("Perfect! All cells are correct!")
        return "\n".join(lines) + "\n"

    def reset(self) -> None:
        self.last = None
