# sudoku_session.py
"""
Déroulé d'une partie côté hôte : génération, saisies, notes, indices, résultat.

Toutes les dépendances (solveur, détecteur, sélecteur d'indices, analyseur,
notes) sont passées explicitement au constructeur ; rien n'est cherché dans
un registre global. Une partie n'est pas thread-safe : un objet par fil.

Après chaque modification : nouveau scan des techniques ; après chaque
saisie ou effacement : nouveau classement.
"""

from __future__ import annotations

from typing import Callable, Iterator, List, Optional
import logging
import random

from sudoku_core import (
    ClueMask,
    Grid,
    GridSolver,
    check_digit,
    check_position,
    copy_grid,
    count_clues,
    format_grid,
)
from sudoku_difficulty import DifficultyProfile, GeneratedPuzzle, Tier, generate
from sudoku_hints import HintResult, HintSelector
from sudoku_notes import CandidateStore
from sudoku_patterns import Finding, PatternDetector
from sudoku_result import GameResult, ResultAnalysis, ResultAnalyzer, is_cell_correct

log = logging.getLogger(__name__)


class SudokuGame:

    def __init__(
        self,
        solver: Optional[GridSolver] = None,
        detector: Optional[PatternDetector] = None,
        hints: Optional[HintSelector] = None,
        analyzer: Optional[ResultAnalyzer] = None,
        notes: Optional[CandidateStore] = None,
        rng: Optional[random.Random] = None,
        on_victory: Optional[Callable[[ResultAnalysis], None]] = None,
    ):
        self.rng = rng
        self.solver = solver if solver is not None else GridSolver(rng)
        self.detector = detector if detector is not None else PatternDetector()
        self.hints = hints if hints is not None else HintSelector(self.detector)
        self.analyzer = analyzer if analyzer is not None else ResultAnalyzer()
        self.notes = notes if notes is not None else CandidateStore()
        self.on_victory = on_victory

        self.profile: Optional[DifficultyProfile] = None
        self.solution: Optional[Grid] = None
        self.puzzle: Optional[Grid] = None
        self.clue_mask: Optional[ClueMask] = None
        self.findings: List[Finding] = []
        self.result: Optional[ResultAnalysis] = None

    # ---------- partie ----------

    def new_game(self, tier: Tier) -> GeneratedPuzzle:
        """Remplace entièrement la partie en cours (solution, puzzle, notes)."""
        gen = generate(tier, rng=self.rng, solver=self.solver)
        self.profile = gen.profile
        self.solution = gen.solution
        self.puzzle = copy_grid(gen.puzzle)
        self.clue_mask = gen.clue_mask
        self.notes.reset(gen.clue_mask)
        self.hints.reset()
        self.result = None
        log.debug("Nouvelle partie [%s], %d indices\n%s",
                  gen.profile.name, gen.clue_count, format_grid(gen.puzzle))
        self._rescan()
        self._classify()
        return gen

    def _require_game(self) -> None:
        if self.solution is None:
            raise RuntimeError("Aucune partie en cours : appeler new_game() d'abord")

    def is_clue(self, r: int, c: int) -> bool:
        self._require_game()
        check_position(r, c)
        return self.clue_mask[r][c]

    @property
    def clue_count(self) -> int:
        self._require_game()
        return sum(1 for row in self.clue_mask for flag in row if flag)

    @property
    def filled_count(self) -> int:
        self._require_game()
        return count_clues(self.puzzle)

    @property
    def status(self) -> Optional[GameResult]:
        return self.result.status if self.result is not None else None

    # ---------- saisies ----------

    def fill_cell(self, r: int, c: int, v: int) -> bool:
        """Pose v en (r, c) ; False si la case est un indice (rien n'est modifié)."""
        self._require_game()
        check_position(r, c)
        check_digit(v)
        if self.clue_mask[r][c]:
            log.warning("Saisie %d ignorée sur l'indice [%d,%d]", v, r, c)
            return False
        self.puzzle[r][c] = v
        self.notes.clear_cell(r, c)
        self._rescan()
        self._classify()
        return True

    def erase_cell(self, r: int, c: int) -> bool:
        self._require_game()
        check_position(r, c)
        if self.clue_mask[r][c]:
            log.warning("Effacement ignoré sur l'indice [%d,%d]", r, c)
            return False
        self.puzzle[r][c] = 0
        self.notes.clear_cell(r, c)
        self._rescan()
        self._classify()
        return True

    def is_entry_correct(self, r: int, c: int) -> bool:
        """Pour l'affichage d'erreur : la valeur posée correspond-elle à la solution ?"""
        self._require_game()
        check_position(r, c)
        return is_cell_correct(r, c, self.puzzle[r][c], self.solution)

    # ---------- notes ----------

    def toggle_note(self, r: int, c: int, v: int) -> bool:
        """
        Bascule une note. Sur une case remplie par le joueur, la valeur est
        d'abord effacée. Retourne True si la note est présente après l'appel.
        """
        self._require_game()
        check_position(r, c)
        check_digit(v)
        if self.clue_mask[r][c]:
            log.warning("Note %d ignorée sur l'indice [%d,%d]", v, r, c)
            return False
        cleared = self.puzzle[r][c] != 0
        if cleared:
            self.puzzle[r][c] = 0
        present = self.notes.toggle_note(r, c, v)
        self._rescan()
        if cleared:
            self._classify()
        return present

    def auto_notes(self) -> int:
        """Bouton "notes auto" : remplace toutes les notes par les candidats des règles."""
        self._require_game()
        added = self.notes.fill_from_grid(self.puzzle)
        self._rescan()
        return added

    def clear_notes(self) -> None:
        self._require_game()
        self.notes.clear_all_notes()
        self._rescan()

    # ---------- indices ----------

    def request_hint(self) -> HintResult:
        self._require_game()
        hint = self.hints.request_hint(self.puzzle, self.notes)
        self.findings = list(self.detector.findings)
        return hint

    # ---------- démo ----------

    def auto_play(self) -> Iterator[ResultAnalysis]:
        """
        Remplit une à une les cases vides avec la solution, en ordre ligne par
        ligne, et rend le classement après chaque saisie. S'arrête à la victoire.
        """
        self._require_game()
        empties = [(r, c) for r in range(9) for c in range(9) if self.puzzle[r][c] == 0]
        log.debug("Auto play : %d cases à remplir", len(empties))
        for (r, c) in empties:
            self.fill_cell(r, c, self.solution[r][c])
            yield self.result
            if self.result.status is GameResult.WON:
                return

    # ---------- interne ----------

    def _rescan(self) -> None:
        self.findings = self.detector.scan(self.puzzle, self.notes)

    def _classify(self) -> None:
        was_won = self.result is not None and self.result.is_won
        self.result = self.analyzer.classify(self.puzzle, self.solution)
        if self.result.is_won and not was_won:
            log.info("Victoire : puzzle %s résolu", self.profile.name)
            if self.on_victory is not None:
                self.on_victory(self.result)
