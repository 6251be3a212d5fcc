# sudoku_notes.py
"""
Notes du joueur (candidats déclarés) case par case.

Le moteur ne dérive jamais ces notes tout seul : elles sont posées et retirées
par l'hôte, sur action du joueur. fill_from_grid() n'existe que pour le bouton
"notes auto" côté hôte, qui reste une action explicite du joueur.
"""

from __future__ import annotations
import logging
from typing import Dict, Optional, Set

from sudoku_core import (
    Grid,
    ClueMask,
    Pos,
    GRID_SIZE,
    cell_candidates,
    check_digit,
    check_position,
)

log = logging.getLogger(__name__)


class CandidateStore:
    """
    Ensemble de candidats par case, uniquement pour les cases vides non-indices.

    Les cases indices n'acceptent jamais de note. Une case remplie doit être
    vidée de ses notes par l'hôte (clear_cell) au moment où il la remplit.
    """

    def __init__(self, clue_mask: Optional[ClueMask] = None):
        self._notes: Dict[Pos, Set[int]] = {}
        self._clues: Set[Pos] = set()
        if clue_mask is not None:
            self.reset(clue_mask)

    def reset(self, clue_mask: Optional[ClueMask] = None) -> None:
        """Nouveau puzzle : toutes les notes sont effacées, nouveau masque d'indices."""
        self._notes.clear()
        self._clues = set()
        if clue_mask is not None:
            self._clues = {
                (r, c) for r in range(GRID_SIZE) for c in range(GRID_SIZE) if clue_mask[r][c]
            }

    def is_clue(self, r: int, c: int) -> bool:
        return (r, c) in self._clues

    # ---------- mutations ----------

    def record_note(self, r: int, c: int, v: int) -> bool:
        """Ajoute v aux notes de (r, c). Retourne True si la note a été ajoutée."""
        check_position(r, c)
        check_digit(v)
        if (r, c) in self._clues:
            log.warning("Note %d ignorée sur l'indice [%d,%d]", v, r, c)
            return False
        notes = self._notes.setdefault((r, c), set())
        if v in notes:
            return False
        notes.add(v)
        return True

    def clear_note(self, r: int, c: int, v: int) -> bool:
        """Retire v des notes de (r, c). Retourne True si une note a été retirée."""
        check_position(r, c)
        check_digit(v)
        notes = self._notes.get((r, c))
        if not notes or v not in notes:
            return False
        notes.discard(v)
        if not notes:
            del self._notes[(r, c)]
        return True

    def toggle_note(self, r: int, c: int, v: int) -> bool:
        """Bascule la note v ; retourne True si la note est présente après l'appel."""
        if self.has_note(r, c, v):
            self.clear_note(r, c, v)
            return False
        return self.record_note(r, c, v)

    def clear_cell(self, r: int, c: int) -> None:
        check_position(r, c)
        self._notes.pop((r, c), None)

    def clear_all_notes(self) -> None:
        self._notes.clear()

    def fill_from_grid(self, grid: Grid) -> int:
        """
        Notes auto : efface tout puis note, pour chaque case vide non-indice,
        les chiffres absents de sa ligne, sa colonne et son bloc.
        Retourne le nombre de notes posées.
        """
        self.clear_all_notes()
        added = 0
        for r in range(GRID_SIZE):
            for c in range(GRID_SIZE):
                if grid[r][c] != 0 or (r, c) in self._clues:
                    continue
                cands = cell_candidates(grid, r, c)
                if cands:
                    self._notes[(r, c)] = cands
                    added += len(cands)
        log.debug("Notes auto : %d notes sur %d cases", added, len(self._notes))
        return added

    # ---------- lecture ----------

    def has_note(self, r: int, c: int, v: int) -> bool:
        return v in self._notes.get((r, c), ())

    def notes(self, r: int, c: int) -> Set[int]:
        """Copie des notes de la case (ensemble vide si aucune)."""
        return set(self._notes.get((r, c), ()))

    def as_dict(self) -> Dict[Pos, Set[int]]:
        """Copie {(r, c): {notes}} des seules cases qui portent des notes."""
        return {pos: set(vals) for pos, vals in self._notes.items()}

    def note_count(self) -> int:
        return sum(len(vals) for vals in self._notes.values())

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, pos) -> bool:
        return pos in self._notes
