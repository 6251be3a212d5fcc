# sudoku_difficulty.py
"""
Profils de difficulté et découpe d'un puzzle jouable à partir d'une grille complète.

Chaque niveau (0..8) correspond à une fourchette inclusive d'indices [min, max].
La découpe tire une cible uniforme dans la fourchette puis vide des cases au hasard.
Aucune vérification d'unicité de la solution : la table ci-dessous est réglée
pour une suppression purement aléatoire.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Dict, Optional, Union
import logging
import random

from sudoku_core import (
    Grid,
    ClueMask,
    GRID_SIZE,
    GridSolver,
    as_grid,
    copy_grid,
    count_clues,
)

log = logging.getLogger(__name__)


class InvalidDifficultyTier(ValueError):
    """Niveau demandé hors de la table des profils."""


# ====================================================
#   PROFILS
# ====================================================

@dataclass(frozen=True)
class DifficultyProfile:
    tier: int
    name: str
    min_clues: int
    max_clues: int

    @property
    def clue_range(self) -> Tuple[int, int]:
        return self.min_clues, self.max_clues


PROFILES: Tuple[DifficultyProfile, ...] = (
    DifficultyProfile(0, "very_easy", 50, 55),
    DifficultyProfile(1, "easy", 45, 50),
    DifficultyProfile(2, "medium", 40, 45),
    DifficultyProfile(3, "hard", 35, 40),
    DifficultyProfile(4, "very_hard", 30, 35),
    DifficultyProfile(5, "expert", 25, 30),
    DifficultyProfile(6, "master", 20, 25),
    DifficultyProfile(7, "extreme", 18, 20),
    DifficultyProfile(8, "legendary", 17, 18),
)

PROFILES_BY_NAME: Dict[str, DifficultyProfile] = {p.name: p for p in PROFILES}

Tier = Union[int, str, DifficultyProfile]


def get_profile(tier: Tier) -> DifficultyProfile:
    """Résout un niveau (ordinal, nom ou profil) ; lève InvalidDifficultyTier sinon."""
    if isinstance(tier, DifficultyProfile):
        if not 0 <= tier.min_clues <= tier.max_clues <= GRID_SIZE * GRID_SIZE:
            raise InvalidDifficultyTier(
                f"Profil {tier.name!r} : plage d'indices invalide {tier.clue_range}"
            )
        return tier
    if isinstance(tier, str):
        try:
            return PROFILES_BY_NAME[tier]
        except KeyError:
            raise InvalidDifficultyTier(f"Niveau inconnu : {tier!r}") from None
    # bool est un int : on le refuse explicitement
    if isinstance(tier, int) and not isinstance(tier, bool) and 0 <= tier < len(PROFILES):
        return PROFILES[tier]
    raise InvalidDifficultyTier(f"Niveau hors table (0..{len(PROFILES) - 1}) : {tier!r}")


# ====================================================
#   DÉCOUPE DU PUZZLE
# ====================================================

@dataclass
class GeneratedPuzzle:
    """Paire solution / puzzle créée par un seul appel de génération."""
    solution: Grid
    puzzle: Grid
    clue_mask: ClueMask
    profile: DifficultyProfile

    @property
    def clue_count(self) -> int:
        return count_clues(self.puzzle)

    def __iter__(self):
        # permet : solution, puzzle, clue_mask = generate(tier)
        return iter((self.solution, self.puzzle, self.clue_mask))


def clue_mask_of(puzzle: Grid) -> ClueMask:
    return [[v != 0 for v in row] for row in puzzle]


def carve_puzzle(
    solution: Grid,
    tier: Tier,
    rng: Optional[random.Random] = None,
) -> Tuple[Grid, ClueMask]:
    """
    Copie la solution puis vide 81 - cible cases, cible tirée uniformément
    dans [min_clues, max_clues] du profil. Retourne (puzzle, masque des indices).
    """
    rng = rng if rng is not None else random
    solution = as_grid(solution, "solution")
    profile = get_profile(tier)

    puzzle = copy_grid(solution)
    target = rng.randint(profile.min_clues, profile.max_clues)
    to_remove = GRID_SIZE * GRID_SIZE - target

    cells = [(r, c) for r in range(9) for c in range(9)]
    rng.shuffle(cells)
    for (r, c) in cells[:to_remove]:
        puzzle[r][c] = 0

    log.debug(
        "[%s] cible=%d indices, %d cases vidées",
        profile.name, target, to_remove,
    )
    return puzzle, clue_mask_of(puzzle)


def generate(
    tier: Tier,
    rng: Optional[random.Random] = None,
    solver: Optional[GridSolver] = None,
) -> GeneratedPuzzle:
    """
    Génère une solution complète et le puzzle associé au niveau demandé.
    Le niveau est validé avant tout travail de génération.
    """
    profile = get_profile(tier)
    if solver is None:
        solver = GridSolver(rng)
    elif rng is None:
        rng = solver.rng
    solution = solver.generate()
    puzzle, mask = carve_puzzle(solution, profile, rng)
    return GeneratedPuzzle(solution=solution, puzzle=puzzle, clue_mask=mask, profile=profile)
