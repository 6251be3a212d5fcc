# sudoku_core.py
"""
Moteur Sudoku commun :
- grille 9x9
- génération d'une grille complète (blocs diagonaux + backtracking)
- test de placement
- UNITS / PEERS
- aperçu texte
"""

from __future__ import annotations
import logging
import random
from typing import List, Tuple, Dict, Set, Sequence, Optional

log = logging.getLogger(__name__)

Grid = List[List[int]]
Pos = Tuple[int, int]
ClueMask = List[List[bool]]

GRID_SIZE = 9
BOX_SIZE = 3
DIGITS = tuple(range(1, GRID_SIZE + 1))


class MalformedGridError(ValueError):
    """Grille qui n'est pas 9x9 (ou 81 valeurs) ou qui contient autre chose que 0..9."""


# ---------- UNITS & PEERS communs ----------

ROWS: List[List[Pos]] = [[(r, c) for c in range(9)] for r in range(9)]
COLS: List[List[Pos]] = [[(r, c) for r in range(9)] for c in range(9)]
BOXES: List[List[Pos]] = [
    [(br + dr, bc + dc) for dr in range(3) for dc in range(3)]
    for br in range(0, 9, 3)
    for bc in range(0, 9, 3)
]
UNITS: List[List[Pos]] = ROWS + COLS + BOXES
PEERS: Dict[Pos, Set[Pos]] = {}

# Voisins de chaque case
for r in range(9):
    for c in range(9):
        peers = set()
        peers |= {(r, cc) for cc in range(9) if cc != c}
        peers |= {(rr, c) for rr in range(9) if rr != r}
        br, bc = 3 * (r // 3), 3 * (c // 3)
        peers |= {
            (br + dr, bc + dc)
            for dr in range(3)
            for dc in range(3)
            if (br + dr, bc + dc) != (r, c)
        }
        PEERS[(r, c)] = peers


def box_of(r: int, c: int) -> Tuple[int, int]:
    """Index (ligne, colonne) du bloc 3x3 contenant la case."""
    return r // BOX_SIZE, c // BOX_SIZE


# ---------- Validation de forme ----------

def as_grid(values: Sequence, name: str = "grid") -> Grid:
    """
    Normalise une grille : accepte 9 lignes de 9 valeurs ou 81 valeurs à plat.
    Lève MalformedGridError sinon (erreur de programmation, jamais silencieuse).
    """
    if values is None:
        raise MalformedGridError(f"{name}: grille absente")
    rows = list(values)
    if len(rows) == GRID_SIZE * GRID_SIZE and all(isinstance(v, int) for v in rows):
        rows = [rows[i : i + GRID_SIZE] for i in range(0, len(rows), GRID_SIZE)]
    if len(rows) != GRID_SIZE:
        raise MalformedGridError(f"{name}: {len(rows)} lignes au lieu de {GRID_SIZE}")
    grid: Grid = []
    for i, row in enumerate(rows):
        row = list(row)
        if len(row) != GRID_SIZE:
            raise MalformedGridError(f"{name}: ligne {i} de longueur {len(row)}")
        for v in row:
            if not isinstance(v, int) or not 0 <= v <= GRID_SIZE:
                raise MalformedGridError(f"{name}: valeur invalide {v!r} en ligne {i}")
        grid.append(row)
    return grid


def check_position(r: int, c: int) -> None:
    if not (0 <= r < GRID_SIZE and 0 <= c < GRID_SIZE):
        raise ValueError(f"case hors grille : ({r}, {c})")


def check_digit(v: int) -> None:
    if v not in DIGITS:
        raise ValueError(f"chiffre invalide : {v!r}")


def copy_grid(grid: Grid) -> Grid:
    return [row[:] for row in grid]


def empty_grid() -> Grid:
    return [[0] * GRID_SIZE for _ in range(GRID_SIZE)]


# ---------- Placement ----------

def is_valid_placement(grid: Grid, r: int, c: int, v: int) -> bool:
    """
    True si v n'apparaît ni dans la ligne, ni dans la colonne, ni dans le bloc de (r, c).
    27 cases lues au plus, on sort au premier conflit. La case (r, c) elle-même
    est comprise dans le balayage : une case déjà égale à v donne False.
    """
    for x in range(9):
        if grid[r][x] == v:
            return False
    for x in range(9):
        if grid[x][c] == v:
            return False
    br, bc = 3 * (r // 3), 3 * (c // 3)
    for rr in range(br, br + 3):
        for cc in range(bc, bc + 3):
            if grid[rr][cc] == v:
                return False
    return True


def unit_is_permutation(values: Sequence[int]) -> bool:
    return sorted(values) == list(DIGITS)


def is_complete_solution(grid: Grid) -> bool:
    """Chaque ligne, colonne et bloc est une permutation de 1..9."""
    return all(unit_is_permutation([grid[r][c] for (r, c) in unit]) for unit in UNITS)


# ---------- Génération d'une grille complète ----------

class GridSolver:
    """
    Générateur aléatoire de grilles complètes.

    1. les trois blocs diagonaux sont remplis indépendamment (aucune contrainte
       commune entre eux, donc pas de vérification) ;
    2. le reste est complété par backtracking en ordre ligne par ligne, chiffres
       essayés dans un ordre aléatoire.

    Chaque appel à generate() travaille sur une grille neuve : rien n'est partagé
    d'un appel à l'autre.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random

    def generate(self) -> Grid:
        grid = empty_grid()
        self._fill_diagonal_boxes(grid)
        # profondeur de récursion <= 81 - 27 cases, sans risque en Python
        if not self._backtrack(grid, 0, 0):
            # impossible sur une grille 9x9 standard amorcée par les diagonales
            raise RuntimeError("Backtracking épuisé sans solution")
        log.debug("Grille complète générée : %s", canon_str(grid))
        return grid

    def _fill_diagonal_boxes(self, grid: Grid) -> None:
        for b in range(0, GRID_SIZE, BOX_SIZE):
            vals = list(DIGITS)
            self.rng.shuffle(vals)
            for i, (dr, dc) in enumerate((dr, dc) for dr in range(3) for dc in range(3)):
                grid[b + dr][b + dc] = vals[i]

    def _backtrack(self, grid: Grid, r: int, c: int) -> bool:
        if r == 9:
            return True
        nr, nc = (r, c + 1) if c < 8 else (r + 1, 0)
        if grid[r][c] != 0:
            return self._backtrack(grid, nr, nc)
        vals = list(DIGITS)
        self.rng.shuffle(vals)
        for v in vals:
            if is_valid_placement(grid, r, c, v):
                grid[r][c] = v
                if self._backtrack(grid, nr, nc):
                    return True
                grid[r][c] = 0
        return False

    # raccourci pour les hôtes qui ne tiennent qu'une référence au solveur
    is_valid_placement = staticmethod(is_valid_placement)


def generate_full_grid(rng: Optional[random.Random] = None) -> Grid:
    """Génère une grille complète valide (9x9)."""
    return GridSolver(rng).generate()


# ---------- Candidats selon les règles ----------

def cell_candidates(grid: Grid, r: int, c: int) -> Set[int]:
    used = set(grid[r]) | {grid[i][c] for i in range(9)}
    br, bc = 3 * (r // 3), 3 * (c // 3)
    used |= {
        grid[i][j]
        for i in range(br, br + 3)
        for j in range(bc, bc + 3)
    }
    return {v for v in DIGITS if v not in used}


def grid_candidates(grid: Grid) -> Dict[Pos, Set[int]]:
    """Retourne un dict {(r,c): {candidats}} pour les cellules vides."""
    return {
        (r, c): cell_candidates(grid, r, c)
        for r in range(9)
        for c in range(9)
        if grid[r][c] == 0
    }


# ---------- Statistiques / représentation ----------

def count_clues(grid: Grid) -> int:
    return sum(1 for row in grid for v in row if v)


def count_empty(grid: Grid) -> int:
    return GRID_SIZE * GRID_SIZE - count_clues(grid)


def canon_str(grid: Grid) -> str:
    """Chaîne canonique pour une grille (ligne par ligne)."""
    return "".join("".join(str(v) for v in row) for row in grid)


def format_grid(grid: Grid) -> str:
    """Aperçu texte : 'x' pour une case vide, séparateurs de blocs."""
    lines = []
    for r in range(9):
        if r % 3 == 0 and r != 0:
            lines.append("------+-------+------")
        parts = []
        for c in range(9):
            if c % 3 == 0 and c != 0:
                parts.append("|")
            parts.append("x" if grid[r][c] == 0 else str(grid[r][c]))
        lines.append(" ".join(parts))
    return "\n".join(lines)
