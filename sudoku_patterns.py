# sudoku_patterns.py
"""
Détection de techniques de résolution "humaines" sur l'état courant d'une partie.

Les détecteurs lisent la grille et les notes du joueur, rien d'autre : une
technique dont le joueur n'a pas noté les candidats ne peut pas être détectée.
Seul le Full House lit directement les valeurs posées.

Chaque scan repart de zéro et reconstruit toute la liste des constats.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Dict, Iterable, List, Mapping, Optional, Set, Tuple, Union
import logging

from sudoku_core import (
    BOXES,
    COLS,
    DIGITS,
    PEERS,
    ROWS,
    UNITS,
    Grid,
    Pos,
    as_grid,
    box_of,
    check_digit,
    check_position,
)
from sudoku_notes import CandidateStore

log = logging.getLogger(__name__)

Notes = Dict[Pos, Set[int]]
NoteSource = Union[CandidateStore, Mapping[Pos, Iterable[int]], None]

_NO_NOTES: Set[int] = frozenset()


class PatternType(Enum):
    FULL_HOUSE = "full_house"
    NAKED_SINGLE = "naked_single"
    HIDDEN_SINGLE = "hidden_single"
    NAKED_PAIR = "naked_pair"
    NAKED_TRIPLE = "naked_triple"
    HIDDEN_PAIR = "hidden_pair"
    POINTING_PAIR = "pointing_pair"
    BOX_LINE_REDUCTION = "box_line_reduction"
    X_WING = "x_wing"
    SWORDFISH = "swordfish"
    XY_WING = "xy_wing"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    PatternType.FULL_HOUSE: "Full House",
    PatternType.NAKED_SINGLE: "Naked Single",
    PatternType.HIDDEN_SINGLE: "Hidden Single",
    PatternType.NAKED_PAIR: "Naked Pair",
    PatternType.NAKED_TRIPLE: "Naked Triple",
    PatternType.HIDDEN_PAIR: "Hidden Pair",
    PatternType.POINTING_PAIR: "Pointing Pair",
    PatternType.BOX_LINE_REDUCTION: "Box/Line Reduction",
    PatternType.X_WING: "X-Wing",
    PatternType.SWORDFISH: "Swordfish",
    PatternType.XY_WING: "XY-Wing",
}


@dataclass(frozen=True)
class Finding:
    """Un constat : technique, explication, cases concernées, chiffre suggéré éventuel."""
    kind: PatternType
    explanation: str
    cells: Tuple[Pos, ...]
    suggested_value: Optional[int] = None

    def __str__(self) -> str:
        return f"[{self.kind.label}] {self.explanation}"


# ====================================================
#   OUTILS
# ====================================================

def _fmt_cell(pos: Pos) -> str:
    return f"[{pos[0]},{pos[1]}]"


def _fmt_digits(vals: Iterable[int]) -> str:
    return "{" + ",".join(str(v) for v in sorted(vals)) + "}"


def _unit_name(index: int) -> str:
    """Nom lisible d'une unité de UNITS (lignes, puis colonnes, puis blocs)."""
    if index < 9:
        return f"Row {index + 1}"
    if index < 18:
        return f"Column {index - 9 + 1}"
    b = index - 18
    return f"Box ({b // 3},{b % 3})"


def read_notes(grid: Grid, source: NoteSource) -> Notes:
    """
    Notes utilisables pour la détection : uniquement celles des cases vides.
    Accepte un CandidateStore, un dict {(r, c): chiffres} ou None.
    Une case ou un chiffre hors grille lève ValueError.
    """
    if source is None:
        return {}
    raw = source.as_dict() if isinstance(source, CandidateStore) else source
    notes: Notes = {}
    for (r, c), vals in raw.items():
        check_position(r, c)
        vals = set(vals)
        for v in vals:
            check_digit(v)
        if vals and grid[r][c] == 0:
            notes[(r, c)] = vals
    return notes


def _cells_noting(cells: Iterable[Pos], notes: Notes, v: int) -> List[Pos]:
    return [pos for pos in cells if v in notes.get(pos, _NO_NOTES)]


# ====================================================
#   TECHNIQUES DE BASE
# ====================================================

def detect_full_house(grid: Grid, notes: Notes) -> List[Finding]:
    """
    Ligne / colonne / bloc avec une seule case vide : le chiffre absent des 8
    autres. Une unité dont les 8 valeurs posées ne laissent pas exactement un
    chiffre libre (doublon du joueur) ne donne rien.
    """
    found = []
    for i, unit in enumerate(UNITS):
        empties = [(r, c) for (r, c) in unit if grid[r][c] == 0]
        if len(empties) != 1:
            continue
        missing = set(DIGITS) - {grid[r][c] for (r, c) in unit}
        if len(missing) != 1:
            continue
        (v,) = missing
        pos = empties[0]
        found.append(Finding(
            PatternType.FULL_HOUSE,
            f"{_unit_name(i)}: Cell {_fmt_cell(pos)} must be {v}",
            (pos,),
            v,
        ))
    return found


def detect_naked_singles(grid: Grid, notes: Notes) -> List[Finding]:
    found = []
    for r in range(9):
        for c in range(9):
            vals = notes.get((r, c), _NO_NOTES)
            if len(vals) == 1:
                (v,) = vals
                found.append(Finding(
                    PatternType.NAKED_SINGLE,
                    f"Cell [{r},{c}] has only one candidate: {v}",
                    ((r, c),),
                    v,
                ))
    return found


def detect_hidden_singles(grid: Grid, notes: Notes) -> List[Finding]:
    """
    Pour chaque chiffre, une seule case de la ligne (ou de la colonne) le porte
    en note, et cette case a d'autres notes (sinon c'est un naked single).
    """
    found = []
    for v in DIGITS:
        for i, unit in enumerate(ROWS + COLS):
            places = _cells_noting(unit, notes, v)
            if len(places) != 1:
                continue
            pos = places[0]
            if len(notes[pos]) > 1:
                found.append(Finding(
                    PatternType.HIDDEN_SINGLE,
                    f"{_unit_name(i)}: Only {_fmt_cell(pos)} can be {v}",
                    (pos,),
                    v,
                ))
    return found


# ====================================================
#   SOUS-ENSEMBLES NUS / CACHÉS
# ====================================================

def detect_naked_pairs(grid: Grid, notes: Notes) -> List[Finding]:
    """Deux cases d'une ligne ou colonne avec exactement les deux mêmes notes."""
    found = []
    for i, unit in enumerate(ROWS + COLS):
        cells = [pos for pos in unit if len(notes.get(pos, _NO_NOTES)) == 2]
        for a, b in combinations(cells, 2):
            union = notes[a] | notes[b]
            if len(union) == 2:
                found.append(Finding(
                    PatternType.NAKED_PAIR,
                    f"{_unit_name(i)}: Naked Pair {_fmt_digits(union)} "
                    f"at {_fmt_cell(a)} and {_fmt_cell(b)}",
                    (a, b),
                ))
    return found


def detect_naked_triples(grid: Grid, notes: Notes) -> List[Finding]:
    """Trois cases d'une ligne ou colonne, 2 ou 3 notes chacune, union de 3 chiffres."""
    found = []
    for i, unit in enumerate(ROWS + COLS):
        cells = [pos for pos in unit if 2 <= len(notes.get(pos, _NO_NOTES)) <= 3]
        for trio in combinations(cells, 3):
            union = set().union(*(notes[pos] for pos in trio))
            if len(union) == 3:
                found.append(Finding(
                    PatternType.NAKED_TRIPLE,
                    f"{_unit_name(i)}: Naked Triple {_fmt_digits(union)} at "
                    + ", ".join(_fmt_cell(pos) for pos in trio),
                    trio,
                ))
    return found


def detect_hidden_pairs(grid: Grid, notes: Notes) -> List[Finding]:
    """
    Deux chiffres notés dans exactement les deux mêmes cases d'une unité, l'une
    au moins de ces cases portant d'autres notes (sinon c'est une paire nue).
    """
    found = []
    for i, unit in enumerate(UNITS):
        pos_by_val = {v: _cells_noting(unit, notes, v) for v in DIGITS}
        vals = [v for v in DIGITS if len(pos_by_val[v]) == 2]
        for v1, v2 in combinations(vals, 2):
            if pos_by_val[v1] != pos_by_val[v2]:
                continue
            a, b = pos_by_val[v1]
            if notes[a] | notes[b] == {v1, v2}:
                continue
            found.append(Finding(
                PatternType.HIDDEN_PAIR,
                f"{_unit_name(i)}: Hidden Pair {_fmt_digits((v1, v2))} "
                f"at {_fmt_cell(a)} and {_fmt_cell(b)}",
                (a, b),
            ))
    return found


# ====================================================
#   INTERSECTIONS BLOC / LIGNE
# ====================================================

def detect_pointing_pairs(grid: Grid, notes: Notes) -> List[Finding]:
    """Dans un bloc, un chiffre noté dans exactement deux cases alignées."""
    found = []
    for b, box in enumerate(BOXES):
        br, bc = b // 3, b % 3
        for v in DIGITS:
            pos = _cells_noting(box, notes, v)
            if len(pos) != 2:
                continue
            (r1, c1), (r2, c2) = pos
            if r1 == r2:
                line = f"Row {r1 + 1}"
            elif c1 == c2:
                line = f"Column {c1 + 1}"
            else:
                continue
            found.append(Finding(
                PatternType.POINTING_PAIR,
                f"Box ({br},{bc}): {v} points to {line}",
                tuple(pos),
            ))
    return found


def detect_box_line_reduction(grid: Grid, notes: Notes) -> List[Finding]:
    """
    Dans une ligne ou colonne, toutes les cases qui notent v (au moins deux)
    tombent dans le même bloc, et ce bloc a ailleurs des cases qui notent v :
    ces notes-là peuvent être retirées.
    """
    found = []
    for i, unit in enumerate(ROWS + COLS):
        for v in DIGITS:
            pos = _cells_noting(unit, notes, v)
            if len(pos) < 2:
                continue
            boxes = {box_of(r, c) for (r, c) in pos}
            if len(boxes) != 1:
                continue
            br, bc = boxes.pop()
            line = set(unit)
            targets = [
                cell for cell in _cells_noting(BOXES[br * 3 + bc], notes, v)
                if cell not in line
            ]
            if not targets:
                continue
            found.append(Finding(
                PatternType.BOX_LINE_REDUCTION,
                f"{_unit_name(i)}: {v} is confined to Box ({br},{bc}), "
                f"remove {v} from " + ", ".join(_fmt_cell(t) for t in targets),
                tuple(pos),
            ))
    return found


# ====================================================
#   POISSONS (X-WING, SWORDFISH)
# ====================================================

def _row_cols_for(notes: Notes, v: int) -> List[Tuple[int, Tuple[int, ...]]]:
    out = []
    for r in range(9):
        cols = tuple(c for c in range(9) if v in notes.get((r, c), _NO_NOTES))
        if cols:
            out.append((r, cols))
    return out


def detect_x_wing(grid: Grid, notes: Notes) -> List[Finding]:
    """Deux lignes où v n'est noté que dans les deux mêmes colonnes."""
    found = []
    for v in DIGITS:
        row_cols = [(r, cols) for r, cols in _row_cols_for(notes, v) if len(cols) == 2]
        for (r1, cols1), (r2, cols2) in combinations(row_cols, 2):
            if cols1 != cols2:
                continue
            c1, c2 = cols1
            found.append(Finding(
                PatternType.X_WING,
                f"X-Wing: {v} in rows {r1 + 1},{r2 + 1} columns {c1 + 1},{c2 + 1}",
                ((r1, c1), (r1, c2), (r2, c1), (r2, c2)),
            ))
    return found


def detect_swordfish(grid: Grid, notes: Notes) -> List[Finding]:
    """Trois lignes où v est noté 2 ou 3 fois, dans trois colonnes au total."""
    found = []
    for v in DIGITS:
        row_cols = [(r, cols) for r, cols in _row_cols_for(notes, v) if 2 <= len(cols) <= 3]
        for trio in combinations(row_cols, 3):
            cols = sorted(set().union(*(set(cs) for _r, cs in trio)))
            if len(cols) != 3:
                continue
            rows = [r for r, _cs in trio]
            cells = tuple((r, c) for r, cs in trio for c in cs)
            found.append(Finding(
                PatternType.SWORDFISH,
                f"Swordfish: {v} in rows {','.join(str(r + 1) for r in rows)} "
                f"columns {','.join(str(c + 1) for c in cols)}",
                cells,
            ))
    return found


# ====================================================
#   AILES
# ====================================================

def detect_xy_wing(grid: Grid, notes: Notes) -> List[Finding]:
    """
    Pivot {x,y}, une aile {x,z} et une aile {y,z} qui voient toutes deux le pivot.
    z peut être retiré de toute case qui voit les deux ailes.
    """
    found = []
    for pivot in sorted(notes):
        pv = notes[pivot]
        if len(pv) != 2:
            continue
        x, y = sorted(pv)
        peers = [p for p in sorted(PEERS[pivot]) if len(notes.get(p, _NO_NOTES)) == 2]
        wings_x = [p for p in peers if x in notes[p] and y not in notes[p]]
        wings_y = [p for p in peers if y in notes[p] and x not in notes[p]]
        for wx in wings_x:
            (z,) = notes[wx] - {x}
            for wy in wings_y:
                if notes[wy] != {y, z}:
                    continue
                targets = [
                    p for p in sorted(PEERS[wx] & PEERS[wy])
                    if p != pivot and z in notes.get(p, _NO_NOTES)
                ]
                text = (
                    f"XY-Wing: pivot {_fmt_cell(pivot)} {_fmt_digits((x, y))}, "
                    f"wings {_fmt_cell(wx)} {_fmt_digits((x, z))} and "
                    f"{_fmt_cell(wy)} {_fmt_digits((y, z))}: "
                    f"{z} cannot go in a cell seeing both wings"
                )
                if targets:
                    text += " (" + ", ".join(_fmt_cell(t) for t in targets) + ")"
                found.append(Finding(PatternType.XY_WING, text, (pivot, wx, wy)))
    return found


# ordre de scan : n'influe que sur l'ordre de la liste, pas sur le choix de l'indice
DETECTORS = (
    detect_full_house,
    detect_naked_singles,
    detect_hidden_singles,
    detect_naked_pairs,
    detect_naked_triples,
    detect_hidden_pairs,
    detect_pointing_pairs,
    detect_box_line_reduction,
    detect_x_wing,
    detect_swordfish,
    detect_xy_wing,
)


# ====================================================
#   ANALYSEUR
# ====================================================

class PatternDetector:
    """
    Lance tous les détecteurs et garde le résultat du dernier scan,
    avec un compteur par technique (dérivé, pour le rapport).
    """

    def __init__(self, detectors=DETECTORS):
        self.detectors = tuple(detectors)
        self.findings: List[Finding] = []
        self.counters: Counter = Counter()

    def scan(self, grid: Grid, candidates: NoteSource = None) -> List[Finding]:
        grid = as_grid(grid, "puzzle")
        notes = read_notes(grid, candidates)

        findings: List[Finding] = []
        for detector in self.detectors:
            findings.extend(detector(grid, notes))

        self.findings = findings
        self.counters = Counter(f.kind for f in findings)
        log.debug(
            "Scan : %d constats (%s)",
            len(findings),
            ", ".join(f"{k.value}={n}" for k, n in self.counters.items()) or "aucun",
        )
        return list(findings)

    def findings_of(self, kind: PatternType) -> List[Finding]:
        return [f for f in self.findings if f.kind is kind]

    def clear(self) -> None:
        self.findings = []
        self.counters = Counter()

    def report(self) -> str:
        lines = ["=== SUDOKU PATTERN ANALYSIS ===", ""]
        lines.append(f"Total Patterns Found: {len(self.findings)}")
        lines.append("")
        if not self.findings:
            lines.append("No patterns detected. Player may need to add more notes.")
            return "\n".join(lines)
        for kind in PatternType:
            group = self.findings_of(kind)
            if not group:
                continue
            lines.append(f"--- {kind.label} ({len(group)}) ---")
            for f in group:
                lines.append(f"  - {f.explanation}")
            lines.append("")
        return "\n".join(lines).rstrip() + "\n"


def scan_patterns(grid: Grid, candidates: NoteSource = None) -> List[Finding]:
    """Scan ponctuel, sans garder d'analyseur."""
    return PatternDetector().scan(grid, candidates)
