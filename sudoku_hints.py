# sudoku_hints.py
"""
Choix d'un indice parmi les constats du dernier scan.

Ordre fixe, de la technique la plus simple à la plus dure ; à priorité égale,
le premier constat trouvé par le scan l'emporte.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import logging

from sudoku_core import Grid
from sudoku_patterns import Finding, NoteSource, PatternDetector, PatternType

log = logging.getLogger(__name__)

NO_PATTERN_MESSAGE = (
    "No patterns detected. Try adding more notes to the cells to reveal possible patterns."
)

PATTERN_PRIORITY = {
    PatternType.FULL_HOUSE: 1,
    PatternType.NAKED_SINGLE: 2,
    PatternType.HIDDEN_SINGLE: 3,
    PatternType.NAKED_PAIR: 4,
    PatternType.POINTING_PAIR: 5,
    PatternType.BOX_LINE_REDUCTION: 6,
    PatternType.NAKED_TRIPLE: 7,
    PatternType.HIDDEN_PAIR: 8,
    PatternType.X_WING: 9,
    PatternType.XY_WING: 10,
}
DEFAULT_PRIORITY = 99


def pattern_priority(kind: PatternType) -> int:
    return PATTERN_PRIORITY.get(kind, DEFAULT_PRIORITY)


def pattern_difficulty(kind: PatternType) -> str:
    """Libellé de difficulté d'une technique."""
    if kind in (PatternType.FULL_HOUSE, PatternType.NAKED_SINGLE):
        return "Very Easy"
    if kind is PatternType.HIDDEN_SINGLE:
        return "Easy"
    if kind in (PatternType.NAKED_PAIR, PatternType.POINTING_PAIR):
        return "Medium"
    if kind in (PatternType.NAKED_TRIPLE, PatternType.HIDDEN_PAIR, PatternType.BOX_LINE_REDUCTION):
        return "Hard"
    if kind in (PatternType.X_WING, PatternType.XY_WING):
        return "Very Hard"
    return "Expert"


@dataclass
class HintSettings:
    # False : on rend simplement le premier constat du scan
    prioritize_simple_patterns: bool = True
    show_description: bool = True


@dataclass
class HintResult:
    success: bool
    message: str
    finding: Optional[Finding] = None


def select_finding(findings: List[Finding]) -> Optional[Finding]:
    """Constat de plus faible numéro de priorité ; min() garde le premier à égalité."""
    if not findings:
        return None
    return min(findings, key=lambda f: pattern_priority(f.kind))


class HintSelector:
    """
    Demande un scan au détecteur qu'on lui passe, puis choisit et met en forme
    un seul constat.
    """

    def __init__(self, detector: Optional[PatternDetector] = None,
                 settings: Optional[HintSettings] = None):
        self.detector = detector if detector is not None else PatternDetector()
        self.settings = settings if settings is not None else HintSettings()
        self.current_hint: Optional[Finding] = None
        self.hints_given = 0

    def select(self, findings: List[Finding]) -> Optional[Finding]:
        if not findings:
            return None
        if not self.settings.prioritize_simple_patterns:
            return findings[0]
        return select_finding(findings)

    def format_hint(self, finding: Finding) -> str:
        if not self.settings.show_description:
            return f"Pattern detected: {finding.kind.label}"
        message = f"{finding.kind.label}\n{finding.explanation}"
        if finding.suggested_value and finding.cells:
            r, c = finding.cells[0]
            message += f"\n\nSuggestion: Cell [{r + 1},{c + 1}] can be {finding.suggested_value}"
        return message

    def hint_from(self, findings: List[Finding]) -> HintResult:
        """Choisit parmi des constats déjà calculés (pas de nouveau scan)."""
        finding = self.select(findings)
        if finding is None:
            return HintResult(success=False, message=NO_PATTERN_MESSAGE)
        self.current_hint = finding
        self.hints_given += 1
        log.debug("Indice #%d : %s", self.hints_given, finding)
        return HintResult(success=True, message=self.format_hint(finding), finding=finding)

    def request_hint(self, grid: Grid, candidates: NoteSource = None) -> HintResult:
        return self.hint_from(self.detector.scan(grid, candidates))

    def reset(self) -> None:
        self.current_hint = None
        self.hints_given = 0


def request_hint(grid: Grid, candidates: NoteSource = None) -> HintResult:
    return HintSelector().request_hint(grid, candidates)
