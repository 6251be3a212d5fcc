# tests/test_hints.py
from sudoku_hints import (
    NO_PATTERN_MESSAGE,
    HintSelector,
    HintSettings,
    pattern_difficulty,
    pattern_priority,
    request_hint,
    select_finding,
)
from sudoku_notes import CandidateStore
from sudoku_patterns import Finding, PatternDetector, PatternType


def _finding(kind, text="x", cells=((0, 0),), value=None):
    return Finding(kind, text, cells, value)


def test_full_house_beats_naked_single_in_the_same_scan(blank, solved):
    blank[0] = solved[0][:]
    blank[0][0] = 0
    store = CandidateStore()
    store.record_note(4, 4, 7)
    hint = request_hint(blank, store)
    assert hint.success
    assert hint.finding.kind is PatternType.FULL_HOUSE
    assert hint.finding.cells == ((0, 0),)
    assert hint.message.startswith("Full House\nRow 1: Cell [0,0] must be 5")
    assert hint.message.endswith("Suggestion: Cell [1,1] can be 5")


def test_naked_single_hint_message(blank):
    store = CandidateStore()
    store.record_note(4, 4, 7)
    hint = HintSelector().request_hint(blank, store)
    assert hint.finding.kind is PatternType.NAKED_SINGLE
    assert hint.finding.suggested_value == 7
    assert "can be 7" in hint.message


def test_no_pattern_is_not_an_error(blank):
    hint = request_hint(blank, CandidateStore())
    assert not hint.success
    assert hint.finding is None
    assert hint.message == NO_PATTERN_MESSAGE


def test_ties_go_to_the_first_finding_in_scan_order():
    first = _finding(PatternType.FULL_HOUSE, "first")
    second = _finding(PatternType.FULL_HOUSE, "second")
    assert select_finding([first, second]) is first
    assert select_finding([]) is None


def test_priority_order():
    easy_to_hard = [
        PatternType.FULL_HOUSE,
        PatternType.NAKED_SINGLE,
        PatternType.HIDDEN_SINGLE,
        PatternType.NAKED_PAIR,
        PatternType.POINTING_PAIR,
        PatternType.BOX_LINE_REDUCTION,
        PatternType.NAKED_TRIPLE,
        PatternType.HIDDEN_PAIR,
        PatternType.X_WING,
        PatternType.XY_WING,
        PatternType.SWORDFISH,
    ]
    prios = [pattern_priority(k) for k in easy_to_hard]
    assert prios == sorted(prios)
    findings = [_finding(k) for k in reversed(easy_to_hard)]
    assert select_finding(findings).kind is PatternType.FULL_HOUSE


def test_unranked_techniques_share_the_lowest_priority():
    fish = _finding(PatternType.SWORDFISH)
    wing = _finding(PatternType.XY_WING)
    assert select_finding([fish, wing]) is wing


def test_scan_order_when_prioritisation_is_disabled():
    selector = HintSelector(settings=HintSettings(prioritize_simple_patterns=False))
    xwing = _finding(PatternType.X_WING)
    single = _finding(PatternType.NAKED_SINGLE, value=4)
    assert selector.select([xwing, single]) is xwing


def test_message_without_description():
    selector = HintSelector(settings=HintSettings(show_description=False))
    result = selector.hint_from([_finding(PatternType.FULL_HOUSE, value=5)])
    assert result.message == "Pattern detected: Full House"


def test_no_suggestion_line_without_suggested_digit():
    selector = HintSelector()
    result = selector.hint_from([_finding(PatternType.X_WING, "X-Wing: 4 in rows 2,6 columns 3,8")])
    assert result.message == "X-Wing\nX-Wing: 4 in rows 2,6 columns 3,8"


def test_hint_bookkeeping(blank):
    detector = PatternDetector()
    selector = HintSelector(detector)
    store = CandidateStore()
    store.record_note(2, 2, 9)
    selector.request_hint(blank, store)
    selector.request_hint(blank, store)
    assert selector.hints_given == 2
    assert selector.current_hint.suggested_value == 9
    # le sélecteur passe par le détecteur qu'on lui a donné
    assert len(detector.findings) == 1
    selector.request_hint(blank, CandidateStore())
    assert selector.hints_given == 2
    selector.reset()
    assert selector.hints_given == 0
    assert selector.current_hint is None


def test_pattern_difficulty_labels():
    assert pattern_difficulty(PatternType.FULL_HOUSE) == "Very Easy"
    assert pattern_difficulty(PatternType.HIDDEN_SINGLE) == "Easy"
    assert pattern_difficulty(PatternType.POINTING_PAIR) == "Medium"
    assert pattern_difficulty(PatternType.BOX_LINE_REDUCTION) == "Hard"
    assert pattern_difficulty(PatternType.XY_WING) == "Very Hard"
    assert pattern_difficulty(PatternType.SWORDFISH) == "Expert"
