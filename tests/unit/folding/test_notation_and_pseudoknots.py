"""
Unit tests for the dot-bracket codec and the crossing-pair (pseudoknot) classifier.
"""
import pytest

from rna_hairpin.folding.notation import (
    pairs_to_dotbracket,
    parse_dot_bracket,
    validate_dot_bracket,
)
from rna_hairpin.folding.pseudoknots import detect_pseudoknots, pairs_cross
from rna_hairpin.structures import BasePair, BasePairType, Pair


# ---------- Parsing ----------

def test_parse_simple_structure():
    assert parse_dot_bracket("((..))") == [(0, 5), (1, 4)]


def test_parse_empty_structure():
    assert parse_dot_bracket("") == []
    assert parse_dot_bracket("......") == []


def test_parse_multiple_bracket_kinds():
    """
    Each bracket kind is matched on its own stack, so crossing layers parse.
    """
    assert parse_dot_bracket("((..[[..))..]]") == [(0, 9), (1, 8), (4, 13), (5, 12)]
    assert parse_dot_bracket("([)]") == [(0, 2), (1, 3)]
    assert parse_dot_bracket("{<>}") == [(0, 3), (1, 2)]


def test_parse_skips_unmatched_closers():
    assert parse_dot_bracket(")(.)") == [(1, 3)]


# ---------- Validation ----------

@pytest.mark.parametrize("notation", ["", "....", "(((...)))", "((..[[..))..]]", "([)]", "<{}>"])
def test_validate_balanced(notation):
    assert validate_dot_bracket(notation) is True


@pytest.mark.parametrize("notation", ["(((...)", "...)", ")(", "((x))", "[(])]", "(( ))"])
def test_validate_unbalanced_or_foreign(notation):
    assert validate_dot_bracket(notation) is False


# ---------- Rendering ----------

def test_pairs_to_dotbracket_round_trip():
    pairs = [Pair(0, 9), Pair(1, 8), Pair(2, 7)]
    notation = pairs_to_dotbracket(10, pairs)
    assert notation == "(((....)))"
    assert parse_dot_bracket(notation) == [p.as_tuple() for p in pairs]


def test_pairs_to_dotbracket_ignores_out_of_range():
    assert pairs_to_dotbracket(4, [Pair(0, 9), Pair(1, 2)]) == ".()."


def test_parse_matches_each_bracket_kind_separately():
    notation = "(..[..)..]"
    assert validate_dot_bracket(notation)
    assert parse_dot_bracket(notation) == [(0, 6), (3, 9)]


# ---------- Pseudoknots ----------

def test_nested_pairs_are_not_pseudoknots():
    pairs = [
        BasePair(0, 5, "G", "C", BasePairType.WATSON_CRICK),
        BasePair(1, 4, "C", "G", BasePairType.WATSON_CRICK),
    ]
    assert detect_pseudoknots(pairs) == []


def test_crossing_pairs_are_detected():
    first = BasePair(0, 6, "G", "C", BasePairType.WATSON_CRICK)
    second = BasePair(3, 9, "A", "U", BasePairType.WATSON_CRICK)
    knots = detect_pseudoknots([first, second])
    assert knots == [(first, second)]


def test_empty_pair_list_has_no_pseudoknots():
    assert detect_pseudoknots([]) == []


@pytest.mark.parametrize(
    "first,second,expected",
    [
        ((0, 6), (3, 9), True),    # i < k < j < l
        ((3, 9), (0, 6), True),    # k < i < l < j
        ((0, 5), (1, 4), False),   # Nested.
        ((0, 3), (5, 9), False),   # Disjoint.
        ((0, 5), (5, 9), False),   # Shared endpoint is not an interleave.
    ],
)
def test_pairs_cross_conditions(first, second, expected):
    assert pairs_cross(first, second) is expected
    assert pairs_cross(Pair(*first), Pair(*second)) is expected


def test_detect_pseudoknots_on_parsed_notation():
    """
    Pairs parsed from a two-layer notation contain one crossing per interleaved combination.
    """
    pairs = parse_dot_bracket("((..[[..))..]]")
    knots = detect_pseudoknots(pairs)
    assert len(knots) == 4
    assert all(pairs_cross(a, b) for a, b in knots)
