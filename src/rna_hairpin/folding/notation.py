from __future__ import annotations
from typing import Dict, Iterable, List, Tuple

from rna_hairpin.structures import Pair

# Layers → bracket glyphs
BRACKETS: List[Tuple[str, str]] = [('(', ')'), ('[', ']'), ('{', '}'), ('<', '>')]

UNPAIRED = '.'

_OPENERS: Dict[str, str] = {br_open: br_open for br_open, _ in BRACKETS}
_CLOSERS: Dict[str, str] = {br_close: br_open for br_open, br_close in BRACKETS}


def pairs_to_dotbracket(seq_len: int, pairs: Iterable[Pair]) -> str:
    """
    Converts a list of base pairs into a standard (single-layer) dot-bracket string.

    All pairs are drawn with parentheses `()` and unpaired bases with dots `.`.
    Pairs falling outside ``0 <= i < j < seq_len`` are ignored.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Iterable[Pair]
        `Pair` or `BasePair` objects (anything with `base_i` / `base_j`).

    Returns
    -------
    str
        The single-layer dot-bracket string representation of the structure.
    """
    chars = [UNPAIRED] * seq_len
    for pr in pairs:
        i, j = pr.base_i, pr.base_j
        if 0 <= i < j < seq_len:
            chars[i] = '('
            chars[j] = ')'
    return ''.join(chars)


def parse_dot_bracket(notation: str) -> List[Tuple[int, int]]:
    """
    Parses a dot-bracket string (any bracket kind) into base pairs.

    Each bracket kind is matched on its own stack, so a closer pairs with the
    nearest unmatched opener of the same kind regardless of other kinds in
    between. Unmatched brackets and any other characters are skipped; use
    `validate_dot_bracket` first when strictness matters.

    Parameters
    ----------
    notation : str
        Dot-bracket string using any of ``()``, ``[]``, ``{}``, ``<>``.

    Returns
    -------
    List[Tuple[int, int]]
        ``(i, j)`` pairs ordered by the opener position `i`.
    """
    stacks: Dict[str, List[int]] = {br_open: [] for br_open in _OPENERS}
    out: List[Tuple[int, int]] = []
    for idx, ch in enumerate(notation or ''):
        if ch in _OPENERS:
            stacks[ch].append(idx)
        elif ch in _CLOSERS:
            stack = stacks[_CLOSERS[ch]]
            if stack:
                out.append((stack.pop(), idx))

    out.sort()
    return out


def validate_dot_bracket(notation: str) -> bool:
    """
    Check that every bracket kind in a notation string is balanced.

    Returns
    -------
    bool
        True when no closer precedes its opener, all openers are closed and the
        string holds only brackets and dots. The empty string is valid.
    """
    if notation is None:
        return False

    depth: Dict[str, int] = {br_open: 0 for br_open in _OPENERS}
    for ch in notation:
        if ch == UNPAIRED:
            continue
        if ch in _OPENERS:
            depth[ch] += 1
        elif ch in _CLOSERS:
            kind = _CLOSERS[ch]
            if depth[kind] == 0:
                return False
            depth[kind] -= 1
        else:
            return False

    return all(count == 0 for count in depth.values())
