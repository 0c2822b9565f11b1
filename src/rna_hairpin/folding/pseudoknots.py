from __future__ import annotations
from typing import List, Sequence, Tuple, TypeVar, Union

from rna_hairpin.structures import BasePair, Pair

PairLike = Union[BasePair, Pair, Tuple[int, int]]
P = TypeVar("P", BasePair, Pair, Tuple[int, int])


def _indices(pair: PairLike) -> Tuple[int, int]:
    if isinstance(pair, (BasePair, Pair)):
        return pair.base_i, pair.base_j
    i, j = pair
    return int(i), int(j)


def pairs_cross(first: PairLike, second: PairLike) -> bool:
    """
    True when two pairs interleave, i.e. ``i < k < j < l`` or ``k < i < l < j``.

    Nested (``i < k < l < j``) and disjoint pairs do not cross.
    """
    i, j = _indices(first)
    k, l = _indices(second)

    return (i < k < j < l) or (k < i < l < j)


def detect_pseudoknots(base_pairs: Sequence[P]) -> List[Tuple[P, P]]:
    """
    Report every pair of crossing base pairs.

    This is a pure classification of an existing pair list; it does not predict
    pseudoknotted structure.

    Parameters
    ----------
    base_pairs : Sequence
        `BasePair`, `Pair` or plain ``(i, j)`` tuples.

    Returns
    -------
    List[Tuple[P, P]]
        Each crossing combination once, in input order ``(earlier, later)``.
        Empty for fewer than two pairs.
    """
    crossings: List[Tuple[P, P]] = []
    for a_idx, first in enumerate(base_pairs):
        for second in base_pairs[a_idx + 1:]:
            if pairs_cross(first, second):
                crossings.append((first, second))

    return crossings
