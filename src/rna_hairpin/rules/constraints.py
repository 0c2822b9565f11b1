from __future__ import annotations
from typing import Final, Optional

from rna_hairpin.structures.pairing import BasePairType
from rna_hairpin.utils.nucleotide_utils import normalize_base, pair_key

# Minimum number of unpaired nucleotides required in a hairpin loop.
# Loops shorter than three bases are sterically impossible.
MIN_HAIRPIN_UNPAIRED: Final[int] = 3

# ---- Pairing rules (RNA) -----------------------------------------------------

_WATSON_CRICK_PAIRS: Final[frozenset[str]] = frozenset({"AU", "UA", "GC", "CG"})
_WOBBLE_PAIRS: Final[frozenset[str]] = frozenset({"GU", "UG"})

_COMPLEMENTS: Final[dict[str, str]] = {"A": "U", "U": "A", "G": "C", "C": "G"}


def _is_single_base(base: object) -> bool:
    return isinstance(base, str) and len(base) == 1


def can_pair(base_i: str, base_j: str, allow_wobble: bool = True) -> bool:
    """
    Return True if nucleotides `base_i` and `base_j` can base pair in RNA.

    Canonical Watson–Crick pairs (AU, GC) are always allowed; GU wobble pairs
    only when `allow_wobble` is set.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides, case-insensitive. `T` is read as `U`.
    allow_wobble : bool, optional
        Accept G-U / U-G, by default True.

    Returns
    -------
    bool
        True if the pair is allowed; False otherwise, including for non-string,
        multi-character or ambiguous input.
    """
    if not _is_single_base(base_i) or not _is_single_base(base_j):
        return False

    key = pair_key(base_i, base_j)
    if key in _WATSON_CRICK_PAIRS:
        return True

    return allow_wobble and key in _WOBBLE_PAIRS


def pair_type(base_i: str, base_j: str) -> Optional[BasePairType]:
    """
    Classify a pair of nucleotides.

    Returns
    -------
    BasePairType or None
        `WATSON_CRICK` for AU/UA/GC/CG, `WOBBLE` for GU/UG, `None` otherwise.
    """
    if not _is_single_base(base_i) or not _is_single_base(base_j):
        return None

    key = pair_key(base_i, base_j)
    if key in _WATSON_CRICK_PAIRS:
        return BasePairType.WATSON_CRICK
    if key in _WOBBLE_PAIRS:
        return BasePairType.WOBBLE

    return None


def complement(base: str) -> Optional[str]:
    """
    Strict Watson–Crick complement of an RNA base (A<->U, G<->C).

    Returns
    -------
    str or None
        The complementary base, or `None` for non-canonical input (e.g. ``N``).
    """
    if not _is_single_base(base):
        return None

    return _COMPLEMENTS.get(normalize_base(base))


def hairpin_size(i: int, j: int) -> int:
    """
    Number of unpaired nucleotides inside a hairpin closed by (i, j): ``j - i - 1``.
    """
    return j - i - 1


def is_min_hairpin_size(i: int, j: int, min_unpaired: int = MIN_HAIRPIN_UNPAIRED) -> bool:
    """
    Check whether a closing pair (i, j) encloses at least `min_unpaired` bases.
    """
    return hairpin_size(i, j) >= min_unpaired
