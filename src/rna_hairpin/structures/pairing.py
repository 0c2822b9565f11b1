from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class BasePairType(Enum):
    """
    Kind of hydrogen-bonded pair formed between two RNA residues.

    Attributes
    ----------
    WATSON_CRICK
        Canonical A-U / G-C pairing.
    WOBBLE
        Non-canonical but stable G-U pairing.
    """
    WATSON_CRICK = "WatsonCrick"
    WOBBLE = "Wobble"


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Bare (i, j) coordinates of a pair, without residues.

    Used where only positions matter: dot-bracket rendering and
    crossing-pair checks.
    """
    base_i: int
    base_j: int

    def as_tuple(self) -> tuple[int, int]:
        return self.base_i, self.base_j


@dataclass(frozen=True, slots=True)
class BasePair:
    """
    A base pair observed in a sequence: two positions, their residues and the pair kind.

    Parameters
    ----------
    base_i : int
        5' position (0-based).
    base_j : int
        3' position (0-based), strictly greater than `base_i`.
    nt_i : str
        Normalized residue at `base_i`.
    nt_j : str
        Normalized residue at `base_j`.
    pair_type : BasePairType
        Watson-Crick or wobble.
    """
    base_i: int
    base_j: int
    nt_i: str
    nt_j: str
    pair_type: BasePairType

    @property
    def is_wobble(self) -> bool:
        return self.pair_type is BasePairType.WOBBLE

    def as_tuple(self) -> tuple[int, int]:
        return self.base_i, self.base_j
