from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

from rna_hairpin.structures.pairing import BasePair


class LoopType(Enum):
    """Loop classes; the hairpin scanner only ever produces `HAIRPIN`."""
    HAIRPIN = "Hairpin"


@dataclass(frozen=True, slots=True)
class Stem:
    """
    A perfect, gap-free antiparallel run of base pairs.

    Consecutive pairs satisfy ``i[k+1] == i[k] + 1`` and ``j[k+1] == j[k] - 1``.
    Pairs are ordered from the outermost pair inward.

    Attributes
    ----------
    base_pairs : Tuple[BasePair, ...]
        The stacked pairs, outermost first.
    free_energy : float
        Summed stacking free energy (kcal/mol); 0.0 for a single pair.
    """
    base_pairs: Tuple[BasePair, ...]
    free_energy: float = 0.0

    @property
    def length(self) -> int:
        return len(self.base_pairs)

    @property
    def has_wobble(self) -> bool:
        return any(bp.is_wobble for bp in self.base_pairs)


@dataclass(frozen=True, slots=True)
class Loop:
    """
    An unpaired span ``[start, end]`` closed by the innermost pair of a stem.

    Attributes
    ----------
    start, end : int
        Inclusive 0-based bounds of the unpaired region.
    loop_type : LoopType
        Always `LoopType.HAIRPIN` for loops produced by the scanner.
    sequence : str
        The loop residues.
    free_energy : float
        Hairpin loop free energy (kcal/mol), positive (destabilizing) in general.
    """
    start: int
    end: int
    loop_type: LoopType
    sequence: str
    free_energy: float = 0.0

    @property
    def size(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class StemLoop:
    """
    A hairpin: one stem plus the loop it closes.

    Attributes
    ----------
    start, end : int
        Inclusive span covering the 5' stem, the loop and the 3' stem.
    stem : Stem
        The closing helix.
    loop : Loop
        The hairpin loop.
    total_free_energy : float
        ``stem.free_energy + loop.free_energy``.
    dot_bracket : str
        Local notation, one character per position of the span.
    """
    start: int
    end: int
    stem: Stem
    loop: Loop
    total_free_energy: float
    dot_bracket: str

    @property
    def span(self) -> int:
        return self.end - self.start + 1

    def overlaps(self, other: "StemLoop") -> bool:
        """True when the two spans share at least one position."""
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True, slots=True)
class SecondaryStructure:
    """
    A whole-sequence structure assembled from non-overlapping stem-loops.

    Attributes
    ----------
    sequence : str
        Upper-case RNA sequence (T read as U).
    dot_bracket : str
        Notation string, same length as `sequence`.
    base_pairs : Tuple[BasePair, ...]
        Pairs of all selected stems, in stem-loop order.
    stem_loops : Tuple[StemLoop, ...]
        Selected stem-loops, ordered by start position.
    free_energy : float
        Sum of the selected stem-loop energies (0.0 when nothing is selected).
    """
    sequence: str
    dot_bracket: str
    base_pairs: Tuple[BasePair, ...] = field(default_factory=tuple)
    stem_loops: Tuple[StemLoop, ...] = field(default_factory=tuple)
    free_energy: float = 0.0


@dataclass(frozen=True, slots=True)
class PrecursorHairpin:
    """
    A precursor-like (pre-miRNA) hairpin found in a window of an input sequence.

    Attributes
    ----------
    start, end : int
        Inclusive window bounds in the input sequence.
    sequence : str
        Window residues (upper-case RNA).
    structure : str
        Window notation: ``(`` * stem + ``.`` * loop + ``)`` * stem.
    mature_sequence : str
        5'-most arm residues (at most the configured mature length).
    star_sequence : str
        3'-most arm residues, same length as `mature_sequence`.
    free_energy : float
        Simplified estimate ``-1.5 * stem_length + 0.5 * loop_size``.
    stem_length : int
        Number of consecutive pairs grown inward from the window ends.
    loop_size : int
        Unpaired residues left between the two arms.
    """
    start: int
    end: int
    sequence: str
    structure: str
    mature_sequence: str
    star_sequence: str
    free_energy: float
    stem_length: int
    loop_size: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass(frozen=True, slots=True)
class InvertedRepeat:
    """
    Two strictly Watson-Crick complementary arms separated by a spacer.

    The left arm ``[left_start, left_end]`` read 5'->3' is the reverse complement
    of the right arm ``[right_start, right_end]``.
    """
    left_start: int
    left_end: int
    right_start: int
    right_end: int
    left_arm: str
    right_arm: str
    spacer: str

    @property
    def arm_length(self) -> int:
        return self.left_end - self.left_start + 1

    @property
    def spacer_length(self) -> int:
        return self.right_start - self.left_end - 1
