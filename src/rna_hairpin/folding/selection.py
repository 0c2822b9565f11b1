from __future__ import annotations
import logging
from typing import Callable, Iterable, List, Optional, Tuple

from rna_hairpin.energies.energy_model import HairpinEnergyModelProtocol, default_energy_model
from rna_hairpin.folding.notation import UNPAIRED
from rna_hairpin.folding.stem_loops import StemLoopScanConfig, StemLoopScanner, stem_loop_pairs
from rna_hairpin.rules import MIN_HAIRPIN_UNPAIRED
from rna_hairpin.structures import SecondaryStructure, StemLoop
from rna_hairpin.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)

SelectionKey = Callable[[StemLoop], Tuple]


def energy_then_start(stem_loop: StemLoop) -> Tuple[float, int]:
    """Default selection order: most stable first, ties broken by 5' position."""
    return stem_loop.total_free_energy, stem_loop.start


def select_non_overlapping(
    candidates: Iterable[StemLoop],
    key: SelectionKey = energy_then_start,
) -> List[StemLoop]:
    """
    Greedy selection of stem-loops whose spans share no position.

    Candidates are visited in `key` order and accepted when they do not
    overlap anything accepted so far.

    Parameters
    ----------
    candidates : Iterable[StemLoop]
        Scanner output.
    key : Callable[[StemLoop], tuple], optional
        Visit order; by default total energy, then start position.

    Returns
    -------
    List[StemLoop]
        Accepted stem-loops ordered by start position.
    """
    accepted: List[StemLoop] = []
    for candidate in sorted(candidates, key=key):
        if any(candidate.overlaps(chosen) for chosen in accepted):
            continue
        accepted.append(candidate)

    accepted.sort(key=lambda sl: sl.start)
    return accepted


def render_structure(seq_len: int, stem_loops: Iterable[StemLoop]) -> str:
    """
    Write each stem-loop's local notation at its absolute span.

    Raises
    ------
    ValueError
        If a stem-loop's notation does not match its span, or the span leaves the sequence.
    """
    chars = [UNPAIRED] * seq_len
    for sl in stem_loops:
        if len(sl.dot_bracket) != sl.span:
            raise ValueError(
                f"Stem-loop notation length {len(sl.dot_bracket)} does not match span "
                f"{sl.span} at [{sl.start}, {sl.end}]."
            )
        if sl.start < 0 or sl.end >= seq_len:
            raise ValueError(f"Stem-loop [{sl.start}, {sl.end}] lies outside a sequence of length {seq_len}.")
        chars[sl.start:sl.end + 1] = sl.dot_bracket

    return ''.join(chars)


def predict_structure(
    sequence: Optional[str],
    min_stem_length: int = 3,
    min_loop_size: int = MIN_HAIRPIN_UNPAIRED,
    max_loop_size: int = 10,
    allow_wobble: bool = True,
    energy_model: Optional[HairpinEnergyModelProtocol] = None,
    key: SelectionKey = energy_then_start,
) -> SecondaryStructure:
    """
    Predict a hairpin-only secondary structure.

    Scans for all stem-loop candidates, keeps a non-overlapping subset with
    `select_non_overlapping` and assembles the whole-sequence notation.

    Parameters
    ----------
    sequence : str or None
        RNA sequence (T read as U), any case.
    min_stem_length, min_loop_size, max_loop_size, allow_wobble
        Scanner bounds, see `find_stem_loops`.
    energy_model : HairpinEnergyModelProtocol, optional
        Scoring model; the bundled parameters are used when omitted.
    key : Callable[[StemLoop], tuple], optional
        Selection order passed to `select_non_overlapping`.

    Returns
    -------
    SecondaryStructure
        Empty structure for empty input; otherwise notation of the same length as
        the sequence with `.` outside the selected stem-loops.
    """
    seq = normalize_sequence(sequence)
    if not seq:
        return SecondaryStructure(sequence="", dot_bracket="")

    config = StemLoopScanConfig(
        min_stem_length=min_stem_length,
        min_loop_size=min_loop_size,
        max_loop_size=max_loop_size,
        allow_wobble=allow_wobble,
    )
    scanner = StemLoopScanner(energy_model=energy_model or default_energy_model(), config=config)
    selected = select_non_overlapping(scanner.scan(seq), key=key)

    dot_bracket = render_structure(len(seq), selected)
    free_energy = sum(sl.total_free_energy for sl in selected)
    logger.debug(f"Selected {len(selected)} stem-loop(s); ΔG = {free_energy:.2f} kcal/mol")

    return SecondaryStructure(
        sequence=seq,
        dot_bracket=dot_bracket,
        base_pairs=stem_loop_pairs(selected),
        stem_loops=tuple(selected),
        free_energy=free_energy,
    )


def minimum_free_energy(
    sequence: Optional[str],
    energy_model: Optional[HairpinEnergyModelProtocol] = None,
) -> float:
    """
    Free energy of the predicted structure, relative to the open chain.

    With the bundled parameters every qualifying stem-loop is net stabilizing,
    so the result is negative whenever a hairpin is found.

    Returns
    -------
    float
        The summed ΔG of the selected stem-loops, or 0.0 when there are none
        (including empty input).
    """
    return float(predict_structure(sequence, energy_model=energy_model).free_energy)
