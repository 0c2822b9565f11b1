from __future__ import annotations
from dataclasses import dataclass, field
import logging
from typing import List, Optional, Tuple

from tqdm import tqdm

from rna_hairpin.energies.energy_model import HairpinEnergyModelProtocol, default_energy_model
from rna_hairpin.rules import MIN_HAIRPIN_UNPAIRED, can_pair, pair_type
from rna_hairpin.structures import BasePair, InvertedRepeat, Loop, LoopType, Stem, StemLoop
from rna_hairpin.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class StemLoopScanConfig:
    """
    Search bounds for the stem-loop scanner.

    Attributes
    ----------
    min_stem_length : int
        Minimum number of stacked pairs a stem must have. Defaults to 3.
    min_loop_size : int
        Smallest hairpin loop considered (values below 1 are raised to 1). Defaults to 3.
    max_loop_size : int
        Largest hairpin loop considered. Defaults to 10.
    allow_wobble : bool
        Whether G-U pairs may extend a stem. Defaults to True.
    verbose : bool
        If True, shows a progress bar over loop sizes.
    """
    min_stem_length: int = 3
    min_loop_size: int = MIN_HAIRPIN_UNPAIRED
    max_loop_size: int = 10
    allow_wobble: bool = True
    verbose: bool = False

    @property
    def loop_sizes(self) -> range:
        return range(max(self.min_loop_size, 1), self.max_loop_size + 1)

    @property
    def min_sequence_length(self) -> int:
        return 2 * self.min_stem_length + self.min_loop_size


def grow_stem(
    seq: str,
    i: int,
    j: int,
    allow_wobble: bool = True,
) -> List[BasePair]:
    """
    Grow a perfect stem outward from the closing pair candidate (i, j).

    Pairs are added while ``seq[i]`` and ``seq[j]`` can pair, moving ``i`` left
    and ``j`` right. Growth stops at the first non-pairing position, at a
    sequence boundary. The stem is gap-free: no bulges, internal loops or
    mismatches are ever bridged.

    Parameters
    ----------
    seq : str
        Normalized RNA sequence.
    i, j : int
        Innermost candidate pair, ``i < j``.
    allow_wobble : bool, optional
        Accept G-U pairs, by default True.

    Returns
    -------
    List[BasePair]
        The stem pairs ordered outermost first. Empty when (i, j) cannot pair.
    """
    n = len(seq)
    grown: List[BasePair] = []
    # Stop at the first mismatch or at either sequence end
    while i >= 0 and j < n and i < j and can_pair(seq[i], seq[j], allow_wobble):
        grown.append(BasePair(i, j, seq[i], seq[j], pair_type(seq[i], seq[j])))
        i -= 1
        j += 1

    # Outermost pair first
    grown.reverse()
    return grown


def render_stem_loop(stem_length: int, loop_size: int) -> str:
    """Local notation of a perfect hairpin: ``((( .... )))``."""
    return "(" * stem_length + "." * loop_size + ")" * stem_length


@dataclass(slots=True)
class StemLoopScanner:
    """
    Enumerates every perfect hairpin in a sequence.

    For each admissible loop size and loop position, a stem is grown outward
    from the two residues flanking the loop. Each position/size yields at most
    one (maximal) stem; it is reported when it meets `min_stem_length`.

    Attributes
    ----------
    energy_model : HairpinEnergyModelProtocol
        Scores stems and loops.
    config : StemLoopScanConfig
        Search bounds.
    """
    energy_model: HairpinEnergyModelProtocol
    config: StemLoopScanConfig = field(default_factory=StemLoopScanConfig)

    def scan(self, sequence: Optional[str]) -> List[StemLoop]:
        """
        Return all stem-loop candidates, ordered by start position then loop size.

        Empty or too-short input, and contradictory bounds, give an empty list.
        """
        seq = normalize_sequence(sequence)
        n = len(seq)
        cfg = self.config

        # Nothing fits below two minimal arms plus a minimal loop
        if n == 0 or n < cfg.min_sequence_length:
            logger.debug(f"Stem-loop scan skipped: length {n} < {cfg.min_sequence_length}")
            return []

        min_stem = max(cfg.min_stem_length, 1)
        show_progress = cfg.verbose or logger.isEnabledFor(logging.INFO)
        size_iter = tqdm(cfg.loop_sizes, desc="Stem-loop scan", leave=False, disable=not show_progress)

        # One maximal stem per loop position and size
        candidates: List[StemLoop] = []
        for loop_size in size_iter:
            # Loop needs at least one flanking residue on each side.
            for loop_start in range(1, n - loop_size):
                loop_end = loop_start + loop_size - 1
                pairs = grow_stem(seq, loop_start - 1, loop_end + 1, cfg.allow_wobble)
                if len(pairs) < min_stem:
                    continue
                candidates.append(self._build(seq, pairs, loop_start, loop_end))

        # Order by start, then smallest loop first
        candidates.sort(key=lambda sl: (sl.start, sl.loop.size))
        logger.info(f"Stem-loop scan: {len(candidates)} candidates over N={n}")

        return candidates

    def _build(self, seq: str, pairs: List[BasePair], loop_start: int, loop_end: int) -> StemLoop:
        loop_seq = seq[loop_start:loop_end + 1]
        # Loop energy depends on the pair that closes it
        innermost = pairs[-1]

        stem_dg = self.energy_model.stem(seq, pairs)
        loop_dg = self.energy_model.hairpin_loop(loop_seq, innermost.nt_i, innermost.nt_j)

        stem = Stem(base_pairs=tuple(pairs), free_energy=stem_dg)
        loop = Loop(loop_start, loop_end, LoopType.HAIRPIN, loop_seq, free_energy=loop_dg)

        return StemLoop(
            start=pairs[0].base_i,
            end=pairs[0].base_j,
            stem=stem,
            loop=loop,
            total_free_energy=stem_dg + loop_dg,
            dot_bracket=render_stem_loop(len(pairs), len(loop_seq)),
        )


def find_stem_loops(
    sequence: Optional[str],
    min_stem_length: int = 3,
    min_loop_size: int = MIN_HAIRPIN_UNPAIRED,
    max_loop_size: int = 10,
    allow_wobble: bool = True,
    energy_model: Optional[HairpinEnergyModelProtocol] = None,
) -> List[StemLoop]:
    """
    Enumerate all perfect stem-loops (hairpins) in an RNA sequence.

    Parameters
    ----------
    sequence : str or None
        RNA (or DNA, T read as U), any case.
    min_stem_length : int, optional
        Minimum stem length in pairs, by default 3.
    min_loop_size : int, optional
        Minimum loop size, by default 3.
    max_loop_size : int, optional
        Maximum loop size, by default 10.
    allow_wobble : bool, optional
        Accept G-U pairs in stems, by default True.
    energy_model : HairpinEnergyModelProtocol, optional
        Scoring model; the bundled parameters are used when omitted.

    Returns
    -------
    List[StemLoop]
        Candidates ordered by start position then loop size. Overlapping
        candidates are all reported; see `select_non_overlapping`.
    """
    config = StemLoopScanConfig(
        min_stem_length=min_stem_length,
        min_loop_size=min_loop_size,
        max_loop_size=max_loop_size,
        allow_wobble=allow_wobble,
    )
    scanner = StemLoopScanner(energy_model=energy_model or default_energy_model(), config=config)

    return scanner.scan(sequence)


def find_inverted_repeats(
    sequence: Optional[str],
    min_length: int = 4,
    min_spacing: int = 3,
    max_spacing: int = 20,
) -> List[InvertedRepeat]:
    """
    Find reverse-complementary arm pairs separated by a spacer.

    Arms are grown outward from every spacer of admissible length using strict
    Watson-Crick pairing (no G-U), and reported when at least `min_length` long.

    Parameters
    ----------
    sequence : str or None
        RNA sequence (T read as U).
    min_length : int, optional
        Minimum arm length, by default 4.
    min_spacing : int, optional
        Minimum spacer length, by default 3.
    max_spacing : int, optional
        Maximum spacer length, by default 20.

    Returns
    -------
    List[InvertedRepeat]
        Repeats ordered by left arm start, then spacer length.
    """
    seq = normalize_sequence(sequence)
    n = len(seq)
    min_arm = max(min_length, 1)
    if n < 2 * min_arm + max(min_spacing, 0):
        return []

    repeats: List[InvertedRepeat] = []
    for spacer_len in range(max(min_spacing, 0), max_spacing + 1):
        for spacer_start in range(1, n - spacer_len):
            spacer_end = spacer_start + spacer_len - 1
            arms = grow_stem(seq, spacer_start - 1, spacer_end + 1, allow_wobble=False)
            if len(arms) < min_arm:
                continue
            left_start, right_end = arms[0].as_tuple()
            repeats.append(InvertedRepeat(
                left_start=left_start,
                left_end=spacer_start - 1,
                right_start=spacer_end + 1,
                right_end=right_end,
                left_arm=seq[left_start:spacer_start],
                right_arm=seq[spacer_end + 1:right_end + 1],
                spacer=seq[spacer_start:spacer_end + 1],
            ))

    repeats.sort(key=lambda rep: (rep.left_start, rep.spacer_length))
    return repeats


def stem_loop_pairs(stem_loops: List[StemLoop]) -> Tuple[BasePair, ...]:
    """Flatten the stem pairs of several stem-loops, in the given order."""
    return tuple(bp for sl in stem_loops for bp in sl.stem.base_pairs)
