from __future__ import annotations
from dataclasses import dataclass, field
import logging
import time
from typing import Final, List, Optional

from tqdm import tqdm

from rna_hairpin.rules import MIN_HAIRPIN_UNPAIRED, can_pair, hairpin_size, is_min_hairpin_size
from rna_hairpin.structures import PrecursorHairpin
from rna_hairpin.utils.nucleotide_utils import normalize_sequence

logger = logging.getLogger(__name__)

# Shortest window ever analyzed, whatever `min_length` the caller passes.
PRECURSOR_MIN_LENGTH_FLOOR: Final[int] = 55

MIN_PRECURSOR_STEM: Final[int] = 18
MIN_PRECURSOR_LOOP: Final[int] = MIN_HAIRPIN_UNPAIRED
MAX_PRECURSOR_LOOP: Final[int] = 25

# Residues per window end kept out of the stem so a loop always remains.
_LOOP_RESERVE: Final[int] = 5

STEM_PAIR_ENERGY: Final[float] = -1.5
LOOP_NT_ENERGY: Final[float] = 0.5


@dataclass(slots=True)
class PrecursorSearchConfig:
    """
    Window bounds for the precursor hairpin search.

    Attributes
    ----------
    min_length : int
        Requested minimum window length. Never below `PRECURSOR_MIN_LENGTH_FLOOR`
        in effect, see `effective_min_length`. Defaults to 55.
    max_length : int
        Maximum window length. Defaults to 120.
    mature_length : int
        Maximum length of the reported mature/star arms. Defaults to 22.
    verbose : bool
        If True, shows a progress bar over window lengths.
    """
    min_length: int = PRECURSOR_MIN_LENGTH_FLOOR
    max_length: int = 120
    mature_length: int = 22
    verbose: bool = False

    @property
    def effective_min_length(self) -> int:
        return max(self.min_length, PRECURSOR_MIN_LENGTH_FLOOR)


def precursor_energy(stem_length: int, loop_size: int) -> float:
    """Simplified precursor stability: each pair stabilizes, each loop residue costs."""
    return STEM_PAIR_ENERGY * stem_length + LOOP_NT_ENERGY * loop_size


def analyze_hairpin_window(
    window: str,
    start: int = 0,
    mature_length: int = 22,
) -> Optional[PrecursorHairpin]:
    """
    Test whether a window folds into a single long precursor-like hairpin.

    The stem is grown inward from both window ends (G-U allowed) until the
    first mismatch, capped at ``len(window) // 2 - 5`` pairs. The window is a
    precursor when the stem has at least 18 pairs and the remaining loop has
    3 to 25 residues.

    Parameters
    ----------
    window : str
        Normalized RNA residues of the window.
    start : int, optional
        Position of the window in the parent sequence.
    mature_length : int, optional
        Maximum arm length reported as mature/star, by default 22.

    Returns
    -------
    PrecursorHairpin or None
        The hairpin, or None when the window does not qualify.
    """
    length = len(window)
    cap = length // 2 - _LOOP_RESERVE

    # --- 1. Zip the stem inward from both window ends ---
    stem_length = 0
    i, j = 0, length - 1
    while stem_length < cap and can_pair(window[i], window[j], allow_wobble=True):
        stem_length += 1
        i += 1
        j -= 1

    # --- 2. Check stem and loop bounds ---
    # (i - 1, j + 1) is the innermost pair, or the virtual pair outside the window when none formed.
    loop_size = hairpin_size(i - 1, j + 1)
    if stem_length < MIN_PRECURSOR_STEM:
        return None
    if not is_min_hairpin_size(i - 1, j + 1, MIN_PRECURSOR_LOOP) or loop_size > MAX_PRECURSOR_LOOP:
        return None

    # --- 3. Mature and star arms: the two window ends ---
    mature = window[:min(max(mature_length, 0), length)]
    star = window[length - len(mature):]

    return PrecursorHairpin(
        start=start,
        end=start + length - 1,
        sequence=window,
        structure="(" * stem_length + "." * loop_size + ")" * stem_length,
        mature_sequence=mature,
        star_sequence=star,
        free_energy=precursor_energy(stem_length, loop_size),
        stem_length=stem_length,
        loop_size=loop_size,
    )


@dataclass(slots=True)
class PrecursorHairpinFinder:
    """
    Slides windows of every admissible length over a sequence and keeps the
    ones that fold into a precursor-like hairpin.

    Only perfect stems (Watson-Crick or G-U, no bulges or mismatches) are
    recognized, so most real precursors, whose stems are interrupted, are not
    detected.

    Attributes
    ----------
    config : PrecursorSearchConfig
        Window bounds and arm length.
    """
    config: PrecursorSearchConfig = field(default_factory=PrecursorSearchConfig)

    def find(self, sequence: Optional[str]) -> List[PrecursorHairpin]:
        """
        Return all qualifying windows, ordered by start position then length.
        """
        seq = normalize_sequence(sequence)
        n = len(seq)
        cfg = self.config
        min_len = cfg.effective_min_length

        # Requested lengths below the floor are silently raised
        if cfg.min_length < PRECURSOR_MIN_LENGTH_FLOOR:
            logger.debug(f"min_length={cfg.min_length} raised to floor {PRECURSOR_MIN_LENGTH_FLOOR}")
        if n < min_len or cfg.max_length < min_len:
            return []

        start_time = time.perf_counter()
        show_progress = cfg.verbose or logger.isEnabledFor(logging.INFO)
        length_iter = tqdm(
            range(min_len, min(cfg.max_length, n) + 1),
            desc="Precursor windows",
            leave=False,
            disable=not show_progress,
        )

        # Every window of every admissible length is tested independently
        found: List[PrecursorHairpin] = []
        for length in length_iter:
            for start in range(0, n - length + 1):
                hairpin = analyze_hairpin_window(seq[start:start + length], start, cfg.mature_length)
                if hairpin is not None:
                    found.append(hairpin)

        # Order by start, then shortest window first
        found.sort(key=lambda hp: (hp.start, hp.length))
        elapsed = time.perf_counter() - start_time
        logger.info(f"Precursor search: {len(found)} hairpin(s) in N={n} ({elapsed * 1000:.0f}ms)")

        return found


def find_precursor_hairpins(
    sequence: Optional[str],
    min_length: int = PRECURSOR_MIN_LENGTH_FLOOR,
    max_length: int = 120,
    mature_length: int = 22,
) -> List[PrecursorHairpin]:
    """
    Find pre-miRNA-like hairpins in a sequence.

    Parameters
    ----------
    sequence : str or None
        RNA (or DNA, T read as U), any case.
    min_length : int, optional
        Minimum window length; values below 55 behave as 55.
    max_length : int, optional
        Maximum window length, by default 120.
    mature_length : int, optional
        Maximum mature/star arm length, by default 22.

    Returns
    -------
    List[PrecursorHairpin]
        Every qualifying window, ordered by start then length. Overlapping
        windows describing the same hairpin are all reported.
    """
    config = PrecursorSearchConfig(min_length=min_length, max_length=max_length, mature_length=mature_length)
    return PrecursorHairpinFinder(config).find(sequence)
