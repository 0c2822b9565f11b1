from __future__ import annotations
from typing import Optional

import numpy as np

RNA_ALPHABET = ("A", "C", "G", "U")


def generate_random_rna(length: int, gc_content: float = 0.5, seed: Optional[int] = None) -> str:
    """
    Draw a random RNA sequence with an expected GC fraction.

    G and C are each drawn with probability ``gc_content / 2``; A and U with
    ``(1 - gc_content) / 2``. Useful as a null model when judging how often
    hairpins occur by chance.

    Parameters
    ----------
    length : int
        Number of residues. Non-positive lengths yield ``""``.
    gc_content : float, optional
        Expected fraction of G + C, in ``[0, 1]``. Defaults to 0.5.
    seed : int, optional
        Seed for `numpy.random.default_rng`, for reproducible draws.

    Returns
    -------
    str
        Upper-case RNA sequence over {A, C, G, U}.

    Raises
    ------
    ValueError
        If `gc_content` lies outside ``[0, 1]``.
    """
    if not 0.0 <= gc_content <= 1.0:
        raise ValueError(f"gc_content must lie in [0, 1], got {gc_content}.")

    if length <= 0:
        return ""

    at_prob = (1.0 - gc_content) / 2.0
    gc_prob = gc_content / 2.0
    rng = np.random.default_rng(seed)
    draws = rng.choice(len(RNA_ALPHABET), size=length, p=[at_prob, gc_prob, gc_prob, at_prob])

    return "".join(RNA_ALPHABET[k] for k in draws)


def gc_fraction(seq: str) -> float:
    """Fraction of G + C residues in `seq` (0.0 for the empty sequence)."""
    if not seq:
        return 0.0

    seq_upper = seq.upper()
    return (seq_upper.count("G") + seq_upper.count("C")) / len(seq_upper)
