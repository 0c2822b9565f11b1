from __future__ import annotations
import math
from typing import Sequence

from rna_hairpin.energies.energy_types import HairpinEnergies, stack_key
from rna_hairpin.structures.pairing import BasePair
from rna_hairpin.utils import gas_constant_times_temp, lookup_loop_energy_js, normalize_base, pair_class
from rna_hairpin.utils.nucleotide_utils import normalize_sequence

DEFAULT_T_K = 310.15  # 37 °C in Kelvin

_PURINES = frozenset({"A", "G"})


def _residue(seq: str, index: int, fallback: str) -> str:
    if 0 <= index < len(seq):
        return normalize_base(seq[index])
    return normalize_base(fallback)


def stack_energy(outer: BasePair, inner: BasePair, seq: str, energies: HairpinEnergies) -> float:
    """
    Free energy (ΔG) of pair `outer` stacking on the adjacent pair `inner`.

    The stack is scored by the classes of the two pairs (GC, AU, GU) only.
    Residues are read from `seq` and fall back to the residues stored on the
    pairs when an index lies outside the sequence.

    Returns
    -------
    float
        Stacking ΔG in kcal/mol; 0.0 when either pair is not a valid RNA pair.
    """
    outer_class = pair_class(_residue(seq, outer.base_i, outer.nt_i), _residue(seq, outer.base_j, outer.nt_j))
    inner_class = pair_class(_residue(seq, inner.base_i, inner.nt_i), _residue(seq, inner.base_j, inner.nt_j))
    if outer_class is None or inner_class is None:
        return 0.0

    return energies.STACK.get(stack_key(outer_class, inner_class), 0.0)


def stem_energy(seq: str, base_pairs: Sequence[BasePair], energies: HairpinEnergies) -> float:
    """
    Sum of stacking contributions over consecutive pairs of a stem.

    Parameters
    ----------
    seq : str
        The sequence the pairs index into.
    base_pairs : Sequence[BasePair]
        Stem pairs ordered outermost first.
    energies : HairpinEnergies
        Parameter tables.

    Returns
    -------
    float
        ΔG in kcal/mol. Negative for two or more pairs; exactly 0.0 for zero or
        one pair since there is nothing to stack on.
    """
    if len(base_pairs) < 2:
        return 0.0

    norm_seq = normalize_sequence(seq)
    return sum(
        stack_energy(outer, inner, norm_seq, energies)
        for outer, inner in zip(base_pairs, base_pairs[1:])
    )


def is_gnra_loop(loop_seq: str) -> bool:
    """
    True for a tetraloop ``G N R A`` (N any base, R a purine).
    """
    if len(loop_seq) != 4:
        return False

    loop_norm = normalize_sequence(loop_seq)
    return loop_norm[0] == "G" and loop_norm[2] in _PURINES and loop_norm[3] == "A"


def is_all_c_loop(loop_seq: str) -> bool:
    """True for a non-empty loop made only of cytosines."""
    return bool(loop_seq) and set(normalize_sequence(loop_seq)) == {"C"}


def all_c_loop_penalty(loop_size: int, energies: HairpinEnergies) -> float:
    """
    Poly-C loop penalty: ``c3`` for loops of three or fewer, else ``slope * n + intercept``.
    """
    c3, slope, intercept = energies.ALL_C_LOOP
    if loop_size <= 3:
        return c3

    return slope * loop_size + intercept


def hairpin_loop_energy(
    loop_seq: str,
    closing_5: str,
    closing_3: str,
    energies: HairpinEnergies,
    temp_k: float = DEFAULT_T_K,
) -> float:
    """
    Calculates the free energy (ΔG) of a hairpin loop.

    The loop is scored as a length-dependent initiation penalty plus two
    sequence-specific terms, each relative to an unbiased loop of the same length:
    a GNRA tetraloop bonus when closed by a G·C pair, and a poly-C penalty.

    Parameters
    ----------
    loop_seq : str
        The unpaired loop residues, 5'->3'.
    closing_5 : str
        5' residue of the closing pair.
    closing_3 : str
        3' residue of the closing pair.
    energies : HairpinEnergies
        Parameter tables.
    temp_k : float, optional
        Temperature used for Jacobson–Stockmayer extrapolation of long loops.

    Returns
    -------
    float
        Loop ΔG in kcal/mol.
    """
    loop_size = len(loop_seq)

    # --- 1. Length-dependent initiation ---
    delta_g = lookup_loop_energy_js(energies.HAIRPIN, loop_size, temp_k, alpha=energies.JS_ALPHA) or 0.0

    # --- 2. GNRA tetraloop bonus ---
    if is_gnra_loop(loop_seq) and pair_class(closing_5, closing_3) == "GC":
        delta_g += energies.GNRA_BONUS

    # --- 3. Poly-C penalty ---
    if is_all_c_loop(loop_seq):
        delta_g += all_c_loop_penalty(loop_size, energies)

    return delta_g


def structure_probability(
    structure_energy: float,
    ensemble_energy: float,
    temp_k: float = DEFAULT_T_K,
) -> float:
    """
    Relative stability of a structure against an ensemble free energy.

    Uses the Boltzmann ratio ``exp(-(E_s - E_ens) / RT)`` clamped to ``[0, 1]``.
    This is a monotone stand-in, not a partition-function probability: a
    structure at (or below) the ensemble energy scores 1.0.

    Parameters
    ----------
    structure_energy : float
        ΔG of the structure (kcal/mol).
    ensemble_energy : float
        Reference ensemble ΔG (kcal/mol).
    temp_k : float, optional
        Absolute temperature in Kelvin.

    Returns
    -------
    float
        A score in ``[0, 1]``.
    """
    if math.isnan(structure_energy) or math.isnan(ensemble_energy):
        return 0.0

    gap = structure_energy - ensemble_energy
    if gap <= 0:
        return 1.0
    if math.isinf(gap):
        return 0.0

    return math.exp(-gap / gas_constant_times_temp(temp_k))
