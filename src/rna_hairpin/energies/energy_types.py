from __future__ import annotations
from dataclasses import dataclass
from typing import Mapping, Tuple

# Stack ΔG keyed by the two stacked pair classes, e.g. "AU/GC" (halves sorted).
StackEnergies = Mapping[str, float]

# Loop ΔG keyed by loop length (nt).
LoopEnergies = Mapping[int, float]

# All-C hairpin loop coefficients (c3, slope, intercept).
AllCLoopCoeffs = Tuple[float, float, float]


@dataclass(frozen=True, slots=True)
class HairpinEnergies:
    """
    Immutable container for the simplified hairpin free-energy parameters.

    All energies are ΔG values in kcal/mol at `TEMP_K`. The loader stores the
    tables as read-only mapping views, so a shared bundle cannot be edited in
    place.

    Parameters
    ----------
    STACK : StackEnergies
        Stacking free energy for two adjacent pairs, keyed by their sorted pair
        classes (``"GC/GC"``, ``"AU/GC"``, ``"GC/GU"``, ...).
    HAIRPIN : LoopEnergies
        Hairpin loop initiation penalty by loop length (nt).
    GNRA_BONUS : float
        Added to a GNRA tetraloop closed by a G·C pair (negative).
    ALL_C_LOOP : AllCLoopCoeffs
        Poly-C loop penalty: ``c3`` for 3-nt loops, ``slope * n + intercept`` above.
    JS_ALPHA : float
        Jacobson–Stockmayer coefficient for loops longer than the table.
    TEMP_K : float
        Reference temperature in Kelvin.
    """
    STACK: StackEnergies
    HAIRPIN: LoopEnergies
    GNRA_BONUS: float = 0.0
    ALL_C_LOOP: AllCLoopCoeffs = (0.0, 0.0, 0.0)
    JS_ALPHA: float = 1.75
    TEMP_K: float = 310.15


def stack_key(class_outer: str, class_inner: str) -> str:
    """
    Orientation-free key for a stack of two pair classes: ``"AU/GC"``.
    """
    first, second = sorted((class_outer, class_inner))
    return f"{first}/{second}"
