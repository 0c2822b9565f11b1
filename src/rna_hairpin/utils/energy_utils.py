from __future__ import annotations
from math import log
from typing import Mapping, Optional

# Ideal gas constant in kcal mol⁻¹ K⁻¹
# 8.3145112 J K-1 mol-1 = 1.9872159e-3 kcal mol⁻¹ K⁻¹
R_KCAL = 1.98720425864083e-3


def gas_constant_times_temp(temp_k: float) -> float:
    """
    Return ``R * T`` in kcal/mol for an absolute temperature in Kelvin.
    """
    return R_KCAL * temp_k


def lookup_loop_energy_js(
    table: Mapping[int, float],
    size: int,
    temp_k: float,
    *,
    alpha: float = 1.75,
) -> Optional[float]:
    """
    Fetch a loop free energy (ΔG) for a given loop size, using Jacobson–Stockmayer
    (JS) extrapolation when `size` is not tabulated.

    Hairpin tables are given as ΔG values at selected sizes. This helper returns:
      - the exact value if `size` is present;
      - for sizes above the largest key `a`, anchor at the largest key `a <= size`:
                ΔG(n) = ΔG(a) + α · R · T · ln(n / a)
      - for sizes below the smallest key, the smallest-key value (the loop can
        only be that short when a caller lowers the scan bounds);
      - `None` if the table is empty.

    Parameters
    ----------
    table : Mapping[int, float]
        Loop ΔG table (kcal/mol) keyed by integer loop size (nt).
    size : int
        Requested loop size.
    temp_k : float
        Absolute temperature in Kelvin.
    alpha : float
        Jacobson–Stockmayer loop-entropy coefficient.

    Returns
    -------
    Optional[float]
        ΔG in kcal/mol, or `None` for an empty table.
    """
    if not table:
        return None

    if size in table:
        return table[size]

    anchor = max((k for k in table.keys() if k <= size), default=None)
    if anchor is None:
        return table[min(table.keys())]

    return table[anchor] + alpha * gas_constant_times_temp(temp_k) * log(size / anchor)
