from __future__ import annotations
from typing import Any


def delta_g(dh: float, ds: float, temp_k: float) -> float:
    """
    Free energy of a stacking or loop term at `temp_k` from its enthalpy
    (kcal/mol) and entropy (cal/(K·mol)), rounded to 0.01 kcal/mol.
    """
    return round(float(dh) - float(temp_k) * (float(ds) / 1000.0), 2)


def resolve_dg(entry: Any, temp_k: float) -> float:
    """
    Resolve a free energy ΔG(T) from a parameter entry.

    Accepted shapes:
      - a bare number, taken as ΔG;
      - ``{"dg": x}`` (or ``{"dg_37": x}``);
      - ``{"dh": x, "ds": y}``, converted at `temp_k`.

    When both ``dg`` and ``(dh, ds)`` are present, ``dg`` wins.

    Parameters
    ----------
    entry : Any
        The raw YAML value.
    temp_k : float
        Absolute temperature in Kelvin used for (ΔH, ΔS) conversion.

    Returns
    -------
    float
        ΔG in kcal/mol.

    Raises
    ------
    ValueError
        If the entry provides neither ΔG nor both ΔH and ΔS.
    """
    if isinstance(entry, (int, float)) and not isinstance(entry, bool):
        return float(entry)

    if not isinstance(entry, dict):
        raise ValueError(f"Unsupported thermo entry: {entry!r}")

    dg = entry.get("dg") if "dg" in entry else entry.get("dg_37")
    if dg is not None:
        return float(dg)

    dh = entry.get("dh")
    ds = entry.get("ds")
    if dh is None or ds is None:
        raise ValueError("Insufficient thermo terms; need dg or both (dh, ds).")

    return delta_g(dh, ds, temp_k)
