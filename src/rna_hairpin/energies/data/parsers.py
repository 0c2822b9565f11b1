from __future__ import annotations
from typing import Any, Dict, Iterable, Mapping

from rna_hairpin.energies.energy_types import (
    AllCLoopCoeffs,
    LoopEnergies,
    StackEnergies,
    stack_key,
)
from rna_hairpin.energies.data.thermo_math import resolve_dg

_PAIR_CLASSES = frozenset({"GC", "AU", "GU"})


# ---------- Top-level config helpers ----------

def get_section(node: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    """
    Fetch an optional nested mapping; absent or null sections read as empty.

    Raises
    ------
    ValueError
        If the section is present but is not a mapping.
    """
    section = node.get(key)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(f"YAML section '{key}' must be a mapping, got {type(section).__name__}.")

    return section


def get_temperature_kelvin(data: Mapping[str, Any]) -> float:
    """
    Return the reference temperature (Kelvin) of a parameter file.

    Notes
    -----
    Prefer metadata.temperature_kelvin, else top-level temperature_kelvin,
    else default 310.15 K.
    """
    metadata = get_section(data, "metadata")
    if metadata.get("temperature_kelvin") is not None:
        return get_float(metadata, "temperature_kelvin", 310.15)

    return get_float(data, "temperature_kelvin", 310.15)


def get_float(node: Mapping[str, Any], key: str, default: float) -> float:
    """
    Fetch a float from a mapping, falling back to `default` when absent or null.

    Raises
    ------
    ValueError
        If the value is present but not numeric.
    """
    value = node.get(key)
    if value is None:
        return default

    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"'{key}' must be a number, got {value!r}.") from e


# ---------- Stacks ----------

def parse_stack_table(data: Mapping[str, Any], temp_k: float) -> StackEnergies:
    """
    Parse the pair-class stacking table into normalized ``"XX/YY"`` keys.

    Each key names the classes of two stacked pairs (``GC``, ``AU`` or ``GU``);
    the halves may appear in either order in the file and are stored sorted.

    Raises
    ------
    ValueError
        If the section is missing, or a key is malformed or names an unknown class.
    """
    stacks = data.get("stacks")
    if not isinstance(stacks, dict) or not stacks:
        raise ValueError("YAML must contain a non-empty 'stacks' mapping.")

    stack_energies: Dict[str, float] = {}
    for raw_key, entry in stacks.items():
        halves = str(raw_key).upper().split("/")
        if len(halves) != 2 or not all(half in _PAIR_CLASSES for half in halves):
            raise ValueError(f"Invalid stack key {raw_key!r}; expected e.g. 'GC/AU'.")
        stack_energies[stack_key(halves[0], halves[1])] = resolve_dg(entry, temp_k)

    return stack_energies


# ---------- Loop length tables ----------

def parse_loop_table(
    data: Mapping[str, Any],
    keys: Iterable[str],
    temp_k: float,
) -> LoopEnergies:
    """
    Parse loop free energies indexed by loop length (nt).

    The first present key among `keys` (e.g. ``("hairpin_loops", "hairpin_loop")``)
    is used. Entries resolving to nothing are skipped.

    Returns
    -------
    LoopEnergies
        Mapping ``length:int → ΔG``. Empty if no table is present.
    """
    loop = None
    for loop_type in keys:
        if loop_type in data:
            loop = data[loop_type]
            break

    if not isinstance(loop, dict):
        return {}

    loop_energies: Dict[int, float] = {}
    for length_str, entry in loop.items():
        if entry is None:
            continue
        loop_energies[int(length_str)] = resolve_dg(entry, temp_k)

    return loop_energies


# ---------- Special hairpins ----------

def parse_gnra_bonus(data: Mapping[str, Any], temp_k: float) -> float:
    """
    Parse the GNRA tetraloop bonus (0.0 when absent).
    """
    special = get_section(data, "special_hairpins")
    entry = special.get("gnra_bonus")

    return 0.0 if entry is None else resolve_dg(entry, temp_k)


def parse_all_c_loop(data: Mapping[str, Any]) -> AllCLoopCoeffs:
    """
    Parse the poly-C loop penalty coefficients ``(c3, slope, intercept)``.
    """
    node = get_section(get_section(data, "special_hairpins"), "all_c_loop")

    return (
        get_float(node, "c3", 0.0),
        get_float(node, "slope", 0.0),
        get_float(node, "intercept", 0.0),
    )
