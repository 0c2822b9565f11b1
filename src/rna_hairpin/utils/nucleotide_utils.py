from typing import Optional


def normalize_base(base_raw: str) -> str:
    """
    Upper-case a nucleotide base and map T->U so RNA logic can be applied uniformly.

    Parameters
    ----------
    base_raw : str
        Raw single-character nucleotide base.

    Returns
    -------
    str
        Normalized base in {A, U, G, C, N}. Inputs that are not single-character
        strings are returned unchanged.
    """
    if not isinstance(base_raw, str):
        return base_raw

    if len(base_raw) != 1:
        return base_raw

    base_norm = base_raw.upper()

    return "U" if base_norm == "T" else base_norm


def normalize_sequence(seq_raw: Optional[str]) -> str:
    """
    Upper-case a whole sequence and map every T to U.

    Parameters
    ----------
    seq_raw : str or None
        Raw DNA/RNA text. `None` is treated as the empty sequence.

    Returns
    -------
    str
        The RNA-normalized sequence; ``""`` for `None` or empty input.
    """
    if not seq_raw:
        return ""

    return seq_raw.upper().replace("T", "U")


def pair_key(base_a: str, base_b: str) -> str:
    """
    Build a two-letter base-pair key (RNA-normalized), e.g. ``"AU"`` or ``"GU"``.
    """
    return normalize_base(base_a) + normalize_base(base_b)


def pair_class(base_a: str, base_b: str) -> Optional[str]:
    """
    Collapse a base pair to its orientation-free class.

    Both ``G-C`` and ``C-G`` map to ``"GC"``, ``A-U``/``U-A`` to ``"AU"`` and
    ``G-U``/``U-G`` to ``"GU"``.

    Parameters
    ----------
    base_a, base_b : str
        Single-character nucleotides, case-insensitive.

    Returns
    -------
    str or None
        One of ``"GC"``, ``"AU"``, ``"GU"``; `None` when the bases do not pair.
    """
    key = pair_key(base_a, base_b)
    if key in ("GC", "CG"):
        return "GC"
    if key in ("AU", "UA"):
        return "AU"
    if key in ("GU", "UG"):
        return "GU"

    return None
