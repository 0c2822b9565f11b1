from rna_hairpin.precursor.precursor_hairpins import (
    PRECURSOR_MIN_LENGTH_FLOOR,
    PrecursorHairpinFinder,
    PrecursorSearchConfig,
    analyze_hairpin_window,
    find_precursor_hairpins,
)

__all__ = [
    "PRECURSOR_MIN_LENGTH_FLOOR",
    "PrecursorHairpinFinder",
    "PrecursorSearchConfig",
    "analyze_hairpin_window",
    "find_precursor_hairpins",
]
