from rna_hairpin.folding.notation import (
    BRACKETS,
    pairs_to_dotbracket,
    parse_dot_bracket,
    validate_dot_bracket,
)
from rna_hairpin.folding.pseudoknots import detect_pseudoknots, pairs_cross
from rna_hairpin.folding.stem_loops import (
    StemLoopScanConfig,
    StemLoopScanner,
    find_inverted_repeats,
    find_stem_loops,
    grow_stem,
)
from rna_hairpin.folding.selection import minimum_free_energy, predict_structure, select_non_overlapping

__all__ = [
    "BRACKETS",
    "pairs_to_dotbracket",
    "parse_dot_bracket",
    "validate_dot_bracket",
    "detect_pseudoknots",
    "pairs_cross",
    "StemLoopScanConfig",
    "StemLoopScanner",
    "find_inverted_repeats",
    "find_stem_loops",
    "grow_stem",
    "minimum_free_energy",
    "predict_structure",
    "select_non_overlapping",
]
