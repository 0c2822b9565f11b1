from rna_hairpin.structures.pairing import BasePair, BasePairType, Pair
from rna_hairpin.structures.stem_loop import (
    InvertedRepeat,
    Loop,
    LoopType,
    PrecursorHairpin,
    SecondaryStructure,
    Stem,
    StemLoop,
)

__all__ = [
    "BasePair",
    "BasePairType",
    "Pair",
    "InvertedRepeat",
    "Loop",
    "LoopType",
    "PrecursorHairpin",
    "SecondaryStructure",
    "Stem",
    "StemLoop",
]
