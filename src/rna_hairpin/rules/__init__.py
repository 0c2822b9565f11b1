from rna_hairpin.rules.constraints import (
    MIN_HAIRPIN_UNPAIRED,
    can_pair,
    complement,
    hairpin_size,
    is_min_hairpin_size,
    pair_type,
)

__all__ = [
    "MIN_HAIRPIN_UNPAIRED",
    "can_pair",
    "complement",
    "hairpin_size",
    "is_min_hairpin_size",
    "pair_type",
]
