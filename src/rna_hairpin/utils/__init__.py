from rna_hairpin.utils.energy_utils import gas_constant_times_temp, lookup_loop_energy_js
from rna_hairpin.utils.nucleotide_utils import normalize_base, normalize_sequence, pair_key, pair_class
from rna_hairpin.utils.sequence_utils import generate_random_rna, gc_fraction

__all__ = [
    "gas_constant_times_temp",
    "lookup_loop_energy_js",
    "normalize_base",
    "normalize_sequence",
    "pair_key",
    "pair_class",
    "generate_random_rna",
    "gc_fraction",
]
