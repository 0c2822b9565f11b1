"""
Unit tests for nucleotide normalization, the random RNA generator and the
loop-energy lookup helper.
"""
import math

import pytest

from rna_hairpin.utils import (
    gc_fraction,
    generate_random_rna,
    lookup_loop_energy_js,
    normalize_base,
    normalize_sequence,
    pair_class,
)
from rna_hairpin.utils.energy_utils import R_KCAL


# ---------- Normalization ----------

@pytest.mark.parametrize("raw,expected", [("a", "A"), ("t", "U"), ("T", "U"), ("g", "G"), ("n", "N")])
def test_normalize_base(raw, expected):
    assert normalize_base(raw) == expected


def test_normalize_sequence_reads_dna_as_rna():
    """
    Whole sequences are upper-cased with every T mapped to U; None reads as empty.
    """
    assert normalize_sequence("ggGaaTTccc") == "GGGAAUUCCC"
    assert normalize_sequence("") == ""
    assert normalize_sequence(None) == ""


@pytest.mark.parametrize("a,b", [("G", "C"), ("A", "U"), ("G", "U"), ("A", "G")])
def test_pair_class_is_orientation_free(a, b):
    """
    Both orientations of a pair collapse to the same class.
    """
    assert pair_class(a, b) == pair_class(b, a)


def test_pair_class_values():
    assert pair_class("C", "G") == "GC"
    assert pair_class("u", "a") == "AU"
    assert pair_class("U", "G") == "GU"
    assert pair_class("A", "G") is None


# ---------- Random RNA ----------

def test_generate_random_rna_length_and_alphabet():
    rna = generate_random_rna(100, seed=1)
    assert len(rna) == 100
    assert set(rna) <= set("ACGU")


def test_generate_random_rna_is_reproducible_with_seed():
    assert generate_random_rna(50, seed=42) == generate_random_rna(50, seed=42)


@pytest.mark.parametrize("gc_content", [0.2, 0.5, 0.8])
def test_generate_random_rna_approximates_gc_content(gc_content):
    """
    Over a long draw the observed GC fraction stays close to the target.
    """
    rna = generate_random_rna(10_000, gc_content=gc_content, seed=7)
    assert abs(gc_fraction(rna) - gc_content) < 0.05


def test_generate_random_rna_extremes():
    assert set(generate_random_rna(200, gc_content=1.0, seed=3)) <= {"G", "C"}
    assert set(generate_random_rna(200, gc_content=0.0, seed=3)) <= {"A", "U"}


def test_generate_random_rna_degenerate_inputs():
    assert generate_random_rna(0) == ""
    assert generate_random_rna(-5) == ""
    with pytest.raises(ValueError):
        generate_random_rna(10, gc_content=1.5)
    with pytest.raises(ValueError):
        generate_random_rna(10, gc_content=-0.1)


def test_gc_fraction():
    assert gc_fraction("") == 0.0
    assert gc_fraction("GCAU") == 0.5
    assert gc_fraction("gggg") == 1.0


# ---------- Loop energy lookup ----------

TABLE = {3: 5.4, 4: 5.6, 9: 6.4}


def test_lookup_exact_entry():
    assert lookup_loop_energy_js(TABLE, 4, 310.15) == 5.6


def test_lookup_extrapolates_above_table():
    """
    Longer loops follow ΔG(a) + α·R·T·ln(n / a) from the largest tabulated size.
    """
    expected = 6.4 + 1.75 * R_KCAL * 310.15 * math.log(12 / 9)
    assert lookup_loop_energy_js(TABLE, 12, 310.15) == pytest.approx(expected)


def test_lookup_interior_gap_anchors_below():
    expected = 5.6 + 1.75 * R_KCAL * 310.15 * math.log(6 / 4)
    assert lookup_loop_energy_js(TABLE, 6, 310.15) == pytest.approx(expected)


def test_lookup_below_table_and_empty_table():
    assert lookup_loop_energy_js(TABLE, 1, 310.15) == 5.4
    assert lookup_loop_energy_js({}, 5, 310.15) is None
