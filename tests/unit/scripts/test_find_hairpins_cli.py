"""
Unit tests for the `find_hairpins` command-line entry point.
"""
import json

import pytest

from rna_hairpin.scripts.find_hairpins import build_parser, main, validate_and_normalize_seq

PRECURSOR_57 = (
    "GCAUAGCUAGCUAGCUAGCUAGCUA"
    "GAAAUUU"
    "UAGCUAGCUAGCUAGCUAGCUAUGC"
)


def run_json(capsys, argv):
    exit_code = main(["--json", *argv])
    out = capsys.readouterr().out
    return exit_code, json.loads(out)


# ---------- Sequence validation ----------

def test_validate_and_normalize_seq():
    assert validate_and_normalize_seq("  gggTTTaccc\n") == "GGGUUUACCC"


@pytest.mark.parametrize("raw", ["", "   ", "GGGXCCC", "ACGN"])
def test_validate_rejects_bad_input(raw):
    with pytest.raises(ValueError):
        validate_and_normalize_seq(raw)


def test_parser_defaults():
    args = build_parser().parse_args(["GGGAAAACCC"])
    assert args.mode == "structure"
    assert (args.min_stem, args.min_loop, args.max_loop) == (3, 3, 10)
    assert (args.min_length, args.max_length, args.mature_length) == (55, 120, 22)
    assert args.no_wobble is False


# ---------- Structure mode ----------

def test_structure_text_output(capsys):
    assert main(["GGGAAAACCC"]) == 0
    out = capsys.readouterr().out
    assert "Dot-Bracket Notation: (((....)))" in out
    assert "MFE (kcal/mol): -5.40" in out


def test_structure_json_output(capsys):
    exit_code, payload = run_json(capsys, ["GGGAAAACCC"])
    assert exit_code == 0
    assert payload["mode"] == "structure"

    (report,) = payload["results"]
    assert report["sequence"] == "GGGAAAACCC"
    assert report["length"] == 10
    assert report["dot_bracket"] == "(((....)))"
    assert report["mfe_kcal_per_mol"] == pytest.approx(-5.4)
    assert len(report["stem_loops"]) == 1
    assert report["stem_loops"][0]["stem_length"] == 3


def test_multiple_sequences_and_dna_input(capsys):
    exit_code, payload = run_json(capsys, ["GGGTTTTCCC", "AAAAAAAAAA"])
    assert exit_code == 0
    first, second = payload["results"]
    assert first["sequence"] == "GGGUUUUCCC"
    assert second["dot_bracket"] == "." * 10
    assert second["mfe_kcal_per_mol"] == 0.0
    assert second["stem_loops"] == []


def test_scan_bounds_are_forwarded(capsys):
    _, payload = run_json(capsys, ["--min-stem", "4", "GGGAAAACCC"])
    assert payload["results"][0]["dot_bracket"] == ".........."


# ---------- Precursor mode ----------

def test_precursor_json_output(capsys):
    exit_code, payload = run_json(capsys, ["--mode", "precursor", PRECURSOR_57])
    assert exit_code == 0
    assert payload["mode"] == "precursor"

    precursors = payload["results"][0]["precursors"]
    assert precursors
    first = precursors[0]
    assert (first["start"], first["end"]) == (0, 56)
    assert first["stem_length"] == 23
    assert first["free_energy"] == pytest.approx(-29.0)
    assert len(first["mature_sequence"]) == 22


def test_precursor_text_output_without_hits(capsys):
    assert main(["--mode", "precursor", "ACGU" * 5]) == 0
    assert "Precursors : 0" in capsys.readouterr().out


# ---------- Failures ----------

def test_invalid_sequence_exits_with_error(capsys):
    assert main(["GGGXCCC"]) == 2
    captured = capsys.readouterr()
    assert "Error:" in captured.err
    assert "Dot-Bracket" not in captured.out


def test_invalid_sequence_in_json_mode_emits_no_payload(capsys):
    assert main(["--json", "ACGZ"]) == 2
    captured = capsys.readouterr()
    assert "\"results\"" not in captured.out
    assert captured.err == ""


@pytest.mark.parametrize("mode", ["structure", "precursor"])
def test_missing_params_file_exits_with_error(capsys, tmp_path, mode):
    missing = tmp_path / "absent.yaml"
    assert main(["--mode", mode, "--params", str(missing), "GGGAAAACCC"]) == 2
    assert "Failed to load energy parameter YAML" in capsys.readouterr().err


def test_malformed_params_file_exits_with_error(capsys, tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("hairpin_loops: [1, 2\n", encoding="utf-8")
    assert main(["--params", str(bad), "GGGAAAACCC"]) == 2
    assert "Malformed YAML" in capsys.readouterr().err


@pytest.mark.parametrize(
    "content",
    ["metadata: [310.15]\n", "special_hairpins: [gnra]\n"],
    ids=["metadata-list", "special-hairpins-list"],
)
def test_params_file_with_non_mapping_section_exits_with_error(capsys, tmp_path, content):
    bad = tmp_path / "bad.yaml"
    bad.write_text(content + "stacks: {GC/GC: -3.0}\nhairpin_loops: {3: 5.0}\n", encoding="utf-8")
    assert main(["--params", str(bad), "GGGAAAACCC"]) == 2
    assert "must be a mapping" in capsys.readouterr().err
