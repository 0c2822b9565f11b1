#!/usr/bin/env python3
"""
Find RNA hairpins from the command line.

Two modes are available: `structure` predicts a hairpin-only secondary
structure (non-overlapping stem-loops) for each sequence, and `precursor`
lists pre-miRNA-like hairpins with their mature and star arms.

Examples:
  - python find_hairpins.py "GGGAAAACCC"
  - python find_hairpins.py --json --min-stem 4 --no-wobble "GCGCAAAAGCGC" "GGGGAAAACCCC"
  - python find_hairpins.py --mode precursor -v "GGGGGGGGGGGGGGGGGGGGGGGGGAAAAAAACCCCCCCCCCCCCCCCCCCCCCCCC"

"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
import time
from dataclasses import asdict
from typing import Any, Dict, List, Optional

# --- Local Application Imports ---
from rna_hairpin.utils.logging_utils import configure_engine_logging, DEFAULT_LOG_DIR
from rna_hairpin.energies.energy_model import HairpinEnergyModel, load_energy_model
from rna_hairpin.folding.selection import predict_structure
from rna_hairpin.rules import MIN_HAIRPIN_UNPAIRED
from rna_hairpin.precursor.precursor_hairpins import PRECURSOR_MIN_LENGTH_FLOOR, find_precursor_hairpins

# Set up module logger
logger = logging.getLogger(__name__)

ALLOWED_BASES = frozenset("ACGU")


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None) -> None:
    """
    Configures logging for the CLI and the scanning engines.

    Parameters
    ----------
    verbose_level : int
        The verbosity level: 0 for WARNING, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        The path to a specific log file. If not provided, a default timestamped
        log file is created in the `var/log/` directory when verbosity is > 0.
    """
    configure_engine_logging(verbose_level, log_file, extra_loggers=(__name__,))

    if (verbose_level > 0) and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Helpers
# --------------------------
def validate_and_normalize_seq(raw_sequence: str) -> str:
    """
    Validates and normalizes an RNA sequence.

    Strips whitespace, upper-cases, replaces 'T' with 'U' and rejects any
    other character.

    Raises
    ------
    ValueError
        If the sequence is empty or contains characters other than A, C, G, U, T.
    """
    logger.debug(f"Validating sequence: {raw_sequence[:50]}{'...' if len(raw_sequence) > 50 else ''}")
    normalized_sequence = raw_sequence.strip().upper().replace("T", "U")

    if not normalized_sequence:
        raise ValueError("Sequence is empty.")

    for pos, char in enumerate(normalized_sequence):
        if char not in ALLOWED_BASES:
            raise ValueError(f"Invalid character at position {pos} ('{char}'). Only A,C,G,U (or T) are allowed.")

    logger.info(f"Sequence validated: length={len(normalized_sequence)}")
    return normalized_sequence


def structure_report(seq: str, energy_model: HairpinEnergyModel, cli_args: argparse.Namespace) -> Dict[str, Any]:
    """
    Predict the hairpin structure of one sequence and summarize it for output.
    """
    structure = predict_structure(
        seq,
        min_stem_length=cli_args.min_stem,
        min_loop_size=cli_args.min_loop,
        max_loop_size=cli_args.max_loop,
        allow_wobble=not cli_args.no_wobble,
        energy_model=energy_model,
    )

    return {
        "sequence": structure.sequence,
        "length": len(structure.sequence),
        "dot_bracket": structure.dot_bracket,
        "mfe_kcal_per_mol": round(float(structure.free_energy), 2),
        "stem_loops": [
            {
                "start": sl.start,
                "end": sl.end,
                "stem_length": sl.stem.length,
                "loop": sl.loop.sequence,
                "dot_bracket": sl.dot_bracket,
                "delta_G_kcal_per_mol": round(sl.total_free_energy, 2),
            }
            for sl in structure.stem_loops
        ],
    }


def precursor_report(seq: str, cli_args: argparse.Namespace) -> Dict[str, Any]:
    """
    Find precursor hairpins in one sequence and summarize them for output.
    """
    hairpins = find_precursor_hairpins(
        seq,
        min_length=cli_args.min_length,
        max_length=cli_args.max_length,
        mature_length=cli_args.mature_length,
    )

    return {
        "sequence": seq,
        "length": len(seq),
        "precursors": [asdict(hp) for hp in hairpins],
    }


def print_text(report: Dict[str, Any], mode: str) -> None:
    print(f"Sequence Length : {report['length']}")
    print(f"Sequence : {report['sequence']}")
    if mode == "structure":
        print(f"Dot-Bracket Notation: {report['dot_bracket']}")
        print(f"MFE (kcal/mol): {report['mfe_kcal_per_mol']:.2f}")
        for sl in report["stem_loops"]:
            print(f"  [{sl['start']}-{sl['end']}] {sl['dot_bracket']} ΔG={sl['delta_G_kcal_per_mol']:.2f}")
    else:
        print(f"Precursors : {len(report['precursors'])}")
        for hp in report["precursors"]:
            print(f"  [{hp['start']}-{hp['end']}] stem={hp['stem_length']} loop={hp['loop_size']} "
                  f"ΔG={hp['free_energy']:.2f}")
            print(f"    mature : {hp['mature_sequence']}")
            print(f"    star   : {hp['star_sequence']}")


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find RNA hairpins (stem-loops) and pre-miRNA-like precursors.")
    parser.add_argument("sequences", nargs="+", metavar="SEQUENCE",
                        help="RNA sequence(s) (A,C,G,U; T will be converted to U)")
    parser.add_argument("--mode", choices=["structure", "precursor"], default="structure",
                        help="What to report (default: structure).")
    parser.add_argument("--params", default=None,
                        help="Path to parameter YAML (defaults to package data).")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of human-readable text.")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<logger>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all output except final result")

    # Stem-loop scan bounds
    parser.add_argument("--min-stem", type=int, default=3, help="Minimum stem length in pairs (default: 3).")
    parser.add_argument("--min-loop", type=int, default=MIN_HAIRPIN_UNPAIRED,
                        help=f"Minimum hairpin loop size (default: {MIN_HAIRPIN_UNPAIRED}).")
    parser.add_argument("--max-loop", type=int, default=10, help="Maximum hairpin loop size (default: 10).")
    parser.add_argument("--no-wobble", action="store_true", help="Disallow G-U pairs in stems.")

    # Precursor search bounds
    parser.add_argument("--min-length", type=int, default=PRECURSOR_MIN_LENGTH_FLOOR,
                        help=f"Minimum precursor length (never below {PRECURSOR_MIN_LENGTH_FLOOR}).")
    parser.add_argument("--max-length", type=int, default=120, help="Maximum precursor length (default: 120).")
    parser.add_argument("--mature-length", type=int, default=22, help="Mature arm length (default: 22).")

    return parser


def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the requested hairpin search.
    """
    cli_args = build_parser().parse_args(argv)

    # --- Setup ---
    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file)

    try:
        sequences = [validate_and_normalize_seq(raw) for raw in cli_args.sequences]
    except ValueError as e:
        logger.error(f"Sequence validation failed: {e}")
        if not cli_args.json:
            print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        energy_model = load_energy_model(cli_args.params)
    except (ValueError, OSError) as e:
        logger.error(f"Failed to load energy parameters: {e}")
        if not cli_args.json:
            print(f"Failed to load energy parameter YAML: {e}", file=sys.stderr)
        return 2

    start_time = time.perf_counter()
    reports: List[Dict[str, Any]] = []
    for seq in sequences:
        if cli_args.mode == "structure":
            reports.append(structure_report(seq, energy_model, cli_args))
        else:
            reports.append(precursor_report(seq, cli_args))
    logger.info(f"Processed {len(sequences)} sequence(s) in {time.perf_counter() - start_time:.2f}s")

    # --- Output ---
    if cli_args.json:
        print(json.dumps({"mode": cli_args.mode, "results": reports}, indent=2))
    else:
        for idx, report in enumerate(reports):
            if idx:
                print()
            print_text(report, cli_args.mode)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
