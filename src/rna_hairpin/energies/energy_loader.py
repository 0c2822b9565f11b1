from __future__ import annotations
import logging
from functools import lru_cache
from importlib.resources import files as importlib_files
from pathlib import Path
from types import MappingProxyType
from typing import Literal

from rna_hairpin.energies.data.yaml_io import read_yaml
from rna_hairpin.energies.data.parsers import (
    get_float,
    get_temperature_kelvin,
    parse_all_c_loop,
    parse_gnra_bonus,
    parse_loop_table,
    parse_stack_table,
)
from rna_hairpin.energies.energy_types import HairpinEnergies

logger = logging.getLogger(__name__)

Kind = Literal["RNA"]

DEFAULT_PARAMS_FILE = "hairpin_simplified_turner2004.yaml"


def default_params_path() -> Path:
    """
    Location of the parameter file bundled with the package.
    """
    return Path(str(importlib_files("rna_hairpin.energies") / "data" / DEFAULT_PARAMS_FILE))


class HairpinEnergyLoader:
    """
    Loads the simplified hairpin energy parameters from a YAML file.

    The file holds a small stacking table keyed by pair classes, a hairpin
    loop-length table and two sequence-specific loop adjustments (GNRA bonus,
    poly-C penalty). Values are parsed into an immutable `HairpinEnergies`.
    """
    def load(self, kind: Kind = "RNA", yaml_path: str | Path | None = None) -> HairpinEnergies:
        """
        Load the energy parameter bundle.

        Parameters
        ----------
        kind : {"RNA"}, optional
            Nucleic acid type. Only "RNA" is supported.
        yaml_path : str | Path | None
            Parameter file; the bundled file is used when omitted.

        Returns
        -------
        HairpinEnergies
            Parsed, immutable parameter tables.

        Raises
        ------
        ValueError
            For an unsupported `kind`, an unreadable file, or missing sections.
        """
        if kind.upper() != "RNA":
            raise ValueError("Only 'RNA' is supported for now.")

        return self._build_rna(yaml_path if yaml_path is not None else default_params_path())

    @staticmethod
    def _build_rna(yaml_path: str | Path) -> HairpinEnergies:
        logger.debug(f"Reading hairpin energy parameters from {yaml_path}")
        data = read_yaml(yaml_path)
        temp_k = get_temperature_kelvin(data)

        stacks = parse_stack_table(data, temp_k)
        hairpin = parse_loop_table(data, ("hairpin_loops", "hairpin_loop"), temp_k)
        if not hairpin:
            raise ValueError("YAML must contain a non-empty 'hairpin_loops' table.")

        return HairpinEnergies(
            STACK=MappingProxyType(stacks),
            HAIRPIN=MappingProxyType(hairpin),
            GNRA_BONUS=parse_gnra_bonus(data, temp_k),
            ALL_C_LOOP=parse_all_c_loop(data),
            JS_ALPHA=get_float(data, "jacobson_stockmayer_alpha", 1.75),
            TEMP_K=temp_k,
        )


@lru_cache(maxsize=1)
def load_default_energies() -> HairpinEnergies:
    """
    Bundled parameters, parsed once per process. The result is immutable.
    """
    return HairpinEnergyLoader().load("RNA")
