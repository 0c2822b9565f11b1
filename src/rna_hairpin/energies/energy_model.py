from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from rna_hairpin.energies.energy_loader import HairpinEnergyLoader, load_default_energies
from rna_hairpin.energies.energy_ops import (
    hairpin_loop_energy,
    stem_energy,
    structure_probability,
)
from rna_hairpin.energies.energy_types import HairpinEnergies
from rna_hairpin.structures.pairing import BasePair


class HairpinEnergyModelProtocol(Protocol):
    """
    Interface the scanners use to score stems and hairpin loops.
    """
    params: HairpinEnergies
    temp_k: float

    def stem(self, seq: str, base_pairs: Sequence[BasePair]) -> float: ...

    def hairpin_loop(self, loop_seq: str, closing_5: str, closing_3: str) -> float: ...

    def probability(self, structure_energy: float, ensemble_energy: float) -> float: ...


@dataclass(frozen=True, slots=True)
class HairpinEnergyModel:
    """
    Dispatches energy requests to the pure functions in `energy_ops`.

    Attributes
    ----------
    params : HairpinEnergies
        The loaded parameter tables.
    temp_k : float
        Temperature in Kelvin for loop extrapolation and the stability score.
        Defaults to 310.15 K (37 °C).
    """
    params: HairpinEnergies
    temp_k: float = 310.15

    def stem(self, seq: str, base_pairs: Sequence[BasePair]) -> float:
        """Stacking ΔG of a stem (kcal/mol)."""
        return stem_energy(seq, base_pairs, self.params)

    def hairpin_loop(self, loop_seq: str, closing_5: str, closing_3: str) -> float:
        """Hairpin loop ΔG closed by (`closing_5`, `closing_3`) (kcal/mol)."""
        return hairpin_loop_energy(loop_seq, closing_5, closing_3, self.params, self.temp_k)

    def stem_loop(self, seq: str, base_pairs: Sequence[BasePair], loop_seq: str) -> float:
        """
        Total ΔG of a stem plus the loop its innermost pair closes.
        """
        if not base_pairs:
            return self.hairpin_loop(loop_seq, "", "")

        innermost = base_pairs[-1]
        return self.stem(seq, base_pairs) + self.hairpin_loop(loop_seq, innermost.nt_i, innermost.nt_j)

    def probability(self, structure_energy: float, ensemble_energy: float) -> float:
        """Relative stability score in [0, 1]."""
        return structure_probability(structure_energy, ensemble_energy, self.temp_k)


def load_energy_model(yaml_path: Optional[str | Path] = None, temp_k: Optional[float] = None) -> HairpinEnergyModel:
    """
    Build an energy model from a parameter file (bundled file when omitted).

    The model temperature defaults to the file's reference temperature.
    """
    params = load_default_energies() if yaml_path is None else HairpinEnergyLoader().load("RNA", yaml_path=yaml_path)

    return HairpinEnergyModel(params=params, temp_k=params.TEMP_K if temp_k is None else temp_k)


def default_energy_model() -> HairpinEnergyModel:
    """Energy model over the bundled parameters at their reference temperature."""
    return load_energy_model()
