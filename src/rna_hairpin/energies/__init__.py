from rna_hairpin.energies.energy_types import HairpinEnergies
from rna_hairpin.energies.energy_loader import HairpinEnergyLoader, load_default_energies
from rna_hairpin.energies.energy_model import HairpinEnergyModel, default_energy_model, load_energy_model

__all__ = [
    "HairpinEnergies",
    "HairpinEnergyLoader",
    "HairpinEnergyModel",
    "default_energy_model",
    "load_default_energies",
    "load_energy_model",
]
