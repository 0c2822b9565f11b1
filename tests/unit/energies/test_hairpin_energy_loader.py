"""
Tests for the HairpinEnergyLoader: parsing the bundled parameter file and
rejecting malformed or unsupported inputs.
"""
from __future__ import annotations

# --- Standard Library Imports ---
from importlib.resources import files as ir_files
from pathlib import Path

# --- Third-Party Imports ---
import pytest

# --- Local Application Imports ---
from rna_hairpin.energies import HairpinEnergies, HairpinEnergyLoader, load_default_energies
from rna_hairpin.energies.energy_loader import default_params_path
from rna_hairpin.energies.energy_model import load_energy_model
from rna_hairpin.energies.data.thermo_math import delta_g, resolve_dg


@pytest.fixture(scope="module")
def yaml_path() -> str:
    """
    Path to the parameter file bundled with the package.
    """
    return str(ir_files("rna_hairpin.energies") / "data" / "hairpin_simplified_turner2004.yaml")


@pytest.fixture(scope="module")
def bundle(yaml_path) -> HairpinEnergies:
    return HairpinEnergyLoader().load("RNA", yaml_path=yaml_path)


MINIMAL_YAML = """
stacks:
  GC/GC: -3.0
  GU/AU: {dh: -10.0, ds: -30.0}
hairpin_loops:
  3: 5.0
"""


def test_default_path_points_at_bundled_file(yaml_path):
    assert Path(yaml_path) == default_params_path()
    assert default_params_path().is_file()


def test_load_returns_hairpin_bundle(bundle):
    """
    The bundled file yields every table with the expected types and values.
    """
    assert isinstance(bundle, HairpinEnergies)
    assert bundle.TEMP_K == pytest.approx(310.15)
    assert bundle.STACK["GC/GC"] == pytest.approx(-4.2)
    assert bundle.STACK["AU/GC"] == pytest.approx(-3.6)
    assert bundle.STACK["GU/GU"] == pytest.approx(-2.7)
    assert sorted(bundle.HAIRPIN) == [3, 4, 5, 6, 7, 8, 9]
    assert bundle.GNRA_BONUS == pytest.approx(-1.5)
    assert bundle.ALL_C_LOOP == pytest.approx((0.6, 0.1, 0.4))
    assert bundle.JS_ALPHA == pytest.approx(1.75)


def test_all_stacks_are_stabilizing(bundle):
    assert all(dg < 0 for dg in bundle.STACK.values())


def test_default_energies_are_cached():
    assert load_default_energies() is load_default_energies()


@pytest.mark.parametrize("table", ["STACK", "HAIRPIN"])
def test_shared_bundle_tables_are_read_only(table):
    """
    The cached bundle is shared by every caller, so its tables reject writes.
    """
    params = load_default_energies()
    with pytest.raises(TypeError):
        getattr(params, table)["GC/GC"] = 0.0
    assert params.STACK["GC/GC"] == pytest.approx(-4.2)


def test_only_rna_supported(yaml_path):
    with pytest.raises(ValueError):
        HairpinEnergyLoader().load("DNA", yaml_path=yaml_path)


def test_custom_file_with_enthalpy_entropy(tmp_path):
    """
    Stack keys are normalized (halves sorted) and (dh, ds) entries are converted at 37 °C.
    """
    path = tmp_path / "custom.yaml"
    path.write_text(MINIMAL_YAML)

    params = HairpinEnergyLoader().load(yaml_path=path)
    assert params.STACK["GC/GC"] == -3.0
    assert params.STACK["AU/GU"] == pytest.approx(delta_g(-10.0, -30.0, 310.15))
    assert params.GNRA_BONUS == 0.0
    assert params.ALL_C_LOOP == (0.0, 0.0, 0.0)


def test_load_energy_model_uses_file_temperature(tmp_path):
    path = tmp_path / "warm.yaml"
    path.write_text("metadata: {temperature_kelvin: 298.15}\n" + MINIMAL_YAML)

    model = load_energy_model(path)
    assert model.temp_k == pytest.approx(298.15)
    assert load_energy_model(path, temp_k=300.0).temp_k == 300.0


@pytest.mark.parametrize(
    "content",
    [
        "stacks: {GC/XY: -3.0}\nhairpin_loops: {3: 5.0}\n",
        "stacks: {GC/GC: -3.0}\n",
        "stacks: {GC/GC: {dh: -3.0}}\nhairpin_loops: {3: 5.0}\n",
        "metadata: [310.15]\n" + MINIMAL_YAML,
        "special_hairpins: [gnra]\n" + MINIMAL_YAML,
        "special_hairpins: {all_c_loop: [1, 2, 3]}\n" + MINIMAL_YAML,
        "special_hairpins: {all_c_loop: {slope: [0.1]}}\n" + MINIMAL_YAML,
        "jacobson_stockmayer_alpha: steep\n" + MINIMAL_YAML,
        "- just\n- a list\n",
        "stacks: [unclosed\n",
    ],
    ids=[
        "bad-stack-class",
        "no-hairpin",
        "half-thermo",
        "metadata-list",
        "special-list",
        "all-c-list",
        "all-c-non-numeric",
        "alpha-non-numeric",
        "list",
        "malformed",
    ],
)
def test_invalid_files_raise_value_error(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        HairpinEnergyLoader().load(yaml_path=path)


def test_missing_or_non_yaml_file_raises(tmp_path):
    with pytest.raises(ValueError):
        HairpinEnergyLoader().load(yaml_path=tmp_path / "absent.yaml")

    other = tmp_path / "params.json"
    other.write_text("{}")
    with pytest.raises(ValueError):
        HairpinEnergyLoader().load(yaml_path=other)


def test_resolve_dg_shapes():
    assert resolve_dg(-2.0, 310.15) == -2.0
    assert resolve_dg({"dg": -1.5}, 310.15) == -1.5
    assert resolve_dg({"dg_37": -1.25}, 310.15) == -1.25
    assert resolve_dg({"dh": -10.0, "ds": -30.0}, 310.15) == round(-10.0 + 310.15 * 0.03, 2)
    with pytest.raises(ValueError):
        resolve_dg("strong", 310.15)
