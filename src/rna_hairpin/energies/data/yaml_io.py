from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML parameter file into a top-level mapping.

    Raises
    ------
    ValueError
        If the path is not a ``.yml``/``.yaml`` file, does not exist, or its
        top level is not a mapping, or the file is not valid YAML.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError("Only YAML files are supported.")

    if not path_obj.is_file():
        raise ValueError(f"Parameter file not found: {path_obj}")

    try:
        data = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Malformed YAML in {path_obj.name}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path_obj.name} must be a mapping.")

    return data
