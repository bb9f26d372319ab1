"""Data file loading for Gorgon.

Every JSON and YAML file directly inside the project's ``data/`` directory is
loaded as one data bag, keyed by the file name without its extension.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml

from .indifferent import IndifferentDict

DATA_EXTENSIONS = (".json", ".yaml")


def load_data(data_dir: Path) -> IndifferentDict:
    """Load site data from JSON and YAML files in the data directory.

    JSON files are read first, then YAML files, each group in name order, so a
    YAML file wins over a JSON file with the same stem.

    Args:
        data_dir: Directory holding the data files.

    Returns:
        Mapping from bag name to decoded value. Empty if the directory is
        missing.
    """
    data = IndifferentDict()
    if not data_dir.is_dir():
        return data
    for ext in DATA_EXTENSIONS:
        for path in sorted(data_dir.glob(f"*{ext}")):
            if not path.is_file():
                continue
            key = path.name[: -len(ext)]
            print(f"Loading data[{key}] from {path}...")
            with open(path, encoding="utf-8") as f:
                data[key] = json.load(f) if ext == ".json" else yaml.safe_load(f)
    return data
