# flatmat/config.py
"""
Library configuration and defaults.

Factories and file I/O fall back to CONFIG whenever dtype, layout or
delimiter is not given explicitly.
"""

import json
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union


@dataclass
class MatrixConfig:
    """Global flatmat configuration."""

    # Element type used when a factory gets dtype=None
    default_dtype: str = "float64"

    # Storage order used when a factory gets layout=None
    default_layout: str = "row_major"

    # Delimited-text settings for read_matrix / write_matrix
    delimiter: str = ","
    encoding: str = "utf-8"

    # Seed for Matrix.random when neither seed nor rng is passed (None = fresh entropy)
    random_seed: Optional[int] = None

    # Level used by setup_logging() when none is given
    log_level: str = "WARNING"

    def __post_init__(self):
        if len(self.delimiter) != 1:
            raise ValueError(f"delimiter must be a single character, got {self.delimiter!r}")


def load_config(path: Union[str, Path]) -> MatrixConfig:
    """
    Build a MatrixConfig from a TOML or JSON file of overrides.

    Keys not present in the file keep their defaults.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: On an unsupported extension or an unknown key
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix == ".toml":
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    elif path.suffix == ".json":
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    else:
        raise ValueError(f"Unsupported config format: {path.suffix}")

    # Allow the overrides to live under a [flatmat] table
    data = data.get("flatmat", data)

    known = {f.name for f in fields(MatrixConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")

    return replace(MatrixConfig(), **data)


# Global config instance
CONFIG = MatrixConfig()
