"""
Variable store for {{ let }} and {{ var }}

One store belongs to one expansion run. A store can be seeded from a YAML
mapping so several templates share a common set of definitions.
"""

from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

import yaml


class VariablesError(Exception):
    """Raised when a variables file cannot be loaded"""
    pass


class VariableStore:
    """
    Name -> string value mapping; last write wins

    Reading a name that was never set gives the empty string, which the
    handlers treat as "not set".
    """

    def __init__(self, initial: Optional[Mapping[str, str]] = None) -> None:
        self.values: Dict[str, str] = dict(initial or {})

    def store(self, name: str, value: str) -> None:
        self.values[name] = value

    def get(self, name: str) -> str:
        return self.values.get(name, "")

    def __contains__(self, name: object) -> bool:
        return name in self.values

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return f"VariableStore({self.values!r})"


def variables_loadYAML(path: str) -> Dict[str, str]:
    """
    Load a flat YAML mapping of variable definitions.

    Scalar values are converted to strings; an empty file gives no variables.

    Args:
        path: Path to the YAML file

    Returns:
        Dict of variable name -> value

    Raises:
        VariablesError: If the file is unreadable, malformed, or not a flat mapping
    """
    try:
        with open(Path(path), 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise VariablesError(f"Failed to parse {path}: {e}")
    except OSError as e:
        raise VariablesError(f"Failed to load {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise VariablesError(f"{path} must contain a mapping of names to values")

    variables: Dict[str, str] = {}
    for name, value in data.items():
        if isinstance(value, (dict, list)):
            raise VariablesError(f"Variable '{name}' in {path} must be a scalar")
        variables[str(name)] = "" if value is None else str(value)
    return variables
