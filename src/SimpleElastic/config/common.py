from __future__ import annotations

"""Typed access to one section of the YAML config.

Every error message names the dotted config key it refers to, e.g.
`connection.timeout` or `search.indices[1]`.
"""

from dataclasses import dataclass
from typing import Any, Mapping

_REQUIRED = object()


@dataclass(frozen=True, slots=True)
class Section:
    """One top-level mapping of the config, read field by field.

    Getters take an optional default; without one the field is required.
    """

    name: str
    values: Mapping[str, Any]

    @classmethod
    def of(cls, raw: Mapping[str, Any], name: str, *, required: bool) -> Section:
        """Pick section `name` from the root mapping.

        Raises:
            ValueError: If the section is required but missing.
            TypeError: If the section is not a mapping.
        """
        values = raw.get(name)
        if values is None:
            if required:
                raise ValueError(f"Missing required config: {name}")
            return cls(name, {})
        if not isinstance(values, Mapping):
            raise TypeError(f"{name} must be an object")
        return cls(name, values)

    def key(self, field: str) -> str:
        return f"{self.name}.{field}"

    def _raw(self, field: str, default: Any) -> Any:
        value = self.values.get(field, default)
        if value is _REQUIRED:
            raise ValueError(f"Missing required config: {self.key(field)}")
        return value

    def text(self, field: str, default: Any = _REQUIRED) -> str:
        value = self._raw(field, default)
        if not isinstance(value, str):
            raise TypeError(f"{self.key(field)} must be a string")
        return value

    def flag(self, field: str, default: Any = _REQUIRED) -> bool:
        value = self._raw(field, default)
        if not isinstance(value, bool):
            raise TypeError(f"{self.key(field)} must be a boolean")
        return value

    def integer(self, field: str, default: Any = _REQUIRED) -> int:
        """Read an int; booleans are rejected although they subclass int."""
        value = self._raw(field, default)
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{self.key(field)} must be an integer")
        return value

    def seconds(self, field: str, default: Any = _REQUIRED) -> float:
        """Read a non-negative duration given as int or float."""
        value = self._raw(field, default)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{self.key(field)} must be a number")
        if value < 0:
            raise ValueError(f"{self.key(field)} must not be negative")
        return float(value)

    def names(self, field: str, default: Any = _REQUIRED) -> tuple[str, ...]:
        """Read a list of non-blank names, stripped."""
        value = self._raw(field, default)
        key = self.key(field)
        if not isinstance(value, list):
            raise TypeError(f"{key} must be a list")
        names: list[str] = []
        for idx, item in enumerate(value):
            if not isinstance(item, str):
                raise TypeError(f"{key}[{idx}] must be a string")
            if not item.strip():
                raise ValueError(f"{key}[{idx}] must not be empty")
            names.append(item.strip())
        return tuple(names)
