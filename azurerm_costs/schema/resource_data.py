"""Read-only views over one resource's attributes and its usage estimates.

Attributes that are missing and attributes explicitly set to null both read
back as ``None``; ``0``, ``False`` and ``""`` are real values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple


def _as_int(owner: str, key: str, v: Any) -> int:
    if isinstance(v, bool):
        return int(v)
    try:
        return int(Decimal(str(v).strip()))
    except (InvalidOperation, ValueError, OverflowError):
        raise ValueError(f"Value of {key} for {owner} is not numeric: {v!r}") from None


def _as_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        return v.strip().lower() in {"true", "1"}
    return bool(v)


class _Values:
    address: str
    _values: Mapping[str, Any]

    def get(self, key: str) -> Any:
        return self._values.get(key)

    def exists(self, key: str) -> bool:
        return self._values.get(key) is not None

    def get_str(self, key: str) -> Optional[str]:
        v = self.get(key)
        return None if v is None else str(v)

    def get_int(self, key: str) -> Optional[int]:
        v = self.get(key)
        return None if v is None else _as_int(self.address, key, v)

    def get_bool(self, key: str) -> Optional[bool]:
        v = self.get(key)
        return None if v is None else _as_bool(v)


@dataclass(frozen=True)
class ResourceData(_Values):
    address: str
    type: str
    attributes: Mapping[str, Any] = field(default_factory=dict)
    reference_map: Mapping[str, Tuple["ResourceData", ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        object.__setattr__(
            self,
            "reference_map",
            MappingProxyType({k: tuple(v) for k, v in self.reference_map.items()}),
        )

    @property
    def _values(self) -> Mapping[str, Any]:
        return self.attributes

    def references(self, attribute: str) -> Tuple["ResourceData", ...]:
        return self.reference_map.get(attribute, ())


@dataclass(frozen=True)
class UsageData(_Values):
    address: str
    values: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    @property
    def _values(self) -> Mapping[str, Any]:
        return self.values

