from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .resource_data import ResourceData, UsageData
from .types import Resource

logger = logging.getLogger(__name__)

ResourceFunc = Callable[[ResourceData, Optional[UsageData]], Optional[Resource]]


@dataclass(frozen=True)
class RegistryItem:
    """Terraform resource type -> builder, plus the attributes that hold references.

    ``rfunc`` is lenient and returns None for a resource it cannot map.
    ``strict_func``, when given, raises ValueError instead so callers can
    report why the resource was skipped.
    """

    name: str
    rfunc: ResourceFunc
    reference_attributes: Tuple[str, ...] = ()
    strict_func: Optional[Callable[[ResourceData, Optional[UsageData]], Resource]] = None


@dataclass
class ResourceRegistry:
    """Lookup table for cost builders by Terraform resource type."""

    items: Dict[str, RegistryItem] = field(default_factory=dict)

    def register(self, item: RegistryItem) -> None:
        self.items[item.name] = item

    def get(self, resource_type: str) -> Optional[RegistryItem]:
        return self.items.get(resource_type)

    def supported_types(self) -> List[str]:
        return sorted(self.items)

    def reference_attributes(self, resource_type: str) -> Tuple[str, ...]:
        item = self.get(resource_type)
        return item.reference_attributes if item else ()

    def build(self, d: ResourceData, u: Optional[UsageData] = None) -> Optional[Resource]:
        item = self.get(d.type)
        if item is None:
            logger.debug("No cost builder for %s (%s)", d.address, d.type)
            return None
        return item.rfunc(d, u)

    def build_or_reason(
        self, d: ResourceData, u: Optional[UsageData] = None
    ) -> Tuple[Optional[Resource], Optional[str]]:
        """Like build, but also returns why a resource was not built."""
        item = self.get(d.type)
        if item is None:
            return None, f"no cost builder for {d.type}"
        if item.strict_func is None:
            r = item.rfunc(d, u)
            if r is None:
                return None, "builder returned no resource"
            return r, None
        try:
            return item.strict_func(d, u), None
        except ValueError as exc:
            logger.warning("%s", exc)
            return None, str(exc)


def build_default_registry() -> ResourceRegistry:
    # Builders import the schema package, so they are loaded lazily.
    from ..resources import mssql_database, storage_account

    reg = ResourceRegistry()
    reg.register(mssql_database.registry_item())
    reg.register(storage_account.registry_item())
    return reg
