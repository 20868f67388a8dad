from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from ..config import HOURS_PER_MONTH


def _qty(v: Optional[Decimal]) -> Optional[str]:
    return None if v is None else str(v)


@dataclass(frozen=True)
class AttributeFilter:
    """Matches one catalog attribute, either exactly or by /regex/."""

    key: str
    value: Optional[str] = None
    value_regex: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.value is None) == (self.value_regex is None):
            raise ValueError(f"AttributeFilter {self.key!r} needs exactly one of value / value_regex")

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"key": self.key}
        if self.value is not None:
            out["value"] = self.value
        else:
            out["value_regex"] = self.value_regex
        return out


@dataclass(frozen=True)
class ProductFilter:
    vendor_name: str
    region: str
    service: str
    product_family: str
    attribute_filters: Tuple[AttributeFilter, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vendor_name": self.vendor_name,
            "region": self.region,
            "service": self.service,
            "product_family": self.product_family,
            "attribute_filters": [f.to_dict() for f in self.attribute_filters],
        }


@dataclass(frozen=True)
class PriceFilter:
    purchase_option: Optional[str] = None
    start_usage_amount: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "purchase_option": self.purchase_option,
            "start_usage_amount": self.start_usage_amount,
        }


@dataclass(frozen=True)
class CostComponent:
    """One billable dimension of a resource.

    Quantities are ``None`` when no estimate is available. That is not the same
    as zero: downstream aggregation renders it as N/A instead of pricing it at 0.
    """

    name: str
    unit: str
    product_filter: ProductFilter
    unit_multiplier: int = 1
    hourly_quantity: Optional[Decimal] = None
    monthly_quantity: Optional[Decimal] = None
    price_filter: Optional[PriceFilter] = None

    def __post_init__(self) -> None:
        if self.hourly_quantity is not None and self.monthly_quantity is not None:
            raise ValueError(f"Cost component {self.name!r} cannot have both hourly and monthly quantities")

    @property
    def is_estimated(self) -> bool:
        return self.hourly_quantity is not None or self.monthly_quantity is not None

    def monthly_equivalent(self, hours_per_month: int = HOURS_PER_MONTH) -> Optional[Decimal]:
        if self.monthly_quantity is not None:
            return self.monthly_quantity
        if self.hourly_quantity is not None:
            return self.hourly_quantity * hours_per_month
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "unit": self.unit,
            "unit_multiplier": self.unit_multiplier,
            "hourly_quantity": _qty(self.hourly_quantity),
            "monthly_quantity": _qty(self.monthly_quantity),
            "product_filter": self.product_filter.to_dict(),
            "price_filter": self.price_filter.to_dict() if self.price_filter else None,
        }


@dataclass(frozen=True)
class Resource:
    """Cost descriptor for one infrastructure resource, named after its address."""

    name: str
    cost_components: Tuple[CostComponent, ...] = field(default_factory=tuple)

    def component(self, name: str) -> Optional[CostComponent]:
        for c in self.cost_components:
            if c.name == name:
                return c
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "cost_components": [c.to_dict() for c in self.cost_components],
        }
