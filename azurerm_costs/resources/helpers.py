from __future__ import annotations

from decimal import Decimal
from typing import Optional

from ..config import PURCHASE_OPTION, VENDOR_NAME
from ..schema.resource_data import UsageData
from ..schema.types import AttributeFilter, PriceFilter, ProductFilter


def value_filter(key: str, value: str) -> AttributeFilter:
    return AttributeFilter(key=key, value=value)


def regex_filter(key: str, pattern: str) -> AttributeFilter:
    """Catalog regexes are written between slashes, e.g. ``/Hyperscale - Storage/``."""
    return AttributeFilter(key=key, value_regex=f"/{pattern}/")


def product_filter(region: str, service: str, family: str, *filters: AttributeFilter) -> ProductFilter:
    return ProductFilter(
        vendor_name=VENDOR_NAME,
        region=region,
        service=service,
        product_family=family,
        attribute_filters=tuple(filters),
    )


def consumption_price(start_usage_amount: Optional[str] = None) -> PriceFilter:
    return PriceFilter(purchase_option=PURCHASE_OPTION, start_usage_amount=start_usage_amount)


def decimal_or_none(v: Optional[int]) -> Optional[Decimal]:
    return None if v is None else Decimal(v)


def usage_quantity(u: Optional[UsageData], key: str) -> Optional[Decimal]:
    """Usage estimate for ``key``, or None when the user gave none."""
    if u is None or not u.exists(key):
        return None
    return decimal_or_none(u.get_int(key))
