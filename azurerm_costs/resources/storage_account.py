"""azurerm_storage_account cost components (block blob capacity and operations).

Every quantity comes from the usage file; an account without usage still
yields its components, each with no estimate.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import List, Optional

from ..config import STORAGE_OPERATIONS_MULTIPLIER, STORAGE_PRODUCT_FAMILY, STORAGE_SERVICE_NAME
from ..errors import InvalidReplicationError, UnsupportedAccountKindError
from ..schema.registry import RegistryItem
from ..schema.resource_data import ResourceData, UsageData
from ..schema.types import CostComponent, Resource
from .helpers import consumption_price, product_filter, regex_filter, usage_quantity, value_filter

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_storage_account"

ACCOUNT_PRODUCTS = MappingProxyType(
    {
        "BlockBlobStorage": "Premium Block Blob",
        "StorageV2": "General Block Blob v2",
        "BlobStorage": "Blob Storage",
    }
)

REPLICATION_NAMES = MappingProxyType(
    {
        "LRS": "LRS",
        "ZRS": "ZRS",
        "GRS": "GRS",
        "RAGRS": "RA-GRS",
        "GZRS": "GZRS",
        "RAGZRS": "RA-GZRS",
    }
)

PREMIUM_KIND = "BlockBlobStorage"
PREMIUM_REPLICATION = frozenset({"LRS", "ZRS"})

# (component name, usage key, meter suffix)
OPERATION_METERS = (
    ("Write operations", "monthly_write_operations", "Write Operations"),
    (
        "List and create container operations",
        "monthly_list_and_create_container_operations",
        "List and Create Container Operations",
    ),
    ("Read operations", "monthly_read_operations", "Read Operations"),
    ("All other operations", "monthly_other_operations", "All Other Operations"),
)


def _account_tier(d: ResourceData) -> str:
    return d.get_str("account_tier") or "Standard"


def storage_sku_name(d: ResourceData) -> str:
    """``<tier> <replication>`` as the catalog spells it, e.g. ``Hot RA-GRS``."""
    kind = d.get_str("account_kind") or "StorageV2"
    if kind not in ACCOUNT_PRODUCTS:
        raise UnsupportedAccountKindError(d.address, kind)

    account_tier = _account_tier(d)
    # Block blob pricing is Premium only for BlockBlobStorage and Standard for the rest.
    if (kind == PREMIUM_KIND) != (account_tier == "Premium"):
        raise UnsupportedAccountKindError(d.address, f"{kind} ({account_tier})")

    replication_key = (d.get_str("account_replication_type") or "LRS").upper()
    replication = REPLICATION_NAMES.get(replication_key)
    if replication is None:
        raise InvalidReplicationError(d.address, account_tier, replication_key)

    if account_tier == "Premium":
        if replication_key not in PREMIUM_REPLICATION:
            raise InvalidReplicationError(d.address, account_tier, replication_key)
        return f"Premium {replication}"

    access_tier = d.get_str("access_tier") or "Hot"
    return f"{access_tier} {replication}"


def _storage_filter(region: str, product: str, sku_name: str, meter: str):
    return product_filter(
        region,
        STORAGE_SERVICE_NAME,
        STORAGE_PRODUCT_FAMILY,
        value_filter("productName", product),
        value_filter("skuName", sku_name),
        regex_filter("meterName", f"{meter}$"),
    )


def build_storage_account(d: ResourceData, u: Optional[UsageData]) -> Resource:
    sku_name = storage_sku_name(d)
    product = ACCOUNT_PRODUCTS[d.get_str("account_kind") or "StorageV2"]
    region = d.get_str("location") or ""

    components: List[CostComponent] = [
        CostComponent(
            name="Capacity",
            unit="GB",
            monthly_quantity=usage_quantity(u, "storage_gb"),
            product_filter=_storage_filter(region, product, sku_name, "Data Stored"),
            price_filter=consumption_price(start_usage_amount="0"),
        )
    ]

    for name, usage_key, meter in OPERATION_METERS:
        components.append(
            CostComponent(
                name=name,
                unit="10k operations",
                unit_multiplier=STORAGE_OPERATIONS_MULTIPLIER,
                monthly_quantity=usage_quantity(u, usage_key),
                product_filter=_storage_filter(region, product, sku_name, meter),
                price_filter=consumption_price(),
            )
        )

    if sku_name.startswith("Cool "):
        components.append(
            CostComponent(
                name="Data retrieval",
                unit="GB",
                monthly_quantity=usage_quantity(u, "monthly_data_retrieval_gb"),
                product_filter=_storage_filter(region, product, sku_name, "Data Retrieval"),
                price_filter=consumption_price(),
            )
        )

    return Resource(name=d.address, cost_components=tuple(components))


def new_storage_account(d: ResourceData, u: Optional[UsageData] = None) -> Optional[Resource]:
    try:
        return build_storage_account(d, u)
    except ValueError as exc:
        logger.warning("%s", exc)
        return None


def registry_item() -> RegistryItem:
    return RegistryItem(name=RESOURCE_TYPE, rfunc=new_storage_account, strict_func=build_storage_account)
