"""azurerm_mssql_database cost components.

SKU names follow the vCore model: ``<TIER>_<FAMILY>_<CORES>``, where the tier
itself may contain an underscore (``GP_S_Gen5_2`` is a 2-core serverless
General Purpose database on Gen5 hardware).

Components are emitted in a fixed order: compute, read replicas (Hyperscale),
SQL license (LicenseIncluded, provisioned tiers), storage, long-term
retention (all tiers except Hyperscale).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import List, Optional, Tuple

from ..config import DEFAULT_MSSQL_STORAGE_GB, SQL_PRODUCT_FAMILY, SQL_SERVICE_NAME
from ..errors import (
    FormatError,
    InvalidCoreCountError,
    InvalidFamilyError,
    InvalidTierError,
    MissingReferenceError,
)
from ..schema.registry import RegistryItem
from ..schema.resource_data import ResourceData, UsageData
from ..schema.types import CostComponent, Resource
from .helpers import (
    consumption_price,
    decimal_or_none,
    product_filter,
    regex_filter,
    usage_quantity,
    value_filter,
)

logger = logging.getLogger(__name__)

RESOURCE_TYPE = "azurerm_mssql_database"

SERVERLESS_TIER = "General Purpose - Serverless"
HYPERSCALE_TIER = "Hyperscale"

MSSQL_TIERS = MappingProxyType(
    {
        "GP": "General Purpose",
        "GP_S": SERVERLESS_TIER,
        "HS": HYPERSCALE_TIER,
        "BC": "Business Critical",
    }
)

MSSQL_FAMILIES = MappingProxyType(
    {
        "Gen5": "Compute Gen5",
        "Gen4": "Compute Gen4",
        "M": "Compute M Series",
    }
)

# Checked in order; the first substring found in the region wins.
LICENSE_REGIONS: Tuple[Tuple[str, str], ...] = (
    ("usgov", "US Gov"),
    ("china", "China"),
    ("germany", "Germany"),
)
DEFAULT_LICENSE_REGION = "Global"

# Core counts are signed 64-bit integers.
MIN_CORES = -(2**63)
MAX_CORES = 2**63 - 1


@dataclass(frozen=True)
class MSSQLSku:
    tier: str
    family: str
    cores: str


def parse_mssql_sku(address: str, sku: str) -> MSSQLSku:
    """Decode ``sku`` into tier, family and core count names.

    Raises a ``SkuParseError`` subclass naming ``address`` and ``sku`` when any
    segment is not recognised.
    """
    s = sku.split("_")
    if len(s) < 3:
        raise FormatError(address, sku)

    tier = MSSQL_TIERS.get("_".join(s[:-2]))
    if tier is None:
        raise InvalidTierError(address, sku)

    family = MSSQL_FAMILIES.get(s[-2])
    if family is None:
        raise InvalidFamilyError(address, sku)

    raw_cores = s[-1]
    if not raw_cores.isascii() or raw_cores != raw_cores.strip():
        raise InvalidCoreCountError(address, sku)
    try:
        cores = int(raw_cores, 10)
    except ValueError:
        raise InvalidCoreCountError(address, sku) from None
    if not MIN_CORES <= cores <= MAX_CORES:
        raise InvalidCoreCountError(address, sku)

    return MSSQLSku(tier=tier, family=family, cores=str(cores))


def mssql_sku_name(cores: str, zone_redundant: bool) -> str:
    sku = f"{cores} vCore"
    if zone_redundant:
        sku += " Zone Redundancy"
    return sku


def license_region(region: str) -> str:
    for needle, name in LICENSE_REGIONS:
        if needle in region:
            return name
    return DEFAULT_LICENSE_REGION


def _database_filter(region: str, product_regex: str, sku_name: str):
    return product_filter(
        region,
        SQL_SERVICE_NAME,
        SQL_PRODUCT_FAMILY,
        regex_filter("productName", product_regex),
        value_filter("skuName", sku_name),
    )


def _compute_component(
    sku: str, parsed: MSSQLSku, region: str, zone_redundant: bool, u: Optional[UsageData]
) -> CostComponent:
    product_regex = f"{parsed.tier} - {parsed.family}"

    if parsed.tier == SERVERLESS_TIER:
        return CostComponent(
            name=f"Compute (serverless, {sku})",
            unit="vCore-hours",
            monthly_quantity=usage_quantity(u, "monthly_vcore_hours"),
            product_filter=_database_filter(region, product_regex, mssql_sku_name("1", zone_redundant)),
            price_filter=consumption_price(),
        )

    return CostComponent(
        name=f"Compute (provisioned, {sku})",
        unit="hours",
        hourly_quantity=Decimal(1),
        product_filter=_database_filter(region, product_regex, mssql_sku_name(parsed.cores, zone_redundant)),
        price_filter=consumption_price(),
    )


def _read_replicas_component(d: ResourceData, parsed: MSSQLSku, region: str, zone_redundant: bool) -> CostComponent:
    return CostComponent(
        name="Read replicas",
        unit="hours",
        hourly_quantity=decimal_or_none(d.get_int("read_replica_count")),
        product_filter=_database_filter(
            region,
            f"{parsed.tier} - {parsed.family}",
            mssql_sku_name(parsed.cores, zone_redundant),
        ),
        price_filter=consumption_price(),
    )


def sql_license_component(region: str, cores: str, tier: str) -> CostComponent:
    return CostComponent(
        name="SQL license",
        unit="vCore-hours",
        hourly_quantity=Decimal(int(cores)),
        product_filter=product_filter(
            license_region(region),
            SQL_SERVICE_NAME,
            SQL_PRODUCT_FAMILY,
            regex_filter("productName", f"{tier} - SQL License"),
        ),
        price_filter=consumption_price(),
    )


def mssql_storage_component(storage_gb: Decimal, region: str, tier: str, zone_redundant: bool) -> CostComponent:
    storage_tier = "General Purpose" if tier == SERVERLESS_TIER else tier

    sku_name = storage_tier
    if zone_redundant:
        sku_name += " Zone Redundancy"

    return CostComponent(
        name="Storage",
        unit="GB",
        monthly_quantity=storage_gb,
        product_filter=product_filter(
            region,
            SQL_SERVICE_NAME,
            SQL_PRODUCT_FAMILY,
            regex_filter("productName", f"{storage_tier} - Storage"),
            value_filter("skuName", sku_name),
            value_filter("meterName", "Data Stored"),
        ),
    )


def _long_term_retention_component(region: str, u: Optional[UsageData]) -> CostComponent:
    return CostComponent(
        name="Long-term retention",
        unit="GB",
        monthly_quantity=usage_quantity(u, "long_term_retention_storage_gb"),
        product_filter=product_filter(
            region,
            SQL_SERVICE_NAME,
            SQL_PRODUCT_FAMILY,
            regex_filter("productName", "LTR Backup Storage"),
            value_filter("skuName", "Backup RA-GRS"),
            value_filter("meterName", "RA-GRS Data Stored"),
        ),
        price_filter=consumption_price(),
    )


def _server_region(d: ResourceData) -> str:
    servers = d.references("server_id")
    if not servers:
        raise MissingReferenceError(d.address, "server_id")
    return servers[0].get_str("location") or ""


def build_mssql_database(d: ResourceData, u: Optional[UsageData]) -> Resource:
    """Strict builder: raises on an unrecognised SKU or a missing server reference."""
    region = _server_region(d)
    sku = d.get_str("sku_name") or ""
    parsed = parse_mssql_sku(d.address, sku)
    zone_redundant = bool(d.get_bool("zone_redundant"))

    components: List[CostComponent] = [_compute_component(sku, parsed, region, zone_redundant, u)]

    if parsed.tier == HYPERSCALE_TIER:
        components.append(_read_replicas_component(d, parsed, region, zone_redundant))

    if parsed.tier != SERVERLESS_TIER and d.get_str("license_type") == "LicenseIncluded":
        components.append(sql_license_component(region, parsed.cores, parsed.tier))

    storage_gb = decimal_or_none(d.get_int("max_size_gb"))
    if storage_gb is None:
        storage_gb = Decimal(DEFAULT_MSSQL_STORAGE_GB)
    components.append(mssql_storage_component(storage_gb, region, parsed.tier, zone_redundant))

    if parsed.tier != HYPERSCALE_TIER:
        components.append(_long_term_retention_component(region, u))

    return Resource(name=d.address, cost_components=tuple(components))


def new_mssql_database(d: ResourceData, u: Optional[UsageData] = None) -> Optional[Resource]:
    """Build the resource, or log a warning and return None if it cannot be mapped."""
    try:
        return build_mssql_database(d, u)
    except ValueError as exc:
        logger.warning("%s", exc)
        return None


def registry_item() -> RegistryItem:
    return RegistryItem(
        name=RESOURCE_TYPE,
        rfunc=new_mssql_database,
        reference_attributes=("server_id",),
        strict_func=build_mssql_database,
    )
