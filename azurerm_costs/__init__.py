"""Map azurerm resource definitions to priced cost components."""

from .resources import new_mssql_database, new_storage_account, parse_mssql_sku
from .schema import CostComponent, Resource, ResourceData, UsageData, build_default_registry

__all__ = [
    "CostComponent",
    "Resource",
    "ResourceData",
    "UsageData",
    "build_default_registry",
    "new_mssql_database",
    "new_storage_account",
    "parse_mssql_sku",
]
