from .registry import RegistryItem, ResourceRegistry, build_default_registry
from .resource_data import ResourceData, UsageData
from .types import AttributeFilter, CostComponent, PriceFilter, ProductFilter, Resource

__all__ = [
    "AttributeFilter",
    "CostComponent",
    "PriceFilter",
    "ProductFilter",
    "Resource",
    "ResourceData",
    "UsageData",
    "RegistryItem",
    "ResourceRegistry",
    "build_default_registry",
]
