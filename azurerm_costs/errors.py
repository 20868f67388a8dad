"""Errors raised while mapping a resource to cost components.

Every error here is a deterministic validation failure. Builders catch them,
log a warning and skip the resource; they are never retried.
"""

from __future__ import annotations


class SkuParseError(ValueError):
    """A SQL SKU string could not be decoded."""

    reason = "Unrecognized MSSQL SKU"

    def __init__(self, address: str, sku: str):
        self.address = address
        self.sku = sku
        super().__init__(f"{self.reason} for resource {address}: {sku}")


class FormatError(SkuParseError):
    reason = "Unrecognized MSSQL SKU format"


class InvalidTierError(SkuParseError):
    reason = "Invalid tier in MSSQL SKU"


class InvalidFamilyError(SkuParseError):
    reason = "Invalid family in MSSQL SKU"


class InvalidCoreCountError(SkuParseError):
    reason = "Invalid core count in MSSQL SKU"


class StorageAccountError(ValueError):
    """A storage account combination has no catalog mapping."""


class UnsupportedAccountKindError(StorageAccountError):
    def __init__(self, address: str, kind: str):
        self.address = address
        self.kind = kind
        super().__init__(f"Unsupported account kind for resource {address}: {kind}")


class InvalidReplicationError(StorageAccountError):
    def __init__(self, address: str, tier: str, replication: str):
        self.address = address
        self.replication = replication
        super().__init__(
            f"Invalid replication type for {tier} storage account {address}: {replication}"
        )


class MissingReferenceError(ValueError):
    """A reference attribute did not resolve to any resource."""

    def __init__(self, address: str, attribute: str):
        self.address = address
        self.attribute = attribute
        super().__init__(f"Resource {address} has no resolved reference for {attribute}")


__all__ = [
    "SkuParseError",
    "FormatError",
    "InvalidTierError",
    "InvalidFamilyError",
    "InvalidCoreCountError",
    "StorageAccountError",
    "UnsupportedAccountKindError",
    "InvalidReplicationError",
    "MissingReferenceError",
]
