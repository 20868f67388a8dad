import logging
from decimal import Decimal

import pytest

from azurerm_costs.errors import InvalidReplicationError, UnsupportedAccountKindError
from azurerm_costs.resources.storage_account import (
    build_storage_account,
    new_storage_account,
    storage_sku_name,
)
from azurerm_costs.schema import ResourceData, UsageData

ADDRESS = "azurerm_storage_account.logs"


def _account(**attributes):
    attributes.setdefault("location", "westeurope")
    return ResourceData(address=ADDRESS, type="azurerm_storage_account", attributes=attributes)


def _attr(component, key):
    for f in component.product_filter.attribute_filters:
        if f.key == key:
            return f.value if f.value is not None else f.value_regex
    return None


def test_hot_lrs_defaults_without_usage():
    r = new_storage_account(_account(account_kind="StorageV2", account_tier="Standard", account_replication_type="LRS"))

    assert [c.name for c in r.cost_components] == [
        "Capacity",
        "Write operations",
        "List and create container operations",
        "Read operations",
        "All other operations",
    ]
    assert all(c.monthly_quantity is None for c in r.cost_components)

    capacity = r.cost_components[0]
    assert capacity.unit == "GB"
    assert capacity.product_filter.service == "Storage"
    assert capacity.product_filter.region == "westeurope"
    assert _attr(capacity, "productName") == "General Block Blob v2"
    assert _attr(capacity, "skuName") == "Hot LRS"
    assert _attr(capacity, "meterName") == "/Data Stored$/"
    assert capacity.price_filter.start_usage_amount == "0"

    writes = r.component("Write operations")
    assert writes.unit == "10k operations"
    assert writes.unit_multiplier == 10000
    assert _attr(writes, "meterName") == "/Write Operations$/"


def test_usage_quantities():
    u = UsageData(
        address=ADDRESS,
        values={
            "storage_gb": 1000,
            "monthly_write_operations": 200000,
            "monthly_read_operations": "50000",
        },
    )
    r = new_storage_account(_account(), u)

    assert r.component("Capacity").monthly_quantity == Decimal(1000)
    assert r.component("Write operations").monthly_quantity == Decimal(200000)
    assert r.component("Read operations").monthly_quantity == Decimal(50000)
    assert r.component("All other operations").monthly_quantity is None


def test_cool_tier_adds_data_retrieval():
    r = new_storage_account(_account(account_kind="BlobStorage", access_tier="Cool", account_replication_type="RAGRS"))

    retrieval = r.component("Data retrieval")
    assert retrieval is not None
    assert _attr(retrieval, "productName") == "Blob Storage"
    assert _attr(retrieval, "skuName") == "Cool RA-GRS"
    assert _attr(retrieval, "meterName") == "/Data Retrieval$/"


@pytest.mark.parametrize(
    "attributes,expected",
    [
        ({}, "Hot LRS"),
        ({"account_replication_type": "ragzrs"}, "Hot RA-GZRS"),
        ({"account_replication_type": "GZRS", "access_tier": "Cool"}, "Cool GZRS"),
        ({"account_kind": "BlockBlobStorage", "account_tier": "Premium", "account_replication_type": "ZRS"}, "Premium ZRS"),
    ],
)
def test_sku_names(attributes, expected):
    assert storage_sku_name(_account(**attributes)) == expected


def test_premium_block_blob_product():
    r = new_storage_account(_account(account_kind="BlockBlobStorage", account_tier="Premium"))
    assert _attr(r.cost_components[0], "productName") == "Premium Block Blob"
    assert r.component("Data retrieval") is None


def test_premium_geo_replication_is_rejected(caplog):
    d = _account(account_kind="BlockBlobStorage", account_tier="Premium", account_replication_type="GRS")

    with pytest.raises(InvalidReplicationError):
        build_storage_account(d, None)

    with caplog.at_level(logging.WARNING, logger="azurerm_costs"):
        assert new_storage_account(d) is None
    assert ADDRESS in caplog.text


@pytest.mark.parametrize(
    "attributes",
    [
        {"account_kind": "FileStorage", "account_tier": "Premium"},
        {"account_kind": "BlockBlobStorage", "account_tier": "Standard"},
        {"account_kind": "StorageV2", "account_tier": "Premium"},
        {"account_kind": "BlobStorage", "account_tier": "Premium", "account_replication_type": "ZRS"},
    ],
)
def test_unsupported_kinds(attributes):
    with pytest.raises(UnsupportedAccountKindError):
        build_storage_account(_account(**attributes), None)
    assert new_storage_account(_account(**attributes)) is None


def test_unknown_replication_is_rejected():
    assert new_storage_account(_account(account_replication_type="XRS")) is None
