import pytest

from azurerm_costs.schema import ResourceData, UsageData


def test_absent_and_null_read_as_none():
    d = ResourceData(address="a.b", type="a", attributes={"x": None, "zero": 0, "empty": "", "off": False})

    assert d.get("missing") is None
    assert d.get("x") is None
    assert not d.exists("missing")
    assert not d.exists("x")
    assert d.exists("zero") and d.get_int("zero") == 0
    assert d.exists("empty") and d.get_str("empty") == ""
    assert d.exists("off") and d.get_bool("off") is False


@pytest.mark.parametrize(
    "value,expected",
    [(4, 4), ("8", 8), (" 16 ", 16), (2.9, 2), (True, 1)],
)
def test_get_int_coercion(value, expected):
    assert ResourceData(address="a.b", type="a", attributes={"n": value}).get_int("n") == expected


def test_get_int_rejects_text():
    d = ResourceData(address="a.b", type="a", attributes={"n": "lots"})
    with pytest.raises(ValueError, match="a.b"):
        d.get_int("n")


@pytest.mark.parametrize("value,expected", [(True, True), ("true", True), ("False", False), (1, True), (0, False)])
def test_get_bool_coercion(value, expected):
    assert ResourceData(address="a.b", type="a", attributes={"z": value}).get_bool("z") is expected


def test_views_are_read_only():
    attrs = {"sku_name": "GP_Gen5_2"}
    d = ResourceData(address="a.b", type="a", attributes=attrs)
    attrs["sku_name"] = "BC_Gen5_2"

    assert d.get("sku_name") == "GP_Gen5_2"
    with pytest.raises(TypeError):
        d.attributes["sku_name"] = "HS_Gen5_2"  # type: ignore[index]
    with pytest.raises(AttributeError):
        d.address = "c.d"  # type: ignore[misc]


def test_usage_exists_distinguishes_zero_from_unknown():
    u = UsageData(address="a.b", values={"monthly_vcore_hours": 0})
    assert u.exists("monthly_vcore_hours")
    assert u.get_int("monthly_vcore_hours") == 0
    assert not u.exists("long_term_retention_storage_gb")


def test_references_default_to_empty():
    server = ResourceData(address="s.main", type="s", attributes={"location": "eastus"})
    d = ResourceData(address="a.b", type="a", reference_map={"server_id": [server]})

    assert d.references("server_id") == (server,)
    assert d.references("other_id") == ()
