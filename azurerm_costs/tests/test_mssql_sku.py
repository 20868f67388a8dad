import itertools

import pytest

from azurerm_costs.errors import (
    FormatError,
    InvalidCoreCountError,
    InvalidFamilyError,
    InvalidTierError,
    SkuParseError,
)
from azurerm_costs.resources.mssql_database import (
    MSSQL_FAMILIES,
    MSSQL_TIERS,
    MSSQLSku,
    parse_mssql_sku,
)

ADDRESS = "azurerm_mssql_database.db"


def test_parse_general_purpose_gen5():
    assert parse_mssql_sku(ADDRESS, "GP_Gen5_4") == MSSQLSku(
        tier="General Purpose", family="Compute Gen5", cores="4"
    )


def test_parse_serverless_tier_with_underscore():
    parsed = parse_mssql_sku(ADDRESS, "GP_S_Gen5_2")
    assert parsed.tier == "General Purpose - Serverless"
    assert parsed.family == "Compute Gen5"
    assert parsed.cores == "2"


@pytest.mark.parametrize(
    "tier_key,family_key,cores",
    list(itertools.product(["GP", "GP_S", "HS", "BC"], ["Gen4", "Gen5", "M"], ["0", "2", "80"])),
)
def test_every_known_combination_parses(tier_key, family_key, cores):
    parsed = parse_mssql_sku(ADDRESS, f"{tier_key}_{family_key}_{cores}")
    assert parsed.tier == MSSQL_TIERS[tier_key]
    assert parsed.family == MSSQL_FAMILIES[family_key]
    assert parsed.cores == cores


def test_core_count_is_normalised():
    assert parse_mssql_sku(ADDRESS, "BC_M_08").cores == "8"


@pytest.mark.parametrize("sku", ["", "GP", "GP_Gen5", "Basic", "S0"])
def test_too_few_segments_is_format_error(sku):
    with pytest.raises(FormatError):
        parse_mssql_sku(ADDRESS, sku)


@pytest.mark.parametrize(
    "sku,error",
    [
        ("XX_Gen5_4", InvalidTierError),
        ("GP_X_Gen5_4", InvalidTierError),
        ("GP_Gen9_4", InvalidFamilyError),
        ("HS_gen5_4", InvalidFamilyError),
        ("GP_Gen5_four", InvalidCoreCountError),
        ("GP_Gen5_", InvalidCoreCountError),
        ("GP_Gen5_4.5", InvalidCoreCountError),
        ("GP_Gen5_99999999999999999999", InvalidCoreCountError),
        ("GP_Gen5_9223372036854775808", InvalidCoreCountError),
    ],
)
def test_unrecognised_segments(sku, error):
    with pytest.raises(error) as exc_info:
        parse_mssql_sku(ADDRESS, sku)

    assert isinstance(exc_info.value, SkuParseError)
    assert isinstance(exc_info.value, ValueError)
    assert sku in str(exc_info.value)
    assert ADDRESS in str(exc_info.value)


def test_vocabularies_are_read_only():
    with pytest.raises(TypeError):
        MSSQL_TIERS["XX"] = "Nope"  # type: ignore[index]


def test_core_count_at_64_bit_limit_parses():
    assert parse_mssql_sku(ADDRESS, "GP_Gen5_9223372036854775807").cores == "9223372036854775807"
