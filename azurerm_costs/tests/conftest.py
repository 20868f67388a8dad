import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1].parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from azurerm_costs.schema import ResourceData, UsageData  # noqa: E402


@pytest.fixture
def make_database():
    """Build an azurerm_mssql_database view wired to a server in ``region``."""

    def _make(attributes, region="eastus", address="azurerm_mssql_database.db"):
        server = ResourceData(
            address="azurerm_mssql_server.main",
            type="azurerm_mssql_server",
            attributes={"location": region},
        )
        return ResourceData(
            address=address,
            type="azurerm_mssql_database",
            attributes=attributes,
            reference_map={"server_id": [server]},
        )

    return _make


@pytest.fixture
def make_usage():
    def _make(values, address="azurerm_mssql_database.db"):
        return UsageData(address=address, values=values)

    return _make
