from .mssql_database import MSSQLSku, new_mssql_database, parse_mssql_sku
from .storage_account import new_storage_account

__all__ = [
    "MSSQLSku",
    "new_mssql_database",
    "parse_mssql_sku",
    "new_storage_account",
]
