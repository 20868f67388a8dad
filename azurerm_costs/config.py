#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
config.py

Configuration constants and defaults for azurerm-costs.

The builders in ``azurerm_costs.resources`` never read the environment
themselves; they import the constants below. Values that a user may want to
tune per run (default storage size, hours per month, log level) can be
overridden through ``AZURERM_COSTS_*`` environment variables.
"""

import os

# ---------------------------------------------------------------------
# Pricing catalog identifiers
# ---------------------------------------------------------------------
# VENDOR_NAME:
# - vendorName value every product filter carries.
VENDOR_NAME = "azure"

# PURCHASE_OPTION:
# - Default purchase option for price filters (pay-as-you-go meters).
PURCHASE_OPTION = "Consumption"

# SQL Database catalog coordinates.
SQL_SERVICE_NAME = "SQL Database"
SQL_PRODUCT_FAMILY = "Databases"

# Storage catalog coordinates.
STORAGE_SERVICE_NAME = "Storage"
STORAGE_PRODUCT_FAMILY = "Storage"

# ---------------------------------------------------------------------
# Quantities
# ---------------------------------------------------------------------
# HOURS_PER_MONTH:
# - Used only for presenting hourly quantities as a monthly equivalent.
# - 730 = 365 * 24 / 12 (approx)
HOURS_PER_MONTH = int(os.getenv("AZURERM_COSTS_HOURS_PER_MONTH", "730"))

# DEFAULT_MSSQL_STORAGE_GB:
# - Storage quantity for azurerm_mssql_database when max_size_gb is not set.
DEFAULT_MSSQL_STORAGE_GB = int(os.getenv("AZURERM_COSTS_DEFAULT_MSSQL_STORAGE_GB", "5"))

# STORAGE_OPERATIONS_MULTIPLIER:
# - Storage operation meters are priced per 10,000 operations.
STORAGE_OPERATIONS_MULTIPLIER = 10000

# ---------------------------------------------------------------------
# CLI / logging
# ---------------------------------------------------------------------
DEFAULT_LOG_LEVEL = os.getenv("AZURERM_COSTS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# DEFAULT_OUTPUT_FORMAT:
# - "table" prints a Markdown table through rich, "json" prints the descriptors.
DEFAULT_OUTPUT_FORMAT = os.getenv("AZURERM_COSTS_OUTPUT_FORMAT", "table")

# TRACE_PATH:
# - If set, the CLI appends one JSONL event per processed resource.
TRACE_PATH = os.getenv("AZURERM_COSTS_TRACE", "").strip()
