"""Resource and usage document loader.

A resources document is YAML or JSON::

    resources:
      - address: azurerm_mssql_server.main
        type: azurerm_mssql_server
        attributes: {location: eastus}
      - address: azurerm_mssql_database.db
        type: azurerm_mssql_database
        attributes:
          server_id: azurerm_mssql_server.main
          sku_name: GP_Gen5_4

Reference attributes (the ones the registry lists for a type) hold the
address, or a list of addresses, of other resources in the same document.

A usage document maps addresses to usage estimates::

    resource_usage:
      azurerm_mssql_database.db:
        long_term_retention_storage_gb: 1000

The loader is strict: a malformed document raises ValueError with a readable
message so CLI runs fail fast.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

import yaml

from .schema.registry import ResourceRegistry
from .schema.resource_data import ResourceData, UsageData

logger = logging.getLogger(__name__)


def _as_list(x: Any) -> List[Any]:
    if x is None:
        return []
    if isinstance(x, list):
        return x
    return [x]


def _require(obj: Dict[str, Any], key: str, *, ctx: str) -> Any:
    if key not in obj:
        raise ValueError(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _load_one(path: Path) -> Dict[str, Any]:
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw) or {}
        except yaml.YAMLError as ex:
            raise ValueError(f"Invalid YAML in {path}: {ex}") from ex
        if not isinstance(data, dict):
            raise ValueError(f"Top-level YAML must be a mapping in {path}")
        return data
    if path.suffix.lower() == ".json":
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"Top-level JSON must be an object in {path}")
        return data
    raise ValueError(f"Unsupported document file type: {path}")


def _parse_raw_resources(items: Iterable[Any], *, ctx: str) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    seen = set()
    for i, it in enumerate(items):
        rctx = f"{ctx}.resources[{i}]"
        if not isinstance(it, dict):
            raise ValueError(f"resource must be an object in {rctx}")
        address = str(_require(it, "address", ctx=rctx)).strip()
        rtype = str(_require(it, "type", ctx=rctx)).strip()
        if not address or not rtype:
            raise ValueError(f"address and type cannot be empty in {rctx}")
        if address in seen:
            raise ValueError(f"Duplicate address {address!r} in {rctx}")
        seen.add(address)
        attributes = it.get("attributes")
        if attributes is None:
            attributes = {}
        if not isinstance(attributes, dict):
            raise ValueError(f"attributes must be an object in {rctx}")
        out.append({"address": address, "type": rtype, "attributes": attributes})
    return out


def parse_resources(data: Dict[str, Any], registry: ResourceRegistry, *, ctx: str = "document") -> List[ResourceData]:
    """Build ResourceData views, resolving the reference attributes the registry declares."""
    raw = _parse_raw_resources(_as_list(data.get("resources")), ctx=ctx)

    # Referenced resources are exposed one level deep, without their own references.
    plain: Dict[str, ResourceData] = {
        r["address"]: ResourceData(address=r["address"], type=r["type"], attributes=r["attributes"]) for r in raw
    }

    out: List[ResourceData] = []
    for r in raw:
        refs: Dict[str, List[ResourceData]] = {}
        for attr in registry.reference_attributes(r["type"]):
            targets = []
            for addr in _as_list(r["attributes"].get(attr)):
                target = plain.get(str(addr))
                if target is None:
                    logger.warning("Reference %s.%s points to unknown resource %s", r["address"], attr, addr)
                    continue
                targets.append(target)
            refs[attr] = targets
        out.append(
            ResourceData(
                address=r["address"],
                type=r["type"],
                attributes=r["attributes"],
                reference_map=refs,
            )
        )
    return out


def parse_usage(data: Dict[str, Any], *, ctx: str = "usage") -> Dict[str, UsageData]:
    usage = data.get("resource_usage") or {}
    if not isinstance(usage, dict):
        raise ValueError(f"resource_usage must be a mapping in {ctx}")
    out: Dict[str, UsageData] = {}
    for address, values in usage.items():
        if values is None:
            values = {}
        if not isinstance(values, dict):
            raise ValueError(f"usage for {address!r} must be a mapping in {ctx}")
        out[str(address)] = UsageData(address=str(address), values=values)
    return out


def load_resources(path: Path | str, registry: ResourceRegistry) -> List[ResourceData]:
    p = Path(path)
    return parse_resources(_load_one(p), registry, ctx=f"document({p.name})")


def load_usage(path: Path | str) -> Dict[str, UsageData]:
    p = Path(path)
    return parse_usage(_load_one(p), ctx=f"usage({p.name})")
