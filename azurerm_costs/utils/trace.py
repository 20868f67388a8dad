"""JSONL run trace.

Each line is one event. ``run_started`` records the inputs of a run; every
supported resource then produces either ``resource_built`` (with a summary of
its components and quantities) or ``resource_skipped`` (with the reason the
builder rejected it).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..schema.resource_data import ResourceData
from ..schema.types import CostComponent, Resource


def _qty(v) -> Optional[str]:
    return None if v is None else str(v)


def component_summary(c: CostComponent) -> Dict[str, Any]:
    return {
        "name": c.name,
        "unit": c.unit,
        "hourly_quantity": _qty(c.hourly_quantity),
        "monthly_quantity": _qty(c.monthly_quantity),
    }


@dataclass(frozen=True)
class TraceEvent:
    event: str
    address: Optional[str] = None
    resource_type: Optional[str] = None
    detail: Dict[str, Any] = field(default_factory=dict)

    def to_json(self, at: datetime) -> str:
        record: Dict[str, Any] = {"at": at.isoformat(), "event": self.event}
        if self.address is not None:
            record["address"] = self.address
            record["resource_type"] = self.resource_type
        record.update(self.detail)
        return json.dumps(record, ensure_ascii=False)


class RunTrace:
    """Appends trace events to ``path``; a trace without a path records nothing."""

    def __init__(self, path: Path | str | None = None):
        self.path = Path(path) if path else None
        self.events_written = 0

    @property
    def enabled(self) -> bool:
        return self.path is not None

    def run_started(self, *, tool_version: str, resources: str, usage_file: Optional[str]) -> None:
        self.write(
            TraceEvent(
                "run_started",
                detail={"tool_version": tool_version, "resources": resources, "usage_file": usage_file},
            )
        )

    def resource_built(self, d: ResourceData, r: Resource) -> None:
        components: List[Dict[str, Any]] = [component_summary(c) for c in r.cost_components]
        self.write(
            TraceEvent(
                "resource_built",
                address=d.address,
                resource_type=d.type,
                detail={
                    "components": components,
                    "unestimated": [c.name for c in r.cost_components if not c.is_estimated],
                },
            )
        )

    def resource_skipped(self, d: ResourceData, reason: Optional[str]) -> None:
        self.write(TraceEvent("resource_skipped", address=d.address, resource_type=d.type, detail={"reason": reason}))

    def write(self, event: TraceEvent) -> None:
        if self.path is None:
            return
        if self.events_written == 0:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(event.to_json(datetime.now(timezone.utc)) + "\n")
        self.events_written += 1


__all__ = ["RunTrace", "TraceEvent", "component_summary"]
