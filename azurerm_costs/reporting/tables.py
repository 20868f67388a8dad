from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..config import HOURS_PER_MONTH
from ..schema.types import CostComponent, Resource

NOT_AVAILABLE = "N/A"


def _md_escape(v: Any) -> str:
    s = "" if v is None else str(v)
    # Escape pipes so Markdown tables don't break
    return s.replace("|", "\\|").replace("\n", " ").strip()


def _num(v: Optional[Decimal]) -> str:
    if v is None:
        return NOT_AVAILABLE
    f = float(v)
    # Keep compact for huge numbers
    if abs(f) >= 1_000_000:
        return f"{f:,.0f}"
    if abs(f) >= 1_000:
        return f"{f:,.2f}"
    return f"{f:.4g}"


def _match_summary(c: CostComponent) -> str:
    pf = c.product_filter
    parts = [pf.service, pf.region or "-"]
    for f in pf.attribute_filters:
        parts.append(f"{f.key}={f.value if f.value is not None else f.value_regex}")
    return ", ".join(parts)


def render_resource_table(resources: Sequence[Resource], skipped: Iterable[str] = ()) -> str:
    """Render cost components for all resources as one Markdown table.

    Hourly quantities are shown together with their monthly equivalent.
    Components without an estimate show N/A instead of 0 so they are never
    mistaken for free.
    """
    out: List[str] = []
    out.append("| Resource | Component | Unit | Hourly Qty | Monthly Qty | Catalog match |\n")
    out.append("|---|---|---|---:|---:|---|\n")
    for r in resources:
        for c in r.cost_components:
            hourly = _num(c.hourly_quantity) if c.hourly_quantity is not None else "-"
            monthly = _num(c.monthly_equivalent(HOURS_PER_MONTH))
            out.append(
                "| "
                + " | ".join(
                    [
                        _md_escape(r.name),
                        _md_escape(c.name),
                        _md_escape(c.unit),
                        hourly,
                        monthly,
                        _md_escape(_match_summary(c)),
                    ]
                )
                + " |\n"
            )

    skipped = list(skipped)
    if skipped:
        out.append("\n**Skipped resources**\n\n")
        for addr in skipped:
            out.append(f"- {_md_escape(addr)}\n")

    return "".join(out)


def resources_to_json(resources: Sequence[Resource], skipped: Iterable[str] = ()) -> Dict[str, Any]:
    return {
        "resources": [r.to_dict() for r in resources],
        "skipped": list(skipped),
    }
