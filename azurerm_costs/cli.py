#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
azurerm-costs – CLI

Flow:
- Reads a resources document (YAML/JSON) and, optionally, a usage file.
- Maps every supported resource to its cost components.
- Prints a Markdown table (or JSON) of the components and the catalog
  filters a pricing stage should use. No prices are fetched.
"""

import argparse
import json
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markdown import Markdown

from .config import DEFAULT_LOG_LEVEL, DEFAULT_OUTPUT_FORMAT, LOG_FORMAT, TRACE_PATH
from .loader import load_resources, load_usage
from .reporting import render_resource_table, resources_to_json
from .schema import ResourceData, ResourceRegistry, UsageData, build_default_registry
from .schema.types import Resource
from .utils.trace import RunTrace

console = Console()
logger = logging.getLogger("azurerm_costs")


# --------------------------------------------------------------------
# Argument parsing
# --------------------------------------------------------------------
def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="azurerm-costs",
        description=(
            "Map azurerm resources to cost components.\n\n"
            "For each supported resource type the tool derives the pricing-catalog\n"
            "product/price filters and the hourly or monthly quantity to price."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("resources", help="Resources document (.yaml, .yml or .json).")
    parser.add_argument(
        "--usage-file",
        default=None,
        help="Usage estimates document with a resource_usage mapping keyed by address.",
    )
    parser.add_argument(
        "--output-format",
        choices=["table", "json"],
        default=DEFAULT_OUTPUT_FORMAT,
        help="table: Markdown table on the console, json: cost descriptors as JSON.",
    )
    parser.add_argument("--output", default=None, help="Write the output to this file instead of stdout.")
    parser.add_argument(
        "--log-level",
        default=DEFAULT_LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for internal messages.",
    )
    parser.add_argument(
        "--trace-path",
        default=TRACE_PATH or None,
        help="Append one JSONL event per processed resource to this file.",
    )
    return parser.parse_args(argv)


def build_resources(
    resources: Sequence[ResourceData],
    usage: Dict[str, UsageData],
    registry: ResourceRegistry,
    trace: Optional[RunTrace] = None,
) -> Tuple[List[Resource], List[str]]:
    """Run every supported resource through its builder.

    Returns the built descriptors and the addresses of supported resources the
    builder skipped. Unsupported types are neither built nor reported as skipped.
    """
    trace = trace or RunTrace()
    built: List[Resource] = []
    skipped: List[str] = []
    for d in resources:
        if registry.get(d.type) is None:
            continue
        r, reason = registry.build_or_reason(d, usage.get(d.address))
        if r is None:
            skipped.append(d.address)
            trace.resource_skipped(d, reason)
            continue
        built.append(r)
        trace.resource_built(d, r)
    return built, skipped


def _tool_version() -> str:
    try:
        return metadata.version("azurerm-costs")
    except metadata.PackageNotFoundError:
        return "dev"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logger.debug("CLI arguments: %s", args)

    trace = RunTrace(args.trace_path)
    trace.run_started(tool_version=_tool_version(), resources=args.resources, usage_file=args.usage_file)

    registry = build_default_registry()
    try:
        resources = load_resources(args.resources, registry)
        usage = load_usage(args.usage_file) if args.usage_file else {}
    except (OSError, ValueError) as ex:
        logger.error("Could not load input: %s", ex)
        return 2

    logger.info(
        "Loaded %d resources (%d with usage); supported types: %s",
        len(resources),
        len(usage),
        ", ".join(registry.supported_types()),
    )

    built, skipped = build_resources(resources, usage, registry, trace)
    if skipped:
        logger.warning("Skipped %d resource(s): %s", len(skipped), ", ".join(skipped))

    if args.output_format == "json":
        text = json.dumps(resources_to_json(built, skipped), indent=2, ensure_ascii=False)
    else:
        text = render_resource_table(built, skipped)

    if args.output:
        Path(args.output).write_text(text, encoding="utf-8")
        logger.info("Saved output to %s", args.output)
    elif args.output_format == "json":
        console.print_json(text)
    else:
        console.print(Markdown(text))

    return 0


if __name__ == "__main__":
    sys.exit(main())
