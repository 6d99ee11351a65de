"""Command-line interface for the map tool dispatcher."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .config import DispatcherConfig, load_config
from .exporters import get_exporter
from .surface import RecordingSurface
from .tools import MapToolDispatcher, get_all_tool_schemas

LOGGER = logging.getLogger("map_mcp_tools.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Map tools for LLM agents")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")
    subparsers = parser.add_subparsers(dest="command", required=True)

    catalog_parser = subparsers.add_parser("catalog", help="Print the tool catalog as JSON")
    catalog_parser.add_argument(
        "--format",
        choices=["anthropic", "openai"],
        default="anthropic",
        help="Tool schema flavour",
    )

    run_parser = subparsers.add_parser(
        "run", help="Execute tool calls against a headless map"
    )
    run_parser.add_argument("calls", help="JSON list or JSON Lines file of tool calls ('-' for stdin)")
    run_parser.add_argument("--config", default=None, help="YAML dispatcher config")
    run_parser.add_argument("--export", default=None, help="Write the map to .geojson/.json/.yaml")

    return parser


def load_tool_calls(text: str) -> list[dict]:
    """Parse tool calls from a JSON list, a single JSON object or JSON Lines.

    Raises: ValueError naming the first JSON Lines line that does not parse.
    """
    stripped = text.strip()
    if not stripped:
        return []
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return _load_json_lines(text)
    if isinstance(data, dict):
        # A whole model response: take its tool calls or content blocks.
        if "tool_calls" in data:
            return list(data["tool_calls"])
        return list(data.get("content", [data]))
    return list(data)


def _load_json_lines(text: str) -> list[dict]:
    calls = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            calls.append(json.loads(line))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON on line {lineno}: {e.msg}") from e
    return calls


def catalog(args: argparse.Namespace) -> int:
    json.dump(get_all_tool_schemas(args.format), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def run(args: argparse.Namespace) -> int:
    config = load_config(args.config) if args.config else DispatcherConfig()
    # The CLI reports real failures, so wait for each call to be drawn.
    config.wait_for_completion = True
    exporter = get_exporter(args.export) if args.export else None

    if args.calls == "-":
        text = sys.stdin.read()
    else:
        text = Path(args.calls).read_text(encoding="utf-8")
    try:
        tool_calls = load_tool_calls(text)
    except ValueError as e:
        LOGGER.error("Cannot read tool calls from %s: %s", args.calls, e)
        return 2

    surface = RecordingSurface(
        viewport_width=config.viewport_width,
        viewport_height=config.viewport_height,
    )
    failures = 0
    with MapToolDispatcher(surface, config) as dispatcher:
        for result in dispatcher.dispatch_all(tool_calls):
            if not result.success:
                failures += 1
            line = {"id": result.call_id, "tool": result.tool_name, **result.outcome.to_dict()}
            print(json.dumps(line, ensure_ascii=False))
        dispatcher.drain()

    if exporter is not None:
        count = exporter.export(surface, Path(args.export))
        LOGGER.info("Exported %d feature(s) to %s", count, args.export)

    return 1 if failures else 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    if args.command == "catalog":
        return catalog(args)
    if args.command == "run":
        return run(args)
    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":
    sys.exit(main())
