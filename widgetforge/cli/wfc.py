from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

from widgetforge.bootstrap_tools import WIDGET_TOOL, build_tool_registry
from widgetforge.compiler.facade import WidgetCompiler
from widgetforge.compiler.persistence import PersistenceCoordinator
from widgetforge.compiler.request import WidgetRequest
from widgetforge.config import Config, load_config
from widgetforge.core.dispatcher import ToolDispatcher, check_tool_args
from widgetforge.core.errors import ValidationError, WidgetForgeError
from widgetforge.core.runtime_context import RuntimeContext
from widgetforge.picker import DecliningDestinationPicker, DestinationPicker, StdioDestinationPicker
from widgetforge.resources import load_prompts
from widgetforge.trace.replay import Replay

logger = logging.getLogger(__name__)


def _load_json_arg(value: str) -> Any:
    """
    Accept inline JSON or "@path/to/file.json".
    """
    if value.startswith("@"):
        text = Path(value[1:]).expanduser().read_text(encoding="utf-8")
    else:
        text = value
    try:
        return json.loads(text)
    except ValueError as e:
        raise ValidationError(code="cli.invalid_json", message=f"Invalid JSON argument: {e}") from e


def _format_cli_error(e: Exception) -> str:
    """
    Print-friendly error formatting for CLI commands.
    - code/message (via __str__) for WidgetForgeError
    - structured `data` payload when present
    """
    if isinstance(e, WidgetForgeError) and isinstance(e.data, dict) and e.data:
        return str(e) + "\n" + json.dumps(e.data, ensure_ascii=False, indent=2, default=str)
    return str(e)


def _make_picker(args: argparse.Namespace) -> DestinationPicker:
    if getattr(args, "no_input", False):
        return DecliningDestinationPicker()
    return StdioDestinationPicker()


def _build_compiler(cfg: Config, args: argparse.Namespace) -> WidgetCompiler:
    target_dir = Path(args.target_dir).expanduser() if getattr(args, "target_dir", None) else cfg.target_dir
    file_name = getattr(args, "file_name", None) or cfg.file_name
    coordinator = PersistenceCoordinator(target_dir, _make_picker(args), file_name=file_name)
    return WidgetCompiler(
        coordinator,
        strict_styles=bool(getattr(args, "strict_styles", False)) or cfg.strict_styles,
        dry_run=bool(getattr(args, "dry_run", False)),
    )


def _trace_path(cfg: Config, args: argparse.Namespace) -> Path | None:
    if getattr(args, "trace", None):
        return Path(args.trace)
    return cfg.trace_path


def cmd_list_tools(args: argparse.Namespace, cfg: Config) -> int:
    tool_defs = build_tool_registry(_build_compiler(cfg, args)).list_tools()
    if args.json:
        print(json.dumps(tool_defs, ensure_ascii=False, indent=2))
    else:
        for t in tool_defs:
            print("{name} - {title}".format(name=t.get("name"), title=t.get("title")))
    return 0


def cmd_call_tool(args: argparse.Namespace, cfg: Config) -> int:
    tool_args = _load_json_arg(args.args)
    dispatcher = ToolDispatcher(build_tool_registry(_build_compiler(cfg, args)))
    ctx = RuntimeContext(run_id=args.run_id, dry_run=bool(args.dry_run), trace_path=_trace_path(cfg, args))
    out = asyncio.run(dispatcher.call(ctx, args.tool, tool_args))
    print(out)
    return 0


def _request_from_args(args: argparse.Namespace, compiler: WidgetCompiler) -> WidgetRequest:
    if args.from_json:
        data = _load_json_arg("@" + args.from_json)
        # Same shape check the agent's tool calls go through.
        check_tool_args(build_tool_registry(compiler).get(WIDGET_TOOL), data)
        return WidgetRequest.from_args(data)
    return WidgetRequest(
        command=args.command or "",
        refresh_interval_ms=args.refresh_ms,
        positioning=args.positioning or "",
        markup=args.markup or "",
        style_variables_raw=args.styles,
    )


def cmd_compile(args: argparse.Namespace, cfg: Config) -> int:
    compiler = _build_compiler(cfg, args)
    result = asyncio.run(compiler.compile(_request_from_args(args, compiler)))
    if args.print and result.artifact is not None:
        print(result.artifact)
    print(result.status)
    if result.error is not None:
        logger.debug("compile error: %s", result.error)
        return 1
    return 0


def cmd_show_prompt(args: argparse.Namespace, cfg: Config) -> int:
    _ = cfg
    prompts = load_prompts()
    if args.name not in prompts:
        raise ValidationError(code="prompt.unknown", message=f"Unknown prompt: {args.name}", data={"available": sorted(prompts)})
    print(prompts[args.name], end="")
    return 0


def cmd_show_trace(args: argparse.Namespace, cfg: Config) -> int:
    path = _trace_path(cfg, args)
    if path is None:
        raise ValidationError(code="trace.missing", message="No trace path given (use --trace or trace.path in config)")
    events = list(Replay(path).iter_events())

    if args.event_type:
        events = [e for e in events if e.get("event_type") == args.event_type]

    if args.tail is not None and args.tail >= 0:
        events = events[-args.tail :] if args.tail else []

    for e in events:
        print(json.dumps(e, ensure_ascii=False, indent=2 if args.pretty else None))
    return 0


def _add_output_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--target-dir", help="Widgets folder to write into (overrides output.target_dir)")
    p.add_argument("--file-name", help="File name inside the widgets folder (overrides output.file_name)")
    p.add_argument("--no-input", action="store_true", help="Never prompt; an unwritable folder cancels the save")
    p.add_argument("--strict-styles", action="store_true", help="Reject style variables the markup does not reference")
    p.add_argument("--dry-run", action="store_true", help="Generate but do not write anything")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="wfc", description="Übersicht widget compiler")
    parser.add_argument("--config", help="Path to config.yml (default: $XDG_CONFIG_HOME/widgetforge/config.yml)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Override logging.level")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_list_tools = sub.add_parser("list-tools", help="List agent-callable tools")
    p_list_tools.add_argument("--json", action="store_true", help="Output JSON definitions")
    p_list_tools.set_defaults(func=cmd_list_tools)

    p_call = sub.add_parser("call-tool", help="Invoke a tool the way the agent does (JSON args in, status out)")
    p_call.add_argument("--tool", required=True, help="Tool name (see list-tools)")
    p_call.add_argument("--args", required=True, help="Tool args as JSON, or @file.json")
    p_call.add_argument("--trace", help="Trace output path (jsonl)")
    p_call.add_argument("--run-id", default="run_cli", help="Run ID for trace correlation")
    _add_output_args(p_call)
    p_call.set_defaults(func=cmd_call_tool)

    p_compile = sub.add_parser("compile", help="Compile a widget from individual fields")
    p_compile.add_argument("--command", dest="command", help="Shell command whose output the widget displays")
    p_compile.add_argument("--refresh-ms", type=int, default=1000, help="Refresh interval in milliseconds")
    p_compile.add_argument("--positioning", help="CSS positioning declarations")
    p_compile.add_argument("--markup", help="JSX markup with a single root element")
    p_compile.add_argument("--styles", default="{}", help="JSON object of style-variable name -> CSS body")
    p_compile.add_argument("--from-json", help="Read all fields from a JSON file (tool-args shape)")
    p_compile.add_argument("--print", action="store_true", help="Also print the generated script")
    _add_output_args(p_compile)
    p_compile.set_defaults(func=cmd_compile)

    p_prompt = sub.add_parser("show-prompt", help="Print agent prompt text")
    p_prompt.add_argument("--name", default="widget_designer", help="Prompt id")
    p_prompt.set_defaults(func=cmd_show_prompt)

    p_show_trace = sub.add_parser("show-trace", help="Show trace events from a JSONL file")
    p_show_trace.add_argument("--trace", help="Trace path (jsonl)")
    p_show_trace.add_argument("--event-type", help="Only events of this type")
    p_show_trace.add_argument("--tail", type=int, help="Only the last N events")
    p_show_trace.add_argument("--pretty", action="store_true", help="Indent JSON output")
    p_show_trace.set_defaults(func=cmd_show_trace)

    ns = parser.parse_args(argv)
    try:
        cfg = load_config(ns.config)
        logging.basicConfig(
            level=ns.log_level or cfg.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )
        return int(ns.func(ns, cfg))
    except Exception as e:  # noqa: BLE001
        print(_format_cli_error(e))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
