from __future__ import annotations

from typing import Any, Dict

from tools.text.total_length import run as total_length_run
from widgetforge.compiler.facade import WidgetCompiler
from widgetforge.registry.tool_registry import ToolRegistry


WIDGET_TOOL = "OutputUbersichtWidget"
TOTAL_LENGTH_TOOL = "TotalLengthOfStrings"


def _widget_args_schema() -> Dict[str, Any]:
    # Types and presence only: emptiness/positivity are reported by the
    # compiler's own validator, one field at a time.
    return {
        "type": "object",
        "additionalProperties": False,
        "properties": {
            "command": {"type": "string", "description": "Shell command whose output the widget displays."},
            "refreshIntervalMs": {"type": "integer", "description": "Refresh period in milliseconds."},
            "positioning": {"type": "string", "description": "CSS positioning declarations."},
            "markup": {"type": "string", "description": "JSX view body with a single root element."},
            "styleVariablesRaw": {
                "type": "string",
                "description": 'JSON object of style-variable name -> CSS body, e.g. {"titleStyle": "font-weight: bold;"}.',
            },
        },
        "required": ["command", "refreshIntervalMs", "positioning", "markup", "styleVariablesRaw"],
    }


def build_tool_registry(compiler: WidgetCompiler) -> ToolRegistry:
    """
    Register the agent-callable tools. The registry is static once built.
    """
    reg = ToolRegistry()

    def reg_tool(name: str, title: str, description: str, side_effects: str, args_schema: Dict[str, Any], impl):
        reg.register(
            {
                "name": name,
                "version": "0.1.0",
                "title": title,
                "description": description,
                "side_effects": side_effects,
                "args_schema": args_schema,
            },
            impl,
        )

    async def total_length_tool(args: Dict[str, Any], dry_run: bool) -> str:
        _ = dry_run
        return total_length_run(args)

    reg_tool(
        WIDGET_TOOL,
        "Compile and save an Übersicht widget",
        "Generates an Übersicht widget script from structured fields, saves it to the widgets folder and returns a status message.",
        "filesystem",
        _widget_args_schema(),
        compiler.run_tool,
    )
    reg_tool(
        TOTAL_LENGTH_TOOL,
        "Total length of strings",
        "Calculates the sum of the lengths of all strings in the input array.",
        "none",
        {
            "type": "object",
            "additionalProperties": False,
            "properties": {"strings": {"type": "array", "items": {"type": "string"}}},
            "required": ["strings"],
        },
        total_length_tool,
    )

    return reg
