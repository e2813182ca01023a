from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class WidgetRequest:
    """
    Structured widget description supplied by the agent.

    Field semantics:
    - command: shell command whose output the widget displays
    - refresh_interval_ms: refresh period in milliseconds
    - positioning: CSS positioning declarations (fixed-centered or absolute-offset)
    - markup: JSX view body with a single root element
    - style_variables_raw: JSON object text, style-variable name -> CSS body
    """

    command: str
    refresh_interval_ms: int
    positioning: str
    markup: str
    style_variables_raw: str = ""

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "WidgetRequest":
        """
        Build from tool-call arguments (wire names: command, refreshIntervalMs,
        positioning, markup, styleVariablesRaw). Shape is validated upstream.
        """
        return cls(
            command=args["command"],
            refresh_interval_ms=args["refreshIntervalMs"],
            positioning=args["positioning"],
            markup=args["markup"],
            style_variables_raw=args.get("styleVariablesRaw", ""),
        )
