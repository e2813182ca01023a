from __future__ import annotations

from typing import List

from .request import WidgetRequest
from .styles import StyleMapping

HEADER_LINES = (
    "import { css } from 'uebersicht'; // Optional, use when Emotion's css functions are needed.",
    "import { styled } from 'uebersicht'; // Optional, use when Emotion styled functions are needed.",
)

NO_STYLES_PLACEHOLDER = "// No style variables defined"

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_js_string(value: str) -> str:
    """
    Escape text for embedding inside a double-quoted JS string literal.
    """
    return "".join(_JS_STRING_ESCAPES.get(ch, ch) for ch in value)


def render_style_declarations(styles: StyleMapping) -> str:
    if not styles:
        return NO_STYLES_PLACEHOLDER
    return "\n".join(f"const {name} = css`{body}`;" for name, body in styles.items())


def generate_artifact(request: WidgetRequest, styles: StyleMapping) -> str:
    """
    Render the Übersicht widget script (index.jsx) for a validated request.

    Pure and deterministic: markup and positioning are inlined verbatim,
    style declarations follow the mapping's order.
    """
    lines: List[str] = [
        *HEADER_LINES,
        "",
        "/* ----- Übersicht exports ---- */",
        "",
        f'export const command = "{escape_js_string(request.command)}"',
        f"export const refreshFrequency = {int(request.refresh_interval_ms)}",
        "",
        "export const render = ({ data_in }) => (",
        f"    {request.markup}",
        ");",
        "",
        "export const className = css`",
        request.positioning,
        "`;",
        "",
        "/* ----- local stuff ---- */",
        "",
        render_style_declarations(styles),
    ]
    return "\n".join(lines)
