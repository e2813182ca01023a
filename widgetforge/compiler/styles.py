from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List

from widgetforge.core.errors import ValidationError

logger = logging.getLogger(__name__)


StyleMapping = Dict[str, str]


@dataclass(frozen=True)
class StyleParseResult:
    """
    Outcome of decoding the style dictionary.

    degraded=True means the input could not be used and `styles` is empty.
    An empty but well-formed "{}" is not a degradation.
    """

    styles: StyleMapping = field(default_factory=dict)
    degraded: bool = False
    reason: str | None = None


def _degrade(reason: str) -> StyleParseResult:
    logger.warning("Could not parse style variables, continuing unstyled: %s", reason)
    return StyleParseResult(styles={}, degraded=True, reason=reason)


def parse_style_variables(raw: str) -> StyleParseResult:
    """
    Decode a JSON object of style-variable name -> CSS body.

    Never raises: empty input, invalid JSON, a non-object, or any non-string
    value all yield an empty mapping. Key order follows the JSON text.
    """
    if not isinstance(raw, str) or not raw.strip():
        return _degrade("empty input")
    try:
        obj = json.loads(raw)
    except ValueError as e:
        return _degrade(f"invalid JSON: {e}")
    if not isinstance(obj, dict):
        return _degrade(f"expected a JSON object, got {type(obj).__name__}")

    styles: StyleMapping = {}
    for name, body in obj.items():
        if not isinstance(body, str):
            return _degrade(f"value for {name!r} is not a string")
        styles[name] = body
    return StyleParseResult(styles=styles)


def _is_referenced(name: str, markup: str) -> bool:
    return re.search(r"(?<![\w$])" + re.escape(name) + r"(?![\w$])", markup) is not None


def check_style_references(markup: str, styles: StyleMapping) -> None:
    """
    Strict mode only: every style variable must be a usable identifier and
    appear in the markup. Raises ValidationError listing the offenders.
    """
    hyphenated: List[str] = [n for n in styles if "-" in n]
    unreferenced: List[str] = [n for n in styles if n not in hyphenated and not _is_referenced(n, markup)]
    if not hyphenated and not unreferenced:
        return

    parts = []
    if hyphenated:
        parts.append("names must not contain hyphens: " + ", ".join(hyphenated))
    if unreferenced:
        parts.append("not referenced by markup: " + ", ".join(unreferenced))
    raise ValidationError(
        code="validation.style_variable_mismatch",
        message="Style variables do not match markup (" + "; ".join(parts) + ")",
        data={"hyphenated": hyphenated, "unreferenced": unreferenced},
    )
