from .request import WidgetRequest
from .validator import validate_request
from .styles import StyleMapping, StyleParseResult, check_style_references, parse_style_variables
from .generator import escape_js_string, generate_artifact
from .persistence import (
    DEFAULT_FILE_NAME,
    CancelledByOperator,
    Failed,
    PersistenceCoordinator,
    PersistenceOutcome,
    Saved,
)
from .facade import CompileResult, WidgetCompiler

__all__ = [
  "WidgetRequest",
  "validate_request",
  "StyleMapping",
  "StyleParseResult",
  "parse_style_variables",
  "check_style_references",
  "escape_js_string",
  "generate_artifact",
  "DEFAULT_FILE_NAME",
  "PersistenceCoordinator",
  "PersistenceOutcome",
  "Saved",
  "CancelledByOperator",
  "Failed",
  "CompileResult",
  "WidgetCompiler",
]
