from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, Optional

import jsonschema

from .errors import ToolNotFound, ValidationError, WidgetForgeError, UnexpectedError
from .runtime_context import RuntimeContext
from ..registry.tool_registry import ToolRegistry
from ..trace.trace_emitter import TraceEmitter
from ..trace.trace_store_jsonl import TraceStoreJSONL

logger = logging.getLogger(__name__)


def check_tool_args(tool_def: Dict[str, Any], args: Any) -> None:
    """
    Check tool arguments against the registered args_schema.

    Shape only (types, required keys, no unknown keys); content rules belong
    to the tool itself. Raises ValidationError(code="tool.args_invalid").
    """
    tool_name = tool_def.get("name")
    if not isinstance(args, dict):
        raise ValidationError(code="tool.args_invalid", message="Tool args must be an object", data={"tool_name": tool_name})

    validator = jsonschema.Draft202012Validator(tool_def.get("args_schema", {}))
    errors = [e.message for e in sorted(validator.iter_errors(args), key=str)]
    if errors:
        raise ValidationError(
            code="tool.args_invalid",
            message="Tool args validation failed: " + "; ".join(errors),
            data={"tool_name": tool_name, "errors": errors},
        )


class ToolDispatcher:
    """
    Tool-invocation layer between the agent and the registry.

    Looks the tool up, validates its arguments against the registered
    args_schema, awaits the handler and traces every step. The handler's
    status string is returned unchanged.
    """

    def __init__(self, tool_registry: ToolRegistry):
        self._tools = tool_registry

    async def call(self, ctx: RuntimeContext, tool_name: str, args: Any, *, call_id: Optional[str] = None) -> str:
        store = TraceStoreJSONL(ctx.trace_path) if ctx.trace_path is not None else None
        trace = TraceEmitter(store=store, run_id=ctx.run_id)
        call_id = call_id or uuid.uuid4().hex[:12]

        tool_def = self._tools.get(tool_name)
        if tool_def is None:
            trace.emit("tool_denied", tool_name=tool_name, call_id=call_id, message="Unknown tool")
            logger.warning("Unknown tool requested: %s", tool_name)
            raise ToolNotFound(code="tool.unknown", message=f"Unknown tool: {tool_name}", data={"tool_name": tool_name})

        try:
            check_tool_args(tool_def, args)
        except ValidationError as e:
            trace.emit("tool_denied", tool_name=tool_name, call_id=call_id, message=e.message, data=e.data)
            logger.warning("Rejected %s call: %s", tool_name, e.message)
            raise

        trace.emit("tool_called", tool_name=tool_name, call_id=call_id, message="Tool called", data={"args": args, "dry_run": ctx.dry_run})
        logger.info("Calling tool %s (call_id=%s)", tool_name, call_id)
        try:
            out = await self._tools.call(tool_name, args, dry_run=ctx.dry_run)
        except WidgetForgeError as e:
            trace.emit("error", tool_name=tool_name, call_id=call_id, message=e.message, data={"code": e.code})
            raise
        except Exception as e:  # noqa: BLE001
            trace.emit("error", tool_name=tool_name, call_id=call_id, message="Tool execution error", data={"error": repr(e)})
            raise UnexpectedError(code="unexpected", message=str(e) or repr(e), data={"tool_name": tool_name}) from e

        trace.emit("tool_finished", tool_name=tool_name, call_id=call_id, message="Tool finished", data={"output": out})
        return out

    def tool_definitions(self) -> list[Dict[str, Any]]:
        return self._tools.list_tools()
