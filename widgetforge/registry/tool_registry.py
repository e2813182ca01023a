from __future__ import annotations

from typing import Any, Awaitable, Callable


ToolFunc = Callable[[dict[str, Any], bool], Awaitable[str]]


class ToolRegistry:
    """
    Static registry of agent-callable tools: name -> (definition, handler).

    Handlers take the structured tool arguments plus the run's dry_run flag
    and resolve to the status string returned to the agent.
    """

    def __init__(self) -> None:
        self._defs: dict[str, dict[str, Any]] = {}
        self._impls: dict[str, ToolFunc] = {}

    def register(self, tool_def: dict[str, Any], impl: ToolFunc) -> None:
        name = tool_def["name"]
        if name in self._defs:
            raise ValueError(f"Tool already registered: {name}")
        self._defs[name] = tool_def
        self._impls[name] = impl

    def get(self, name: str) -> dict[str, Any] | None:
        return self._defs.get(name)

    async def call(self, name: str, args: dict[str, Any], *, dry_run: bool) -> str:
        impl = self._impls.get(name)
        if impl is None:
            raise KeyError(name)
        return await impl(args, dry_run)

    def list_tools(self) -> list[dict[str, Any]]:
        return [self._defs[k] for k in sorted(self._defs.keys())]
