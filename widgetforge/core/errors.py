from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WidgetForgeError(Exception):
    code: str
    message: str
    data: dict[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"


class ValidationError(WidgetForgeError):
    pass


class PersistenceError(WidgetForgeError):
    pass


class UnexpectedError(WidgetForgeError):
    pass


class ToolNotFound(WidgetForgeError):
    pass
