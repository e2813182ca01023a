from .runtime_context import RuntimeContext
from .errors import PersistenceError, ToolNotFound, UnexpectedError, ValidationError, WidgetForgeError
from .dispatcher import ToolDispatcher

__all__ = [
  "RuntimeContext",
  "WidgetForgeError",
  "ValidationError",
  "PersistenceError",
  "UnexpectedError",
  "ToolNotFound",
  "ToolDispatcher",
]
