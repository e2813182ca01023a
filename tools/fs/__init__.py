from .write import atomic_write_text
from .write import run as write_run

__all__ = ["atomic_write_text", "write_run"]
