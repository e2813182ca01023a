from .total_length import run as total_length_run
from .total_length import total_length

__all__ = ["total_length", "total_length_run"]
