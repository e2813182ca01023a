from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class RuntimeContext:
    """
    Per-run settings shared by the dispatcher and the compiler.

    - dry_run: generate artifacts but never write them.
    - trace_path: JSONL audit trace; None disables tracing.
    """

    run_id: str
    dry_run: bool = False
    trace_path: Optional[Path] = None
