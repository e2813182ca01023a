from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Optional, Protocol


class DestinationPicker(Protocol):
    """
    Host-provided capability: ask the operator where to save a file.

    Returns the chosen path, or None when the operator cancels.
    """

    async def prompt_for_destination(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]: ...


def _resolve_choice(answer: str, *, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
    answer = answer.strip()
    if not answer:
        return None
    p = Path(answer).expanduser()
    if not p.is_absolute():
        p = initial_directory / p
    if p.is_dir():
        p = p / default_name
    if extension and not p.suffix:
        p = p.with_suffix("." + extension.lstrip("."))
    return p


class StdioDestinationPicker:
    """
    Terminal picker: prompts on stderr, reads one line from stdin.

    An empty answer (or EOF) cancels. Relative answers are taken relative to
    the initial directory; a directory answer gets the default file name.
    """

    def __init__(self, *, title: str = "Save widget script") -> None:
        self._title = title

    def _ask(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
        print(f"{self._title}: could not write to the widgets folder.", file=sys.stderr)
        print(f"Enter a destination for {default_name} (empty to cancel) [{initial_directory}]: ", end="", file=sys.stderr, flush=True)
        try:
            answer = input()
        except EOFError:
            return None
        return _resolve_choice(answer, default_name=default_name, extension=extension, initial_directory=initial_directory)

    async def prompt_for_destination(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
        return await asyncio.to_thread(self._ask, default_name, extension, initial_directory)


class DecliningDestinationPicker:
    """
    Non-interactive picker that always cancels (e.g. `--no-input`).
    """

    async def prompt_for_destination(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
        _ = (default_name, extension, initial_directory)
        return None
