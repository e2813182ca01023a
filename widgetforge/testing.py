from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Tuple


class FixedDestinationPicker:
    """
    Deterministic picker for tests/examples: always answers with `path`
    (None means the operator cancels). Every prompt is recorded.
    """

    def __init__(self, path: Optional[Path]) -> None:
        self._path = path
        self.calls: List[Tuple[str, str, Path]] = []

    async def prompt_for_destination(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
        self.calls.append((default_name, extension, initial_directory))
        return self._path


class CancellingDestinationPicker(FixedDestinationPicker):
    def __init__(self) -> None:
        super().__init__(None)


class GatedDestinationPicker(FixedDestinationPicker):
    """
    Picker that waits until `release()` is called, simulating an operator who
    has not answered the dialog yet.
    """

    def __init__(self, path: Optional[Path]) -> None:
        super().__init__(path)
        self._gate = asyncio.Event()
        self.prompted = asyncio.Event()

    def release(self) -> None:
        self._gate.set()

    async def prompt_for_destination(self, default_name: str, extension: str, initial_directory: Path) -> Optional[Path]:
        self.calls.append((default_name, extension, initial_directory))
        self.prompted.set()
        await self._gate.wait()
        return self._path
