from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from tools.fs.write import atomic_write_text
from tools.fs.write import run as fs_write
from widgetforge.picker import DestinationPicker

logger = logging.getLogger(__name__)


DEFAULT_FILE_NAME = "index.jsx"


@dataclass(frozen=True)
class Saved:
    path: Path


@dataclass(frozen=True)
class CancelledByOperator:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str
    code: str = "persistence.fallback_write_failed"


PersistenceOutcome = Union[Saved, CancelledByOperator, Failed]


def _write_direct(target_dir: Path, file_name: str, artifact: str) -> Path:
    target_dir.mkdir(parents=True, exist_ok=True)
    return atomic_write_text(target_dir / file_name, artifact)


class PersistenceCoordinator:
    """
    Two-tier save of a compiled artifact.

    1. Direct write of `file_name` into `target_dir` (created if missing).
    2. Only if that raises OSError: ask the picker for a destination and write
       there. A None answer, or cancellation of the waiting task, means the
       operator declined.

    Writes are atomic; nothing is retried. Blocking I/O runs in a worker thread
    so a pending picker never stalls other compilations.
    """

    def __init__(self, target_dir: Path, picker: DestinationPicker, *, file_name: str = DEFAULT_FILE_NAME):
        self._target_dir = target_dir
        self._picker = picker
        self._file_name = file_name

    @property
    def target_dir(self) -> Path:
        return self._target_dir

    @property
    def target_path(self) -> Path:
        return self._target_dir / self._file_name

    def preview(self, artifact: str) -> Dict[str, Any]:
        return fs_write({"path": str(self.target_path), "content": artifact}, dry_run=True)

    async def persist(self, artifact: str, *, default_name: Optional[str] = None) -> PersistenceOutcome:
        file_name = default_name or self._file_name
        try:
            path = await asyncio.to_thread(_write_direct, self._target_dir, file_name, artifact)
        except OSError as e:
            logger.warning("Direct write to %s failed, falling back to picker: %s", self._target_dir, e)
            return await self._fallback(artifact, file_name)

        logger.info("Widget script written to %s", path)
        return Saved(path=path)

    async def _fallback(self, artifact: str, file_name: str) -> PersistenceOutcome:
        extension = Path(file_name).suffix.lstrip(".")
        try:
            chosen = await self._picker.prompt_for_destination(file_name, extension, self._target_dir)
        except asyncio.CancelledError:
            logger.info("Destination prompt cancelled")
            return CancelledByOperator()

        if chosen is None:
            logger.info("Operator declined to choose a destination")
            return CancelledByOperator()

        try:
            path = await asyncio.to_thread(atomic_write_text, Path(chosen), artifact)
        except OSError as e:
            logger.error("Write to operator-chosen path %s failed: %s", chosen, e)
            return Failed(reason=f"Error writing file: {e}")

        logger.info("Widget script written to operator-chosen path %s", path)
        return Saved(path=path)
