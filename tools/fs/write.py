from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any, Dict

from ._path import expand_user_path


def atomic_write_text(path: Path, content: str, *, make_parents: bool = False) -> Path:
    """
    Write UTF-8 text so that readers see either the old file or the complete
    new one: write a temp file beside the target, fsync, then os.replace().
    The temp file is removed if anything fails.
    """
    if make_parents:
        path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except BaseException:
        try:
            tmp.unlink()
        except FileNotFoundError:
            pass
        raise
    return path


def run(args: Dict[str, Any], dry_run: bool) -> Dict[str, Any]:
    """
    Write a text file atomically (overwrites an existing file).
    args:
      - path: string
      - content: string
      - parents: bool (default true; create missing parent directories)
    """
    path_raw = args.get("path")
    content = args.get("content")
    if not isinstance(path_raw, str) or not path_raw:
        raise ValueError("fs.write: 'path' must be a non-empty string")
    if not isinstance(content, str):
        raise ValueError("fs.write: 'content' must be a string")

    parents = bool(args.get("parents", True))
    path = expand_user_path(path_raw)

    if dry_run:
        return {
            "path": str(path),
            "would_overwrite": path.exists(),
            "bytes": len(content.encode("utf-8")),
            "dry_run": True,
            "expected_effects": [
                {"kind": "fs_write", "summary": f"Write {path}", "resources": [str(path)]}
            ],
        }

    existed = path.exists()
    atomic_write_text(path, content, make_parents=parents)
    return {"path": str(path), "overwritten": existed, "bytes": len(content.encode("utf-8")), "dry_run": False}
