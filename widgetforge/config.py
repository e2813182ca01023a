from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from widgetforge.core.errors import ValidationError

DEFAULT_TARGET_DIR = "~/Library/Application Support/Übersicht/widgets"
DEFAULT_FILE_NAME = "index.jsx"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _expand(path: str) -> Path:
    return Path(os.path.expandvars(os.path.expanduser(path)))


def default_config_path() -> Path:
    """
    Default per-user config location.

    - If XDG_CONFIG_HOME is set, use it.
    - Else use ~/.config
    """
    base = os.environ.get("XDG_CONFIG_HOME")
    if isinstance(base, str) and base.strip():
        return Path(base).expanduser() / "widgetforge" / "config.yml"
    return Path("~/.config").expanduser() / "widgetforge" / "config.yml"


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    v = raw.get(name, {})
    return v if isinstance(v, dict) else {}


@dataclass(frozen=True)
class Config:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def target_dir(self) -> Path:
        return _expand(str(_section(self.raw, "output").get("target_dir", DEFAULT_TARGET_DIR)))

    @property
    def file_name(self) -> str:
        name = str(_section(self.raw, "output").get("file_name", DEFAULT_FILE_NAME))
        if not name or "/" in name or "\\" in name:
            raise ValidationError(code="config.invalid", message="output.file_name must be a plain file name", data={"file_name": name})
        return name

    @property
    def strict_styles(self) -> bool:
        return bool(_section(self.raw, "compiler").get("strict_styles", False))

    @property
    def trace_path(self) -> Optional[Path]:
        p = _section(self.raw, "trace").get("path")
        if not isinstance(p, str) or not p:
            return None
        return _expand(p)

    @property
    def log_level(self) -> str:
        level = str(_section(self.raw, "logging").get("level", "WARNING")).upper()
        if level not in _LOG_LEVELS:
            raise ValidationError(code="config.invalid", message=f"logging.level must be one of {', '.join(_LOG_LEVELS)}", data={"level": level})
        return level


def load_config(path: Union[str, Path, None] = None) -> Config:
    """
    Load YAML config. An explicit path must exist; the default path is optional
    and falls back to built-in defaults.
    """
    explicit = path is not None
    p = _expand(str(path)) if explicit else default_config_path()
    if not p.exists():
        if explicit:
            raise ValidationError(code="config.not_found", message=f"Config file not found: {p}", data={"path": str(p)})
        return Config()

    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return Config()
    if not isinstance(raw, dict):
        raise ValidationError(code="config.invalid", message="config.yml must contain a YAML mapping at top level", data={"path": str(p)})
    return Config(raw=raw)
