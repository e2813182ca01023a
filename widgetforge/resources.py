from __future__ import annotations

from pathlib import Path
from typing import Dict

import yaml


def _package_dir(package_name: str) -> Path:
    """
    Return the on-disk directory for an imported package.

    Note:
    This assumes the package is installed in a filesystem-backed environment
    (pip/wheel or editable installs).
    """
    module = __import__(package_name, fromlist=["__file__"])
    p = getattr(module, "__file__", None)
    if not isinstance(p, str) or not p:
        raise RuntimeError(f"Cannot resolve package directory for: {package_name}")
    return Path(p).resolve().parent


def data_dir() -> Path:
    return _package_dir("widgetforge") / "data"


def prompts_path() -> Path:
    return data_dir() / "prompts.yml"


def load_prompts() -> Dict[str, str]:
    """
    Prompt text for the orchestrating agent, keyed by prompt id.
    """
    raw = yaml.safe_load(prompts_path().read_text(encoding="utf-8"))
    prompts = raw.get("prompts") if isinstance(raw, dict) else None
    if not isinstance(prompts, dict):
        raise RuntimeError(f"Malformed prompts file: {prompts_path()}")
    return {str(k): str(v) for k, v in prompts.items()}
