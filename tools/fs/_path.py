from __future__ import annotations

import os
from pathlib import Path
from typing import Union


def expand_user_path(p: Union[str, Path]) -> Path:
    # Expand ~ and $VARS, then make absolute without requiring the path to exist.
    return Path(os.path.expandvars(os.path.expanduser(str(p)))).absolute()
