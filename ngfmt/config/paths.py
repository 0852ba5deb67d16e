from __future__ import annotations

from pathlib import Path
from typing import Optional

# Single source of truth for the configuration file name.
CONFIG_FILE = ".ngfmt.yaml"
ALT_CONFIG_FILE = ".ngfmt.yml"


def find_config(start: Path) -> Optional[Path]:
    """
    Nearest configuration file: start directory first, then its parents.
    Returns None if nothing is found up to the filesystem root.
    """
    base = start.resolve()
    if base.is_file():
        base = base.parent
    for directory in (base, *base.parents):
        for name in (CONFIG_FILE, ALT_CONFIG_FILE):
            candidate = directory / name
            if candidate.is_file():
                return candidate
    return None


__all__ = ["CONFIG_FILE", "ALT_CONFIG_FILE", "find_config"]
