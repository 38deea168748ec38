"""Locate the projctl.toml to load.

``PROJCTL_CONFIG`` names the file explicitly.  Otherwise each directory from
the start point up to the filesystem root is checked for ``projctl.toml``
and then ``.github/projctl.toml``, so a config kept next to workflow files
is found from anywhere inside the repository.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "projctl.toml"
CONFIG_ENV_VAR = "PROJCTL_CONFIG"

_CANDIDATES = (Path(CONFIG_FILENAME), Path(".github") / CONFIG_FILENAME)


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    An explicit ``PROJCTL_CONFIG`` that points at a missing file yields None
    rather than falling back to discovery.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        for candidate in _CANDIDATES:
            path = directory / candidate
            if path.is_file():
                return path
    return None
