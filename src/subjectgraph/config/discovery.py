"""Locate and read ``subjectgraph.toml``.

The file is found by walking up from a start directory (the way git finds
``.git``). ``SUBJECTGRAPH_CONFIG`` names a file directly and disables the
walk; if it points nowhere, no config is used.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any


CONFIG_FILENAME = "subjectgraph.toml"
CONFIG_ENV_VAR = "SUBJECTGRAPH_CONFIG"


def _candidates(start: Path) -> Iterator[Path]:
    here = start.resolve()
    for directory in (here, *here.parents):
        yield directory / CONFIG_FILENAME


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override).expanduser()
        return path if path.is_file() else None
    return next((p for p in _candidates(start or Path.cwd()) if p.is_file()), None)


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*. Raises :class:`tomllib.TOMLDecodeError` on bad syntax."""
    return tomllib.loads(path.read_text(encoding="utf-8"))
