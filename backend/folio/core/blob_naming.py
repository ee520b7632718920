"""Blob Naming — pure rules for turning an uploaded filename into a stored name.

Invariants:
    - Directory components are stripped (no path traversal out of the upload dir)
    - Runs of whitespace become a single "-"
    - Stored name is "{marker}-{normalized}" where marker is a distinct integer
"""

import re
from pathlib import PurePosixPath, PureWindowsPath

_WHITESPACE = re.compile(r"\s+")
FALLBACK_NAME = "upload"


def normalize_filename(name: str | None) -> str:
    """Strip directories and whitespace from a client-supplied filename."""
    base = PureWindowsPath(PurePosixPath(name or "").name).name
    base = _WHITESPACE.sub("-", base.strip())
    if base in ("", ".", ".."):
        return FALLBACK_NAME
    return base


def blob_filename(name: str | None, marker: int) -> str:
    return f"{marker}-{normalize_filename(name)}"
