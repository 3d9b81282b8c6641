from __future__ import annotations

"""Filesystem helpers shared by the exporter."""

import os
import uuid
from pathlib import Path
from typing import Union


def ensure_dir(path: Union[str, Path]):
    """Create a directory (and parents) if it does not already exist."""

    Path(path).mkdir(parents=True, exist_ok=True)


def write_atomic(data: Union[bytes, str], output_path: Union[str, Path]) -> int:
    """Write ``data`` by swapping a temporary sibling file into place.

    Text is encoded as UTF-8. Returns the number of bytes written.
    """

    payload = data.encode("utf-8") if isinstance(data, str) else data
    output_path = Path(output_path)
    ensure_dir(output_path.parent)

    temp_path = output_path.parent / f".{uuid.uuid4().hex}{output_path.suffix}.tmp"
    try:
        with open(temp_path, "wb") as fh:
            fh.write(payload)
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()

    return len(payload)


__all__ = ["ensure_dir", "write_atomic"]
