#!/usr/bin/env python3
"""
JSON Utilities Module

Pretty-printed JSON (and YAML) reading and writing used by the file-backed
store. Writes go through a temporary file and an atomic rename so a crashed
write never leaves a truncated workspace file behind.
"""

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TextIO

import yaml


@contextmanager
def _atomic_open(filepath: Path) -> Iterator[TextIO]:
    """Open a temp file beside `filepath`; it replaces `filepath` only if the block succeeds."""
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yield f
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_json(filepath: str | Path, data: Any, sort_keys: bool = False) -> None:
    """
    Atomically write data to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        sort_keys: If True, sort dictionary keys (default: False)
    """
    with _atomic_open(Path(filepath)) as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=sort_keys)


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def write_yaml(filepath: str | Path, data: Any) -> None:
    """Atomically write data as block-style YAML with sorted keys."""
    with _atomic_open(Path(filepath)) as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True, allow_unicode=True)
