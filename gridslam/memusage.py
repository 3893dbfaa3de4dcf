"""Report the data and virtual memory size of the running process."""

from __future__ import annotations

import os
import sys
from typing import Dict, Iterable, Optional, TextIO

_KEYS = ("VmData:", "VmSize:")


def parse_mem_status(lines: Iterable[str]) -> Dict[str, str]:
    """Pick VmData and VmSize values out of /proc status text.

    Keys are given without the colon, in the order they appear.
    """
    tokens = iter([tok for line in lines for tok in line.split()])
    result: Dict[str, str] = {}
    for tok in tokens:
        if tok in _KEYS:
            value = next(tokens, None)
            if value is not None:
                result[tok[:-1]] = value
    return result


def print_mem_usage(stream: Optional[TextIO] = None, status_path: Optional[str] = None) -> Dict[str, str]:
    """Write '#VmData:' and '#VmSize:' lines for this process.

    Nothing is written when the status file cannot be read. Returns the
    values found.
    """
    if stream is None:
        stream = sys.stderr
    if status_path is None:
        status_path = f"/proc/{os.getpid()}/status"
    try:
        with open(status_path, encoding="utf-8", errors="replace") as f:
            values = parse_mem_status(f)
    except OSError:
        return {}
    for name, value in values.items():
        stream.write(f"#{name}:\t{value}\n")
    return values