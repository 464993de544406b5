"""Infrastructure: current process memory usage via psutil."""

from __future__ import annotations

import psutil


def memory_usage() -> str:
    """Return the resident set size of this process, e.g. ``"52.31 MB"``."""
    rss = psutil.Process().memory_info().rss
    return f"{rss / 1024 / 1024:.2f} MB"
