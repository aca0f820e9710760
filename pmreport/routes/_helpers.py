"""Shared route helpers used across multiple route modules."""

from __future__ import annotations

import re

_SAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9._-]")


def safe_filename(name: str) -> str:
    """Sanitize *name* for use in Content-Disposition headers."""
    return _SAFE_FILENAME_RE.sub("_", name)[:200] or "download"


def report_filename(cinema_name: str, date: str) -> str:
    stem = "_".join(p for p in (cinema_name.strip(), date.strip()) if p) or "maintenance"
    return f"{safe_filename(stem)}_report.pdf"
