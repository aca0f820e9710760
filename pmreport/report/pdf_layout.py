"""Image sizing for the report header logos and the signature band."""

from __future__ import annotations


def fit_logo_size(src_w: float, src_h: float, max_w: float, max_h: float) -> tuple[float, float]:
    """Largest ``(w, h)`` with the source aspect ratio that fits ``max_w`` x ``max_h``.

    A degenerate source (zero or negative side) fills the whole slot.
    """
    if src_w <= 0 or src_h <= 0:
        return max_w, max_h
    scale = min(max_w / src_w, max_h / src_h)
    return src_w * scale, src_h * scale


def clamp_scaled_size(
    src_w: float,
    src_h: float,
    scale: float,
    max_w: float,
    max_h: float,
) -> tuple[float, float]:
    """Scale by *scale*, then clamp each side to its maximum independently."""
    return min(max_w, src_w * scale), min(max_h, src_h * scale)
