#!/usr/bin/env python3
"""
cyd_rgb565.py

RGB565 colour packing shared by the converter scripts.

Bit layout of a packed pixel: RRRRRGGGGGGBBBBB. Each 8-bit component is
truncated (low bits dropped), never rounded.
"""

from __future__ import annotations
import re
import numpy as np

HEX_PAD = 4

_HEX_COLOR_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


class InvalidColorFormat(ValueError):
    pass


def pack_rgb565(r: int, g: int, b: int) -> int:
    return ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)


def to_hex_literal(n: int, pad: int = HEX_PAD) -> str:
    return f"0x{n:0{pad}X}"


def parse_hex_color(text: str) -> tuple[int, int, int]:
    """'#RRGGBB' -> (r, g, b). The '#' is optional."""
    m = _HEX_COLOR_RE.match(text.strip()) if isinstance(text, str) else None
    if not m:
        raise InvalidColorFormat(f"Expected #RRGGBB colour, got {text!r}")
    v = int(m.group(1), 16)
    return (v >> 16) & 0xFF, (v >> 8) & 0xFF, v & 0xFF


def rgb888_to_rgb565(rgb: np.ndarray) -> np.ndarray:
    if rgb.ndim != 3 or rgb.shape[2] != 3:
        raise ValueError(f"Expected HxWx3 RGB array, got shape {rgb.shape}")
    r = rgb[:, :, 0].astype(np.uint16) & 0xF8
    g = rgb[:, :, 1].astype(np.uint16) & 0xFC
    b = rgb[:, :, 2].astype(np.uint16) >> 3
    return (r << 8) | (g << 3) | b
