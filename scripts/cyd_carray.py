#!/usr/bin/env python3
"""
cyd_carray.py

Turn a decoded RGBA pixel buffer into an Arduino/TFT_eSPI compatible C array
of RGB565 values.

Output shape (exact, consumed by the firmware build):

  const uint16_t <name>Width = <W>;
  const uint16_t <name>Height = <H>;

  const unsigned short <name>[<W*H>] PROGMEM = {
      0xRRRR, 0xRRRR, ..., 0xRRRR,
      ...
  };

Fully transparent pixels (alpha == 0) take the background colour. Any other
alpha counts as opaque; nothing is blended. Row line breaks are cosmetic.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import List

import numpy as np

from cyd_rgb565 import pack_rgb565, parse_hex_color, rgb888_to_rgb565, to_hex_literal

DEFAULT_VARIABLE_NAME = "image"
DEFAULT_BACKGROUND = "#ffffff"

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelBuffer:
    width: int
    height: int
    data: bytes = field(repr=False)   # RGBA, row-major, top row first

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Bad image size {self.width}x{self.height}")
        exp = self.width * self.height * 4
        if len(self.data) != exp:
            raise ValueError(
                f"RGBA buffer size {len(self.data)} != expected {exp} "
                f"({self.width}x{self.height}x4)"
            )


@dataclass(frozen=True)
class Configuration:
    variable_name: str = DEFAULT_VARIABLE_NAME
    background_color: str = DEFAULT_BACKGROUND


@dataclass(frozen=True)
class GenerationResult:
    code: str
    data: List[int]
    width: int
    height: int


def sanitize_variable_name(name: str) -> str:
    name = re.sub(r"[^a-zA-Z0-9_\s]", "_", name)
    name = re.sub(r"\s+", "_", name)
    return name or DEFAULT_VARIABLE_NAME


def header_filename(name: str) -> str:
    """'logo' -> 'Logo.h'"""
    return name[:1].upper() + name[1:] + ".h"


def pack_pixels(buf: PixelBuffer, background_rgb: tuple[int, int, int]) -> np.ndarray:
    """HxW uint16 array of packed pixels, transparent ones replaced by the background."""
    rgba = np.frombuffer(buf.data, dtype=np.uint8).reshape((buf.height, buf.width, 4))
    packed = rgb888_to_rgb565(rgba[:, :, :3])
    packed[rgba[:, :, 3] == 0] = pack_rgb565(*background_rgb)
    return packed


def render_code(name: str, arr565: np.ndarray) -> str:
    h, w = arr565.shape
    rows = [
        "    " + ", ".join(to_hex_literal(int(v)) for v in row)
        for row in arr565
    ]
    return (
        f"const uint16_t {name}Width = {w};\n"
        f"const uint16_t {name}Height = {h};\n"
        "\n"
        f"const unsigned short {name}[{w * h}] PROGMEM = {{\n"
        + ",\n".join(rows)
        + "\n};"
    )


def generate(
    pixel_buffer: PixelBuffer,
    variable_name: str = DEFAULT_VARIABLE_NAME,
    background_color: str = DEFAULT_BACKGROUND,
) -> GenerationResult:
    background_rgb = parse_hex_color(background_color)
    arr565 = pack_pixels(pixel_buffer, background_rgb)
    code = render_code(variable_name, arr565)
    log.debug(
        "Generated %s: %dx%d, %d pixels, background=%s",
        variable_name, pixel_buffer.width, pixel_buffer.height, arr565.size, background_color,
    )
    return GenerationResult(
        code=code,
        data=[int(v) for v in arr565.ravel()],
        width=pixel_buffer.width,
        height=pixel_buffer.height,
    )


def generate_from_config(pixel_buffer: PixelBuffer, config: Configuration) -> GenerationResult:
    return generate(pixel_buffer, config.variable_name, config.background_color)
