#!/usr/bin/env python3
"""
cyd_image.py

Decode an image file into an RGBA PixelBuffer, the way a browser canvas
would draw it: EXIF orientation applied, 16-bit samples scaled down to
8 bits. Only the first frame of animated/multi-frame images is used.
"""

from __future__ import annotations

import logging

import numpy as np
from PIL import Image, ImageOps

from cyd_carray import PixelBuffer

log = logging.getLogger(__name__)


def to_8bit(img: Image.Image) -> Image.Image:
    """Scale 16/32-bit integer greyscale ('I', 'I;16', 'I;16B', ...) to 'L'."""
    if not img.mode.startswith("I"):
        return img
    a = np.asarray(img).astype(np.int64)
    a = np.clip(a, 0, 0xFFFF) >> 8
    return Image.fromarray(a.astype(np.uint8), "L")


def pixel_buffer_from_image(img: Image.Image) -> PixelBuffer:
    if getattr(img, "n_frames", 1) > 1:
        log.debug("Image has %d frames, using the first", img.n_frames)
        img.seek(0)
    img = ImageOps.exif_transpose(img)
    rgba = to_8bit(img).convert("RGBA")
    w, h = rgba.size
    return PixelBuffer(w, h, rgba.tobytes())


def load_pixel_buffer(path) -> PixelBuffer:
    with Image.open(path) as img:
        log.debug("Opened %s: format=%s mode=%s size=%dx%d", path, img.format, img.mode, *img.size)
        return pixel_buffer_from_image(img)
