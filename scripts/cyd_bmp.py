#!/usr/bin/env python3
"""
cyd_bmp.py

Preview bitmaps for generated arrays: BMPv4 RGB565 top-down images holding
exactly the packed values that go into the C array, so what you see is what
the display gets.
"""

from __future__ import annotations
import struct
import numpy as np

from cyd_carray import GenerationResult

FILE_HDR = struct.Struct("<2sIHHI")
V4_HDR = struct.Struct("<IiiHHIIiiIIIIIII")   # up to and including cstype
V4_TAIL = b"\x00" * 48                         # endpoints + gamma, unused for sRGB
HEADER_SIZE = FILE_HDR.size + V4_HDR.size + len(V4_TAIL)  # 122

MASKS = (0xF800, 0x07E0, 0x001F, 0x0000)
LCS_SRGB = 0x73524742
BI_BITFIELDS = 3


def _row_stride(w: int) -> int:
    return (w * 2 + 3) // 4 * 4


def bmp_bytes(arr565: np.ndarray) -> bytes:
    if arr565.ndim != 2:
        raise ValueError(f"Expected HxW uint16 array, got shape {arr565.shape}")

    h, w = arr565.shape
    pad_cols = _row_stride(w) // 2 - w
    pix = np.pad(arr565.astype("<u2"), ((0, 0), (0, pad_cols))).tobytes()

    return (
        FILE_HDR.pack(b"BM", HEADER_SIZE + len(pix), 0, 0, HEADER_SIZE)
        + V4_HDR.pack(108, w, -h, 1, 16, BI_BITFIELDS, len(pix), 0, 0, 0, 0, *MASKS, LCS_SRGB)
        + V4_TAIL
        + pix
    )


def parse_bmp(blob: bytes):
    """Inverse of bmp_bytes(): (w, h, HxW uint16 array)."""
    if len(blob) < HEADER_SIZE or blob[0:2] != b"BM":
        raise ValueError("Not an RGB565 preview BMP")
    _, _, _, _, off = FILE_HDR.unpack_from(blob, 0)
    dib, w, h, planes, bpp, comp, _, _, _, _, _, *masks, _ = V4_HDR.unpack_from(blob, FILE_HDR.size)

    if (off, dib, planes, bpp, comp) != (HEADER_SIZE, 108, 1, 16, BI_BITFIELDS) or tuple(masks) != MASKS:
        raise ValueError(
            f"Unexpected BMP header off={off} dib={dib} planes={planes} "
            f"bpp={bpp} comp={comp} masks={[hex(m) for m in masks]}"
        )
    if h >= 0:
        raise ValueError("Expected top-down BMP (negative height)")

    h = -h
    stride = _row_stride(w)
    pix = blob[off:off + stride * h]
    if len(pix) != stride * h:
        raise ValueError("Truncated BMP pixel data")
    return w, h, np.frombuffer(pix, dtype="<u2").reshape((h, stride // 2))[:, :w]


def preview_bytes(result: GenerationResult) -> bytes:
    arr565 = np.asarray(result.data, dtype=np.uint16).reshape((result.height, result.width))
    return bmp_bytes(arr565)
