from __future__ import annotations

import numpy as np
import pytest

from cyd_rgb565 import (
    InvalidColorFormat,
    pack_rgb565,
    parse_hex_color,
    rgb888_to_rgb565,
    to_hex_literal,
)


@pytest.mark.parametrize(
    "rgb, expected",
    [
        ((0, 0, 0), 0x0000),
        ((255, 255, 255), 0xFFFF),
        ((255, 0, 0), 0xF800),
        ((0, 255, 0), 0x07E0),
        ((0, 0, 255), 0x001F),
        ((7, 3, 7), 0x0000),
        ((8, 4, 8), 0x0821),
    ],
)
def test_pack_rgb565(rgb, expected):
    assert pack_rgb565(*rgb) == expected


def test_pack_rgb565_truncates_each_component():
    for v in range(256):
        assert pack_rgb565(v, 0, 0) >> 11 == v >> 3
        assert (pack_rgb565(0, v, 0) >> 5) & 0x3F == v >> 2
        assert pack_rgb565(0, 0, v) & 0x1F == v >> 3
        assert 0 <= pack_rgb565(v, v, v) <= 0xFFFF


def test_to_hex_literal():
    assert to_hex_literal(0, 4) == "0x0000"
    assert to_hex_literal(0xFFFF, 4) == "0xFFFF"
    assert to_hex_literal(0x7E0) == "0x07E0"
    assert to_hex_literal(0xAB, 2) == "0xAB"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("#ffffff", (255, 255, 255)),
        ("#0000FF", (0, 0, 255)),
        ("123456", (0x12, 0x34, 0x56)),
        (" #aBcDeF ", (0xAB, 0xCD, 0xEF)),
    ],
)
def test_parse_hex_color(text, expected):
    assert parse_hex_color(text) == expected


@pytest.mark.parametrize("text", ["", "#", "#fff", "#12345g", "#1234567", "red", None])
def test_parse_hex_color_rejects_malformed(text):
    with pytest.raises(InvalidColorFormat):
        parse_hex_color(text)


def test_invalid_color_is_value_error():
    assert issubclass(InvalidColorFormat, ValueError)


def test_rgb888_to_rgb565_matches_scalar():
    rng = np.random.default_rng(565)
    rgb = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
    arr = rgb888_to_rgb565(rgb)
    assert arr.shape == (5, 7)
    assert arr.dtype == np.uint16
    for y in range(5):
        for x in range(7):
            r, g, b = (int(c) for c in rgb[y, x])
            assert arr[y, x] == pack_rgb565(r, g, b)


def test_rgb888_to_rgb565_rejects_bad_shape():
    with pytest.raises(ValueError):
        rgb888_to_rgb565(np.zeros((4, 4), dtype=np.uint8))
    with pytest.raises(ValueError):
        rgb888_to_rgb565(np.zeros((4, 4, 4), dtype=np.uint8))
