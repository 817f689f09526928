#!/usr/bin/env python3
"""
img_to_carray.py  –  Convert an image into an RGB565 C array header

Writes <Name>.h holding <name>Width, <name>Height and a PROGMEM array of
16-bit pixels, ready for tft.pushImage(0, 0, <name>Width, <name>Height, <name>)
with TFT_eSPI on the CYD (Cheap Yellow Display) and similar boards.

Transparent pixels are replaced with the background colour.

Usage:
  img_to_carray.py logo.png --name logo --background '#000000'
  img_to_carray.py logo.png --dry-run
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
from pathlib import Path

from cyd_bmp import preview_bytes
from cyd_carray import (
    DEFAULT_BACKGROUND,
    DEFAULT_VARIABLE_NAME,
    Configuration,
    generate_from_config,
    header_filename,
    sanitize_variable_name,
)
from cyd_image import load_pixel_buffer

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s %(message)s',
    datefmt='%H:%M:%S',
)
log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def atomic_write(path: Path, payload: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp, path)
    except Exception:
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def output_path(args, name: str) -> Path:
    if args.out:
        return args.out
    return args.outdir / header_filename(name)

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def parse_args(argv=None):
    p = argparse.ArgumentParser(description='Convert an image into an RGB565 C array header')
    p.add_argument("input", type=Path, help="Input image (PNG, JPEG, GIF, BMP, ...)")
    p.add_argument("--name", default=DEFAULT_VARIABLE_NAME,
                   help=f"Variable name prefix (default: {DEFAULT_VARIABLE_NAME})")
    p.add_argument("--background", default=DEFAULT_BACKGROUND,
                   help=f"Colour for transparent pixels, #RRGGBB (default: {DEFAULT_BACKGROUND})")
    out = p.add_mutually_exclusive_group()
    out.add_argument("--out", type=Path, help="Output header path (default: <outdir>/<Name>.h)")
    out.add_argument("--outdir", type=Path, default=Path("."), help="Output directory")
    p.add_argument("--preview", type=Path, help="Also write an RGB565 BMP preview here")
    p.add_argument("--dry-run", action="store_true", help="Print, do not write")
    p.add_argument("--debug", action="store_true")
    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        name = sanitize_variable_name(args.name)
        if name != args.name:
            log.info("Variable name %r sanitized to %r", args.name, name)
        config = Configuration(variable_name=name, background_color=args.background)

        buf = load_pixel_buffer(args.input)
        result = generate_from_config(buf, config)

        # Preview first; the header is always the last file written.
        if args.preview:
            atomic_write(args.preview, preview_bytes(result))
            log.info("Wrote preview %s", args.preview)

        if args.dry_run:
            print(result.code)
        else:
            path = output_path(args, name)
            atomic_write(path, (result.code + "\n").encode("utf-8"))
            log.info("Wrote %s (%dx%d, %d pixels)", path, result.width, result.height, len(result.data))

        return 0

    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
