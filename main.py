from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

import requests

from csv2img.output import write_image
from csv2img.sources import DEFAULT_TIMEOUT, CsvError, from_file, from_url
from csv2img.table_image import DEFAULT_FONT_SIZE, render
from csv2img.util import safe_float, safe_int


SEPARATOR = os.getenv("CSV2IMG_SEPARATOR", ",")
MAX_LENGTH = safe_int(os.getenv("CSV2IMG_MAX_LENGTH"))
FONT_SIZE = safe_float(os.getenv("CSV2IMG_FONT_SIZE"), default=DEFAULT_FONT_SIZE)
OUT_PATH = os.getenv("CSV2IMG_OUT_PATH", "out/table.png")
TIMEOUT = safe_float(os.getenv("CSV2IMG_TIMEOUT"), default=float(DEFAULT_TIMEOUT))


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a CSV file or URL as a PNG table image.")
    parser.add_argument("source", help="local path, file:// URL or http(s) URL")
    parser.add_argument("out_path", nargs="?", default=None, help="PNG destination (default: CSV2IMG_OUT_PATH)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    out_path = args.out_path or OUT_PATH

    if MAX_LENGTH is not None and MAX_LENGTH < 0:
        print("=== csv2img ERROR ===")
        print(f"CSV2IMG_MAX_LENGTH must be >= 0, got {MAX_LENGTH}")
        return 2

    try:
        if _is_url(args.source):
            table = from_url(args.source, separator=SEPARATOR, max_length=MAX_LENGTH, timeout=TIMEOUT)
        else:
            table = from_file(args.source, separator=SEPARATOR, max_length=MAX_LENGTH)
    except (CsvError, requests.RequestException) as e:
        print("=== csv2img ERROR ===")
        print(str(e))
        return 1

    image = render(table, font_size=FONT_SIZE)
    if not write_image(image, out_path):
        return 1

    width, height = image.size
    print(
        f"[CSV2IMG] {out_path} columns={len(table.column_names)} rows={len(table.rows)} "
        f"size={width}x{height}"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
