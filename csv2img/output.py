from __future__ import annotations

import io
import os
from typing import Optional

from PIL import Image

from csv2img.table import Table
from csv2img.table_image import TableImageStyle, render


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def _encode_or_none(image: Image.Image) -> Optional[bytes]:
    try:
        return encode_png(image)
    except (OSError, ValueError) as e:
        print(f"[ERROR] PNG encode failed: {e}")
        return None


def png_data(table: Table, font_size: Optional[float] = None, style: TableImageStyle | None = None) -> Optional[bytes]:
    """Render *table* and encode it as PNG. Returns None if encoding fails."""
    return _encode_or_none(render(table, font_size=font_size, style=style))


def write_image(image: Image.Image, path: str) -> bool:
    """Encode an already rendered image and write it to *path*."""
    data = _encode_or_none(image)
    if data is None:
        return False
    try:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        return True
    except OSError as e:
        print(f"[ERROR] failed to write {path}: {e}")
        return False


def write_png(
    table: Table,
    path: str,
    font_size: Optional[float] = None,
    style: TableImageStyle | None = None,
) -> bool:
    """Write the rendered table to *path*. True on success, False otherwise."""
    return write_image(render(table, font_size=font_size, style=style), path)
