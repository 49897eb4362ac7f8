from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from csv2img.table import Table
from csv2img.util import clamp

DEFAULT_FONT_SIZE = 12.0


@dataclass
class TableImageStyle:
    """Styling knobs for the PNG table renderer.

    Notes
    -----
    ``font_size`` drives the whole geometry: text widths, row height and so
    the canvas size. Large values give large images; nothing caps them.
    """

    font_size: float = DEFAULT_FONT_SIZE
    pad_x: int = 8
    pad_y: int = 4
    line_width: int = 1
    # Row height is font_size * line_spacing_ratio before padding.
    line_spacing_ratio: float = 1.4
    header_bold: bool = True
    # Colors
    background: str = "#FFFFFF"
    header_bg: str = "#F2F2F2"
    text_color: str = "#101010"
    grid_color: str = "#202020"


@dataclass
class TableLayout:
    col_widths: List[int]
    row_height: int
    n_rows: int
    width: int
    height: int

    @property
    def xs(self) -> List[int]:
        """Left edge of every column boundary (grid line), last one included."""
        out = [0]
        for w in self.col_widths:
            out.append(out[-1] + w)
        return out

    @property
    def ys(self) -> List[int]:
        return [i * self.row_height for i in range(self.n_rows + 1)]


_REGULAR_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
    "/Library/Fonts/Arial Unicode.ttf",
    "C:/Windows/Fonts/arial.ttf",
]
_BOLD_FONTS = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/opentype/noto/NotoSansCJK-Bold.ttc",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Bold.ttc",
    "C:/Windows/Fonts/arialbd.ttf",
]


def _first_existing(paths: Sequence[str]) -> Optional[str]:
    for p in paths:
        if p and Path(p).exists():
            return str(p)
    return None


def _font_px(font_size: float) -> int:
    return int(clamp(round(font_size), 1, 4096))


def _load_pil_font(size: int, *, bold: bool = False):
    """Load a scalable font, falling back to Pillow's bundled default."""
    chosen = _first_existing(_BOLD_FONTS if bold else _REGULAR_FONTS) or _first_existing(_REGULAR_FONTS)
    if chosen:
        try:
            return ImageFont.truetype(chosen, size=size, index=0)
        except OSError:
            print(f"[WARN] failed to load font {chosen}; using default font")
    return ImageFont.load_default(size=size)


def _text_bbox(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int, int, int]:
    if not text:
        return 0, 0, 0, 0
    x0, y0, x1, y1 = draw.textbbox((0, 0), text, font=font)
    return int(x0), int(y0), int(math.ceil(x1)), int(math.ceil(y1))


def _text_width(draw: ImageDraw.ImageDraw, text: str, font) -> int:
    x0, _, x1, _ = _text_bbox(draw, text, font)
    return max(0, x1 - x0)


def _fonts(font_size: float, style: TableImageStyle):
    px = _font_px(font_size)
    body = _load_pil_font(px)
    header = _load_pil_font(px, bold=True) if style.header_bold else body
    return header, body


def _compute_layout(table: Table, font_size: float, style: TableImageStyle, header_font, body_font) -> TableLayout:
    # Measurement canvas
    mdraw = ImageDraw.Draw(Image.new("RGBA", (4, 4)))

    headers = table.padded_headers()
    rows = table.padded_rows()
    extra = 2 * style.pad_x + style.line_width

    col_widths: List[int] = []
    for j in range(table.column_count):
        max_w = _text_width(mdraw, headers[j], header_font)
        for cells in rows:
            w = _text_width(mdraw, cells[j], body_font)
            if w > max_w:
                max_w = w
        col_widths.append(max_w + extra)

    row_height = int(math.ceil(font_size * style.line_spacing_ratio)) + 2 * style.pad_y + style.line_width
    n_rows = 1 + len(rows)
    return TableLayout(
        col_widths=col_widths,
        row_height=row_height,
        n_rows=n_rows,
        width=sum(col_widths) + style.line_width,
        height=n_rows * row_height + style.line_width,
    )


def compute_layout(table: Table, font_size: Optional[float] = None, style: TableImageStyle | None = None) -> TableLayout:
    """Column widths, row height and canvas size for *table* at *font_size*."""
    style = style or TableImageStyle()
    size = style.font_size if font_size is None else font_size
    header_font, body_font = _fonts(size, style)
    return _compute_layout(table, size, style, header_font, body_font)


def render(table: Table, font_size: Optional[float] = None, style: TableImageStyle | None = None) -> Image.Image:
    """Render *table* as an RGBA image.

    The header is row 0 and data rows follow. Rows shorter than the widest
    row are drawn with empty trailing cells. Text is left-aligned and
    vertically centered in its cell. ``font_size`` overrides
    ``style.font_size`` for this call only.
    """
    style = style or TableImageStyle()
    size = style.font_size if font_size is None else font_size
    header_font, body_font = _fonts(size, style)
    layout = _compute_layout(table, size, style, header_font, body_font)

    img = Image.new("RGBA", (max(1, layout.width), max(1, layout.height)), style.background)
    width, height = img.size
    draw = ImageDraw.Draw(img)
    lw = style.line_width
    xs = layout.xs
    ys = layout.ys

    # Header background
    draw.rectangle([0, 0, width - 1, min(layout.row_height, height - 1)], fill=style.header_bg)

    # ---- Grid lines
    if lw > 0:
        for y in ys:
            draw.rectangle([0, y, width - 1, y + lw - 1], fill=style.grid_color)
        for x in xs:
            draw.rectangle([x, 0, x + lw - 1, height - 1], fill=style.grid_color)

    # ---- Text
    def draw_cell(x: int, y: int, text: str, font) -> None:
        if not text:
            return
        bx0, by0, _, by1 = _text_bbox(draw, text, font)
        inner_h = layout.row_height - lw
        ty = y + lw + (inner_h - (by1 - by0)) / 2 - by0
        tx = x + lw + style.pad_x - bx0
        draw.text((tx, ty), text, font=font, fill=style.text_color)

    for j, text in enumerate(table.padded_headers()):
        draw_cell(xs[j], ys[0], text, header_font)
    for i, cells in enumerate(table.padded_rows(), start=1):
        for j, text in enumerate(cells):
            draw_cell(xs[j], ys[i], text, body_font)

    return img


def to_array(image: Image.Image) -> np.ndarray:
    """Pixel grid as a (height, width, 4) uint8 array."""
    return np.asarray(image.convert("RGBA"), dtype=np.uint8)
