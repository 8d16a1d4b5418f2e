# stringplan_app/renderer.py

import io
import logging
from typing import Optional, Sequence

import numpy as np
from PIL import Image, ImageDraw

from .pin_layouts import Pin


def render_path(
    pins: Sequence[Pin],
    path: Sequence[int],
    size: tuple[int, int],
    line_width: int = 1,
    start_index: int = 0,
    logger: Optional[logging.Logger] = None
) -> Image.Image:
    """
    Render a blank-canvas preview of a pin path: one black thread from
    `start_index` to path[0], then between each consecutive pair.
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    logger.debug(
        f"render_path called with "
        f"{len(path)} threads, size={size}, "
        f"pins={len(pins)}, line_width={line_width}"
    )

    img = Image.new('L', size, color=255)
    draw = ImageDraw.Draw(img)

    current = start_index
    for idx, nxt in enumerate(path, start=1):
        draw.line(
            [tuple(pins[current]), tuple(pins[nxt])],
            fill=0,
            width=line_width
        )
        current = nxt
        if idx % 500 == 0:
            logger.debug(f"Drew {idx}/{len(path)} threads")

    logger.debug("Completed render_path")
    return img


def render_pins(
    pins: Sequence[Pin],
    size: tuple[int, int],
    radius: float = 2,
) -> Image.Image:
    """
    Draw each pin as a small black dot on a white canvas.
    """
    img = Image.new('L', size, color=255)
    draw = ImageDraw.Draw(img)
    for x, y in pins:
        draw.ellipse([x - radius, y - radius, x + radius, y + radius], fill=0)
    return img


def image_to_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format='PNG')
    return buf.getvalue()


def grid_to_png(grid: np.ndarray) -> bytes:
    """Encode an (H, W) uint8 intensity grid as a grayscale PNG."""
    return image_to_png(Image.fromarray(grid.astype(np.uint8)))
