# stringplan_app/preprocessing.py

import io
import logging
import math
import numbers
from typing import Callable, NamedTuple, Optional

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, GeometryError, InvalidArgument
from .session import StringArtSession

# The injected "bytes → image" capability
Decoder = Callable[[bytes], Image.Image]


class CropBox(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    def as_box(self) -> tuple[int, int, int, int]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)


def decode_image(data: bytes) -> Image.Image:
    """
    Decode raw image bytes with Pillow, compositing any transparency over
    white, and return an RGB image.
    """
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
        raise DecodeError(f"Could not decode image: {exc}", {"size": len(data)}) from exc

    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        img = img.convert("RGBA")
        bg = Image.new("RGBA", img.size, (255, 255, 255, 255))
        img = Image.alpha_composite(bg, img)

    return img.convert("RGB")


def crop_rectangle(
    source_size: tuple[int, int],
    canvas_width: int,
    canvas_height: int,
    zoom: float,
    offset_x: float,
    offset_y: float,
) -> CropBox:
    """
    Map the pan/zoom view onto the source image and return the region of the
    source that ends up on the canvas, clamped to the source bounds.
    """
    src_w, src_h = source_size

    crop_x = min(max(-offset_x / zoom, 0.0), float(src_w))
    crop_y = min(max(-offset_y / zoom, 0.0), float(src_h))
    crop_w = max(1, math.floor(min(canvas_width / zoom, src_w - crop_x)))
    crop_h = max(1, math.floor(min(canvas_height / zoom, src_h - crop_y)))

    # pull the origin back so the rectangle stays inside the source
    x = max(0, min(math.floor(crop_x), src_w - crop_w))
    y = max(0, min(math.floor(crop_y), src_h - crop_h))

    if crop_w <= 0 or crop_h <= 0 or x + crop_w > src_w or y + crop_h > src_h:
        raise GeometryError(
            f"Crop rectangle {crop_w}x{crop_h} at ({x}, {y}) does not fit "
            f"source {src_w}x{src_h}",
            {"crop": [x, y, crop_w, crop_h], "source": [src_w, src_h]},
        )
    return CropBox(x, y, crop_w, crop_h)


def process_image(
    session: StringArtSession,
    raw_bytes: bytes,
    canvas_width: int,
    canvas_height: int,
    zoom: float = 1.0,
    offset_x: float = 0.0,
    offset_y: float = 0.0,
    *,
    decoder: Optional[Decoder] = None,
    logger: Optional[logging.Logger] = None,
) -> None:
    """
    Crop the pan/zoom-selected region of the session's source image, resample
    it to canvas_width×canvas_height and store its luma as `session.grid`.

    The source is decoded from `raw_bytes` only while the session has no
    cached source; afterwards the bytes are ignored until
    `session.clear_source()` is called. On any failure the session is left
    as it was.

    :param session: session owning the cached source and the grid
    :param raw_bytes: encoded image (PNG, JPEG, BMP, ...)
    :param canvas_width: grid width in pixels
    :param canvas_height: grid height in pixels
    :param zoom: source→canvas scale factor, > 0
    :param offset_x: horizontal pan of the image on the canvas, canvas units
    :param offset_y: vertical pan of the image on the canvas, canvas units
    :param decoder: optional bytes→PIL image callable, defaults to decode_image
    :param logger: optional logger to receive debug messages
    """
    if logger is None:
        logger = logging.getLogger(__name__)
    if decoder is None:
        decoder = decode_image

    if not math.isfinite(zoom) or zoom <= 0:
        logger.error(f"Rejected zoom {zoom!r}")
        raise InvalidArgument(f"Zoom must be a positive number, got {zoom!r}", {"zoom": zoom})
    if not (math.isfinite(offset_x) and math.isfinite(offset_y)):
        raise InvalidArgument(
            f"Offsets must be finite, got ({offset_x!r}, {offset_y!r})",
            {"offset_x": offset_x, "offset_y": offset_y},
        )
    for name, value in (("canvas_width", canvas_width), ("canvas_height", canvas_height)):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            logger.error(f"Rejected {name} {value!r}")
            raise InvalidArgument(f"{name} must be an integer, got {value!r}", {name: value})
    if canvas_width < 1 or canvas_height < 1:
        raise GeometryError(
            f"Canvas must be at least 1x1, got {canvas_width}x{canvas_height}",
            {"canvas": [canvas_width, canvas_height]},
        )

    source = session.source
    if source is None:
        logger.debug(f"Decoding {len(raw_bytes)} bytes into source image")
        source = decoder(raw_bytes)
        logger.debug(f"Decoded source image {source.size[0]}x{source.size[1]}")
    else:
        logger.debug("Reusing cached source image")

    box = crop_rectangle(source.size, canvas_width, canvas_height, zoom, offset_x, offset_y)
    logger.debug(f"Cropping {box} and resizing to {(canvas_width, canvas_height)}")

    img = source.crop(box.as_box()).resize(
        (int(canvas_width), int(canvas_height)), Image.Resampling.BILINEAR
    )
    grid = np.array(img.convert("L"), dtype=np.uint8)

    # commit only after everything above succeeded
    session.source = source
    session.grid = grid
    logger.debug(f"Stored {grid.shape[1]}x{grid.shape[0]} intensity grid")
