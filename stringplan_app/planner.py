# stringplan_app/planner.py

from typing import List, Optional, Callable, Sequence
import logging
import math

import numpy as np

from .errors import InvalidArgument, PreconditionError
from .path_algorithms import ALGORITHMS
from .pin_layouts import Pin
from .session import StringArtSession

DEFAULT_ALGORITHM = "greedy"
# slack for pins computed with floating-point trigonometry on the frame edge
PIN_TOLERANCE = 1e-6


def generate_string_art(
    session: StringArtSession,
    pins: Sequence[Pin],
    line_count: int,
    algorithm: str = DEFAULT_ALGORITHM,
    logger: Optional[logging.Logger] = None,
    *,
    vector_callback: Optional[Callable[[int, int], None]] = None
) -> List[int]:
    """
    Choose `line_count` threads starting at pin 0, using the session's
    intensity grid, and return the destination pin index of each thread.

    The grid is brightened along every chosen thread, so a second call on
    the same grid gives a different path unless the image is processed again.

    :param session: session whose grid was produced by process_image()
    :param pins: ordered pin coordinates, as returned by generate_pins()
    :param line_count: number of threads to choose, >= 0
    :param algorithm: key into ALGORITHMS registry
    :param logger: optional Logger to receive debug/info messages
    :param vector_callback: optional callable that will be called for each
                            chosen thread as vector_callback(from_idx, to_idx)
    :returns: list of pin indices, one per thread
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    algo = ALGORITHMS.get(algorithm)
    if algo is None:
        valid = ", ".join(ALGORITHMS.keys())
        logger.error(f"Unknown algorithm '{algorithm}'. Valid options: {valid}")
        raise InvalidArgument(f"Unknown algorithm '{algorithm}'. Valid options: {valid}")

    if isinstance(line_count, bool) or not isinstance(line_count, int) or line_count < 0:
        logger.error(f"Rejected line count {line_count!r}")
        raise InvalidArgument(
            f"Line count must be a non-negative integer, got {line_count!r}",
            {"line_count": line_count},
        )
    if session.grid is None:
        logger.error("Planning requested before an image was processed")
        raise PreconditionError("No intensity grid; process an image first")
    if not pins:
        logger.error("Planning requested with no pins")
        raise PreconditionError("Pin set is empty")

    if line_count == 0:
        return []
    if len(pins) < 2:
        raise PreconditionError(
            "At least two pins are needed to place a thread", {"pins": len(pins)}
        )

    pins = checked_pins(pins, session.grid.shape, logger)
    if not session.grid.flags.c_contiguous:
        session.grid = np.ascontiguousarray(session.grid)

    # delegate to the selected strategy, providing the logger and callback
    return algo.generate(
        session.grid,
        pins,
        line_count,
        logger=logger,
        vector_callback=vector_callback,
    )


def checked_pins(
    pins: Sequence[Pin],
    grid_shape: tuple[int, int],
    logger: logging.Logger,
) -> List[Pin]:
    """
    Return the pins as float Pins, rejecting non-finite coordinates and
    pins outside the [0, width]×[0, height] canvas.
    """
    height, width = grid_shape
    result = []
    for idx, p in enumerate(pins):
        x, y = float(p[0]), float(p[1])
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.error(f"Rejected non-finite pin {idx}: ({x}, {y})")
            raise InvalidArgument(
                f"Pin {idx} has non-finite coordinates ({x}, {y})",
                {"pin": idx},
            )
        if not (-PIN_TOLERANCE <= x <= width + PIN_TOLERANCE
                and -PIN_TOLERANCE <= y <= height + PIN_TOLERANCE):
            logger.error(f"Rejected pin {idx} outside the {width}x{height} canvas: ({x}, {y})")
            raise InvalidArgument(
                f"Pin {idx} at ({x}, {y}) lies outside the {width}x{height} canvas",
                {"pin": idx, "x": x, "y": y},
            )
        result.append(Pin(x, y))
    return result
