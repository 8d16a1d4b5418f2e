# stringplan_app/path_algorithms/greedy.py

import time
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .base import StringArtAlgorithm
from ..pin_layouts import Pin
from ..raster import segment_indices

# brightness added to every pixel a chosen thread crosses
ERASE_INCREMENT = 150
MAX_INTENSITY = 255


class GreedyAlgorithm(StringArtAlgorithm):
    """
    From the current pin, pick the thread whose pixels are darkest in total,
    then brighten ("erase") those pixels so the next pick looks elsewhere.
    """

    def generate(
        self,
        grid: np.ndarray,
        pins: Sequence[Pin],
        line_count: int,
        logger: Optional[logging.Logger] = None,
        *,
        vector_callback: Optional[Callable[[int, int], None]] = None
    ) -> List[int]:
        if logger is None:
            logger = logging.getLogger(__name__)

        height, width = grid.shape
        n_pins = len(pins)
        logger.debug(
            f"[greedy] Starting: pins={n_pins}, lines={line_count}, grid={width}x{height}"
        )
        start_time = time.time()

        # the caller hands over a C-contiguous grid, so this is a writable view
        flat = grid.reshape(-1)

        # segment cells depend only on the pin pair; cache them per direction
        walks: Dict[Tuple[int, int], np.ndarray] = {}

        def walk(i: int, j: int) -> np.ndarray:
            key = (i, j)
            if key not in walks:
                walks[key] = segment_indices(pins[i], pins[j], width, height)
            return walks[key]

        path: List[int] = []
        current = 0

        for iteration in range(line_count):
            scores = np.full(n_pins, -1, dtype=np.int64)
            for j in range(n_pins):
                if j == current:
                    continue
                cells = walk(current, j)
                scores[j] = int((MAX_INTENSITY - flat[cells].astype(np.int64)).sum())

            # argmax returns the first maximum, i.e. the lowest index on ties
            best = int(np.argmax(scores))

            cells = walk(current, best)
            flat[cells] = np.minimum(
                flat[cells].astype(np.int16) + ERASE_INCREMENT, MAX_INTENSITY
            ).astype(np.uint8)

            logger.debug(
                f"[greedy] Pick {iteration+1}/{line_count}: {current}→{best} "
                f"score={scores[best]} pixels={len(cells)}"
            )
            if vector_callback:
                vector_callback(current, best)

            path.append(best)
            current = best

        elapsed = time.time() - start_time
        logger.debug(f"[greedy] Done in {elapsed:.2f}s; total picks={len(path)}")
        return path
