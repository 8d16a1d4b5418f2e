# stringplan_app/path_algorithms/base.py

from typing import List, Optional, Callable, Sequence
import numpy as np
import logging

from ..pin_layouts import Pin


class StringArtAlgorithm:
    """
    Interface for any grid→pin-path algorithm.
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
        """
        Walk from pin 0 and return `line_count` destination pin indices.
        The grid is updated in place as threads are chosen.

        :param grid: (H, W) uint8 intensity grid, mutated in place
        :param pins: ordered pin coordinates, at least two
        :param line_count: number of threads to choose
        :param logger: Optional logger for debug/info messages
        :param vector_callback: Optional callback called as each thread is chosen,
                                signature vector_callback(from_idx: int, to_idx: int)
        """
        raise NotImplementedError("Must implement generate()")
