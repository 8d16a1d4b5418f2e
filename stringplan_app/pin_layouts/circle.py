# stringplan_app/pin_layouts/circle.py

import math
from typing import List

from .base import PinLayout, Pin, Shape


class CircleLayout(PinLayout):
    """
    Pins evenly spaced by angle on the largest circle centred in the frame.
    """
    shape = Shape.CIRCLE

    def positions(self, count: int, width: float, height: float) -> List[Pin]:
        cx, cy = width / 2, height / 2
        radius = min(width, height) / 2
        return [
            Pin(
                cx + radius * math.cos(2 * math.pi * i / count),
                cy + radius * math.sin(2 * math.pi * i / count),
            )
            for i in range(count)
        ]
