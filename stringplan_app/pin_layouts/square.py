# stringplan_app/pin_layouts/square.py

from typing import List

from .base import PinLayout, Pin, Shape


class SquareLayout(PinLayout):
    """
    Pins evenly spaced by arc length along the frame's rectangle, clockwise
    from the top-left corner: top edge, right edge, bottom edge, left edge.
    """
    shape = Shape.SQUARE

    def positions(self, count: int, width: float, height: float) -> List[Pin]:
        perimeter = 2 * (width + height)
        return [self._point_at(perimeter * i / count, width, height) for i in range(count)]

    @staticmethod
    def _point_at(dist: float, width: float, height: float) -> Pin:
        if dist < width:
            return Pin(dist, 0.0)
        dist -= width
        if dist < height:
            return Pin(width, dist)
        dist -= height
        if dist < width:
            return Pin(width - dist, height)
        dist -= width
        return Pin(0.0, height - dist)
