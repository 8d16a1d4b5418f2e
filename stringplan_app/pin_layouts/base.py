# stringplan_app/pin_layouts/base.py

from enum import Enum
from typing import List, NamedTuple


class Shape(Enum):
    CIRCLE = "circle"
    SQUARE = "square"


class Pin(NamedTuple):
    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}


class PinLayout:
    """
    Interface for any boundary shape that pins can be placed on.
    """
    shape: Shape

    def positions(self, count: int, width: float, height: float) -> List[Pin]:
        """
        Return `count` pins in order along the boundary of a width×height frame.

        :param count: number of pins, already validated to be >= 1
        :param width: frame width in canvas units
        :param height: frame height in canvas units
        """
        raise NotImplementedError("Must implement positions()")
