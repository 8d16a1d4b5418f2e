# stringplan_app/pin_layouts/__init__.py

import importlib
import inspect
import logging
import math
import pkgutil
from typing import Dict, List, Optional, Union

from ..errors import InvalidArgument
from .base import PinLayout, Pin, Shape

LAYOUTS: Dict[Shape, PinLayout] = {}

# --- Auto-discover all layout modules in this package ---
package_name = __name__  # "stringplan_app.pin_layouts"
package_path = __path__

for finder, module_name, is_pkg in pkgutil.iter_modules(package_path):
    if module_name in ("base", "__init__"):
        continue
    module = importlib.import_module(f"{package_name}.{module_name}")

    for _, cls in inspect.getmembers(module, inspect.isclass):
        if (
            issubclass(cls, PinLayout)
            and cls is not PinLayout
            and not inspect.isabstract(cls)
        ):
            LAYOUTS[cls.shape] = cls()


def parse_shape(shape: Union[Shape, str]) -> Shape:
    if isinstance(shape, Shape):
        return shape
    try:
        return Shape(str(shape).strip().lower())
    except ValueError:
        valid = ", ".join(s.value for s in Shape)
        raise InvalidArgument(
            f"Unknown shape '{shape}'. Valid options: {valid}",
            {"shape": str(shape)},
        ) from None


def generate_pins(
    shape: Union[Shape, str],
    count: int,
    width: float,
    height: float,
    logger: Optional[logging.Logger] = None,
) -> List[Pin]:
    """
    Place `count` pins along the boundary of a width×height frame.

    :param shape: Shape.CIRCLE / Shape.SQUARE or their string values
    :param count: how many pins, must be >= 1
    :param width: frame width, > 0
    :param height: frame height, > 0
    :param logger: optional logger to receive debug messages
    :returns: ordered list of Pin(x, y); index 0 is where planning starts
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if isinstance(count, bool) or not isinstance(count, int) or count < 1:
        logger.error(f"Rejected pin count {count!r}")
        raise InvalidArgument(f"Pin count must be a positive integer, got {count!r}", {"count": count})
    for name, value in (("width", width), ("height", height)):
        if not math.isfinite(value) or value <= 0:
            logger.error(f"Rejected frame {name} {value!r}")
            raise InvalidArgument(f"Frame {name} must be positive, got {value!r}", {name: value})

    layout = LAYOUTS[parse_shape(shape)]
    logger.debug(
        f"generate_pins called with shape={layout.shape.value}, "
        f"count={count}, width={width}, height={height}"
    )
    pins = layout.positions(count, float(width), float(height))
    logger.debug(f"Generated {len(pins)} pins")
    return pins


__all__ = ["LAYOUTS", "Pin", "PinLayout", "Shape", "generate_pins", "parse_shape"]
