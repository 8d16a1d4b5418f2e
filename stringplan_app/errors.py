# stringplan_app/errors.py

from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    INVALID_ARGUMENT = "invalid_argument"
    DECODE_ERROR = "decode_error"
    GEOMETRY_ERROR = "geometry_error"
    PRECONDITION_ERROR = "precondition_error"


class StringArtError(Exception):
    """
    Base error for every pin/preprocess/plan operation.
    Carries the error kind, a human readable message and optional context.
    """
    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, message: str, context: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.context:
            data["context"] = self.context
        return data


class InvalidArgument(StringArtError, ValueError):
    kind = ErrorKind.INVALID_ARGUMENT


class DecodeError(StringArtError):
    kind = ErrorKind.DECODE_ERROR


class GeometryError(StringArtError):
    kind = ErrorKind.GEOMETRY_ERROR


class PreconditionError(StringArtError):
    kind = ErrorKind.PRECONDITION_ERROR
