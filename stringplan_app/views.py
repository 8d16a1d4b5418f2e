# stringplan_app/views.py
#
# HTTP surface for the string-art planner:
# - Computes pin layouts for a frame shape
# - Owns one StringArtSession per client (cached source image + intensity grid)
# - Preprocesses uploaded images and plans thread paths against a session
# - Replays each session's log lines to the frontend using Server-Sent Events (SSE)
#

import base64
import json
import logging
import math
from collections import deque
from functools import wraps
from typing import Any

from django.http import HttpResponse, JsonResponse, StreamingHttpResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from .errors import ErrorKind, InvalidArgument, StringArtError
from .pin_layouts import Pin, generate_pins
from .planner import DEFAULT_ALGORITHM, generate_string_art
from .preprocessing import process_image
from .renderer import image_to_png, render_path
from .session import StringArtSession
from .sse_logging import create_session_logger, drop_session_logger

logger = logging.getLogger(__name__)

DEFAULT_PIN_COUNT = 200
DEFAULT_LINE_COUNT = 1000
DEFAULT_CANVAS_SIZE = (500, 500)
MAX_LINE_COUNT = 20000
MAX_CANVAS_SIZE = (4096, 4096)

ERROR_STATUS = {
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.DECODE_ERROR: 400,
    ErrorKind.GEOMETRY_ERROR: 422,
    ErrorKind.PRECONDITION_ERROR: 409,
}

# === Per-session registries ===
SESSIONS: dict[str, StringArtSession] = {}
SESSION_LOGS: dict[str, deque] = {}
SESSION_LOGGERS: dict[str, logging.LoggerAdapter] = {}


def error_response(exc: StringArtError) -> JsonResponse:
    return JsonResponse({"error": exc.to_dict()}, status=ERROR_STATUS[exc.kind])


def reports_errors(view):
    """Turn StringArtError raised by a view into a JSON error response."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except StringArtError as exc:
            logger.info(f"{request.path}: {exc.kind.value}: {exc.message}")
            return error_response(exc)
    return wrapper


def with_session(view):
    """Resolve the <uuid:session_id> URL argument to a StringArtSession."""
    @wraps(view)
    def wrapper(request, session_id, *args, **kwargs):
        session = SESSIONS.get(str(session_id))
        if session is None:
            return JsonResponse({"error": {"kind": "not_found", "message": "Unknown session"}}, status=404)
        return view(request, session, *args, **kwargs)
    return wrapper


def parse_number(params, name: str, cast, default):
    raw = params.get(name)
    if raw is None or raw == "":
        return default
    if isinstance(raw, bool) or (cast is int and isinstance(raw, float) and not raw.is_integer()):
        raise InvalidArgument(f"Parameter '{name}' must be {cast.__name__}, got {raw!r}", {name: raw})
    try:
        value = cast(raw)
    except (TypeError, ValueError, OverflowError):
        raise InvalidArgument(f"Parameter '{name}' must be {cast.__name__}, got {raw!r}", {name: raw}) from None
    if cast is float and not math.isfinite(value):
        raise InvalidArgument(f"Parameter '{name}' must be finite, got {raw!r}", {name: raw})
    return value


def parse_pins(raw: Any) -> list[Pin]:
    if not isinstance(raw, list):
        raise InvalidArgument("'pins' must be a list of {x, y} points")
    pins = []
    for item in raw:
        try:
            if isinstance(item, dict):
                pins.append(Pin(float(item["x"]), float(item["y"])))
            else:
                x, y = item
                pins.append(Pin(float(x), float(y)))
        except (KeyError, TypeError, ValueError):
            raise InvalidArgument(f"Invalid pin {item!r}", {"pin": repr(item)}) from None
        if not (math.isfinite(pins[-1].x) and math.isfinite(pins[-1].y)):
            raise InvalidArgument(f"Pin {len(pins) - 1} has non-finite coordinates", {"pin": len(pins) - 1})
    return pins


@require_GET
@reports_errors
def pins(request):
    shape = request.GET.get('shape', 'circle')
    pin_count = parse_number(request.GET, 'pin_count', int, DEFAULT_PIN_COUNT)
    width = parse_number(request.GET, 'width', float, float(DEFAULT_CANVAS_SIZE[0]))
    height = parse_number(request.GET, 'height', float, float(DEFAULT_CANVAS_SIZE[1]))

    layout = generate_pins(shape, pin_count, width, height)
    return JsonResponse({"pins": [p.to_dict() for p in layout]})


@csrf_exempt
@require_POST
def create_session(request):
    session = StringArtSession()
    SESSIONS[session.session_id] = session
    SESSION_LOGGERS[session.session_id] = create_session_logger(session.session_id, SESSION_LOGS)
    logger.info(f"Created session {session.session_id}")
    return JsonResponse({"session_id": session.session_id}, status=201)


@csrf_exempt
@require_http_methods(["DELETE"])
@with_session
def delete_session(request, session):
    SESSIONS.pop(session.session_id, None)
    SESSION_LOGGERS.pop(session.session_id, None)
    drop_session_logger(session.session_id, SESSION_LOGS)
    logger.info(f"Deleted session {session.session_id}")
    return HttpResponse(status=204)


@csrf_exempt
@require_POST
@with_session
@reports_errors
def upload_image(request, session):
    upload = request.FILES.get('image')
    if upload is None and session.source is None:
        raise InvalidArgument("No 'image' file uploaded")
    data = upload.read() if upload is not None else b""

    canvas_width = parse_number(request.POST, 'canvas_width', int, DEFAULT_CANVAS_SIZE[0])
    canvas_height = parse_number(request.POST, 'canvas_height', int, DEFAULT_CANVAS_SIZE[1])
    if canvas_width > MAX_CANVAS_SIZE[0] or canvas_height > MAX_CANVAS_SIZE[1]:
        raise InvalidArgument(
            f"Canvas may not exceed {MAX_CANVAS_SIZE[0]}x{MAX_CANVAS_SIZE[1]}, "
            f"got {canvas_width}x{canvas_height}",
            {"canvas": [canvas_width, canvas_height]},
        )
    zoom = parse_number(request.POST, 'zoom', float, 1.0)
    offset_x = parse_number(request.POST, 'offset_x', float, 0.0)
    offset_y = parse_number(request.POST, 'offset_y', float, 0.0)

    process_image(
        session,
        data,
        canvas_width,
        canvas_height,
        zoom,
        offset_x,
        offset_y,
        logger=SESSION_LOGGERS.get(session.session_id),
    )
    return JsonResponse({"width": canvas_width, "height": canvas_height})


@csrf_exempt
@require_POST
@with_session
def clear_image(request, session):
    session.clear_source()
    return HttpResponse(status=204)


@csrf_exempt
@require_POST
@with_session
@reports_errors
def string_art(request, session):
    try:
        body = json.loads(request.body or b"{}")
    except json.JSONDecodeError as exc:
        raise InvalidArgument(f"Request body is not valid JSON: {exc}") from None
    if not isinstance(body, dict):
        raise InvalidArgument("Request body must be a JSON object")

    pin_list = parse_pins(body.get('pins', []))
    line_count = parse_number(body, 'line_count', int, DEFAULT_LINE_COUNT)
    if line_count > MAX_LINE_COUNT:
        raise InvalidArgument(f"line_count may not exceed {MAX_LINE_COUNT}", {"line_count": line_count})
    algorithm = body.get('algorithm', DEFAULT_ALGORITHM)

    path = generate_string_art(
        session,
        pin_list,
        line_count,
        algorithm=algorithm,
        logger=SESSION_LOGGERS.get(session.session_id),
    )

    result: dict[str, Any] = {"path": path}
    if body.get('preview'):
        height, width = session.grid.shape
        img = render_path(pin_list, path, (width, height))
        result["preview"] = base64.b64encode(image_to_png(img)).decode('ascii')
    return JsonResponse(result)


@require_GET
@with_session
def stream_logs(request, session):
    logs = SESSION_LOGS.get(session.session_id, [])

    def event_stream():
        # replay a snapshot; every operation finishes before its response
        for line in list(logs):
            yield f"data: {line}\n\n".encode()

    return StreamingHttpResponse(event_stream(), content_type='text/event-stream')
