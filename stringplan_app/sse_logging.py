# stringplan_app/sse_logging.py

import logging
from collections import deque

# oldest lines are dropped once a session holds this many
MAX_LOG_LINES = 2000

SESSION_LOGGER_NAME = "stringplan_app.sessions"


class SessionLogHandler(logging.Handler):
    """
    Logging handler that routes records carrying a `session_id` attribute
    into that session's bounded log buffer. Records for unknown sessions
    are dropped.
    """
    def __init__(self, session_logs: dict[str, deque]):
        super().__init__()
        self.session_logs = session_logs

    def emit(self, record: logging.LogRecord) -> None:
        lines = self.session_logs.get(getattr(record, "session_id", None))
        if lines is not None:
            lines.append(self.format(record))


def install_session_handler(session_logs: dict[str, deque],
                            level: int = logging.DEBUG,
                            fmt: str = "%(message)s") -> logging.Logger:
    """
    Attach a single SessionLogHandler to the shared session logger.
    Safe to call more than once.
    """
    logger = logging.getLogger(SESSION_LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(h, SessionLogHandler) and h.session_logs is session_logs
               for h in logger.handlers):
        handler = SessionLogHandler(session_logs)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    return logger


def create_session_logger(session_id: str,
                          session_logs: dict[str, deque],
                          max_lines: int = MAX_LOG_LINES) -> logging.LoggerAdapter:
    """
    Register a bounded buffer for `session_id` and return an adapter over
    the shared session logger that tags every record with the session id.
    """
    session_logs[session_id] = deque(maxlen=max_lines)
    logger = install_session_handler(session_logs)
    return logging.LoggerAdapter(logger, {"session_id": session_id})


def drop_session_logger(session_id: str, session_logs: dict[str, deque]) -> None:
    session_logs.pop(session_id, None)
