"""Structured JSON logging for footprint CLI sessions."""

from __future__ import annotations

import json
import logging
import logging.handlers
from dataclasses import dataclass
from datetime import datetime, timezone
from queue import Full, Queue
from typing import Iterable
from uuid import uuid4

LOGGER = logging.getLogger(__name__)

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_RECORD_KEYS: frozenset[str] = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None))
) | {"message", "asctime", "session_id"}

_QUEUE_SIZE = 1024


def extra_fields(record: logging.LogRecord) -> dict[str, object]:
    """Return the ``extra=`` context attached to ``record``."""

    return {
        key: value
        for key, value in vars(record).items()
        if key not in _RESERVED_RECORD_KEYS
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record, stamped with a session id."""

    def __init__(self, *, default_session_id: str | None = None) -> None:
        super().__init__()
        self.default_session_id = default_session_id

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, object] = {
            "timestamp": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "session_id": getattr(record, "session_id", None)
            or self.default_session_id,
            "context": extra_fields(record),
        }
        exception = record.exc_text
        if record.exc_info:
            exception = self.formatException(record.exc_info)
        if exception:
            payload["exception"] = exception
        return json.dumps(payload, default=str)


class DroppingQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that counts and discards records once the queue is full."""

    def __init__(self, queue: Queue[logging.LogRecord]) -> None:
        super().__init__(queue)
        self.dropped = 0

    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            self.dropped += 1


@dataclass(slots=True)
class StructuredLogSession:
    """Handles installed by :func:`configure_structured_logging`."""

    logger: logging.Logger
    handler: DroppingQueueHandler
    listener: logging.handlers.QueueListener
    session_id: str

    def close(self) -> None:
        """Flush pending records and detach the queue handler."""

        try:
            self.listener.stop()
        finally:
            self.logger.removeHandler(self.handler)


def configure_structured_logging(
    logger: logging.Logger,
    *,
    session_id: str | None = None,
    level: int = logging.INFO,
) -> StructuredLogSession:
    """Route ``logger`` through a background queue that writes JSON lines.

    Args:
        logger: Logger to attach to, usually the ``digital_footprint`` root.
        session_id: Identifier stamped on every record that does not carry
            its own. A random UUID is used when omitted.
        level: Minimum level for ``logger``.

    Returns:
        The running session; call :meth:`StructuredLogSession.close` (or
        :func:`close_sessions`) when done.
    """

    resolved_session = session_id or str(uuid4())
    record_queue: Queue[logging.LogRecord] = Queue(maxsize=_QUEUE_SIZE)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(JsonFormatter(default_session_id=resolved_session))
    listener = logging.handlers.QueueListener(record_queue, stream_handler)

    handler = DroppingQueueHandler(record_queue)
    logger.setLevel(level)
    logger.addHandler(handler)
    listener.start()
    return StructuredLogSession(
        logger=logger,
        handler=handler,
        listener=listener,
        session_id=resolved_session,
    )


def configure_plain_logging(level: int = logging.WARNING) -> None:
    """Configure human-readable logging on stderr."""

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def close_sessions(sessions: Iterable[StructuredLogSession]) -> None:
    """Close every session, logging rather than raising on failure."""

    for session in sessions:
        try:
            session.close()
        except Exception as exc:
            LOGGER.warning("Failed to close logging session", exc_info=exc)
