"""Structured logging utilities for fingerprint tooling."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from queue import Full, Queue
from typing import Iterable

from typing_extensions import override

from podfingerprint.settings import PodFingerprintSettings

LOGGER = logging.getLogger(__name__)

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_RESERVED_KEYS: frozenset[str] = frozenset(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class JsonFormatter(logging.Formatter):
    """Render log records as JSON tagged with the node being fingerprinted."""

    def __init__(self, *, node_name: str | None = None) -> None:
        super().__init__()
        self._node_name = node_name

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - inherited
        node_name = getattr(record, "node_name", None) or self._node_name

        context: dict[str, object] = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_KEYS and key != "node_name"
        }

        payload: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "node_name": node_name,
            "context": context,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            payload["exception"] = record.exc_text

        return json.dumps(payload, default=str)


class BoundedQueueHandler(logging.handlers.QueueHandler):
    """Queue handler that drops records when the queue is full."""

    @override
    def enqueue(self, record: logging.LogRecord) -> None:
        try:
            self.queue.put_nowait(record)
        except Full:
            self.handleError(record)

    @override
    def handleError(self, record: logging.LogRecord) -> None:
        """Drop the record silently when the queue is full."""

        return


def configure_structured_logging(
    logger: logging.Logger,
    *,
    node_name: str | None = None,
    level: int = logging.INFO,
    maxsize: int = 1024,
) -> logging.handlers.QueueListener:
    """Configure ``logger`` with queue-backed JSON output on stderr.

    Args:
        logger: Target logger to configure.
        node_name: Node name attached to every record unless a record sets
            its own via ``extra``.
        level: Logging verbosity level. Defaults to ``logging.INFO``.
        maxsize: Capacity of the record queue; records beyond it are dropped.

    Returns:
        The started queue listener; stop it with :func:`shutdown_listeners`.
    """
    logger.setLevel(level)

    record_queue: Queue[logging.LogRecord] = Queue(maxsize=maxsize)
    logger.addHandler(BoundedQueueHandler(record_queue))

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(JsonFormatter(node_name=node_name))

    queue_listener = logging.handlers.QueueListener(record_queue, stream_handler)
    queue_listener.start()
    return queue_listener


def configure_from_settings(
    settings: PodFingerprintSettings,
    logger: logging.Logger | None = None,
) -> logging.handlers.QueueListener | None:
    """Apply the logging level and format selected by ``settings``.

    Returns:
        The queue listener when JSON output was selected, otherwise ``None``.
    """

    target = logger or logging.getLogger("podfingerprint")
    if settings.log_format == "json":
        return configure_structured_logging(
            target,
            node_name=settings.node_name,
            level=settings.log_level_number,
        )

    logging.basicConfig(format=_TEXT_FORMAT)
    target.setLevel(settings.log_level_number)
    return None


def shutdown_listeners(listeners: Iterable[logging.handlers.QueueListener]) -> None:
    """Stop all queue listeners while suppressing shutdown errors."""
    for listener in listeners:
        try:
            listener.stop()
        except Exception as exc:  # pragma: no cover - defensive logging cleanup
            LOGGER.warning("Failed to stop logging listener", exc_info=exc)
