import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from queue import Queue
from pythonjsonlogger import jsonlogger
from videotube_api.core.trace import get_trace_id
from videotube_api.core.config import settings


class TraceContextFilter(logging.Filter):
    def __init__(self, service: str | None = None) -> None:
        super().__init__()
        self.service = service or settings.app_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.trace_id = (getattr(record, "trace_id", None)
                           or get_trace_id() or "-")
        record.service = getattr(record, "service", None) or self.service
        record.env = getattr(record, "env", None) or settings.env
        return True


_listener: QueueListener | None = None


def setup_json_logging(service: str = "videotube_api") -> None:
    global _listener

    if _listener is not None:
        return

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    fmt = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s"
        " %(message)s %(pathname)s %(lineno)d "
        "%(trace_id)s %(service)s %(env)s"
    )

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(fmt)
    stream_handler.addFilter(TraceContextFilter(service))

    q: Queue = Queue(-1)
    queue_handler = QueueHandler(q)
    # records must carry trace_id before they cross the queue
    queue_handler.addFilter(TraceContextFilter(service))

    _listener = QueueListener(q, stream_handler, respect_handler_level=True)
    _listener.start()

    root.handlers = [queue_handler]
    root.addFilter(TraceContextFilter(service))

    for name in ("uvicorn", "uvicorn.access", "uvicorn.error"):
        logging.getLogger(name).handlers = []
        logging.getLogger(name).propagate = True

    logging.getLogger(__name__).info(
        "logger_initialized",
        extra={"service": service})


def shutdown_logging() -> None:
    """Stop the queue listener on application shutdown."""
    global _listener
    if _listener:
        _listener.stop()
        _listener = None
