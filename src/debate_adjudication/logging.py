import logging
import sys

from pythonjsonlogger import jsonlogger


def setup_logging():
    """
    Routes all application and uvicorn logs to stdout as JSON.

    Every module calls this at import, so an earlier JSON stdout handler is
    replaced rather than stacked. Handlers installed by other tools, such as
    pytest's capture handler, are left in place.

    Returns:
        The root logger.
    """
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)
    root_logger.handlers = [
        h for h in root_logger.handlers if not _is_stdout_json_handler(h)
    ]
    root_logger.addHandler(stream_handler)

    for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error"]:
        u_logger = logging.getLogger(logger_name)
        u_logger.setLevel(logging.INFO)
        u_logger.handlers = [stream_handler]
        u_logger.propagate = False

    return root_logger


def _is_stdout_json_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and isinstance(
        handler.formatter, jsonlogger.JsonFormatter
    )
