"""
Structured Logging Module for the Insights chart service

Every line carries the component (node), a request trace id and a status:
[node] trace_id | status | message | detail

Level and format (text or json) come from Settings.log_level / log_format.
"""
import sys
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Dict


ROOT_LOGGER_NAME = "insights"

# Calls made outside a request
NO_TRACE = "-"


class StructuredFormatter(logging.Formatter):
    """Renders the extra attributes set by StructuredLogger"""

    def __init__(self, use_json: bool = False):
        super().__init__()
        self.use_json = use_json

    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "node": getattr(record, "node", record.name.rsplit(".", 1)[-1]),
            "trace_id": getattr(record, "trace_id", NO_TRACE),
            "status": getattr(record, "status", record.levelname),
            "message": record.getMessage(),
        }
        detail = getattr(record, "detail", None)
        error = self.formatException(record.exc_info) if record.exc_info else None

        if self.use_json:
            fields["ts"] = datetime.now(timezone.utc).isoformat()
            if detail:
                fields["detail"] = detail
            if error:
                fields["exception"] = error
            return json.dumps(fields, default=str)

        line = "[{node}] {trace_id} | {status} | {message}".format(**fields)
        if detail:
            line += " | " + json.dumps(detail, default=str)
        if error:
            line += "\n" + error
        return line


class StructuredLogger:
    """Per-component logger; START/END mark the edges of a chart request"""

    def __init__(self, node_name: str):
        self.node_name = node_name
        self._logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.{node_name}")

    def _log(self, level: int, status: str, message: str, detail: Optional[Dict], trace_id: str, exc_info: bool = False):
        extra = {"node": self.node_name, "trace_id": trace_id, "status": status, "detail": detail}
        self._logger.log(level, message, extra=extra, exc_info=exc_info)

    def debug(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        self._log(logging.DEBUG, "DEBUG", message, detail, trace_id)

    def info(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        self._log(logging.INFO, "INFO", message, detail, trace_id)

    def warning(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        self._log(logging.WARNING, "WARNING", message, detail, trace_id)

    def error(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        """Logs the exception being handled, if any"""
        self._log(logging.ERROR, "ERROR", message, detail, trace_id, exc_info=True)

    def start(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        self._log(logging.INFO, "START", message, detail, trace_id)

    def end(self, message: str, detail: Optional[Dict] = None, trace_id: str = NO_TRACE):
        self._log(logging.INFO, "END", message, detail, trace_id)


_loggers: Dict[str, StructuredLogger] = {}


def get_logger(node_name: str) -> StructuredLogger:
    """Get or create a structured logger for a node"""
    if node_name not in _loggers:
        _loggers[node_name] = StructuredLogger(node_name)
    return _loggers[node_name]


def configure_logging(level: str = "INFO", format_type: str = "text") -> None:
    """
    Send the `insights` logger tree to stdout.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (case-insensitive)
        format_type: "text" or "json"
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(use_json=format_type.lower() == "json"))

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(numeric_level)
    root_logger.handlers = [handler]
    root_logger.propagate = False


_configured = False


def ensure_configured(level: str = "INFO", format_type: str = "text"):
    """Configure once; later calls (e.g. a second app in tests) are no-ops"""
    global _configured
    if not _configured:
        configure_logging(level, format_type)
        _configured = True
