"""One JSON object per log line, tagged with the process that emitted it."""

import json
import logging
from datetime import UTC, datetime

from wrapped_api.constants import ServiceName


class JSONLogFormatter(logging.Formatter):
    """Render records as compact JSON for the API and importer processes.

    Every line carries timestamp, level, service, logger and message.
    request_id appears while an HTTP request is in flight and exception
    when the record holds a traceback.
    """

    def __init__(self, service: ServiceName | str = ServiceName.API) -> None:
        super().__init__()
        self.service = str(service)

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = getattr(record, "request_id", None)
        if request_id:
            payload["request_id"] = request_id
        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, separators=(",", ":"))
