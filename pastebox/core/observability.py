import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = ("error_code", "document_id", "path", "client", "deleted")


class JSONFormatter(logging.Formatter):
    """Форматирование логов в JSON"""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                log[key] = value
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Настройка корневого логгера (вызывается один раз при старте)"""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_pastebox", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._pastebox = True
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
