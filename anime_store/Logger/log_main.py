import json
import logging
import sys
from datetime import datetime,timezone

EXTRA_KEYS = (
    "request_id", "path", "method", "status_code", "latency_ms", "error_code",
    "title", "removed", "records", "api_key_configured", "cors_allow_all",
)

class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage()
        }
        #attach structure extra if present
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                payload[key] = getattr(record, key)
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)
    
def get_logger() -> logging.Logger:
    logger = logging.getLogger("anime_store")
    logger.setLevel(logging.INFO)
    
    logger.handlers.clear()
    
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    logger.propagate = False
    return logger
