import hmac
from functools import wraps
from typing import Optional

from flask import g, request

from anime_store.Logger.log_main import get_logger
from anime_store.utils.errors import Unauthorized

logger = get_logger()

API_KEY_PARAM = "apikey"

def is_authorized(supplied: Optional[str], expected: Optional[str]) -> bool:
    """Single shared secret, exact match. An unset secret never matches."""
    if not supplied or not expected:
        return False
    return hmac.compare_digest(supplied.encode("utf-8"), expected.encode("utf-8"))

def require_api_key(func):
    """
    Resource method decorator: reject with 403 before the wrapped method runs
    unless ?apikey= equals the configured secret.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        supplied = request.args.get(API_KEY_PARAM)
        if not is_authorized(supplied, g.cfg.api_key):
            logger.warning("api_key_rejected", extra={
                "request_id": getattr(g, "request_id", None),
                "path": request.path,
                "method": request.method,
                "error_code": "INVALID_API_KEY" if supplied else "MISSING_API_KEY",
            })
            raise Unauthorized("INVALID_API_KEY", "Invalid or missing API key", 403)
        return func(*args, **kwargs)
    return wrapper
