import time
import uuid
from typing import Optional
from urllib.parse import urlencode

from flask import Flask, request, g, redirect
from flask_cors import CORS
from flask_restx import Api

from werkzeug.exceptions import HTTPException

from anime_store.configs import AppConfig, load_config
from anime_store.Logger.log_main import get_logger
from anime_store.utils.anime_registry import AnimeStore
from anime_store.utils.api_key import API_KEY_PARAM
from anime_store.utils.errors import AppError
from anime_store.utils.route_loader import load_routes

# configure logger once per process, duplicate handlers
logger = get_logger()

class AnimeApi(Api):
    def render_root(self):
        # convenience shortcut, the secret is disclosed in the Location header
        target = AnimeStore.redirect_target()
        return redirect(f"{target}?{urlencode({API_KEY_PARAM: g.cfg.api_key})}", code=302)

# app factory
def create_app(cfg: Optional[AppConfig] = None) -> Flask:
    app = Flask(__name__)
    cfg = cfg or load_config()

    # HARD Request Payload Size Limit, applies to json and form bodies
    app.config["MAX_CONTENT_LENGTH"] = cfg.max_request_bytes
    app.config["MAX_FORM_MEMORY_SIZE"] = cfg.max_request_bytes

    CORS(
        app,
        origins="*" if cfg.cors_allow_all else list(cfg.allowed_origins),
        methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
        supports_credentials=True,
    )

    api = AnimeApi(app, version="1.0", title="Anime Data API", doc="/docs", errors={})

    load_routes(api, "anime_store.routes")

    logger.info("app_started", extra={
        "api_key_configured": bool(cfg.api_key),
        "cors_allow_all": cfg.cors_allow_all,
    })

    @app.before_request
    def before_request():
        g.request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        g.start_time = time.time()
        g.cfg = cfg  # request-scoped config handle

    @app.after_request
    def after_request(resp):
        latency_ms = int((time.time() - g.start_time) * 1000)
        resp.headers["X-Request-ID"] = g.request_id
        logger.info("request_complete", extra={
            "request_id": g.request_id,
            "method": request.method,
            "path": request.path,
            "status_code": resp.status_code,
            "latency_ms": latency_ms,
        })

        return resp

    @api.errorhandler(Exception)
    def handle_all_errors(err):
        # AppError covers the auth gate, lookup and storage failures
        if isinstance(err, AppError):
            return {
                "request_id": getattr(g, "request_id", None),
                "error": {"code": err.code, "message": err.message},
            }, err.http_status

        # If it's a standard HTTPException (like 413, 405)
        if isinstance(err, HTTPException):
            return {
                "request_id": getattr(g, "request_id", None),
                "error": {"code": err.name.upper().replace(" ", "_"), "message": err.description},
            }, err.code

        # fallback
        logger.exception("unhandled_error", extra={"request_id": getattr(g, "request_id", None)})
        return {
            "request_id": getattr(g, "request_id", None),
            "error": {"code": "UNHANDLED", "message": "An unexpected error occurred."},
        }, 500

    return app

if __name__ == "__main__":
    config = load_config()
    create_app(config).run(host="0.0.0.0", port=config.port)
