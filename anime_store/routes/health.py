from flask import g
from flask_restx import Resource, Namespace

from anime_store.utils.anime_registry import AnimeStore
from anime_store.utils.errors import AppError

ns = Namespace("health", description="Health Check")

@ns.route("/")
@ns.route("")
class Health(Resource):
    def get(self):
        """Health check endpoint"""
        return {"status": "ok"}

@ns.route("/store")
@ns.route("/store/")
class HealthStore(Resource):
    def get(self):
        """Health check for the anime document."""
        try:
            records = AnimeStore(g.cfg.data_file).list_all()
        except AppError as e:
            raise AppError("STORE_UNAVAILABLE", f"Anime data is not readable: {e.message}", 503) from e
        return {"status": "ok", "records": len(records)}
