from flask import g, make_response, request
from flask_restx import Namespace, Resource, fields

from anime_store.utils.anime_registry import AnimeStore, LIST_PATH, loads_strict
from anime_store.utils.api_key import API_KEY_PARAM, require_api_key
from anime_store.utils.errors import ValidationError

ns = Namespace("anime", description="Anime collection stored in a single JSON document", path=LIST_PATH)

# documentation only, the store keeps bodies verbatim
anime_model = ns.model("Anime", {
    "title": fields.String(required=True, description="Primary identifier"),
    "infoItems": fields.List(fields.String, description='Info lines, "Judul: <alias>" marks an alternate title'),
})

def _replacement_from_request():
    """JSON object or form fields from the body, None when neither is usable."""
    if request.is_json:
        try:
            payload = loads_strict(request.get_data())
        except ValueError:
            return None
    elif request.form:
        payload = request.form.to_dict()
    else:
        return None
    return payload if isinstance(payload, dict) else None

@ns.route("")
@ns.param(API_KEY_PARAM, "API key", _in="query", required=True)
class AnimeList(Resource):
    method_decorators = [require_api_key]

    def get(self):
        """Return the whole anime collection."""
        return AnimeStore(g.cfg.data_file).list_all()

@ns.route("/<string:title>")
@ns.param("title", "Title of the anime (delete also matches a \"Judul:\" info line)")
@ns.param(API_KEY_PARAM, "API key", _in="query", required=True)
class AnimeItem(Resource):
    method_decorators = [require_api_key]

    @ns.expect(anime_model, validate=False)
    def put(self, title: str):
        """Replace the first anime whose title matches."""
        store = AnimeStore(g.cfg.data_file)
        replacement = _replacement_from_request()
        if replacement is None:
            # an unknown title reports 404 before the body is judged
            store.require(title)
            raise ValidationError("INVALID_BODY", "Request body must be a JSON object describing one anime", 400)
        return store.update(title, replacement), 200

    def delete(self, title: str):
        """Remove every anime matching the title or its Judul alias."""
        AnimeStore(g.cfg.data_file).delete(title)
        return make_response("", 204)
