import importlib
import pkgutil
from flask_restx import Namespace, Api

def load_routes( rest_api: Api, package: str = "anime_store.routes") -> None:
    """
    Register the `ns` Namespace of every route module in `package`
    (anime.py for /data/anime, health.py for /health).
    Modules without a Namespace are imported and skipped.
    """
    pkg = importlib.import_module(package)

    for modinfo in pkgutil.iter_modules(pkg.__path__, pkg.__name__ + "."):
        if modinfo.ispkg:
            continue

        module = importlib.import_module(modinfo.name)
        namespace = getattr(module, "ns", None)
        if isinstance(namespace, Namespace):
            rest_api.add_namespace(namespace)
