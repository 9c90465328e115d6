#json document storage for the anime collection

import json
import threading
from pathlib import Path
from typing import Any, Dict, List

from anime_store.Logger.log_main import get_logger
from anime_store.Models.anime_dto import AnimeRecordDTO
from anime_store.providers.StorageProvider.local_provider import LocalStorageProvider
from anime_store.utils.errors import NotFoundError, StorageParseError, StorageReadError, StorageWriteError

logger = get_logger()

LIST_PATH = "/data/anime"

# one lock per document, shared by every AnimeStore opened on the same path
_locks: Dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()

def _reject_constant(token: str):
    raise ValueError(f"{token} is not valid JSON")

def loads_strict(raw):
    """json.loads that refuses NaN, Infinity and -Infinity."""
    return json.loads(raw, parse_constant=_reject_constant)

def _index_of(animes: List[Dict[str, Any]], title: str) -> int:
    return next((i for i, a in enumerate(animes) if AnimeRecordDTO(a).matches_title(title)), -1)

def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.Lock()
        return lock

class AnimeStore:
    """
    Loads, mutates and persists the anime collection kept in one JSON document.

    Nothing is cached between calls: every operation reads the document fresh.
    update() and delete() hold the per-document lock for the whole
    load-mutate-persist cycle so concurrent mutations never lose a write.
    Writes go through an atomic rename, so list_all() needs no lock.
    """
    def __init__(self, path: str):
        self.path = Path(path)
        self.storage = LocalStorageProvider(path)
        self._lock = _lock_for(self.path)

    def _read(self) -> List[Dict[str, Any]]:
        try:
            raw = self.storage.read_text()
        except (OSError, UnicodeDecodeError) as e:
            logger.error("storage_read_failed", extra={"path": str(self.path), "error_code": type(e).__name__})
            raise StorageReadError("STORAGE_READ_FAILED", "Failed to read anime data", 500) from e
        try:
            data = loads_strict(raw)
        except ValueError as e:
            logger.error("storage_parse_failed", extra={"path": str(self.path)})
            raise StorageParseError("STORAGE_PARSE_FAILED", "Anime data is not valid JSON", 500) from e
        if not isinstance(data, list):
            logger.error("storage_parse_failed", extra={"path": str(self.path)})
            raise StorageParseError("STORAGE_PARSE_FAILED", "Anime data must be a JSON array", 500)
        return data

    def _write(self, animes: List[Dict[str, Any]]) -> None:
        try:
            self.storage.write_text(json.dumps(animes, indent=2, ensure_ascii=False, allow_nan=False))
        except (OSError, TypeError, ValueError) as e:
            logger.exception("storage_write_failed", extra={"path": str(self.path)})
            raise StorageWriteError("STORAGE_WRITE_FAILED", "Failed to write anime data", 500) from e

    def list_all(self) -> List[Dict[str, Any]]:
        return self._read()

    def require(self, title: str) -> None:
        if _index_of(self._read(), title) == -1:
            raise NotFoundError("ANIME_NOT_FOUND", f"Anime '{title}' not found", 404)

    def update(self, title: str, replacement: Dict[str, Any]) -> Dict[str, Any]:
        # replacement is stored verbatim, renaming through it is allowed
        with self._lock:
            animes = self._read()
            index = _index_of(animes, title)
            if index == -1:
                raise NotFoundError("ANIME_NOT_FOUND", f"Anime '{title}' not found", 404)

            animes[index] = replacement
            self._write(animes)

        logger.info("anime_updated", extra={"title": title})
        return replacement

    def delete(self, title: str) -> int:
        """
        Remove every record whose title is `title` or that carries a
        "Judul: <title>" info line. Returns how many were removed; zero is not an error.
        """
        with self._lock:
            animes = self._read()
            kept = []
            for anime in animes:
                dto = AnimeRecordDTO(anime)
                if dto.matches_title(title) or dto.matches_judul(title):
                    continue
                kept.append(anime)
            self._write(kept)

        removed = len(animes) - len(kept)
        logger.info("anime_deleted", extra={"title": title, "removed": removed})
        return removed

    @staticmethod
    def redirect_target() -> str:
        return LIST_PATH
