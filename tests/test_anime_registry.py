"""
Tests for the JSON document store behind the anime routes.
"""
from __future__ import annotations

import json
import sys
import threading
from pathlib import Path

import pytest

# keep the project root importable when running pytest from anywhere
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from anime_store.Models.anime_dto import AnimeRecordDTO
from anime_store.providers.StorageProvider.local_provider import LocalStorageProvider
from anime_store.utils.anime_registry import AnimeStore
from anime_store.utils.errors import NotFoundError, StorageParseError, StorageReadError, StorageWriteError


SAMPLE = [
    {"title": "A", "infoItems": ["Judul: A"], "rating": 8.1},
    {"title": "B", "infoItems": [], "genres": ["action", "drama"]},
]


@pytest.fixture()
def data_file(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text(json.dumps(SAMPLE, indent=2), encoding="utf-8")
    return path


def _read(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_list_all_returns_document_unmodified(data_file):
    assert AnimeStore(str(data_file)).list_all() == SAMPLE


def test_list_all_missing_file_raises_read_error(tmp_path):
    with pytest.raises(StorageReadError):
        AnimeStore(str(tmp_path / "missing.json")).list_all()


def test_list_all_malformed_document_raises_parse_error(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text("[{\"title\": ", encoding="utf-8")
    with pytest.raises(StorageParseError):
        AnimeStore(str(path)).list_all()


def test_list_all_rejects_non_array_document(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text(json.dumps({"title": "A"}), encoding="utf-8")
    with pytest.raises(StorageParseError):
        AnimeStore(str(path)).list_all()


def test_update_replaces_in_place_and_allows_rename(data_file):
    store = AnimeStore(str(data_file))
    replacement = {"title": "C", "infoItems": []}

    assert store.update("B", replacement) == replacement
    assert _read(data_file) == [SAMPLE[0], replacement]


def test_update_stores_body_verbatim(data_file):
    replacement = {"title": "A", "anything": {"nested": [1, 2]}}
    AnimeStore(str(data_file)).update("A", replacement)
    assert _read(data_file)[0] == replacement


def test_update_only_touches_first_match(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text(json.dumps([{"title": "X", "n": 1}, {"title": "X", "n": 2}]), encoding="utf-8")

    AnimeStore(str(path)).update("X", {"title": "X", "n": 3})

    assert _read(path) == [{"title": "X", "n": 3}, {"title": "X", "n": 2}]


def test_update_missing_title_leaves_file_untouched(data_file):
    before = data_file.read_bytes()
    with pytest.raises(NotFoundError) as exc:
        AnimeStore(str(data_file)).update("Z", {"title": "Z"})
    assert exc.value.http_status == 404
    assert data_file.read_bytes() == before


def test_update_write_failure_raises_and_keeps_document(data_file, monkeypatch):
    before = data_file.read_bytes()

    def boom(self, content):
        raise OSError("disk full")

    monkeypatch.setattr(LocalStorageProvider, "write_text", boom)
    with pytest.raises(StorageWriteError):
        AnimeStore(str(data_file)).update("A", {"title": "A2"})
    assert data_file.read_bytes() == before


def test_delete_matches_title_or_judul_line(tmp_path):
    path = tmp_path / "anime.json"
    records = [
        {"title": "A", "infoItems": []},
        {"title": "Alias holder", "infoItems": ["Studio: X", "Judul: A"]},
        {"title": "Other", "infoItems": ["Judul: B"]},
        {"title": "Last", "infoItems": []},
    ]
    path.write_text(json.dumps(records), encoding="utf-8")

    removed = AnimeStore(str(path)).delete("A")

    assert removed == 2
    assert _read(path) == [records[2], records[3]]


def test_delete_absent_title_is_noop(data_file):
    assert AnimeStore(str(data_file)).delete("nope") == 0
    assert _read(data_file) == SAMPLE


def test_delete_is_idempotent(data_file):
    store = AnimeStore(str(data_file))
    store.delete("A")
    once = data_file.read_bytes()
    store.delete("A")
    assert data_file.read_bytes() == once
    assert _read(data_file) == [SAMPLE[1]]


def test_delete_tolerates_records_without_info_items(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text(json.dumps([{"title": "A"}, {"title": "B", "infoItems": None}]), encoding="utf-8")

    AnimeStore(str(path)).delete("A")

    assert _read(path) == [{"title": "B", "infoItems": None}]


def test_persisted_document_round_trips_unicode(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text(json.dumps([{"title": "A", "infoItems": []}]), encoding="utf-8")
    replacement = {"title": "進撃の巨人", "infoItems": ["Judul: Shingeki no Kyojin"], "score": 9.0}

    store = AnimeStore(str(path))
    store.update("A", replacement)

    assert "進撃の巨人" in path.read_text(encoding="utf-8")
    assert store.list_all() == [replacement]


def test_concurrent_updates_on_disjoint_titles_are_not_lost(tmp_path):
    path = tmp_path / "anime.json"
    count = 16
    path.write_text(json.dumps([{"title": f"T{i}", "infoItems": []} for i in range(count)]), encoding="utf-8")
    barrier = threading.Barrier(count)
    errors = []

    def worker(i):
        barrier.wait()
        try:
            # a separate store instance per call, the way each request builds one
            AnimeStore(str(path)).update(f"T{i}", {"title": f"T{i}-new", "infoItems": []})
        except Exception as e:  # collected and asserted below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert [a["title"] for a in _read(path)] == [f"T{i}-new" for i in range(count)]


def test_redirect_target_is_list_path():
    assert AnimeStore.redirect_target() == "/data/anime"


def test_judul_aliases_follow_colon_space_split():
    dto = AnimeRecordDTO({"title": "X", "infoItems": ["Judul: Y", "Judul:Z", "Judul: W: extra", 7, "Studio: Y"]})

    assert dto.judul_aliases() == ["Y", "W"]
    assert dto.matches_judul("Y")
    assert not dto.matches_judul("Z")
    assert not dto.matches_title("Y")


def test_document_with_nan_is_rejected_as_malformed(tmp_path):
    path = tmp_path / "anime.json"
    path.write_text('[{"title": "A", "score": NaN}]', encoding="utf-8")
    with pytest.raises(StorageParseError):
        AnimeStore(str(path)).list_all()


def test_update_never_persists_nan(data_file):
    before = data_file.read_bytes()
    with pytest.raises(StorageWriteError):
        AnimeStore(str(data_file)).update("B", {"title": "B", "score": float("nan")})
    assert data_file.read_bytes() == before
    # strict reader still accepts what is on disk
    json.loads(data_file.read_text(encoding="utf-8"), parse_constant=lambda token: pytest.fail(token))
