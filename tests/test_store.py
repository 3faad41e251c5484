"""Tests for JSON file storage."""

import json
from pathlib import Path

import pytest

from chinukh.models import FailedDownload, IndexEntry, Mitzvah, MitzvahCollection
from chinukh.storage import MitzvahStore, mitzvah_filename
from chinukh.storage.store import read_json, write_json_atomic
from tests.factories import make_payload


class TestFileNames:
    def test_zero_padded(self) -> None:
        assert mitzvah_filename(1) == "mitzvah_001.json"
        assert mitzvah_filename(42) == "mitzvah_042.json"
        assert mitzvah_filename(613) == "mitzvah_613.json"


class TestAtomicWrite:
    def test_writes_pretty_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "out.json"
        write_json_atomic({"he": "שבת"}, path)

        content = path.read_text(encoding="utf-8")
        assert "שבת" in content
        assert content == json.dumps({"he": "שבת"}, indent=2, ensure_ascii=False)
        assert not (tmp_path / "nested" / "out.json.tmp").exists()

    def test_failed_write_keeps_previous_content(self, tmp_path: Path) -> None:
        path = tmp_path / "out.json"
        write_json_atomic([1, 2], path)

        with pytest.raises(TypeError):
            write_json_atomic({"bad": object()}, path)

        assert json.loads(path.read_text(encoding="utf-8")) == [1, 2]

    def test_read_falls_back_for_legacy_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "legacy.json"
        path.write_bytes('{"heTitle": "ספר החינוך, מצות שבת"}'.encode("windows-1255"))

        data = read_json(path)
        assert isinstance(data, dict)
        assert "heTitle" in data


class TestMitzvahFiles:
    def test_save_mitzvah(self, store: MitzvahStore) -> None:
        mitzvah = Mitzvah.model_validate(make_payload(7))
        path = store.save_mitzvah(mitzvah)

        assert path.name == "mitzvah_007.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["mitzvahNumber"] == 7
        assert data["heTitle"] == "ספר החינוך"

    def test_save_mitzvah_overwrites(self, store: MitzvahStore) -> None:
        store.save_mitzvah(Mitzvah.model_validate(make_payload(7, title="old")))
        store.save_mitzvah(Mitzvah.model_validate(make_payload(7, title="new")))

        loaded = store.load_mitzvah(7)
        assert loaded is not None
        assert loaded.title == "new"

    def test_load_missing_mitzvah(self, store: MitzvahStore) -> None:
        assert store.load_mitzvah(99) is None


class TestCollectionFile:
    def test_absent_collection_is_none(self, store: MitzvahStore) -> None:
        assert store.load_collection() is None

    def test_save_twice_and_reload(self, store: MitzvahStore, sample_collection: MitzvahCollection) -> None:
        store.save_collection(sample_collection)
        first_bytes = store.collection_path.read_bytes()
        store.save_collection(sample_collection)

        assert store.collection_path.read_bytes() == first_bytes
        loaded = store.load_collection()
        assert loaded is not None
        assert loaded.numbers() == sample_collection.numbers()
        assert list(loaded) == list(sample_collection)

    def test_invalid_entries_skipped(self, store: MitzvahStore) -> None:
        store.ensure_directory()
        store.collection_path.write_text(
            json.dumps(
                [
                    make_payload(1),
                    {"title": "no number"},
                    make_payload(700),
                    make_payload(1, title="duplicate"),
                    make_payload(2),
                ]
            ),
            encoding="utf-8",
        )

        loaded = store.load_collection()
        assert loaded is not None
        assert loaded.numbers() == [1, 2]
        assert loaded.get(1).title == "Sefer HaChinukh 1"

    def test_non_array_rejected(self, store: MitzvahStore) -> None:
        store.ensure_directory()
        store.collection_path.write_text('{"mitzvahNumber": 1}', encoding="utf-8")

        with pytest.raises(ValueError):
            store.load_collection()

    def test_corrupt_json_rejected(self, store: MitzvahStore) -> None:
        store.ensure_directory()
        store.collection_path.write_text("[{", encoding="utf-8")

        with pytest.raises(ValueError):
            store.load_collection()


class TestIndexFile:
    def test_roundtrip(self, store: MitzvahStore) -> None:
        entries = [IndexEntry(number=1, title="A", has_english=True), IndexEntry(number=3, title="B")]
        store.save_index(entries)

        raw = json.loads(store.index_path.read_text(encoding="utf-8"))
        assert raw[0]["hasEnglish"] is True
        assert store.load_index() == entries

    def test_absent_index_is_none(self, store: MitzvahStore) -> None:
        assert store.load_index() is None


class TestFailuresFile:
    def test_no_file_means_nothing_pending(self, store: MitzvahStore) -> None:
        assert not store.has_pending_failures()
        assert store.load_failures() == []

    def test_save_load_clear(self, store: MitzvahStore) -> None:
        failures = [FailedDownload(number=2, error="timeout"), FailedDownload(number=9, error="HTTP 502: Bad Gateway")]
        store.save_failures(failures)

        assert store.has_pending_failures()
        assert store.load_failures() == failures

        store.clear_failures()
        assert not store.has_pending_failures()

    def test_clear_without_file(self, store: MitzvahStore) -> None:
        store.clear_failures()  # Should not raise
        assert not store.has_pending_failures()
