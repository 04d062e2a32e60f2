"""Tests for the line-delimited JSON record store."""

import json
import os

import pytest

from aeroprod.infrastructure.persistence import JsonLinesStore


class TestLoadAll:
    def test_absent_collection_returns_none(self, store):
        assert store.load_all("aircraft") is None
        assert store.skipped_records == {"aircraft": 0}

    def test_empty_file_returns_empty_list(self, store):
        store.ensure_data_dir()
        store.path_for("aircraft").write_text("", encoding="utf-8")

        assert store.load_all("aircraft") == []

    def test_malformed_lines_are_skipped_and_counted(self, store):
        store.ensure_data_dir()
        store.path_for("aircraft").write_text(
            '{"code": "AC1"}\n'
            "not json\n"
            "\n"
            "[1, 2, 3]\n"
            '{"code": "AC2"\n'
            '{"code": "AC3"}\n',
            encoding="utf-8",
        )

        records = store.load_all("aircraft")

        assert [r["code"] for r in records] == ["AC1", "AC3"]
        assert store.skipped_records["aircraft"] == 3

    def test_invalid_utf8_line_is_skipped(self, store):
        store.ensure_data_dir()
        store.path_for("aircraft").write_bytes(
            b'{"code": "AC1"}\n\xff\xfe garbage\n{"code": "AC2"}\n'
        )

        records = store.load_all("aircraft")

        assert [r["code"] for r in records] == ["AC1", "AC2"]
        assert store.skipped_records["aircraft"] == 1

    def test_deeply_nested_line_is_skipped(self, store):
        store.ensure_data_dir()
        store.path_for("aircraft").write_text(
            '{"code": "AC1"}\n' + "[" * 200_000 + "\n", encoding="utf-8"
        )

        records = store.load_all("aircraft")

        assert records == [{"code": "AC1"}]
        assert store.skipped_records["aircraft"] == 1

    def test_counts_are_per_collection(self, store):
        store.ensure_data_dir()
        store.path_for("aircraft").write_text("oops\n", encoding="utf-8")
        store.path_for("users").write_text('{"id": "u1"}\n', encoding="utf-8")

        store.load_all("aircraft")
        store.load_all("users")

        assert store.skipped_records == {"aircraft": 1, "users": 0}


class TestWrites:
    def test_append_creates_data_dir(self, tmp_path):
        store = JsonLinesStore(tmp_path / "nested" / "data")

        store.append_one("aircraft", {"code": "AC1"})
        store.append_one("aircraft", {"code": "AC2", "model": "Ção"})

        lines = store.path_for("aircraft").read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["code"] for line in lines] == ["AC1", "AC2"]
        assert store.load_all("aircraft")[1]["model"] == "Ção"

    def test_replace_all_overwrites(self, store):
        store.append_one("aircraft", {"code": "AC1"})
        store.append_one("aircraft", {"code": "AC2"})

        store.replace_all("aircraft", [{"code": "AC3"}])

        assert store.load_all("aircraft") == [{"code": "AC3"}]

    def test_replace_all_with_no_records_leaves_empty_file(self, store):
        store.append_one("aircraft", {"code": "AC1"})

        store.replace_all("aircraft", [])

        assert store.load_all("aircraft") == []

    def test_failed_replace_keeps_previous_file(self, store, monkeypatch):
        """A failed rename leaves the old contents and no temporary files behind."""
        store.append_one("aircraft", {"code": "AC1"})

        def failing_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError, match="disk full"):
            store.replace_all("aircraft", [{"code": "AC2"}])

        monkeypatch.undo()
        assert store.load_all("aircraft") == [{"code": "AC1"}]
        assert sorted(p.name for p in store.data_dir.iterdir()) == ["aircraft.jsonl"]

    def test_unserializable_record_keeps_previous_file(self, store):
        store.append_one("aircraft", {"code": "AC1"})

        with pytest.raises(TypeError):
            store.replace_all("aircraft", [{"code": "AC2", "when": object()}])

        assert store.load_all("aircraft") == [{"code": "AC1"}]
        assert sorted(p.name for p in store.data_dir.iterdir()) == ["aircraft.jsonl"]
