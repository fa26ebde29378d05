"""
Tests for merging common tournament names into tournaments.json.
"""

import json

import pytest

from atp_brackets.common_names import (
    COMMON_NAMES,
    AugmentError,
    add_common_names,
    apply_common_names,
    display_name,
)
from atp_brackets.storage import write_json


def _tournaments():
    return [
        {"id": "t1", "year": 2024, "name": "BNP Paribas Open", "location": "Indian Wells",
         "series": "Masters", "court": "Outdoor", "surface": "Hard"},
        {"id": "t2", "year": 2024, "name": "Some Exhibition", "location": "Nowhere",
         "series": "ATP250", "court": "Outdoor", "surface": "Hard", "commonName": "Stale"},
        {"id": "t3", "year": 2024, "name": "Wimbledon", "location": "London",
         "series": "Grand Slam", "court": "Outdoor", "surface": "Grass", "commonName": "Old"},
    ]


class TestApplyCommonNames:
    def test_adds_and_overwrites(self):
        updated, updated_count, skipped_count = apply_common_names(_tournaments())
        assert updated[0]["commonName"] == "Indian Wells"
        assert updated[2]["commonName"] == "Wimbledon"
        assert updated_count == 2
        assert skipped_count == 1

    def test_removes_unmapped_common_name(self):
        updated, _, _ = apply_common_names(_tournaments())
        assert "commonName" not in updated[1]

    def test_input_not_mutated(self):
        original = _tournaments()
        apply_common_names(original)
        assert original[1]["commonName"] == "Stale"

    def test_new_common_name_appended_last(self):
        updated, _, _ = apply_common_names(_tournaments())
        assert list(updated[0])[-1] == "commonName"

    def test_custom_table(self):
        updated, count, _ = apply_common_names(_tournaments(), {"Some Exhibition": "Expo"})
        assert count == 1
        assert updated[1]["commonName"] == "Expo"
        assert "commonName" not in updated[0]


class TestAddCommonNames:
    def test_rewrites_file(self, tmp_path):
        path = write_json(tmp_path / "tournaments.json", _tournaments())
        assert add_common_names(path) == (2, 1)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["commonName"] == "Indian Wells"

    def test_second_run_byte_identical(self, tmp_path):
        path = write_json(tmp_path / "tournaments.json", _tournaments())
        add_common_names(path)
        first = path.read_bytes()
        add_common_names(path)
        assert path.read_bytes() == first

    def test_missing_file(self, tmp_path):
        with pytest.raises(AugmentError):
            add_common_names(tmp_path / "tournaments.json")

    def test_not_an_array(self, tmp_path):
        path = write_json(tmp_path / "tournaments.json", {"id": "t1"})
        with pytest.raises(AugmentError):
            add_common_names(path)

    def test_non_ascii_preserved(self, tmp_path):
        path = write_json(tmp_path / "tournaments.json", [{"id": "t9", "name": "Generali Open"}])
        add_common_names(path)
        assert "Kitzbühel Open" in path.read_text(encoding="utf-8")


class TestDisplayName:
    def test_prefers_common_name(self):
        assert display_name({"name": "BNP Paribas Open", "commonName": "Indian Wells"}) == "Indian Wells"

    def test_falls_back_to_name(self):
        assert display_name({"name": "Some Exhibition"}) == "Some Exhibition"

    def test_missing(self):
        assert display_name(None) == "Unknown"

    def test_table_has_no_blank_entries(self):
        assert all(k.strip() and v.strip() for k, v in COMMON_NAMES.items())
