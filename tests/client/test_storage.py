"""Tests for durable token storage."""

from taskboard.client.storage import TokenStorage


def test_round_trip_and_clear(tmp_path):
    storage = TokenStorage(tmp_path / "nested" / "token.json")
    assert storage.load() is None

    storage.save("abc.def.ghi")
    assert TokenStorage(tmp_path / "nested" / "token.json").load() == "abc.def.ghi"

    storage.clear()
    assert storage.load() is None
    storage.clear()


def test_corrupt_file_reads_as_empty(tmp_path):
    path = tmp_path / "token.json"
    path.write_text("{broken", encoding="utf-8")
    assert TokenStorage(path).load() is None
