from __future__ import annotations

from pathlib import Path

import pytest

from mozlz4.engine.container import MAGIC
from mozlz4.errors import BadHeader
from mozlz4.files import (
    is_compressed_path,
    read_maybe_compressed,
    read_mozlz4_file,
    write_mozlz4_file,
)

DATA = b'{"windows":[],"selectedWindow":0,"_closedWindows":[]}' * 30


def test_is_compressed_path() -> None:
    assert is_compressed_path("sessionstore.jsonlz4")
    assert is_compressed_path(Path("recovery.baklz4"))
    assert is_compressed_path("search.json.mozlz4")
    assert is_compressed_path("X.JSONLZ4")
    assert not is_compressed_path("sessionstore.json")
    assert not is_compressed_path("lz4")


def test_write_then_read(tmp_path: Path) -> None:
    p = tmp_path / "sub" / "sessionstore.jsonlz4"
    n = write_mozlz4_file(p, DATA, "pure", chunk_size=5)
    raw = p.read_bytes()
    assert n == len(raw)
    assert raw.startswith(MAGIC)
    assert read_mozlz4_file(p, "ported") == DATA
    assert read_maybe_compressed(p, "pure") == DATA


def test_read_maybe_compressed_plain(tmp_path: Path) -> None:
    p = tmp_path / "sessionstore.json"
    p.write_bytes(DATA)
    assert read_maybe_compressed(p) == DATA


def test_read_rejects_plain_json_named_lz4(tmp_path: Path) -> None:
    p = tmp_path / "fake.jsonlz4"
    p.write_bytes(DATA)
    with pytest.raises(BadHeader):
        read_mozlz4_file(p, "ported")
