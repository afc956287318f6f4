"""File helpers for mozLz4 data (.jsonlz4, .mozlz4, .baklz4, ...)."""

from __future__ import annotations

from pathlib import Path

from mozlz4.core.codec_base import BlockBackend, CompressionMode
from mozlz4.engine.container import DEFAULT_CHUNK_SIZE, decode, encode


def is_compressed_path(path: Path | str) -> bool:
    """Firefox names its mozLz4 files with an extension ending in 'lz4'."""
    return Path(path).suffix.lower().endswith("lz4")


def read_mozlz4_file(
    path: Path | str,
    backend: str | BlockBackend | None = None,
    *,
    strict: bool = True,
) -> bytes:
    return decode(Path(path).read_bytes(), backend, strict=strict)


def read_maybe_compressed(
    path: Path | str,
    backend: str | BlockBackend | None = None,
    *,
    strict: bool = True,
) -> bytes:
    """Read a file, decompressing it when its extension says it is mozLz4."""
    p = Path(path)
    if is_compressed_path(p):
        return read_mozlz4_file(p, backend, strict=strict)
    return p.read_bytes()


def write_mozlz4_file(
    path: Path | str,
    data: bytes,
    backend: str | BlockBackend | None = None,
    *,
    mode: CompressionMode | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Compress ``data`` into ``path``; returns the number of bytes written."""
    enc = encode(data, backend, mode=mode)
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with p.open("wb") as f:
        for chunk in enc.iter_chunks(chunk_size):
            f.write(chunk)
            written += len(chunk)
    return written
