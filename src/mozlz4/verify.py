"""Verification helpers.

We implement:
  - bytes verify: validate a mozLz4 container held in memory
  - file verify: same, reading the container from disk

Policy: light by default (header only), --full decodes the block strictly
and hashes the plaintext.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from mozlz4.core.codec_base import BlockBackend
from mozlz4.engine.container import HEADER_LENGTH, decode, unpack_header
from mozlz4.errors import UsageError


@dataclass(frozen=True)
class VerifyReport:
    uncompressed_size: int
    payload_length: int
    decoded_length: int | None = None
    sha256: str | None = None

    @property
    def full(self) -> bool:
        return self.decoded_length is not None

    @property
    def ratio(self) -> float:
        if self.uncompressed_size == 0:
            return 0.0
        return (HEADER_LENGTH + self.payload_length) / self.uncompressed_size


def sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def verify_container_bytes(
    blob: bytes,
    *,
    full: bool = False,
    backend: str | BlockBackend | None = None,
) -> VerifyReport:
    header = unpack_header(blob)
    payload_length = len(blob) - HEADER_LENGTH
    if not full:
        return VerifyReport(header.uncompressed_size, payload_length)

    data = decode(blob, backend, strict=True)
    return VerifyReport(
        uncompressed_size=header.uncompressed_size,
        payload_length=payload_length,
        decoded_length=len(data),
        sha256=sha256_bytes(data),
    )


def verify_container_file(
    path: Path,
    *,
    full: bool = False,
    backend: str | BlockBackend | None = None,
) -> VerifyReport:
    p = Path(path)
    if not p.is_file():
        raise UsageError(f"file not found: {p}")
    return verify_container_bytes(p.read_bytes(), full=full, backend=backend)
