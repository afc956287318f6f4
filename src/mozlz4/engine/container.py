from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from mozlz4.core.backends import as_backend
from mozlz4.core.codec_base import BlockBackend, CompressionMode
from mozlz4.errors import BadHeader, DecodeError, InputTooLarge, SizeMismatch, TooShort

# -------------------
# mozLz4 container
# [MAGIC(8) = "mozLz40\0" | UNCOMPRESSED_SIZE(u32 LE) | LZ4 BLOCK]
# One raw block, no frame header, no checksum, no block-size prefix.
# -------------------
MAGIC = b"mozLz40\0"
MAGIC_LENGTH = len(MAGIC)
HEADER_LENGTH = MAGIC_LENGTH + 4

DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class MozLz4Header:
    uncompressed_size: int

    def to_bytes(self) -> bytes:
        return pack_header(self.uncompressed_size)


def is_mozlz4(blob: bytes) -> bool:
    return len(blob) >= HEADER_LENGTH and bytes(blob[:MAGIC_LENGTH]) == MAGIC


def pack_header(uncompressed_size: int) -> bytes:
    if uncompressed_size < 0:
        raise ValueError(f"negative uncompressed size: {uncompressed_size}")
    if uncompressed_size > 0xFFFFFFFF:
        raise InputTooLarge(uncompressed_size, 0xFFFFFFFF)
    return MAGIC + int(uncompressed_size).to_bytes(4, "little")


def unpack_header(blob: bytes) -> MozLz4Header:
    if len(blob) < HEADER_LENGTH:
        raise TooShort(
            f"buffer of {len(blob)} bytes is too short for a mozLz4 header ({HEADER_LENGTH} bytes)",
            length=len(blob),
        )
    magic = bytes(blob[:MAGIC_LENGTH])
    if magic != MAGIC:
        raise BadHeader(magic)
    return MozLz4Header(int.from_bytes(blob[MAGIC_LENGTH:HEADER_LENGTH], "little"))


# -------------------
# Encoder handle
# -------------------
@dataclass
class Encoder:
    """
    Result of encode(): the compressed block plus what the header needs.

    Pull-based reader over header + payload: ``read(n)`` returns the next n
    bytes (header first), an empty bytes object once exhausted.
    """

    compressed: bytes
    uncompressed_size: int
    _index: int = field(default=0, repr=False)

    def header(self) -> bytes:
        return pack_header(self.uncompressed_size)

    def payload(self) -> bytes:
        """Compressed block without the header."""
        return self.compressed

    def to_bytes(self) -> bytes:
        return self.header() + self.compressed

    def __len__(self) -> int:
        return HEADER_LENGTH + len(self.compressed)

    @property
    def remaining(self) -> int:
        return len(self) - self._index

    def read(self, n: int = -1) -> bytes:
        if n is None or n < 0:
            n = self.remaining
        out = bytearray()

        if self._index < HEADER_LENGTH and n > 0:
            part = self.header()[self._index : self._index + n]
            out += part
            self._index += len(part)
            n -= len(part)

        if self._index >= HEADER_LENGTH and n > 0:
            start = self._index - HEADER_LENGTH
            part = self.compressed[start : start + n]
            out += part
            self._index += len(part)

        return bytes(out)

    def iter_chunks(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be > 0, got {chunk_size}")
        while True:
            chunk = self.read(chunk_size)
            if not chunk:
                return
            yield chunk

    def rewind(self) -> None:
        self._index = 0


# -------------------
# Encode / decode
# -------------------
def encode(
    plaintext: bytes,
    backend: str | BlockBackend | None = None,
    *,
    mode: CompressionMode | None = None,
) -> Encoder:
    if not isinstance(plaintext, (bytes, bytearray, memoryview)):
        raise TypeError("plaintext must be bytes")
    b = as_backend(backend)
    data = bytes(plaintext)
    compressed = b.compress(data, mode)
    return Encoder(compressed=compressed, uncompressed_size=len(data))


def encode_bytes(
    plaintext: bytes,
    backend: str | BlockBackend | None = None,
    *,
    mode: CompressionMode | None = None,
) -> bytes:
    return encode(plaintext, backend, mode=mode).to_bytes()


def decode(
    container: bytes,
    backend: str | BlockBackend | None = None,
    *,
    strict: bool = True,
) -> bytes:
    """
    Decode a mozLz4 container.

    With ``strict`` (default) the decoded length must equal the size declared
    in the header, otherwise SizeMismatch is raised. With ``strict=False``
    the declared size is only a hint and whatever the block holds is returned.
    """
    header = unpack_header(container)
    b = as_backend(backend)
    size = header.uncompressed_size

    try:
        out = b.decompress(bytes(container[HEADER_LENGTH:]), size)
    except DecodeError as e:
        if e.uncompressed_size is None:
            e.uncompressed_size = size
        raise

    if strict and len(out) != size:
        raise SizeMismatch(expected=size, actual=len(out))
    return out
