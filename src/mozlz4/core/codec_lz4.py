from __future__ import annotations

from dataclasses import dataclass

from mozlz4.core.block_decode import decode_block
from mozlz4.core.block_encode import MAX_INPUT_SIZE, check_input_size
from mozlz4.core.codec_base import (
    MODE_FAST,
    MODE_HIGH_COMPRESSION,
    BlockBackend,
    CompressionMode,
)
from mozlz4.errors import BackendInternalError, BackendUnavailable, TooShort

try:
    import lz4.block as lz4_block  # type: ignore
except Exception:  # pragma: no cover
    lz4_block = None

# a sequence can turn one input byte into at most 255 output bytes
MAX_EXPANSION = 255


def have_lz4() -> bool:
    return lz4_block is not None


@dataclass
class CodecLz4Block(BlockBackend):
    """
    Block backend on top of python-lz4 (bindings to the liblz4 C library).

    Firefox compresses with liblz4's default mode, so with the default
    CompressionMode the output is byte-identical to Firefox's own files.
    The size prefix python-lz4 can store is always disabled: mozLz4 keeps
    the size in its own header.

    liblz4 only says "failed". On failure the block is decoded again in pure
    Python so the caller gets the same typed errors (and the same short
    output for a wrong header size) as with the pure backends.
    """

    backend_id: str = "lz4"
    fails_on_compress: bool = False
    same_as_firefox: bool = True

    def _require(self) -> None:
        if lz4_block is None:
            raise BackendUnavailable(
                self.backend_id,
                "module 'lz4' not installed. Install with: python3 -m pip install lz4",
            )

    def is_available(self) -> bool:
        return have_lz4()

    def compress(self, data: bytes, mode: CompressionMode | None = None) -> bytes:
        self._require()
        check_input_size(len(data))
        mode = mode or CompressionMode()

        kwargs: dict[str, object] = {"store_size": False}
        if mode.kind == MODE_FAST:
            kwargs.update(mode="fast", acceleration=int(mode.level))
        elif mode.kind == MODE_HIGH_COMPRESSION:
            kwargs.update(mode="high_compression", compression=int(mode.level))
        else:
            kwargs.update(mode="default")

        try:
            return lz4_block.compress(bytes(data), **kwargs)
        except lz4_block.LZ4BlockError as e:
            raise BackendInternalError(self.backend_id, f"compression failed: {e}") from e

    def decompress(self, data: bytes, uncompressed_size: int | None = None) -> bytes:
        self._require()
        if uncompressed_size is None:
            # liblz4 needs a destination size; without a header there is none
            raise TooShort("lz4: uncompressed size is required to decode a raw block")
        if uncompressed_size < 0:
            raise TooShort(f"lz4: negative uncompressed size {uncompressed_size}")

        src = bytes(data)
        size = int(uncompressed_size)
        if not src or size > min(MAX_INPUT_SIZE, len(src) * MAX_EXPANSION):
            # liblz4 would allocate `size` bytes up front for a block that
            # cannot expand that far
            return decode_block(src, size)

        try:
            return lz4_block.decompress(src, uncompressed_size=size)
        except lz4_block.LZ4BlockError as e:
            # liblz4 reports corrupt input, short input and a wrong size alike;
            # the pure decoder tells them apart and raises the typed error
            out = decode_block(src, size)
            if len(out) != size:
                return out
            raise BackendInternalError(self.backend_id, f"decompression failed: {e}") from e
