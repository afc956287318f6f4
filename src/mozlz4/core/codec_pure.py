from __future__ import annotations

from mozlz4.core.block_decode import decode_block
from mozlz4.core.block_encode import compress_block
from mozlz4.core.codec_base import BlockBackend, CompressionMode


class CodecPureLz4(BlockBackend):
    """
    Pure-Python encoder + decoder (no external deps).

    Round-trips with every backend, but the greedy match finder does not
    reproduce liblz4's choices, so files differ from Firefox's byte for byte.
    The compression mode is ignored.
    """

    backend_id = "pure"
    fails_on_compress = False
    same_as_firefox = False

    def compress(self, data: bytes, mode: CompressionMode | None = None) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError("data must be bytes")
        return compress_block(data)

    def decompress(self, data: bytes, uncompressed_size: int | None = None) -> bytes:
        return decode_block(data, uncompressed_size)
