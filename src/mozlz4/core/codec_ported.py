from __future__ import annotations

from mozlz4.core.block_decode import decode_block
from mozlz4.core.codec_base import BlockBackend, CompressionMode
from mozlz4.errors import UnsupportedOperation


class CodecPortedNodeLz4(BlockBackend):
    """
    Decode-only pure-Python backend: the node-lz4 block decoder with every
    read bounds-checked.

    It has no encoder: compress() raises UnsupportedOperation. Useful where the
    C library is not available and only reading is needed (session restore
    inspection).
    """

    backend_id = "ported"
    fails_on_compress = True
    same_as_firefox = False

    def compress(self, data: bytes, mode: CompressionMode | None = None) -> bytes:
        raise UnsupportedOperation(self.backend_id, "compression")

    def decompress(self, data: bytes, uncompressed_size: int | None = None) -> bytes:
        return decode_block(data, uncompressed_size)
