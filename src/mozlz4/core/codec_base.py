from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

MODE_DEFAULT = "default"
MODE_FAST = "fast"
MODE_HIGH_COMPRESSION = "high_compression"

MODES: tuple[str, ...] = (MODE_DEFAULT, MODE_FAST, MODE_HIGH_COMPRESSION)


@dataclass(frozen=True)
class CompressionMode:
    """
    How hard the block encoder should try.

    - default: what Firefox uses (byte-identical output with the lz4 backend)
    - fast: ``level`` is the acceleration factor (>= 1, higher = faster)
    - high_compression: ``level`` is the HC level (1..12)
    """

    kind: str = MODE_DEFAULT
    level: int = 0

    def __post_init__(self) -> None:
        if self.kind not in MODES:
            raise ValueError(f"unknown compression mode {self.kind!r} (expected one of {', '.join(MODES)})")
        if self.kind == MODE_FAST and self.level < 1:
            raise ValueError(f"fast mode needs an acceleration >= 1, got {self.level}")
        if self.kind == MODE_HIGH_COMPRESSION and not (1 <= self.level <= 12):
            raise ValueError(f"high_compression level must be 1..12, got {self.level}")

    @classmethod
    def fast(cls, acceleration: int = 1) -> "CompressionMode":
        return cls(MODE_FAST, int(acceleration))

    @classmethod
    def high_compression(cls, level: int = 9) -> "CompressionMode":
        return cls(MODE_HIGH_COMPRESSION, int(level))

    @property
    def is_default(self) -> bool:
        return self.kind == MODE_DEFAULT


class BlockBackend(ABC):
    """
    Minimal interface for pluggable LZ4 block backends.

    Two facts are declared per backend instead of being discovered at runtime:
      - fails_on_compress: compress() is not implemented and always raises
        UnsupportedOperation
      - same_as_firefox: compressed output is byte-identical to what Firefox
        writes for the same plaintext
    """

    backend_id: str
    fails_on_compress: bool = False
    same_as_firefox: bool = False

    def is_available(self) -> bool:
        """False when the library behind the backend is not installed."""
        return True

    @abstractmethod
    def compress(self, data: bytes, mode: CompressionMode | None = None) -> bytes:
        """Return one raw LZ4 block (no size prefix)."""
        raise NotImplementedError

    @abstractmethod
    def decompress(self, data: bytes, uncompressed_size: int | None = None) -> bytes:
        """Decode one raw LZ4 block; ``uncompressed_size`` is a size hint."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.backend_id!r}>"
