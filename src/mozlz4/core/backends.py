"""Backend registry.

The backend is always an explicit value handed to encode/decode (an id or an
instance); nothing here keeps a process-wide "current" backend.
"""

from __future__ import annotations

from collections.abc import Callable

from mozlz4.core.codec_base import BlockBackend
from mozlz4.core import codec_lz4
from mozlz4.core.codec_ported import CodecPortedNodeLz4
from mozlz4.core.codec_pure import CodecPureLz4
from mozlz4.errors import UsageError

# IMPORTANT: ids are part of the CLI and of codec specs; keep them stable.
_FACTORIES: dict[str, Callable[[], BlockBackend]] = {
    "lz4": codec_lz4.CodecLz4Block,
    "ported": CodecPortedNodeLz4,
    "pure": CodecPureLz4,
}

BACKEND_IDS: tuple[str, ...] = tuple(_FACTORIES)
DEFAULT_BACKEND = "lz4"


def get_backend(backend_id: str) -> BlockBackend:
    bid = backend_id.strip().lower()
    factory = _FACTORIES.get(bid)
    if factory is None:
        raise UsageError(f"unknown backend {backend_id!r} (expected one of {', '.join(BACKEND_IDS)})")
    return factory()


def as_backend(backend: str | BlockBackend | None) -> BlockBackend:
    """Accept an id, an instance or None (default backend)."""
    if backend is None:
        return get_backend(DEFAULT_BACKEND)
    if isinstance(backend, BlockBackend):
        return backend
    if isinstance(backend, str):
        return get_backend(backend)
    raise TypeError(f"backend must be an id or a BlockBackend, got {type(backend).__name__}")


def all_backends() -> list[BlockBackend]:
    return [factory() for factory in _FACTORIES.values()]


def available_backends() -> list[BlockBackend]:
    return [b for b in all_backends() if b.is_available()]
