from __future__ import annotations

import pytest

from mozlz4.core import codec_lz4
from mozlz4.core.backends import (
    BACKEND_IDS,
    DEFAULT_BACKEND,
    all_backends,
    as_backend,
    available_backends,
    get_backend,
)
from mozlz4.core.codec_base import BlockBackend, CompressionMode
from mozlz4.errors import (
    EXIT_UNSUPPORTED,
    BackendInternalError,
    BackendUnavailable,
    InvalidDeduplicationOffset,
    TruncatedSequence,
    UnsupportedOperation,
    UsageError,
)

# (fails_on_compress, same_as_firefox), declared per backend
DECLARED_FACTS: dict[str, tuple[bool, bool]] = {
    "lz4": (False, True),
    "ported": (True, False),
    "pure": (False, False),
}

SAMPLE = b"sessionstore " * 200


def test_backend_ids_are_stable() -> None:
    assert BACKEND_IDS == ("lz4", "ported", "pure")
    assert DEFAULT_BACKEND == "lz4"


@pytest.mark.parametrize("backend_id", sorted(DECLARED_FACTS))
def test_declared_facts(backend_id: str) -> None:
    b = get_backend(backend_id)
    assert isinstance(b, BlockBackend)
    assert b.backend_id == backend_id
    assert (b.fails_on_compress, b.same_as_firefox) == DECLARED_FACTS[backend_id]


def test_get_backend_is_case_insensitive_and_strict() -> None:
    assert get_backend(" PURE ").backend_id == "pure"
    with pytest.raises(UsageError, match="unknown backend"):
        get_backend("snappy")


def test_as_backend() -> None:
    b = get_backend("ported")
    assert as_backend(b) is b
    assert as_backend("pure").backend_id == "pure"
    assert as_backend(None).backend_id == DEFAULT_BACKEND
    with pytest.raises(TypeError):
        as_backend(42)  # type: ignore[arg-type]


def test_all_and_available_backends() -> None:
    assert [b.backend_id for b in all_backends()] == list(BACKEND_IDS)
    avail = {b.backend_id for b in available_backends()}
    assert {"ported", "pure"} <= avail
    assert ("lz4" in avail) == codec_lz4.have_lz4()


def test_ported_backend_refuses_to_compress() -> None:
    b = get_backend("ported")
    with pytest.raises(UnsupportedOperation) as ei:
        b.compress(SAMPLE)
    assert ei.value.exit_code == EXIT_UNSUPPORTED
    assert ei.value.backend_id == "ported"


def test_lz4_backend_reports_missing_library(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(codec_lz4, "lz4_block", None)
    b = codec_lz4.CodecLz4Block()
    assert b.is_available() is False
    with pytest.raises(BackendUnavailable) as ei:
        b.compress(SAMPLE)
    assert isinstance(ei.value, UnsupportedOperation)
    assert "pip install lz4" in str(ei.value)
    with pytest.raises(BackendUnavailable):
        b.decompress(b"\x00", 0)


def test_compression_mode_validation() -> None:
    assert CompressionMode().is_default
    assert CompressionMode.fast(3) == CompressionMode("fast", 3)
    assert CompressionMode.high_compression().level == 9
    with pytest.raises(ValueError):
        CompressionMode("turbo")
    with pytest.raises(ValueError):
        CompressionMode.fast(0)
    with pytest.raises(ValueError):
        CompressionMode.high_compression(13)


@pytest.mark.lz4
def test_lz4_default_output_is_plain_liblz4_block() -> None:
    lz4_block = pytest.importorskip("lz4.block")
    b = get_backend("lz4")
    assert b.compress(SAMPLE) == lz4_block.compress(SAMPLE, store_size=False)


@pytest.mark.lz4
@pytest.mark.parametrize(
    "mode", [None, CompressionMode.fast(8), CompressionMode.high_compression(12)]
)
def test_lz4_modes_roundtrip(mode: CompressionMode | None) -> None:
    pytest.importorskip("lz4.block")
    b = get_backend("lz4")
    block = b.compress(SAMPLE, mode)
    assert b.decompress(block, len(SAMPLE)) == SAMPLE
    assert get_backend("pure").decompress(block) == SAMPLE


@pytest.mark.lz4
def test_lz4_corrupt_block_raises_typed_errors() -> None:
    pytest.importorskip("lz4.block")
    b = get_backend("lz4")
    # 5 literals announced, 2 present
    with pytest.raises(TruncatedSequence):
        b.decompress(b"\x50he", 5)
    # offset 0 right after the literal run
    with pytest.raises(InvalidDeduplicationOffset) as ei:
        b.decompress(b"\x10a\x00\x00", 10)
    assert ei.value.offset == 0


@pytest.mark.lz4
def test_lz4_wrong_size_returns_what_the_block_holds() -> None:
    pytest.importorskip("lz4.block")
    b = get_backend("lz4")
    block = b.compress(SAMPLE)
    assert b.decompress(block, len(SAMPLE) + 1) == SAMPLE
    assert b.decompress(block, len(SAMPLE) - 1) == SAMPLE


@pytest.mark.lz4
@pytest.mark.parametrize("size", [0x7E000001, 0x80000000, 0xFFFFFFFF])
def test_lz4_huge_declared_size_is_not_passed_to_liblz4(size: int) -> None:
    pytest.importorskip("lz4.block")
    assert get_backend("lz4").decompress(b"\x15a\x01\x00", size) == b"a" * 10


@pytest.mark.lz4
def test_lz4_empty_block() -> None:
    pytest.importorskip("lz4.block")
    assert get_backend("lz4").decompress(b"", 0) == b""


@pytest.mark.lz4
def test_lz4_block_liblz4_rejects_is_backend_internal_error() -> None:
    pytest.importorskip("lz4.block")
    # valid for the pure decoder, but liblz4 wants the block to end with literals
    with pytest.raises(BackendInternalError) as ei:
        get_backend("lz4").decompress(b"\x15a\x01\x00", 10)
    assert ei.value.backend_id == "lz4"
    assert ei.value.__cause__ is not None
