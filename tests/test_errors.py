from __future__ import annotations

from pathlib import Path

from mozlz4.errors import (
    EXIT_CODES,
    EXIT_GENERIC,
    EXIT_SIZE_MISMATCH,
    EXIT_UNSUPPORTED,
    EXIT_USAGE,
    BackendUnavailable,
    BadHeader,
    DecodeError,
    InputTooLarge,
    InvalidDeduplicationOffset,
    MozLz4Error,
    SizeMismatch,
    TooShort,
    TruncatedSequence,
    UnsupportedOperation,
    UsageError,
    exit_code_by_name,
    exit_code_info,
    render_exit_codes_markdown,
)


def test_exit_codes_are_unique() -> None:
    codes = [e.code for e in EXIT_CODES]
    names = [e.name for e in EXIT_CODES]
    assert len(codes) == len(set(codes))
    assert len(names) == len(set(names))


def test_exit_code_lookup() -> None:
    assert exit_code_info(EXIT_SIZE_MISMATCH).name == "SIZE_MISMATCH"
    assert exit_code_info(99) is None
    assert exit_code_by_name("usage") == EXIT_USAGE


def test_markdown_lists_every_code() -> None:
    md = render_exit_codes_markdown()
    for e in EXIT_CODES:
        assert f"| {e.code} | `{e.name}` |" in md


def test_exit_codes_per_error() -> None:
    assert UsageError("x").exit_code == EXIT_USAGE
    assert TooShort().exit_code == EXIT_GENERIC
    assert SizeMismatch(expected=2, actual=1).exit_code == EXIT_SIZE_MISMATCH
    assert UnsupportedOperation("ported", "compression").exit_code == EXIT_UNSUPPORTED
    assert BackendUnavailable("lz4", "install it").exit_code == EXIT_UNSUPPORTED
    assert InputTooLarge(10, 5).exit_code == EXIT_GENERIC


def test_decode_error_hierarchy() -> None:
    for err in (
        TooShort(),
        BadHeader(b"12345678"),
        TruncatedSequence(3),
        InvalidDeduplicationOffset(2, 0),
        SizeMismatch(expected=2, actual=1),
    ):
        assert isinstance(err, DecodeError)
        assert isinstance(err, MozLz4Error)


def test_messages() -> None:
    assert "6d 6f 7a" in str(BadHeader(b"mozLz41\x00"))
    assert BadHeader(b"mozLz41\x00").actual == b"mozLz41\x00"
    assert "offset 7" in str(TruncatedSequence(7, "literal run"))
    err = TruncatedSequence(7, "literal run")
    err.uncompressed_size = 1234
    assert str(err).endswith("(declared uncompressed size: 1234)")


def test_backend_unavailable_is_an_unsupported_operation() -> None:
    err = BackendUnavailable("lz4", "pip install lz4")
    assert isinstance(err, UnsupportedOperation)
    assert err.backend_id == "lz4"
    assert err.operation == "any operation"
    assert err.hint == "pip install lz4"
    assert str(err) == "backend 'lz4' is not available: pip install lz4"
    assert str(UnsupportedOperation("ported", "compression")) == (
        "backend 'ported' does not support compression"
    )


def test_exit_codes_doc_is_up_to_date() -> None:
    doc = Path(__file__).resolve().parents[1] / "docs" / "exit_codes.md"
    assert doc.read_text(encoding="utf-8") == render_exit_codes_markdown()
