"""Typed errors for mozlz4.

Single source of truth for exit codes lives here.

Policy:
- Errors are small and boring.
- The codec never logs, retries or recovers: failures propagate as the
  exceptions below to the immediate caller.
- The CLI maps errors to stable exit codes (see EXIT_* constants).
- docs/exit_codes.md is generated from this module (`mozlz4 exit-codes`).
"""

from __future__ import annotations

from dataclasses import dataclass

# -------------------------
# Exit codes (single source)
# -------------------------

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_GENERIC = 10
EXIT_UNSUPPORTED = 11
EXIT_SIZE_MISMATCH = 13


@dataclass(frozen=True, slots=True)
class ExitCodeInfo:
    code: int
    name: str
    description: str


EXIT_CODES: tuple[ExitCodeInfo, ...] = (
    ExitCodeInfo(EXIT_OK, "OK", "Success"),
    ExitCodeInfo(EXIT_USAGE, "USAGE", "Usage/config error (invalid args, unknown backend, invalid codec spec)"),
    ExitCodeInfo(EXIT_GENERIC, "GENERIC", "Generic failure (corrupt header or block, input too large, backend error)"),
    ExitCodeInfo(EXIT_UNSUPPORTED, "UNSUPPORTED", "Operation not supported by the selected backend (or backend not installed)"),
    ExitCodeInfo(EXIT_SIZE_MISMATCH, "SIZE_MISMATCH", "Decoded length differs from the size declared in the header"),
)

# For convenience (fast lookup)
_EXIT_CODE_BY_NAME: dict[str, int] = {e.name: e.code for e in EXIT_CODES}
_EXIT_CODE_BY_CODE: dict[int, ExitCodeInfo] = {e.code: e for e in EXIT_CODES}


def exit_code_info(code: int) -> ExitCodeInfo | None:
    return _EXIT_CODE_BY_CODE.get(int(code))


def exit_code_by_name(name: str) -> int | None:
    return _EXIT_CODE_BY_NAME.get(name.strip().upper())


def render_exit_codes_markdown() -> str:
    """Render docs/exit_codes.md content."""
    lines: list[str] = []
    lines.append("# Exit codes\n")
    lines.append("> GENERATED FILE — do not edit manually.\n")
    lines.append("> Source of truth: `src/mozlz4/errors.py` (EXIT_CODES).\n")
    lines.append("> Regenerate: `mozlz4 exit-codes > docs/exit_codes.md`.\n\n")
    lines.append("These are the CLI exit codes you can rely on.\n\n")
    lines.append("| Code | Name | Meaning |\n")
    lines.append("|---:|---|---|\n")
    for e in sorted(EXIT_CODES, key=lambda x: x.code):
        lines.append(f"| {e.code} | `{e.name}` | {e.description} |\n")
    lines.append("\n## Notes\n")
    lines.append("- Every codec error extends `MozLz4Error` and carries an `exit_code`.\n")
    lines.append("- `--debug` re-raises errors to show full stack traces.\n")
    lines.append("- `decompress --no-strict` downgrades SIZE_MISMATCH to a success.\n")
    return "".join(lines)


# ---------------
# Typed exceptions
# ---------------


class MozLz4Error(Exception):
    """Base error for mozlz4."""

    exit_code: int = EXIT_GENERIC


class UsageError(MozLz4Error):
    exit_code = EXIT_USAGE


# decode side


class DecodeError(MozLz4Error):
    """A container or block could not be decoded.

    ``uncompressed_size`` is the size declared by the container header, when
    the failure happened after the header was read. The container layer fills
    it in on the way out so the message can mention it.
    """

    def __init__(self, message: str, *, uncompressed_size: int | None = None):
        super().__init__(message)
        self.message = message
        self.uncompressed_size = uncompressed_size

    def __str__(self) -> str:
        if self.uncompressed_size is None:
            return self.message
        return f"{self.message} (declared uncompressed size: {self.uncompressed_size})"


class TooShort(DecodeError):
    """Input is shorter than the header, or than a declared size implies."""

    def __init__(
        self,
        message: str = "buffer too short for a mozLz4 header",
        *,
        length: int | None = None,
        uncompressed_size: int | None = None,
    ):
        super().__init__(message, uncompressed_size=uncompressed_size)
        self.length = length


class BadHeader(DecodeError):
    def __init__(self, actual: bytes):
        seen = bytes(actual).hex(" ")
        super().__init__(f"bad header: expected magic 6d 6f 7a 4c 7a 34 30 00, found {seen}")
        self.actual = bytes(actual)


class TruncatedSequence(DecodeError):
    """A read ran past the end of the LZ4 block.

    ``position`` is the input cursor at the moment the read was attempted.
    """

    def __init__(self, position: int, what: str = "sequence", *, uncompressed_size: int | None = None):
        super().__init__(
            f"truncated LZ4 block: {what} runs past end of input at offset {position}",
            uncompressed_size=uncompressed_size,
        )
        self.position = position
        self.what = what


class InvalidDeduplicationOffset(DecodeError):
    """Back-reference offset is zero or points before the decoded output.

    ``position`` is the input cursor at the start of the 2-byte offset field.
    """

    def __init__(self, position: int, offset: int, *, uncompressed_size: int | None = None):
        super().__init__(
            f"invalid match offset {offset} at input offset {position}: "
            "not contained in the decompressed buffer",
            uncompressed_size=uncompressed_size,
        )
        self.position = position
        self.offset = offset


class SizeMismatch(TooShort):
    exit_code = EXIT_SIZE_MISMATCH

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"decoded {actual} bytes but the header declares {expected}",
            length=actual,
            uncompressed_size=None,
        )
        self.expected = expected
        self.actual = actual


# encode side


class EncodeError(MozLz4Error):
    pass


class InputTooLarge(EncodeError):
    def __init__(self, size: int, limit: int):
        super().__init__(f"input of {size} bytes is too large (max {limit} bytes)")
        self.size = size
        self.limit = limit


# backend side


class BackendInternalError(MozLz4Error):
    """Backend-specific failure that fits none of the kinds above.

    The original exception is chained as ``__cause__``.
    """

    def __init__(self, backend_id: str, message: str):
        super().__init__(f"{backend_id}: {message}")
        self.backend_id = backend_id


class UnsupportedOperation(MozLz4Error):
    exit_code = EXIT_UNSUPPORTED

    def __init__(self, backend_id: str, operation: str, message: str | None = None):
        super().__init__(message or f"backend {backend_id!r} does not support {operation}")
        self.backend_id = backend_id
        self.operation = operation


class BackendUnavailable(UnsupportedOperation):
    def __init__(self, backend_id: str, hint: str):
        super().__init__(
            backend_id,
            "any operation",
            f"backend {backend_id!r} is not available: {hint}",
        )
        self.hint = hint
