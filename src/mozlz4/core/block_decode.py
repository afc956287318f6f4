"""LZ4 block decoder (pure Python).

Decodes one raw LZ4 block: a sequence of records

    token(u8) [literal length ext...] literals [offset(u16 LE) [match length ext...]]

where the high nibble of the token is the literal length and the low nibble
is the match length minus MIN_MATCH. A nibble of 15 is followed by extension
bytes, each added to the length, until a byte < 255 is read. The last record
stops after its literals.

Every read is bounds-checked: malformed or truncated input raises a
DecodeError subclass, never IndexError.
"""

from __future__ import annotations

from mozlz4.errors import InvalidDeduplicationOffset, TruncatedSequence

MIN_MATCH = 4
RUN_MASK = 0x0F
ML_MASK = 0x0F


def _read_extension(src: bytes, i: int, length: int, what: str) -> tuple[int, int]:
    # the first extension byte is folded in as length + 240, so a nibble of 15
    # reads as 255 and enters the loop
    ext = length + 240
    while ext == 255:
        if i >= len(src):
            raise TruncatedSequence(i, what)
        ext = src[i]
        i += 1
        length += ext
    return length, i


def _copy_match(output: bytearray, offset: int, length: int) -> None:
    pos = len(output) - offset
    if offset >= length:
        output += output[pos : pos + length]
        return
    # overlapping copy: each written byte may be read again later in the same
    # match, so the source repeats with period `offset`
    pattern = bytes(output[pos:])
    reps, rest = divmod(length, offset)
    output += pattern * reps + pattern[:rest]


def decompress_block(data: bytes, output: bytearray) -> int:
    """
    Decode ``data`` and append the result to ``output``.

    Returns the number of bytes appended. Offsets may only reach back into
    bytes produced by this call, not into what ``output`` held before.
    """
    src = bytes(data)
    n = len(src)
    start = len(output)
    i = 0

    while i < n:
        token = src[i]
        i += 1

        # literals
        literal_length, i = _read_extension(src, i, token >> 4, "literal length")
        end = i + literal_length
        if end > n:
            raise TruncatedSequence(i, "literal run")
        output += src[i:end]
        i = end

        # a block may end right after a literal run (possibly an empty one)
        if i == n:
            break

        # match
        if i + 2 > n:
            raise TruncatedSequence(i, "match offset")
        offset = src[i] | (src[i + 1] << 8)
        if offset == 0 or offset > len(output) - start:
            raise InvalidDeduplicationOffset(i, offset)
        i += 2

        match_length, i = _read_extension(src, i, token & ML_MASK, "match length")
        _copy_match(output, offset, match_length + MIN_MATCH)

    return len(output) - start


def decode_block(data: bytes, size_hint: int | None = None) -> bytes:
    """Decode a whole block into a new buffer.

    ``size_hint`` is accepted for symmetry with the C backend and is not a
    bound: the block alone decides how many bytes come out.
    """
    output = bytearray()
    decompress_block(data, output)
    return bytes(output)
