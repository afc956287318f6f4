"""LZ4 block encoder (pure Python).

Greedy single-pass compressor with a 64K-entry hash table over 4-byte
sequences, the same scheme node-lz4 uses. Output is a standard raw LZ4 block:
any LZ4 block decoder (ours or liblz4) can read it, but it is not
byte-identical to liblz4/Firefox output.

Block end rules (LZ4 block format):
  - the last 5 bytes are always literals
  - no match starts within the last 12 bytes (MF_LIMIT)
"""

from __future__ import annotations

from mozlz4.errors import InputTooLarge

MAX_INPUT_SIZE = 0x7E000000

MIN_MATCH = 4
COPY_LENGTH = 8
LAST_LITERALS = 5
MF_LIMIT = COPY_LENGTH + MIN_MATCH
MAX_OFFSET = 0xFFFF

ML_BITS = 4
ML_MASK = (1 << ML_BITS) - 1
RUN_MASK = ML_MASK

HASH_LOG = 16
HASH_TABLE_SIZE = 1 << HASH_LOG
HASH_SHIFT = MIN_MATCH * 8 - HASH_LOG
HASHER = 2654435761
SKIP_STRENGTH = 6


def check_input_size(size: int) -> None:
    if size > MAX_INPUT_SIZE:
        raise InputTooLarge(size, MAX_INPUT_SIZE)


def compress_bound(uncompressed_size: int) -> int | None:
    """Worst-case block size for ``uncompressed_size`` bytes (None if too large)."""
    if uncompressed_size > MAX_INPUT_SIZE:
        return None
    return uncompressed_size + (uncompressed_size // 255) + 16


def _write_length_ext(dst: bytearray, rest: int) -> None:
    while rest >= 255:
        dst.append(255)
        rest -= 255
    dst.append(rest)


def _write_literals(dst: bytearray, literals: bytes, token_low: int) -> None:
    n = len(literals)
    if n >= RUN_MASK:
        dst.append((RUN_MASK << ML_BITS) | token_low)
        _write_length_ext(dst, n - RUN_MASK)
    else:
        dst.append((n << ML_BITS) | token_low)
    dst += literals


def _write_sequence(dst: bytearray, literals: bytes, offset: int, match_length: int) -> None:
    # match_length excludes MIN_MATCH
    _write_literals(dst, literals, min(match_length, ML_MASK))
    dst.append(offset & 0xFF)
    dst.append(offset >> 8)
    if match_length >= ML_MASK:
        _write_length_ext(dst, match_length - ML_MASK)


def compress_block(data: bytes) -> bytes:
    check_input_size(len(data))
    src = bytes(data)
    n = len(src)
    dst = bytearray()
    anchor = 0

    # inputs this short cannot hold a match and are stored as one literal run
    if n > MF_LIMIT:
        table = [0] * HASH_TABLE_SIZE
        limit = n - MF_LIMIT
        fresh_attempts = (1 << SKIP_STRENGTH) + 3
        attempts = fresh_attempts
        pos = 0

        while pos + MIN_MATCH < limit:
            seq = src[pos : pos + MIN_MATCH]
            h = ((int.from_bytes(seq, "little") * HASHER) & 0xFFFFFFFF) >> HASH_SHIFT
            # 0 marks an empty slot, positions are stored +1
            ref = table[h] - 1
            table[h] = pos + 1

            if ref < 0 or pos - ref > MAX_OFFSET or src[ref : ref + MIN_MATCH] != seq:
                # step grows the longer nothing is found
                pos += attempts >> SKIP_STRENGTH
                attempts += 1
                continue

            attempts = fresh_attempts
            literals = src[anchor:pos]
            offset = pos - ref

            pos += MIN_MATCH
            ref += MIN_MATCH
            match_start = pos
            while pos < limit and src[pos] == src[ref]:
                pos += 1
                ref += 1

            _write_sequence(dst, literals, offset, pos - match_start)
            anchor = pos

    # last literals
    _write_literals(dst, src[anchor:], 0)
    return bytes(dst)
