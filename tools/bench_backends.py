#!/usr/bin/env python3
"""Backend benchmark/soak tool.

Runs encode -> verify -> decode -> compare for every available backend on one
input file, collecting basic timing and peak RSS.

Usage example:
  python tools/bench_backends.py ~/.mozilla/firefox/xyz.default/sessionstore.jsonlz4 --iters 3

Notes:
- Uses internal APIs (no subprocess). Run inside repo venv.
- A mozLz4 input (extension ending in 'lz4') is decompressed first and its
  plaintext is benchmarked.
"""

from __future__ import annotations

import argparse
import json
import resource
import time
from pathlib import Path
from typing import Any


def _peak_rss_kb() -> int:
    # Linux: ru_maxrss is KB
    return int(resource.getrusage(resource.RUSAGE_SELF).ru_maxrss)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="bench_backends.py", description="mozlz4 backend benchmark")
    ap.add_argument("input", type=Path)
    ap.add_argument("--iters", type=int, default=3)
    ap.add_argument(
        "--backends", default=None, help="Comma-separated backend ids (default: all available)"
    )
    ns = ap.parse_args(argv)

    from mozlz4.core.backends import available_backends, get_backend
    from mozlz4.engine.container import decode, encode
    from mozlz4.files import read_maybe_compressed
    from mozlz4.verify import verify_container_bytes

    inp = ns.input.resolve()
    if not inp.is_file():
        raise SystemExit(f"invalid input file: {inp}")
    plaintext = read_maybe_compressed(inp)

    if ns.backends:
        backends = [get_backend(b) for b in ns.backends.split(",") if b.strip()]
    else:
        backends = available_backends()

    rows: list[dict[str, Any]] = []
    t0_all = time.perf_counter()

    for backend in backends:
        # decode-only backends are measured against the first backend that can encode
        encoder = backend
        if backend.fails_on_compress:
            encoder = next((b for b in backends if not b.fails_on_compress), None)
            if encoder is None:
                continue

        for i in range(int(ns.iters)):
            rss0 = _peak_rss_kb()
            t0 = time.perf_counter()
            blob = encode(plaintext, encoder).to_bytes()
            t_encode = time.perf_counter() - t0

            t1 = time.perf_counter()
            verify_container_bytes(blob, full=False)
            t_verify = time.perf_counter() - t1

            t2 = time.perf_counter()
            back = decode(blob, backend)
            t_decode = time.perf_counter() - t2
            rss1 = _peak_rss_kb()

            same = back == plaintext
            row = {
                "backend": backend.backend_id,
                "encoder": encoder.backend_id,
                "iter": i + 1,
                "plain_bytes": len(plaintext),
                "container_bytes": len(blob),
                "times_sec": {
                    "encode": t_encode,
                    "verify": t_verify,
                    "decode": t_decode,
                    "total": t_encode + t_verify + t_decode,
                },
                "peak_rss_kb": {"before": rss0, "after": rss1, "max": max(rss0, rss1)},
                "roundtrip_ok": bool(same),
            }
            rows.append(row)
            print(json.dumps(row, ensure_ascii=False))
            if not same:
                raise SystemExit(f"roundtrip mismatch for backend {backend.backend_id}")

    total = time.perf_counter() - t0_all
    summary = {
        "schema": "mozlz4.bench_backends.v1",
        "runs": len(rows),
        "wall_total_sec": total,
        "max_peak_rss_kb": max((r["peak_rss_kb"]["max"] for r in rows), default=0),
    }
    print(json.dumps(summary, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
