"""mozlz4 CLI.

This is the stable CLI entrypoint (console-script: ``mozlz4``).

UX policy:
  - backend/mode come either from flags or from a codec spec (--config);
    when --config is set the flags are ignored.
  - without python-lz4 the default backend fails with UNSUPPORTED; pick
    --backend pure (or ported, to decode only) instead.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from mozlz4.codec_spec import CodecSpecV1, codec_spec_from_dict, load_codec_spec
from mozlz4.core.backends import BACKEND_IDS, DEFAULT_BACKEND, all_backends
from mozlz4.core.codec_base import MODE_DEFAULT, MODES
from mozlz4.errors import EXIT_GENERIC, EXIT_USAGE, MozLz4Error, UsageError


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _add_codec_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--config",
        default=None,
        help=(
            "Codec spec (JSON). Use '@file.json' to load from file, or pass JSON inline. "
            "When set, --backend/--mode/--level/--no-strict are ignored."
        ),
    )
    p.add_argument(
        "--backend",
        default=DEFAULT_BACKEND,
        choices=BACKEND_IDS,
        help=f"Block backend (default: {DEFAULT_BACKEND})",
    )


def _codec_spec_from_args(ns: argparse.Namespace) -> CodecSpecV1:
    if getattr(ns, "config", None):
        return load_codec_spec(str(ns.config))

    obj: dict[str, object] = {"spec": "mozlz4.codec.v1", "backend": ns.backend}
    mode = getattr(ns, "mode", MODE_DEFAULT)
    obj["mode"] = mode
    if getattr(ns, "level", None) is not None:
        obj["level"] = int(ns.level)
    obj["strict"] = not bool(getattr(ns, "no_strict", False))
    return codec_spec_from_dict(obj)


def _cmd_compress(ns: argparse.Namespace) -> int:
    from mozlz4.files import write_mozlz4_file

    spec = _codec_spec_from_args(ns)
    data = Path(ns.input).read_bytes()
    write_mozlz4_file(
        ns.output,
        data,
        spec.block_backend(),
        mode=spec.compression_mode(),
    )
    return 0


def _cmd_decompress(ns: argparse.Namespace) -> int:
    from mozlz4.files import read_mozlz4_file

    spec = _codec_spec_from_args(ns)
    data = read_mozlz4_file(ns.input, spec.block_backend(), strict=spec.strict)
    out = Path(ns.output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)
    return 0


def _cmd_verify(ns: argparse.Namespace) -> int:
    from mozlz4.verify import verify_container_file

    spec = _codec_spec_from_args(ns)
    verify_container_file(ns.input, full=bool(ns.full), backend=spec.block_backend())
    print("OK")
    return 0


def _cmd_info(ns: argparse.Namespace) -> int:
    from mozlz4.verify import verify_container_file

    rep = verify_container_file(ns.input, full=False)
    print(f"uncompressed_size: {rep.uncompressed_size}")
    print(f"payload_length:    {rep.payload_length}")
    print(f"ratio:             {rep.ratio:.3f}")
    return 0


def _cmd_backends(ns: argparse.Namespace) -> int:
    print(f"{'id':<8} {'available':<10} {'fails_on_compress':<18} same_as_firefox")
    for b in all_backends():
        print(
            f"{b.backend_id:<8} {str(b.is_available()):<10} "
            f"{str(b.fails_on_compress):<18} {b.same_as_firefox}"
        )
    return 0


def _cmd_exit_codes(ns: argparse.Namespace) -> int:
    from mozlz4.errors import render_exit_codes_markdown

    sys.stdout.write(render_exit_codes_markdown())
    return 0


def _cmd_config_validate(ns: argparse.Namespace) -> int:
    # load is the validation
    load_codec_spec(str(ns.config))
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="mozlz4", description="Firefox mozLz4 (.jsonlz4) codec")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file into a mozLz4 container")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    _add_codec_args(p_c)
    p_c.add_argument("--mode", default=MODE_DEFAULT, choices=MODES, help="Compression mode (lz4 backend only)")
    p_c.add_argument(
        "--level",
        type=int,
        default=None,
        help="Acceleration for --mode fast, level 1..12 for --mode high_compression",
    )
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a mozLz4 container")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_codec_args(p_d)
    p_d.add_argument(
        "--no-strict",
        action="store_true",
        help="Do not fail when the decoded length differs from the header",
    )
    _add_common_args(p_d)

    p_v = sub.add_parser("verify", help="Verify a mozLz4 container")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the block and check its size")
    _add_codec_args(p_v)
    _add_common_args(p_v)

    p_i = sub.add_parser("info", help="Show the header of a mozLz4 container")
    p_i.add_argument("input", type=Path)
    _add_common_args(p_i)

    p_b = sub.add_parser("backends", help="List block backends and their declared properties")
    _add_common_args(p_b)

    p_cv = sub.add_parser("config-validate", help="Validate a codec spec (v1)")
    p_cv.add_argument("config", help="Codec spec JSON (@file.json or inline JSON)")
    _add_common_args(p_cv)

    p_ec = sub.add_parser("exit-codes", help="Print the exit code table (markdown)")
    _add_common_args(p_ec)

    return p


_COMMANDS = {
    "compress": _cmd_compress,
    "decompress": _cmd_decompress,
    "verify": _cmd_verify,
    "info": _cmd_info,
    "backends": _cmd_backends,
    "config-validate": _cmd_config_validate,
    "exit-codes": _cmd_exit_codes,
}


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        handler = _COMMANDS.get(ns.cmd)
        if handler is None:
            raise AssertionError("unreachable")
        return handler(ns)

    except SystemExit:
        raise
    except UsageError as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[mozlz4] {e}", file=sys.stderr)
        return EXIT_USAGE
    except MozLz4Error as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[mozlz4] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        print(f"[mozlz4] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
