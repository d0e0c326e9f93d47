"""Command line interface for spritec."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict

from .api import CompileOptions, compile_resources, inspect_resources
from .compiler.constants import HITMAP_COMPRESSION, WALKMAP_SCALE
from .config import load_config
from .errors import CompileError
from .logging import configure_logging, get_logger, step
from .reporting import (
    PlainReporter,
    RichReporter,
    get_reporter,
    set_reporter,
    set_verbosity,
    REPORTERS,
)


def _int_at_least(minimum: int):
    """argparse ``type=`` callable with the same bounds as the config file."""

    def parse(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(
                f"invalid integer: '{text}'"
            ) from None
        if value < minimum:
            raise argparse.ArgumentTypeError(
                f"must be at least {minimum}, got {value}"
            )
        return value

    return parse


def _options_from_args(args: argparse.Namespace) -> CompileOptions:
    cfg: Dict[str, Any] = load_config(args.config) if args.config else {}
    inputs = args.inputs or cfg.get("inputs")
    output = args.output or cfg.get("output")
    if not inputs:
        raise SystemExit("error: no input documents (pass paths or 'inputs' in config)")
    if output is None:
        raise SystemExit("error: no output path (pass -o or 'output' in config)")

    def pick(name: str, key: str, default: Any) -> Any:
        value = getattr(args, name)
        return value if value is not None else cfg.get(key, default)

    return CompileOptions(
        inputs=[Path(p) for p in inputs],
        output_path=Path(output),
        image_dir=pick("images", "images", None),
        manifest_path=pick("emit_manifest", "manifest", None),
        hitmap_compression=pick(
            "hitmap_compression", "hitmap_compression", HITMAP_COMPRESSION
        ),
        walkmap_scale=pick("walkmap_scale", "walkmap_scale", WALKMAP_SCALE),
        indent=pick("indent", "indent", None),
        dry_run=args.dry_run,
    )


def _build_cmd(args: argparse.Namespace) -> int:
    options = _options_from_args(args)
    get_reporter().section("Build")
    step(f"compiling {len(options.inputs)} input path(s)")
    try:
        compile_resources(options)
    except CompileError as exc:
        get_logger().error("%s", exc)
        return 2
    return 0


def _inspect_cmd(args: argparse.Namespace) -> int:
    step(f"inspecting {args.resources}")
    info, problems = inspect_resources(args.resources, args.images)
    rep = get_reporter()
    rep.section("Inspect results")
    # Finish any live progress display before writing to stdout
    rep.flush()
    if args.json:
        print(json.dumps({**info, "problems": problems}, indent=2, sort_keys=True))
    else:
        sprites = " ".join(f"{k}={v}" for k, v in info["sprites"].items())
        rep.status(
            f"Inspect summary: groups={info['groups']} images={info['images']}"
            f" hitmaps={info['hitmaps']} {sprites}".rstrip()
        )
        for problem in problems:
            rep.error(problem)
    return 1 if problems else 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="spritec",
        description="Compile layered documents into a sprite resource bundle",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=sorted(REPORTERS),
        default="plain",
        help="Reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    b = sub.add_parser("build", help="Compile documents into a resource file")
    b.add_argument(
        "inputs",
        nargs="*",
        type=Path,
        help="Layered documents or directories holding them",
    )
    b.add_argument("-o", "--output", type=Path, help="Resource JSON to write")
    b.add_argument(
        "-c", "--config", type=Path, help="YAML/JSON configuration file"
    )
    b.add_argument(
        "--images",
        type=Path,
        help="Directory for image files (default: <output dir>/images)",
    )
    b.add_argument(
        "--emit-manifest",
        dest="emit_manifest",
        type=Path,
        help="Optional path to write a build manifest JSON",
    )
    b.add_argument(
        "--hitmap-compression",
        dest="hitmap_compression",
        type=_int_at_least(1),
        help=f"Hitmap compression factor (default {HITMAP_COMPRESSION})",
    )
    b.add_argument(
        "--walkmap-scale",
        dest="walkmap_scale",
        type=_int_at_least(1),
        help=f"Walkmap downscale factor (default {WALKMAP_SCALE})",
    )
    b.add_argument(
        "--indent", type=_int_at_least(0), help="Pretty-print JSON with this indent"
    )
    b.add_argument(
        "--dry-run",
        dest="dry_run",
        action="store_true",
        help="Walk and hash everything without writing files",
    )
    b.set_defaults(func=_build_cmd)

    i = sub.add_parser("inspect", help="Summarize and check a resource file")
    i.add_argument("resources", type=Path)
    i.add_argument(
        "--images", type=Path, help="Also check image files in this directory"
    )
    i.add_argument("--json", action="store_true", help="Emit JSON report")
    i.set_defaults(func=_inspect_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.reporter == "rich" and not sys.stderr.isatty():
        # Progress bars need a terminal
        set_reporter(PlainReporter())
    elif args.reporter == "rich":
        set_reporter(RichReporter())
    else:
        set_reporter(REPORTERS[args.reporter]())
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        return args.func(args)
    finally:
        get_reporter().flush()


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
