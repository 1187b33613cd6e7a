"""Command-line entry point: builds a Manifest and hands it to the engine."""

import argparse
import logging
import os
import sys
from pathlib import Path

from spritepack.analyzers.catalog import ClipValidationError
from spritepack.editors.encode import EncodeError
from spritepack.engine import describe_group, plan, process
from spritepack.ffutil import FFmpegNotFoundError, ProcessError
from spritepack.manifest import (
    AudioFormat,
    ConfigError,
    Manifest,
    OggConfig,
    load_manifest,
)


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--source", "-s", type=Path, help="Directory searched recursively for .wav clips")
    p.add_argument("--destination", "-d", type=Path, help="Directory for the sprites and audioSprites.json")
    p.add_argument("--wav-dir", "-w", type=Path, default=Path("./wav-audiosprites"),
                   help="Directory for the .wav versions of the sprites")
    p.add_argument("--manifest", "-m", type=Path, help="Path to a JSON manifest file")
    p.add_argument("--max", dest="max_duration", type=float, default=600.0,
                   help="Maximum length of an audio sprite (seconds)")
    p.add_argument("--spacing", type=float, default=0.1, help="Silence between clips (seconds)")
    p.add_argument("--base-name", type=str, default="audioSprite", help="Base name of the sprite files")
    p.add_argument("--ffmpeg", type=str, default="ffmpeg", help="ffmpeg executable used for .ogg output")
    p.add_argument("--ogg-quality", type=int, default=6, help="libvorbis -qscale:a value")
    p.add_argument("--timeout", type=float, default=None, help="Timeout for each ffmpeg call (seconds)")
    p.add_argument("--indent", type=int, default=None, help="Indent audioSprites.json")
    p.add_argument("--log-level", type=str, default=None, help="Log level (e.g. INFO, DEBUG)")


def _manifest_from_args(args: argparse.Namespace) -> Manifest | None:
    if args.manifest:
        return load_manifest(args.manifest)
    if args.source is None or args.destination is None:
        return None
    return Manifest(
        source=args.source,
        destination=args.destination,
        wav_dir=args.wav_dir,
        base_name=args.base_name,
        max_duration=args.max_duration,
        spacing=args.spacing,
        indent=args.indent,
        audio=AudioFormat(),
        ogg=OggConfig(
            ffmpeg=args.ffmpeg,
            quality=args.ogg_quality,
            timeout=args.timeout,
        ),
    )


def _setup_logging(level: str | None) -> None:
    name = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="spritepack",
        description="SpritePack: pack mono 44.1kHz .wav clips into mp3/ogg audio sprites.",
    )
    sub = parser.add_subparsers(dest="command")

    build = sub.add_parser("build", help="Build audio sprites and audioSprites.json")
    _add_source_args(build)

    plan_parser = sub.add_parser("plan", help="Show how clips would be grouped, without writing anything")
    _add_source_args(plan_parser)

    serve = sub.add_parser("serve", help="Launch the web UI")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from spritepack.web import create_app
        app = create_app()
        print(f"SpritePack web UI: http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=False)
        return

    _setup_logging(args.log_level)

    try:
        m = _manifest_from_args(args)
    except (OSError, ValueError) as e:
        print(f"Error: could not load manifest: {e}", file=sys.stderr)
        sys.exit(1)
    if m is None:
        print("Error: provide --source and --destination, or --manifest.", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "plan":
            sprite_plan = plan(m)
            for group in sprite_plan.groups:
                for line in describe_group(sprite_plan, group, m.base_name):
                    print(line)
            return

        def on_progress(stage: str, frac: float) -> None:
            print(f"  [{frac:3.0%}] {stage}")

        result = process(m, on_progress=on_progress)
    except (ConfigError, ClipValidationError) as e:
        for problem in e.problems:
            print(problem, file=sys.stderr)
        sys.exit(1)
    except (FFmpegNotFoundError, ProcessError, EncodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print()
    print("Completed with no errors.")
    print(f"  Sprites: {result.group_count} ({result.clip_count} sounds)")
    print(f"  Metadata: {result.metadata_path}")
