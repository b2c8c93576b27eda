"""Command-line entry point."""

import argparse
import logging
from pathlib import Path

from vgcsite.builder import build_site
from vgcsite.config import Settings
from vgcsite.core.models import BuildContext, SiteBuildError
from vgcsite.serve import serve

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vgcsite",
        description="Build a static HTML site from a folder of Markdown notes.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log every copied and rendered file")
    sub = parser.add_subparsers(dest="command")

    build = sub.add_parser("build", help="rebuild the output directory (default)")
    build.add_argument("--source", type=Path, help="Markdown source directory")
    build.add_argument("--output", type=Path, help="output directory")

    preview = sub.add_parser("serve", help="serve the output directory locally")
    preview.add_argument("--output", type=Path, help="output directory")
    preview.add_argument("--port", type=int, help="port to listen on")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Settings from the environment, overridden by explicit arguments."""
    overrides = {}
    if getattr(args, "source", None) is not None:
        overrides["markdown_dir"] = args.source
    if getattr(args, "output", None) is not None:
        overrides["output_dir"] = args.output
    if getattr(args, "port", None) is not None:
        overrides["serve_port"] = args.port
    return Settings(**overrides)


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    settings = load_settings(args)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "serve":
            serve(settings.output_dir, settings.serve_port)
        else:
            build_site(BuildContext(settings=settings))
    except SiteBuildError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
