import argparse
import logging
import os.path
import sys
from pathlib import Path

from .activities import find_activity
from .config import settings
from .discovery import fetch_directory, load_discovery
from .errors import DiscoveryError
from .examples import generate_overview_summary
from .generator import KINDS, generate_all
from .mkdocs import render_mkdocs_yaml
from .pages import render_method_page

logger = logging.getLogger("discodocs")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="discodocs",
        description="Generate client documentation from Google API discovery documents.",
    )
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Write README, mkdocs.yml and method pages")
    gen.add_argument("sources", nargs="+", help="Discovery document paths or URLs")
    gen.add_argument("-o", "--out", default="gen", help="Output directory [default: gen]")
    gen.add_argument("--kind", choices=[*KINDS, "all"], default="all")
    gen.add_argument("--summarize", action="store_true", help="Ask OpenAI for an overview paragraph")

    nav = sub.add_parser("nav", help="Print the mkdocs.yml of the CLI docs site")
    nav.add_argument("source")

    page = sub.add_parser("page", help="Print the docs page of one method")
    page.add_argument("source")
    page.add_argument("method_id", help="e.g. books.bookshelves.get")

    listing = sub.add_parser("list", help="List the APIs of the discovery directory")
    listing.add_argument("--preferred", action="store_true")
    return parser.parse_args(argv)


def _configure_logging(args: argparse.Namespace) -> None:
    log_format = "%(asctime)s:%(levelname)s:%(name)s:%(message)s"
    if args.log_file:
        logging.basicConfig(
            filename=os.path.abspath(args.log_file),
            level=args.log_level,
            format=log_format,
        )
    else:
        logging.basicConfig(level=args.log_level, format=log_format)


def run(args: argparse.Namespace) -> int:
    if args.command == "generate":
        kinds = KINDS if args.kind == "all" else (args.kind,)
        for source in args.sources:
            desc = load_discovery(source)
            overview = generate_overview_summary(desc, settings.openai_api_key) if args.summarize else None
            generate_all(desc, Path(args.out), settings, kinds=kinds, overview=overview)
    elif args.command == "nav":
        sys.stdout.write(render_mkdocs_yaml(load_discovery(args.source), settings))
    elif args.command == "page":
        desc = load_discovery(args.source)
        sys.stdout.write(render_method_page(desc, find_activity(desc, args.method_id), settings))
    elif args.command == "list":
        for item in fetch_directory(preferred_only=args.preferred):
            sys.stdout.write(f"{item.name}\t{item.version}\t{item.title}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args)
    try:
        return run(args)
    except (DiscoveryError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
