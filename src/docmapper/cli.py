"""Command line entrypoint: ``documentation-mapper scan|query|stats``."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import structlog
from sqlalchemy.exc import SQLAlchemyError

from . import __version__
from .config import ConfigError, Settings, load_settings
from .crawler import DocumentationCrawler
from .fetcher import PackageFetcher
from .inputs import InputFormatError, load_dependencies_from_json
from .logging import setup_logging
from .mapper import DocumentationMapper
from .models import DependencyRecord
from .report import aggregate, summarize_results
from .scanner import scan
from .store import PackageStore
from .summary import render_summary

DEFAULT_LOG_FILE = "documentation-mapper.log"

log = structlog.get_logger("docmapper.cli")


def build_mapper(settings: Settings, store: PackageStore) -> DocumentationMapper:
    crawler = DocumentationCrawler(
        firecrawl_api_key=settings.firecrawl_api_key,
        firecrawl_base_url=settings.firecrawl_base_url,
        content_limit=settings.content_limit,
    )
    return DocumentationMapper(store, PackageFetcher(), crawler, skip_docs=settings.skip_docs)


def load_input(input_path: Path, recursive: bool = False) -> list[DependencyRecord]:
    """Read records from a dependency-scan JSON file or by scanning a directory."""
    if input_path.is_file() and input_path.suffix == ".json":
        print(f"Processing dependency scan file: {input_path}")
        return load_dependencies_from_json(input_path)
    if input_path.is_dir():
        print(f"Scanning repository: {input_path}")
        return scan(input_path, recursive=recursive)
    raise InputFormatError(f"Invalid input: {input_path} is not a valid file or directory")


def _settings(args: argparse.Namespace, **overrides: object) -> Settings:
    return load_settings(args.config, overrides={"database_url": args.db, **overrides})


def cmd_scan(args: argparse.Namespace) -> int:
    settings = _settings(args, skip_docs=args.skip_docs)
    dependencies = load_input(Path(args.input), recursive=args.recursive)
    print(f"Found {len(dependencies)} dependencies")

    with PackageStore(settings.database_url) as store:
        results = build_mapper(settings, store).process(dependencies)

    if args.output:
        try:
            Path(args.output).write_text(json.dumps(results, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            print(f"Error: failed to write results to {args.output}: {exc}", file=sys.stderr)
            return 1
        print(f"Results saved to {args.output}")

    counts = summarize_results(results)
    print(", ".join(f"{status}: {count}" for status, count in counts.items()))
    print("Documentation mapping completed successfully!")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    settings = _settings(args)
    with PackageStore(settings.database_url) as store:
        entries = store.query(ecosystem=args.ecosystem, name=args.package, version=args.version)
    print(json.dumps([entry.to_dict() for entry in entries], indent=2))
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    settings = _settings(args)
    with PackageStore(settings.database_url) as store:
        entries = store.query()
    print(render_summary(aggregate(entries)), end="")
    return 0


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--db",
        default=None,
        help="Database: 'sqlite' (default, ./documentation.db) or a SQLAlchemy URL",
    )
    parser.add_argument("-c", "--config", default=None, help="Configuration file (YAML or JSON)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="documentation-mapper",
        description="Extract dependencies and fetch documentation from codebase scans",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan", help="Scan a repository or process a dependency scan JSON file"
    )
    scan_parser.add_argument("input", help="Path to repository directory or JSON file")
    _add_common_options(scan_parser)
    scan_parser.add_argument("-o", "--output", default=None, help="Output file for results")
    scan_parser.add_argument(
        "--skip-docs",
        action="store_true",
        default=None,
        help="Store registry descriptions without crawling documentation",
    )
    scan_parser.add_argument(
        "--recursive", action="store_true", help="Also scan subdirectories for manifests"
    )
    scan_parser.set_defaults(func=cmd_scan)

    query_parser = subparsers.add_parser("query", help="Query stored documentation")
    _add_common_options(query_parser)
    query_parser.add_argument("-p", "--package", default=None, help="Package name to query")
    query_parser.add_argument("-v", "--version", default=None, help="Specific version")
    query_parser.add_argument(
        "-e", "--ecosystem", default=None, help="Ecosystem filter (npm, pypi, etc.)"
    )
    query_parser.set_defaults(func=cmd_query)

    stats_parser = subparsers.add_parser("stats", help="Summarize stored documentation")
    _add_common_options(stats_parser)
    stats_parser.set_defaults(func=cmd_stats)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(log_file=DEFAULT_LOG_FILE)

    try:
        return args.func(args)
    except (ConfigError, InputFormatError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except SQLAlchemyError as exc:
        log.error("cli.database_error", error=str(exc))
        print(f"Error: database failure: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
