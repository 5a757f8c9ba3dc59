import argparse
from dataclasses import replace
import logging
import sys

from recordindex.config import get_settings
from recordindex.database import build_session_factory
from recordindex.errors import ConfigurationError, SourceUnavailableError
from recordindex.loader import CatalogLoader, build_store
from recordindex.presentation import render_listing, render_lookup, run_search_session
from recordindex.scheduler import start_reload_scheduler


logger = logging.getLogger(__name__)

EXIT_SOURCE_UNAVAILABLE = 1
EXIT_CONFIGURATION = 2
EXIT_NOT_FOUND = 3


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up catalogued records by identifier")
    parser.add_argument("--source", help="CSV source path (overrides SOURCE_PATH)")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="report repeated identifiers within a load instead of overwriting",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    lookup_parser = subparsers.add_parser("lookup", help="print the records for one or more IDs")
    lookup_parser.add_argument("identifiers", nargs="+", metavar="ID")

    subparsers.add_parser("list", help="print every loaded record")

    search_parser = subparsers.add_parser("search", help="interactive lookup session")
    search_parser.add_argument(
        "--reload-minutes",
        type=float,
        default=None,
        help="reload the source in the background every N minutes",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_CONFIGURATION
    if args.source:
        settings = replace(settings, source_path=args.source)
    if args.strict:
        settings = replace(settings, strict_duplicates=True)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    try:
        store = build_store(settings)
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_CONFIGURATION

    session_factory = None
    if settings.ledger_database_url:
        session_factory = build_session_factory(settings.ledger_database_url)
    loader = CatalogLoader(settings, store, session_factory)

    try:
        report = loader.run()
    except SourceUnavailableError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_SOURCE_UNAVAILABLE

    sys.stderr.write(
        "source={source} processed={processed} stored={stored} failures={failures}\n".format(
            source=report.source,
            processed=report.lines_processed,
            stored=report.records_stored,
            failures=report.parse_failures,
        )
    )

    if args.command == "lookup":
        missing = 0
        for identifier in args.identifiers:
            print(render_lookup(store, identifier))
            if store.get(identifier) is None:
                missing += 1
        return EXIT_NOT_FOUND if missing else 0

    if args.command == "list":
        print(render_listing(sorted(store.list_all(), key=lambda record: record.identifier)))
        return 0

    reload_minutes = args.reload_minutes
    if reload_minutes is None:
        reload_minutes = settings.reload_interval_minutes
    scheduler = start_reload_scheduler(loader, reload_minutes) if reload_minutes > 0 else None
    try:
        run_search_session(store, input, sys.stdout.write)
    finally:
        if scheduler is not None:
            scheduler.shutdown(wait=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
