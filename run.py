"""Entry point for the Sefer HaChinukh application."""

import argparse
import asyncio
import logging
import sys

from chinukh.config import AppConfig, load_config
from chinukh.export import EXPORT_FORMATS, export_mitzvah, render_mitzvah, render_stats
from chinukh.ingestion import MitzvahDownloader, build_index
from chinukh.query import LANGUAGES, MitzvahLibrary
from chinukh.storage import MitzvahStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Download and search Sefer HaChinukh.")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("download", help="Download all mitzvot from Sefaria")
    sub.add_parser("retry", help="Retry previously failed downloads")
    sub.add_parser("index", help="Rebuild the search index from the saved collection")

    show = sub.add_parser("show", help="Display a mitzvah")
    show.add_argument("number", type=int)
    show.add_argument("--no-hebrew", action="store_true")
    show.add_argument("--no-english", action="store_true")

    search = sub.add_parser("search", help="Search mitzvah text and titles")
    search.add_argument("term")
    search.add_argument("--language", choices=LANGUAGES, default="both")
    search.add_argument("--limit", type=int, default=10)

    category = sub.add_parser("category", help="List mitzvot in a category")
    category.add_argument("name")

    sub.add_parser("random", help="Display a random mitzvah")
    sub.add_parser("stats", help="Show collection statistics")

    export = sub.add_parser("export", help="Export a mitzvah to a file")
    export.add_argument("number", type=int)
    export.add_argument("--format", dest="fmt", default="json", help=f"One of: {', '.join(EXPORT_FORMATS)}")
    return parser


def run_download(config: AppConfig, store: MitzvahStore, retry: bool) -> int:
    downloader = MitzvahDownloader(config.source, store, preview_length=config.search.preview_length)
    if retry:
        recovered = asyncio.run(downloader.retry_failed())
        print(f"Recovered {len(recovered)} mitzvot")
        return 0

    seconds = config.source.total_mitzvot * config.source.request_delay_ms / 1000
    print(f"Downloading {config.source.total_mitzvot} mitzvot, this takes about {seconds / 60:.0f} minutes...")
    collection, failed = asyncio.run(downloader.download_all())
    print(f"Downloaded {len(collection)}/{config.source.total_mitzvot} mitzvot into {store.output_dir}")
    if failed:
        print(f"{len(failed)} downloads failed; run 'retry' to try them again")
    return 0 if collection else 1


def run_index(config: AppConfig, store: MitzvahStore) -> int:
    try:
        collection = store.load_collection()
        if collection is None:
            print("No collection found. Run 'download' first.")
            return 1
        store.save_index(build_index(collection, config.search.preview_length))
    except (OSError, ValueError) as e:
        logger.error("Could not rebuild search index: %s", e)
        return 1
    print(f"Indexed {len(collection)} mitzvot into {store.index_path}")
    return 0


def run_query(args: argparse.Namespace, config: AppConfig, store: MitzvahStore) -> int:
    library = MitzvahLibrary.load(store, context_length=config.search.context_length)
    if not library.is_loaded:
        print("No data found. Run 'download' first.")
        return 1

    if args.command == "show":
        mitzvah = library.get_mitzvah(args.number)
        if mitzvah is None:
            print(f"Mitzvah {args.number} not found")
            return 1
        print(render_mitzvah(mitzvah, show_hebrew=not args.no_hebrew, show_english=not args.no_english))

    elif args.command == "search":
        results = library.search(args.term, args.language)
        print(f"Found {len(results)} results:")
        for position, result in enumerate(results[: args.limit], start=1):
            print(f"{position}. Mitzvah {result.number}: {result.title}")
            print(f"   {result.match_text}\n")

    elif args.command == "category":
        mitzvot = library.get_by_category(args.name)
        print(f"Found {len(mitzvot)} mitzvot:")
        for mitzvah in mitzvot:
            print(f"  {mitzvah.number}. {mitzvah.display_title}")

    elif args.command == "random":
        mitzvah = library.random_mitzvah()
        if mitzvah is None:
            print("No mitzvot loaded")
            return 1
        print(render_mitzvah(mitzvah))

    elif args.command == "stats":
        stats = library.get_stats()
        if stats is None:
            return 1
        print(render_stats(stats))

    elif args.command == "export":
        mitzvah = library.get_mitzvah(args.number)
        if mitzvah is None:
            print(f"Mitzvah {args.number} not found")
            return 1
        path = export_mitzvah(mitzvah, args.fmt, config.storage.export_dir)
        if path is None:
            return 1
        print(f"Exported mitzvah {args.number} to {path}")

    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments and dispatch to the requested command."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    logging.basicConfig(
        level=config.app.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    store = MitzvahStore(config.storage.output_dir)

    if args.command in ("download", "retry"):
        return run_download(config, store, retry=args.command == "retry")
    if args.command == "index":
        return run_index(config, store)
    return run_query(args, config, store)


if __name__ == "__main__":
    sys.exit(main())
