"""Command-line research query.

Runs one query through every configured provider, records it in the
history database and prints the merged results.

Usage:
    python -m bplus_research.main_search "rust async runtimes"
    python -m bplus_research.main_search --timeframe week "rust 1.80 release"
    python -m bplus_research.main_search --suggest "rust asy"
    python -m bplus_research.main_search --history
"""

import argparse
import asyncio
import sys
from .log import setup_logging, get_logger
from .config import ConfigError
from .store.db import init_db
from .store.repo import history_repo
from .pipeline.run import pipeline
from .rendering.context import render_context
from .retrieval.suggest import suggest

logger = get_logger("cli")


def print_history(limit: int):
    for row in history_repo.list_queries(limit):
        print(f"{row['id']:>5}  {row['created_at']}  {row['result_count']:>3} results  {row['query']}")


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="Search all configured providers")
    p.add_argument("query", nargs="*", help="Search terms")
    p.add_argument("--json", action="store_true", help="Print the ResultSet as JSON")
    p.add_argument("--context", action="store_true", help="Print the citation block for a prompt")
    p.add_argument("--suggest", action="store_true", help="Print autocomplete suggestions instead")
    p.add_argument("--history", type=int, nargs="?", const=20, help="List the most recent queries")
    p.add_argument("--timeframe", help="Restrict providers that support it to the last day, week or month")
    args = p.parse_args(argv)

    setup_logging()
    init_db()

    if args.history is not None:
        print_history(args.history)
        return 0

    query = " ".join(args.query).strip()
    if not query:
        p.error("a query is required")

    if args.suggest:
        for s in asyncio.run(suggest(query)):
            print(s)
        return 0

    try:
        result = pipeline.run_sync(query, timeframe=args.timeframe)
    except ConfigError as e:
        logger.error(f"Provider configuration is invalid: {e}")
        return 2

    if args.json:
        print(result.model_dump_json(indent=2))
    elif args.context:
        print(render_context(result))
    else:
        for i, item in enumerate(result.results, start=1):
            print(f"[{i}] ({item.source}) {item.title}\n    {item.url}")
        for name, reason in result.failures.items():
            print(f"!! {name}: {reason}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
