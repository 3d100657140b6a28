"""Terminal client that reuses the in-process catalog and shopping logic."""
from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Iterable

from flowersearch.aggregator import ResultAggregator
from flowersearch.catalog import CatalogResolver
from flowersearch.config import settings
from flowersearch.errors import FlowerNotFound, FlowerSearchError
from flowersearch.es_client import get_client
from flowersearch.naver import NaverShoppingClient

MAX_PREVIEW = 10
GREEN = "\033[92m"
RED = "\033[91m"
RESET = "\033[0m"


async def lookup_flower(name: str) -> dict:
    resolver = CatalogResolver.from_settings(get_client(settings), settings)
    record = await resolver.resolve(name)
    return record.model_dump()


async def collect_items(term: str) -> list[dict]:
    aggregator = ResultAggregator(NaverShoppingClient(settings))
    return await aggregator.aggregate(term)


def pretty_print_flower(name: str, record: dict) -> None:
    print(f"{GREEN}{name}{RESET}")
    for key, value in record.items():
        print(f"  {key:<15} {value if value is not None else '-'}")


def pretty_print_items(term: str, items: list[dict]) -> None:
    print(f"Query: {term} | items: {len(items)}")
    for idx, item in enumerate(items[:MAX_PREVIEW], start=1):
        print(f"  {idx:02d}. {item.get('lprice', '-')} | {item.get('mallName', '-')} | {item.get('title')}")


def run_query(term: str, shopping: bool) -> None:
    try:
        if shopping:
            pretty_print_items(term, asyncio.run(collect_items(term)))
        else:
            pretty_print_flower(term, asyncio.run(lookup_flower(term)))
    except FlowerNotFound:
        print(f"{RED}{term}: not found{RESET}")
    except FlowerSearchError as exc:
        print(f"{RED}{term}: {exc.message}{RESET}")


def interactive_shell(shopping: bool) -> None:
    print("Interactive flower lookup. Type 'exit' to quit.")
    while True:
        try:
            query = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            return
        if not query:
            continue
        if query.lower() in {"exit", "quit"}:
            return
        run_query(query, shopping)


def batch_mode(file_path: Path, shopping: bool) -> None:
    with file_path.open("r", encoding="utf-8") as fh:
        for line in fh:
            query = line.strip()
            if not query:
                continue
            run_query(query, shopping)


def main(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="CLI client for the flower search service")
    parser.add_argument("name", nargs="?", help="Flower name. If omitted, starts REPL mode.")
    parser.add_argument("--shopping", action="store_true", help="Collect Naver Shopping items instead of a catalog lookup")
    parser.add_argument("--batch", type=Path, help="File with names to look up line by line")
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.batch:
        batch_mode(args.batch, args.shopping)
        return 0
    if args.name:
        run_query(args.name, args.shopping)
        return 0
    interactive_shell(args.shopping)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
