"""Main CLI entry point."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from ac_extractor.models.record import RecordKind


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="ac-extractor",
        description="Extract contacts, deals and tasks from saved ActiveCampaign pages",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML",
    )
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path to SQLite database (overrides settings)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # classify
    classify_parser = subparsers.add_parser("classify", help="Show which page kind a URL is")
    classify_parser.add_argument("url", help="Page URL")

    # extract
    extract_parser = subparsers.add_parser("extract", help="Extract records from a saved page")
    extract_parser.add_argument(
        "--html",
        type=Path,
        required=True,
        help="Saved HTML of the rendered page",
    )
    extract_parser.add_argument(
        "--url",
        required=True,
        help="URL the page was saved from (selects the extractor)",
    )
    extract_parser.add_argument(
        "--tab",
        type=int,
        default=1,
        help="Tab id to attach the page context under",
    )
    extract_parser.add_argument(
        "--any-host",
        action="store_true",
        help="Skip the supported-host check",
    )
    extract_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the reconciled dataset JSON to file",
    )

    # store
    store_parser = subparsers.add_parser("store", help="Query or edit the reconciled dataset")
    store_parser.add_argument(
        "action",
        choices=["list", "count", "delete"],
        help="List records, show counts, or delete one record",
    )
    store_parser.add_argument(
        "--kind",
        type=str,
        default=None,
        choices=[k.value for k in RecordKind],
        help="Record kind (required for delete)",
    )
    store_parser.add_argument("--id", type=str, default=None, help="Record id (for delete)")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "classify":
        _run_classify(args)
    elif args.command == "extract":
        _run_extract(args)
    elif args.command == "store":
        _run_store(args)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    from ac_extractor.settings import ExtractorSettings

    settings = ExtractorSettings.load(args.config)
    if args.db is not None:
        settings = settings.model_copy(update={"db_path": args.db})
    return settings


def _open_router(settings):
    from ac_extractor.messaging import MessageRouter
    from ac_extractor.store import ReconciliationStore, SqliteKeyValueStore

    store = ReconciliationStore(SqliteKeyValueStore(settings.db_path), key=settings.storage_key)
    return MessageRouter(store)


def _run_classify(args: argparse.Namespace) -> None:
    """Run classify command."""
    from ac_extractor.detector import classify

    kind = classify(args.url)
    if kind is None:
        print("unsupported")
        raise SystemExit(1)
    print(kind.value)


def _run_extract(args: argparse.Namespace) -> None:
    """Run extract command."""
    from ac_extractor.detector import is_supported_host

    settings = _load_settings(args)
    if not args.any_host and not is_supported_host(args.url, settings.supported_hosts):
        raise SystemExit(
            "Please use a URL from an ActiveCampaign page (contacts, deals, or tasks), "
            "or pass --any-host."
        )
    if not args.html.exists():
        raise SystemExit(f"No such file: {args.html}")

    outcome, dataset = asyncio.run(_extract(args, settings))
    print(f"{outcome.status}: {outcome.message}")
    counts = ", ".join(f"{n} {k}" for k, n in dataset.counts().items())
    print(f"Store: {counts}")

    if args.output:
        args.output.write_text(json.dumps(dataset.to_storage(), indent=2), encoding="utf-8")
        print(f"Wrote dataset to {args.output}")
    if not outcome.ok:
        raise SystemExit(1)


async def _extract(args: argparse.Namespace, settings):
    from ac_extractor.dom import LiveDocument
    from ac_extractor.errors import TransportFailure
    from ac_extractor.messaging import Message
    from ac_extractor.orchestrator import ExtractionOutcome, attach_page

    document = LiveDocument.from_file(args.html, url=args.url)
    pages = {}

    def inject(tab_id: int) -> None:
        pages[tab_id] = attach_page(router, tab_id, document, settings=settings)

    async with _open_router(settings) as router:
        try:
            await router.request_extraction(args.tab, injector=inject, retry_delay_ms=settings.retry_delay_ms)
        except TransportFailure as e:
            raise SystemExit(str(e))
        task = pages[args.tab].current_task
        outcome = await task if task is not None else None
        if outcome is None:
            outcome = ExtractionOutcome("failed", "Extraction did not run")
        response = await router.send(Message.get_data())
    return outcome, response.data


def _run_store(args: argparse.Namespace) -> None:
    """Run store command."""
    if args.action == "delete" and (not args.kind or not args.id):
        raise SystemExit("store delete requires --kind and --id")
    settings = _load_settings(args)
    response = asyncio.run(_store(args, settings))
    if not response.success:
        print(f"Error: {response.error}", file=sys.stderr)
        raise SystemExit(1)

    dataset = response.data
    if args.action == "count":
        counts = dataset.counts()
        if args.kind:
            print(counts[args.kind])
        else:
            for kind, n in counts.items():
                print(f"{kind}: {n}")
    elif args.action == "list":
        data = dataset.to_storage()
        output = data[args.kind] if args.kind else data
        print(json.dumps(output, indent=2))
    else:
        print(f"Deleted {args.kind} {args.id} ({len(dataset.records(args.kind))} remaining)")


async def _store(args: argparse.Namespace, settings):
    from ac_extractor.messaging import Message

    async with _open_router(settings) as router:
        if args.action == "delete":
            return await router.send(Message.delete_record(RecordKind(args.kind), args.id))
        return await router.send(Message.get_data())


if __name__ == "__main__":
    main()
