# src/status_watcher/cli/main.py

"""
CLI entrypoint.

Initializes logging, then either:
- watches the configured database for status changes (default), or
- runs one record-creation call against the Notion API and prints the response.
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import json
import logging
import signal
import sys

from ..cli.bootstrap import create_gateway, create_watcher
from ..config import get_settings
from ..errors import ConfigurationError, StatusWatcherError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="status-watcher",
        description="Watch a Notion database for task status changes.",
        epilog=(
            "Examples:\n"
            "  status-watcher                     # poll for status changes\n"
            "  status-watcher create-database Tasks\n"
            "  status-watcher create-page <db_id> 'Write docs' --header Notes\n"
            "  status-watcher append-block <page_id> 'Some text'\n"
            "  status-watcher comment <page_id> 'Looks good'"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    sub = parser.add_subparsers(dest="command")

    sub.add_parser("watch", help="Poll the database and report status changes (default)")

    p = sub.add_parser("create-database", help="Create a database under WATCHER_NOTION_PAGE_ID")
    p.add_argument("title")
    p.add_argument("--parent", help="Parent page id (defaults to WATCHER_NOTION_PAGE_ID)")

    p = sub.add_parser("create-page", help="Create a page in a database")
    p.add_argument("database_id")
    p.add_argument("name")
    p.add_argument("--header", default="", help="Text of the H2 heading added to the page")

    p = sub.add_parser("append-block", help="Append a paragraph to a page or block")
    p.add_argument("block_id")
    p.add_argument("content")

    p = sub.add_parser("comment", help="Add a comment to a page")
    p.add_argument("page_id")
    p.add_argument("text")

    return parser


async def watch(settings) -> None:
    state = create_watcher(settings=settings)

    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop.set()

    for sig in (signal.SIGINT, signal.SIGTERM):
        # Some platforms (Windows) don't support loop signal handlers.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, _handle_signal, sig)

    runner = state.poller.start()
    stopper = asyncio.create_task(stop.wait())
    try:
        done, _ = await asyncio.wait({runner, stopper}, return_when=asyncio.FIRST_COMPLETED)
        if runner in done:
            # Only ends on its own if the initial snapshot could not be loaded.
            runner.result()
    finally:
        stopper.cancel()
        await state.aclose()


async def run_passthrough(settings, args: argparse.Namespace) -> dict:
    settings.require_remote(database=False)
    gateway = create_gateway(settings=settings)
    try:
        if args.command == "create-database":
            parent = args.parent or settings.notion_page_id
            if not parent:
                raise ConfigurationError("No parent page: pass --parent or set WATCHER_NOTION_PAGE_ID")
            return await gateway.create_database(parent, args.title)
        if args.command == "create-page":
            return await gateway.create_page(args.database_id, args.name, args.header)
        if args.command == "append-block":
            return await gateway.append_paragraph(args.block_id, args.content)
        if args.command == "comment":
            return await gateway.create_comment(args.page_id, args.text)
        raise ValueError(f"Unknown command: {args.command}")
    finally:
        await gateway.aclose()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    command = args.command or "watch"
    try:
        if command == "watch":
            logger.info("Starting %s...", settings.app_name)
            asyncio.run(watch(settings))
        else:
            response = asyncio.run(run_passthrough(settings, args))
            print(json.dumps({"message": "success!", "data": response}, ensure_ascii=False, indent=2))
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 1
    except StatusWatcherError:
        logger.exception("%s failed", command)
        return 1
    except KeyboardInterrupt:
        pass

    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
