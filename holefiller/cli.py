"""Command-line harness: run one inline completion against a file."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from .config import load_config
from .provider import InlineCompletionProvider
from .text_source import CursorLocation, StringTextSource

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="holefiller",
        description="Request a fill-in-the-middle completion at a cursor position.",
    )
    parser.add_argument("file", type=Path, help="file to complete in")
    parser.add_argument("--line", type=int, required=True, help="0-based line")
    parser.add_argument(
        "--character", type=int, required=True, help="0-based column"
    )
    parser.add_argument("--provider", help="override HOLEFILLER_LLM_PROVIDER")
    parser.add_argument("--model", help="override HOLEFILLER_LLM_MODEL")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


async def run(args: argparse.Namespace) -> int:
    config = load_config()
    if args.provider:
        config.llm_provider = args.provider
    if args.model:
        config.llm_model = args.model

    source = StringTextSource(args.file.read_text())
    provider = InlineCompletionProvider(config)
    items = await provider.provide_inline_completions(
        source, CursorLocation(args.line, args.character)
    )
    if not items:
        logger.info("No suggestion")
        return 1
    for item in items:
        print(item.insert_text)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the holefiller command."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    # Quiet down noisy loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    try:
        return asyncio.run(run(args))
    except ValueError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
