"""Command-line entry point: ``wrapped-import FILE [FILE ...]``."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from wrapped_importer.api_client import ImportApiClient
from wrapped_importer.orchestrator import FileProgress, ImportOrchestrator, ImportSummary
from wrapped_importer.settings import get_settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wrapped-import",
        description="Upload Spotify extended streaming-history JSON files to the Wrapped API",
    )
    parser.add_argument("files", nargs="+", type=Path, help="Streaming_History_Audio_*.json files")
    parser.add_argument("--api-url", help="API base URL (default: $API_BASE_URL)")
    parser.add_argument("--token", help="Session access token (default: $ACCESS_TOKEN)")
    return parser


def _print_progress(statuses: list[FileProgress], percent: int) -> None:
    print(f"\rImporting... {percent}%", end="", file=sys.stderr, flush=True)


def _print_summary(summary: ImportSummary) -> None:
    print(file=sys.stderr)
    for f in summary.files:
        line = f"{f.name}: {f.status} ({f.count} entries)"
        if f.error:
            line += f" - {f.error}"
        print(line)
    print(f"Total: {summary.total}  Inserted: {summary.inserted}  Skipped (<30s): {summary.skipped_short}")


async def run(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    token = args.token or settings.ACCESS_TOKEN
    if not token:
        logger.error("No access token; pass --token or set ACCESS_TOKEN")
        return 2

    async with ImportApiClient(
        args.api_url or settings.API_BASE_URL,
        token,
        timeout=settings.REQUEST_TIMEOUT_SECONDS,
    ) as client:
        orchestrator = ImportOrchestrator(client, on_progress=_print_progress)
        summary = await orchestrator.run(args.files)

    _print_summary(summary)
    return 1 if summary.has_errors else 0


def main() -> None:
    sys.exit(asyncio.run(run()))


if __name__ == "__main__":
    main()
