"""Main application entry point: API server and one-shot overdue sweep."""

import argparse
import asyncio
import logging
import sys
from datetime import date

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

from bluemoon.config import settings  # noqa: E402
from bluemoon.errors import StoreUnavailableError  # noqa: E402
from bluemoon.services.logging import setup_server_logging  # noqa: E402

logger = logging.getLogger(__name__)

SWEEP_KINDS = {
    "payments": ("payments",),
    "utilities": ("utilities",),
    "all": ("payments", "utilities"),
}


def run_server(host: str, port: int) -> None:
    """Run the API with uvicorn."""
    import uvicorn

    from bluemoon.api.app import app

    logger.info("Starting API server on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=settings.log_level.lower())


async def run_sweep(kind: str, today: date | None) -> int:
    """Run the overdue sweep once and print one line per table.

    Returns:
        Process exit status (0 on success, 1 if the database was unavailable)
    """
    from bluemoon.services import AsyncSessionLocal, async_engine, init_models
    from bluemoon.services.overdue_sweep import SweepKind, sweep_all

    kinds = tuple(SweepKind(k) for k in SWEEP_KINDS[kind])
    try:
        await init_models()
        results = await sweep_all(AsyncSessionLocal, today=today, kinds=kinds)
    except StoreUnavailableError as e:
        logger.error("Overdue sweep failed: %s", e.message)
        print(f"error: {e.message}", file=sys.stderr)
        return 1
    finally:
        await async_engine.dispose()

    for result in results:
        print(f"{result.kind.value}: {result.message}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(prog="bluemoon", description="BlueMoon billing back office")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="0.0.0.0", help="Host to bind to")
    serve.add_argument("--port", type=int, default=8000, help="Port to bind to")

    sweep = subparsers.add_parser("sweep", help="Mark past-due pending records overdue")
    sweep.add_argument("--kind", choices=sorted(SWEEP_KINDS), default="all")
    sweep.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Reference day YYYY-MM-DD (default: today)",
    )

    args = parser.parse_args(argv)

    if args.command == "serve":
        setup_server_logging(settings.log_file, settings.log_level)
        run_server(args.host, args.port)
        return 0

    setup_server_logging(None, settings.log_level)
    return asyncio.run(run_sweep(args.kind, args.date))


if __name__ == "__main__":
    sys.exit(main())
