"""Command-line entry point."""

import asyncio
import logging
import sys

from caltrack.app_logging import configure_logging
from caltrack.bootstrap import bootstrap
from caltrack.cli import console, print_error, run_session
from caltrack.config import Settings
from caltrack.containers import AppContainer, build_container, create_store_client
from caltrack.domain.errors import StoreUnavailable

_logger = logging.getLogger(__name__)


async def start(container: AppContainer) -> int:
    """Bootstrap the store and run the interactive session.

    Returns the process exit status; an unreachable store at startup is fatal.
    """
    try:
        try:
            await bootstrap(container)
        except StoreUnavailable as exc:
            _logger.exception("Store unavailable at startup")
            print_error(f"Could not connect to the database: {exc}")
            return 1
        console.print(
            f"\n{len(container.catalog.foods)} food items loaded into memory "
            "for searching."
        )
        await run_session(container)
        return 0
    finally:
        await container.close_resources()


async def run(settings: Settings | None = None) -> int:
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level, resolved_settings.log_file)
    client = await create_store_client(resolved_settings)
    return await start(build_container(resolved_settings, client))


def main() -> None:
    """Run CalTrack in the terminal."""
    try:
        status = asyncio.run(run())
    except KeyboardInterrupt:
        console.print("\n[cyan]Goodbye![/cyan]")
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    main()
