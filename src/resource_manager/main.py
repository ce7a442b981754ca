from __future__ import annotations

import asyncio
import sys

from resource_manager.config_models import ResourceConfig, load_and_validate_config
from resource_manager.core.factory import ResourceFactory
from resource_manager.core.models import FetchSnapshot
from resource_manager.utils.logging import get_logger, setup_logging

log = get_logger("resource_manager.main")


async def load_pages(config: ResourceConfig) -> FetchSnapshot:
    """
    Load a resource from page 1 up to fetch.max_pages.

    Args:
        config: The validated resource configuration.

    Returns:
        The final snapshot of the collection.
    """
    built = ResourceFactory().build(config, on_error=lambda msg: log.error("Fetch error: %s", msg))
    manager = built.manager

    if config.fetch.should_fetch:
        await manager.start()
    else:
        await manager.queries.fetch_data()

    pages = 1
    while manager.state.has_next_page and pages < config.fetch.max_pages:
        await manager.queries.fetch_next_page()
        pages += 1
        if manager.state.error:
            break

    return manager.state.snapshot()


def main() -> None:
    """Main entry point: load the pages of a configured resource and print a summary."""
    if len(sys.argv) < 2:
        print("Usage: resource-manager configs/resources/<resource>.yaml")
        raise SystemExit(2)

    setup_logging("configs/logging.yaml")
    config_path = sys.argv[1]
    print(f"Loading resource from {config_path}")

    try:
        config = load_and_validate_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        raise SystemExit(1)

    snap = asyncio.run(load_pages(config))
    print(
        f"DONE: {config.resource.name} records={len(snap.data)} page={snap.page} "
        f"total_pages={snap.total_pages} total_results={snap.total_results} error={snap.error}"
    )
    if snap.error:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
