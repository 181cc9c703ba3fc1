"""Worker configuration for the property registry activities.

Starts a Temporal worker with the registry activities registered on the
configured task queue.

Usage::

    import asyncio
    from propledger.workflow.worker import run_worker

    asyncio.run(run_worker())
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys

from temporalio.client import Client
from temporalio.worker import Worker

from propledger.core.result import Err
from propledger.infra.config import RegistryConfig, TemporalWorkerConfig, load_config
from propledger.infra.memory_adapter import InMemoryLedger
from propledger.infra.protocols import Ledger
from propledger.workflow.activities import RegistryActivities

logger = logging.getLogger(__name__)


def build_worker(
    client: Client,
    ledger: Ledger,
    *,
    registry_config: RegistryConfig | None = None,
    task_queue: str = TemporalWorkerConfig().task_queue,
) -> Worker:
    """Worker serving the registry activities for one ledger."""
    activities = RegistryActivities(ledger, registry_config)
    return Worker(client, task_queue=task_queue, activities=activities.all())


async def run_worker(
    *,
    worker_config: TemporalWorkerConfig | None = None,
    registry_config: RegistryConfig | None = None,
    ledger: Ledger | None = None,
) -> None:
    """Connect to Temporal and run the worker until interrupted.

    Without a ledger the worker serves a process-local InMemoryLedger.
    """
    cfg = worker_config if worker_config is not None else TemporalWorkerConfig()
    client = await Client.connect(cfg.target_host, namespace=cfg.namespace)
    worker = build_worker(
        client,
        ledger if ledger is not None else InMemoryLedger(),
        registry_config=registry_config,
        task_queue=cfg.task_queue,
    )
    logger.info("Serving property registry on %s (%s)", cfg.task_queue, cfg.target_host)
    await worker.run()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    loaded = load_config(os.environ)
    if isinstance(loaded, Err):
        logger.error("Invalid configuration: %s", loaded.error)
        return 2
    asyncio.run(run_worker(
        worker_config=loaded.value.worker,
        registry_config=loaded.value.registry,
    ))
    return 0


if __name__ == "__main__":
    sys.exit(main())
