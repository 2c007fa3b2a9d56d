"""
Batch migration across many contracts.

One worker thread per address (or at most ``max_workers``). Each pipeline
gets its own explorer clients, so nothing mutable is shared between
threads; results are collected in input order.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Optional

from verification_migrator.config.explorers import ExplorerConfig
from verification_migrator.config.settings import MigrationSettings
from verification_migrator.helpers.explorer_api import ExplorerClient
from verification_migrator.helpers.progress import ProgressReporter
from verification_migrator.migration.errors import STAGE_INTERNAL, MigrationError
from verification_migrator.migration.pipeline import ContractMigrationPipeline
from verification_migrator.migration.types import MigrationResult

logger = logging.getLogger(__name__)


def default_client_factory(config: ExplorerConfig, settings: MigrationSettings) -> ExplorerClient:
    return ExplorerClient(config, timeout_s=settings.request_timeout_s)


class BatchOrchestrator:
    def __init__(
        self,
        source_config: ExplorerConfig,
        target_config: ExplorerConfig,
        settings: Optional[MigrationSettings] = None,
        progress: Optional[ProgressReporter] = None,
        client_factory: Callable = default_client_factory,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.source_config = source_config
        self.target_config = target_config
        self.settings = settings or MigrationSettings()
        self.progress = progress or ProgressReporter()
        self.client_factory = client_factory
        self.sleep = sleep

    def _notify(self, hook: str, *args) -> None:
        try:
            getattr(self.progress, hook)(*args)
        except Exception:
            logger.warning("Progress reporter failed in %s", hook, exc_info=True)

    def _run_one(self, address: str) -> MigrationResult:
        self._notify("started", address)
        clients = []
        try:
            source_client = self.client_factory(self.source_config, self.settings)
            clients.append(source_client)
            target_client = self.client_factory(self.target_config, self.settings)
            clients.append(target_client)
            pipeline = ContractMigrationPipeline(source_client, target_client, self.settings, sleep=self.sleep)
            result = MigrationResult(address, outcome=pipeline.migrate(address))
        except MigrationError as e:
            logger.error("%s failed: %s", address, e)
            result = MigrationResult(address, error=e)
        except Exception as e:
            logger.exception("%s failed unexpectedly", address)
            result = MigrationResult(address, error=MigrationError(f"unexpected error: {e}", stage=STAGE_INTERNAL))
        finally:
            for client in clients:
                close = getattr(client, "close", None)
                if callable(close):
                    close()
        self._notify("finished", address, result)
        return result

    def migrate_all(self, addresses: Iterable[str]) -> list[MigrationResult]:
        """Migrate every address; exactly one result per address, in input order."""
        addresses = list(addresses)
        if not addresses:
            return []

        workers = self.settings.max_workers or len(addresses)
        logger.info(
            "Migrating %d contract(s) from %s to %s with %d worker(s)",
            len(addresses), self.source_config.name, self.target_config.name, workers,
        )
        self._notify("begin", len(addresses))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="migrate") as ex:
            futures = [ex.submit(self._run_one, address) for address in addresses]
            results = [future.result() for future in futures]
        self._notify("end")

        succeeded = sum(1 for r in results if r.ok)
        logger.info("Batch finished: %d/%d succeeded", succeeded, len(results))
        return results


def migrate_all(
    addresses: Iterable[str],
    source_config: ExplorerConfig,
    target_config: ExplorerConfig,
    settings: Optional[MigrationSettings] = None,
    progress: Optional[ProgressReporter] = None,
) -> list[MigrationResult]:
    return BatchOrchestrator(source_config, target_config, settings, progress).migrate_all(addresses)
