"""Per-contract migration: fetch -> convert -> submit -> poll."""

import logging
import time
from typing import Callable

from verification_migrator.config.settings import MigrationSettings
from verification_migrator.helpers.tracing import trace_stage
from verification_migrator.migration import converter, submitter
from verification_migrator.migration.errors import STAGE_CONVERT, STAGE_FETCH, STAGE_POLL, STAGE_SUBMIT
from verification_migrator.migration.poller import VerificationStatusPoller
from verification_migrator.migration.types import AlreadyVerified, VerificationOutcome, parse_address

logger = logging.getLogger(__name__)


class ContractMigrationPipeline:
    """Copies the verification of one contract from a source to a target explorer.

    Stages run strictly in order and the first error ends the pipeline. Errors
    are MigrationError subclasses tagged with the stage that raised them.
    """

    def __init__(
        self,
        source_client,
        target_client,
        settings: MigrationSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.source_client = source_client
        self.target_client = target_client
        self.settings = settings or MigrationSettings()
        self.poller = VerificationStatusPoller(
            target_client,
            max_attempts=self.settings.max_poll_attempts,
            interval_s=self.settings.poll_interval_s,
            sleep=sleep,
        )

    def migrate(self, address: str) -> VerificationOutcome:
        contract_address = parse_address(address)

        with trace_stage(STAGE_FETCH, contract_address):
            metadata = self.source_client.fetch_source_metadata(contract_address)
        logger.info(
            "%s fetched %s (%s, %s)",
            contract_address, metadata.contract_name, metadata.compiler_version, type(metadata.source).__name__,
        )

        with trace_stage(STAGE_CONVERT, contract_address):
            request = converter.convert(contract_address, metadata, self.settings.contract_name_policy)

        with trace_stage(STAGE_SUBMIT, contract_address):
            submission = submitter.submit(request, self.target_client)
        if isinstance(submission, AlreadyVerified):
            return VerificationOutcome.already_verified()

        with trace_stage(STAGE_POLL, contract_address):
            outcome = self.poller.poll(submission.guid)
        log = logger.info if outcome.ok else logger.warning
        log("%s %s", contract_address, outcome)
        return outcome


def migrate(address: str, source_client, target_client, settings: MigrationSettings | None = None) -> VerificationOutcome:
    """Run one pipeline with default sleeping behaviour."""
    return ContractMigrationPipeline(source_client, target_client, settings).migrate(address)
