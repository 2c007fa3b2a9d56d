"""
Verification status polling.

Pending -> Success | AlreadyVerified | Failed | TimedOut

The target explorer is asked for the status of a submission id at most
``max_attempts`` times, ``interval_s`` apart. Transport errors end the loop
immediately; they are never counted as "still pending".
"""

import logging
import time
from typing import Callable, Optional

from verification_migrator.config.settings import DEFAULT_MAX_POLL_ATTEMPTS, DEFAULT_POLL_INTERVAL_S
from verification_migrator.migration.errors import PollError
from verification_migrator.migration.types import VerificationOutcome

logger = logging.getLogger(__name__)

UNABLE_TO_VERIFY = "unable to verify"
ALREADY_VERIFIED = "already verified"
PASS_MARKER = "Pass - Verified"
FAILURE_STATUS = "0"


def classify_status(status: str, result: str) -> Optional[VerificationOutcome]:
    """Return the terminal outcome for one status response, or None if pending."""
    status = str(status or "").strip()
    text = str(result or "").strip()
    lowered = text.lower()

    if UNABLE_TO_VERIFY in lowered:
        return VerificationOutcome.failed(UNABLE_TO_VERIFY)
    if lowered == ALREADY_VERIFIED:
        return VerificationOutcome.already_verified()
    # Etherscan-style explorers answer status "0" both for queued jobs and for
    # failures; only the "Fail - ..." texts are failures.
    if status == FAILURE_STATUS and lowered.startswith("fail"):
        return VerificationOutcome.failed("contract failed to verify")
    if text == PASS_MARKER:
        return VerificationOutcome.success()
    return None


class VerificationStatusPoller:
    def __init__(
        self,
        client,
        max_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS,
        interval_s: float = DEFAULT_POLL_INTERVAL_S,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.client = client
        self.max_attempts = max_attempts
        self.interval_s = interval_s
        self.sleep = sleep

    def poll(self, guid: str) -> VerificationOutcome:
        """Poll until a terminal outcome or the attempt budget runs out.

        Raises:
            PollError: If the explorer answers with something unreadable.
            TransportError: If a status request fails.
        """
        for attempt in range(1, self.max_attempts + 1):
            report = self.client.check_verification_status(guid)
            if report.result is None:
                raise PollError(f"Status response for {guid} has no result: {report!r}")

            outcome = classify_status(report.status, report.result)
            if outcome is not None:
                logger.debug("guid=%s attempt %d/%d -> %s", guid, attempt, self.max_attempts, outcome)
                return outcome

            logger.debug(
                "guid=%s attempt %d/%d still pending: %s",
                guid, attempt, self.max_attempts, report.result,
            )
            if attempt < self.max_attempts:
                self.sleep(self.interval_s)

        logger.warning("guid=%s not verified after %d attempts", guid, self.max_attempts)
        return VerificationOutcome.timed_out()
