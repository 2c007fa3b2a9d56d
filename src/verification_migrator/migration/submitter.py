"""Submit a verification request and classify the explorer's answer."""

import logging

from verification_migrator.migration.errors import SubmissionError
from verification_migrator.migration.types import (
    AlreadyVerified,
    Rejected,
    SubmissionOutcome,
    Submitted,
    VerificationRequest,
)

logger = logging.getLogger(__name__)

ALREADY_VERIFIED_SIGNAL = "already verified"


def classify_submission(message: str, result: str) -> SubmissionOutcome:
    """Map a submit response onto Submitted / AlreadyVerified / Rejected."""
    message = (message or "").strip()
    result = (result or "").strip()
    if message != "OK":
        if ALREADY_VERIFIED_SIGNAL in result.lower() or ALREADY_VERIFIED_SIGNAL in message.lower():
            return AlreadyVerified()
        return Rejected(result or message or "empty response")
    if not result:
        return Rejected("OK response without a submission id")
    return Submitted(result)


def submit(request: VerificationRequest, client) -> SubmissionOutcome:
    """Send one verification request to the target explorer.

    Single attempt, no retry; transport errors from the client propagate.

    Returns:
        Submitted or AlreadyVerified

    Raises:
        SubmissionError: If the explorer rejects the payload.
    """
    response = client.submit_verification(request)
    outcome = classify_submission(response.message, response.result)
    if isinstance(outcome, Rejected):
        raise SubmissionError(f"Verification returned non-ok response: {outcome.reason}")
    if isinstance(outcome, Submitted):
        logger.info("%s submitted, guid=%s", request.address, outcome.guid)
    else:
        logger.info("%s is already verified on target", request.address)
    return outcome
