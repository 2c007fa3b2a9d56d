"""Error taxonomy for a single contract migration.

Every error carries the pipeline stage that produced it so callers can tell
transient network problems from permanent data problems.
"""

STAGE_FETCH = "fetch"
STAGE_CONVERT = "convert"
STAGE_SUBMIT = "submit"
STAGE_POLL = "poll"
STAGE_INTERNAL = "internal"


class MigrationError(Exception):
    """Base class for all migration failures."""

    stage = STAGE_INTERNAL

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        self.message = message
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


class FetchError(MigrationError):
    """Source explorer has no usable verified source for the address."""

    stage = STAGE_FETCH


class ConversionError(MigrationError):
    """Metadata cannot be turned into a verification request."""

    stage = STAGE_CONVERT


class SubmissionError(MigrationError):
    """Target explorer rejected the submission."""

    stage = STAGE_SUBMIT


class PollError(MigrationError):
    """Target explorer returned a status response that cannot be interpreted."""

    stage = STAGE_POLL


class TransportError(MigrationError):
    """Network or protocol failure while talking to an explorer."""

    def __init__(self, message: str, stage: str):
        super().__init__(message, stage=stage)
