"""Data model shared by the migration stages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from eth_typing import ChecksumAddress
from web3 import Web3

from verification_migrator.migration.errors import ConversionError, MigrationError


VERSION_MARKER = "v"


def parse_address(address: str) -> ChecksumAddress:
    """Validate a contract address and return its checksummed form.

    Raises:
        ConversionError: If the value is not a 20-byte hex address.
    """
    value = (address or "").strip()
    if not Web3.is_address(value):
        raise ConversionError(f"Invalid contract address: {address!r}")
    return Web3.to_checksum_address(value)


# ---------------------------------------------------------------------------
# Source encodings
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SingleFile:
    """One flattened source blob."""

    content: str


@dataclass(frozen=True)
class StandardJsonInput:
    """Source already in compiler standard-json-input shape."""

    raw: dict[str, Any]


@dataclass(frozen=True)
class SourcesMap:
    """Multiple named files not yet assembled into compiler input."""

    files: dict[str, str]


SourceEncoding = Union[SingleFile, StandardJsonInput, SourcesMap]


@dataclass(frozen=True)
class SourceMetadata:
    contract_name: str
    compiler_version: str
    evm_version: str
    optimization_used: int
    runs: int
    constructor_arguments: bytes
    source: SourceEncoding

    @property
    def optimizer_enabled(self) -> bool:
        return self.optimization_used == 1


@dataclass(frozen=True)
class VerificationRequest:
    """Payload for the target explorer's verifysourcecode endpoint."""

    address: ChecksumAddress
    contract_name: str
    compiler_version: str
    optimization_used: int
    runs: int
    evm_version: str
    constructor_arguments: str  # hex, no 0x prefix
    source: str  # standard-json-input text
    code_format: str = "solidity-standard-json-input"


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Submitted:
    guid: str


@dataclass(frozen=True)
class AlreadyVerified:
    pass


@dataclass(frozen=True)
class Rejected:
    reason: str


SubmissionOutcome = Union[Submitted, AlreadyVerified, Rejected]


class VerificationStatus(str, Enum):
    SUCCESS = "success"
    ALREADY_VERIFIED = "already_verified"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class VerificationOutcome:
    """Terminal result of one contract's migration."""

    status: VerificationStatus
    reason: Optional[str] = None

    @classmethod
    def success(cls) -> "VerificationOutcome":
        return cls(VerificationStatus.SUCCESS)

    @classmethod
    def already_verified(cls) -> "VerificationOutcome":
        return cls(VerificationStatus.ALREADY_VERIFIED)

    @classmethod
    def failed(cls, reason: str) -> "VerificationOutcome":
        return cls(VerificationStatus.FAILED, reason)

    @classmethod
    def timed_out(cls) -> "VerificationOutcome":
        return cls(VerificationStatus.TIMED_OUT, "verification timed out")

    @property
    def ok(self) -> bool:
        return self.status in (VerificationStatus.SUCCESS, VerificationStatus.ALREADY_VERIFIED)

    def __str__(self) -> str:
        label = self.status.value.replace("_", " ").capitalize()
        return f"{label}: {self.reason}" if self.reason else label


@dataclass(frozen=True)
class MigrationResult:
    """One batch entry: the outcome or the error for a single address."""

    address: str
    outcome: Optional[VerificationOutcome] = None
    error: Optional[MigrationError] = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.error is None and self.outcome is not None and self.outcome.ok

    def describe(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return str(self.outcome)

    def to_dict(self) -> dict[str, Any]:
        return {
            "address": self.address,
            "ok": self.ok,
            "status": self.outcome.status.value if self.outcome else "error",
            "reason": self.outcome.reason if self.outcome else None,
            "stage": self.error.stage if self.error else None,
            "error": self.error.message if self.error else None,
        }
