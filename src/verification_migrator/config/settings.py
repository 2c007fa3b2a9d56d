"""Runtime settings for a migration batch."""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional


DEFAULT_POLL_INTERVAL_S: float = 10.0
DEFAULT_MAX_POLL_ATTEMPTS: int = 10
DEFAULT_REQUEST_TIMEOUT_S: float = 30.0


class ContractNamePolicy(str, Enum):
    """How the contract name is presented to the target explorer."""

    QUALIFIED = "qualified"  # <Name>.sol:<Name>
    PLAIN = "plain"          # <Name>


@dataclass(frozen=True)
class MigrationSettings:
    poll_interval_s: float = DEFAULT_POLL_INTERVAL_S
    max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS
    max_workers: Optional[int] = None
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    contract_name_policy: ContractNamePolicy = ContractNamePolicy.QUALIFIED

    def __post_init__(self):
        if self.max_poll_attempts < 1:
            raise ValueError("max_poll_attempts must be >= 1")
        if self.poll_interval_s < 0:
            raise ValueError("poll_interval_s must be >= 0")
        if self.request_timeout_s <= 0:
            raise ValueError("request_timeout_s must be > 0")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        # Accept plain strings for the policy.
        object.__setattr__(self, "contract_name_policy", ContractNamePolicy(self.contract_name_policy))

    @classmethod
    def from_env(cls, **overrides) -> "MigrationSettings":
        """Build settings from MIGRATOR_* environment variables.

        Keyword overrides that are not None take precedence over the
        environment.

        Raises:
            ValueError: If an environment variable holds an invalid value.
        """
        values = {
            "poll_interval_s": _env_number("MIGRATOR_POLL_INTERVAL", float, DEFAULT_POLL_INTERVAL_S),
            "max_poll_attempts": _env_number("MIGRATOR_MAX_POLL_ATTEMPTS", int, DEFAULT_MAX_POLL_ATTEMPTS),
            "max_workers": _env_number("MIGRATOR_MAX_WORKERS", int, None),
            "request_timeout_s": _env_number("MIGRATOR_REQUEST_TIMEOUT", float, DEFAULT_REQUEST_TIMEOUT_S),
            "contract_name_policy": os.getenv("MIGRATOR_CONTRACT_NAME_POLICY", ContractNamePolicy.QUALIFIED.value),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _env_number(name: str, cast, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from None
