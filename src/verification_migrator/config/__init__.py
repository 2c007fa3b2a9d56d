"""
Configuration package for the Verification Migrator.

Explorer endpoints, batch settings and logging setup.
"""

from verification_migrator.config.explorers import (
    EXPLORERS,
    ExplorerConfig,
    get_explorer_preset,
    get_explorer_web_url,
    resolve_explorer,
)

from verification_migrator.config.settings import (
    DEFAULT_MAX_POLL_ATTEMPTS,
    DEFAULT_POLL_INTERVAL_S,
    DEFAULT_REQUEST_TIMEOUT_S,
    ContractNamePolicy,
    MigrationSettings,
)

__all__ = [
    # Explorers
    'EXPLORERS',
    'ExplorerConfig',
    'get_explorer_preset',
    'get_explorer_web_url',
    'resolve_explorer',

    # Settings
    'DEFAULT_MAX_POLL_ATTEMPTS',
    'DEFAULT_POLL_INTERVAL_S',
    'DEFAULT_REQUEST_TIMEOUT_S',
    'ContractNamePolicy',
    'MigrationSettings',
]
