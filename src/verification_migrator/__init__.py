"""
Copy verified contract source from one block explorer to another.

Both explorers must speak the Etherscan-compatible ``module=contract`` API.

    from verification_migrator import migrate_all, resolve_explorer

    results = migrate_all(
        ["0xE592427A0AEce92De3Edee1F18E0157C05861564"],
        resolve_explorer("etherscan", "<ETHERSCAN_API_KEY>"),
        resolve_explorer("blockscout", "<BLOCKSCOUT_API_KEY>"),
    )
"""

__version__ = "0.1.0"

from verification_migrator.config import ExplorerConfig, MigrationSettings, resolve_explorer
from verification_migrator.migration import MigrationResult, VerificationOutcome, migrate_all

__all__ = [
    'ExplorerConfig',
    'MigrationSettings',
    'resolve_explorer',
    'MigrationResult',
    'VerificationOutcome',
    'migrate_all',
]
