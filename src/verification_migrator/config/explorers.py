"""
Explorer configuration for the Verification Migrator.

Contains API endpoints for the supported block explorers. Any explorer that
speaks the Etherscan-compatible ``module=contract`` API can also be given as
a raw URL.
"""

import os
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union


# =============================================================================
# EXPLORER PRESETS
# =============================================================================

EXPLORERS: dict[str, dict[str, Any]] = {
    "etherscan": {
        "name": "Etherscan",
        "url": "https://etherscan.io",
        "api_url": "https://api.etherscan.io/api",
        "api_key_env": "ETHERSCAN_API_KEY",
    },
    "blockscout": {
        "name": "Blockscout (Ethereum)",
        "url": "https://eth.blockscout.com",
        "api_url": "https://eth.blockscout.com/api",
        "api_key_env": "BLOCKSCOUT_API_KEY",
    },
    "gnosisscan": {
        "name": "Gnosisscan",
        "url": "https://gnosisscan.io",
        "api_url": "https://api.gnosisscan.io/api",
        "api_key_env": "GNOSISSCAN_API_KEY",
    },
    "gnosis-blockscout": {
        "name": "Blockscout (Gnosis)",
        "url": "https://gnosis.blockscout.com",
        "api_url": "https://gnosis.blockscout.com/api",
        "api_key_env": "BLOCKSCOUT_API_KEY",
    },
    "basescan": {
        "name": "Basescan",
        "url": "https://basescan.org",
        "api_url": "https://api.basescan.org/api",
        "api_key_env": "BASESCAN_API_KEY",
    },
    "base-blockscout": {
        "name": "Blockscout (Base)",
        "url": "https://base.blockscout.com",
        "api_url": "https://base.blockscout.com/api",
        "api_key_env": "BLOCKSCOUT_API_KEY",
    },
}


@dataclass(frozen=True)
class ExplorerConfig:
    """Connection details for one Etherscan-compatible explorer API."""

    api_url: str
    api_key: str = ""
    name: str = ""
    chain_id: Optional[int] = None

    def __repr__(self) -> str:
        # Keep API keys out of logs and tracebacks.
        return f"ExplorerConfig(name={self.name!r}, api_url={self.api_url!r}, chain_id={self.chain_id!r})"


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def get_explorer_preset(name: str) -> dict[str, Any]:
    """Get the preset for a named explorer.

    Raises:
        ValueError: If the explorer is not known.
    """
    key = name.strip().lower()
    if key not in EXPLORERS:
        raise ValueError(f"Unsupported explorer: {name}. Supported: {list(EXPLORERS.keys())}")
    return EXPLORERS[key]


def resolve_explorer(
    url_or_name: str,
    api_key: Optional[str] = None,
    chain_id: Optional[int] = None,
    key_env: Union[str, Sequence[str], None] = None,
) -> ExplorerConfig:
    """Build an ExplorerConfig from a preset name or a raw API URL.

    The API key falls back to the ``key_env`` variable(s), in order, and then
    to the preset's own environment variable when it is not given explicitly.
    """
    value = (url_or_name or "").strip()
    if not value:
        raise ValueError("Explorer URL or preset name is required")

    if value.startswith(("http://", "https://")):
        api_url = value
        name = value
        preset_env = None
    else:
        preset = get_explorer_preset(value)
        api_url = preset["api_url"]
        name = preset["name"]
        preset_env = preset.get("api_key_env")

    env_names = [key_env] if isinstance(key_env, str) else list(key_env or ())
    if not api_key:
        for env_name in env_names + [preset_env]:
            if env_name and os.getenv(env_name):
                api_key = os.getenv(env_name)
                break

    return ExplorerConfig(
        api_url=api_url,
        api_key=(api_key or "").strip(),
        name=name,
        chain_id=chain_id,
    )


def get_explorer_web_url(url_or_name: str) -> Optional[str]:
    """Get the human-facing explorer URL for a preset, if known."""
    preset = EXPLORERS.get((url_or_name or "").strip().lower())
    return preset["url"] if preset else None
