"""Command line for copying contract verification between block explorers.

Example:
    verification-migrator 0xE592427A0AEce92De3Edee1F18E0157C05861564 \\
        --source-url etherscan --source-api-key $ETHERSCAN_API_KEY \\
        --target-url https://eth.blockscout.com/api --progress
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from verification_migrator import __version__
from verification_migrator.config.explorers import EXPLORERS, get_explorer_web_url, resolve_explorer
from verification_migrator.config.logging_config import get_migrator_logger
from verification_migrator.config.settings import ContractNamePolicy, MigrationSettings
from verification_migrator.helpers.progress import ConsoleProgress, ProgressReporter
from verification_migrator.helpers.tracing import configure_tracing
from verification_migrator.migration.orchestrator import BatchOrchestrator

logger = logging.getLogger(__name__)

# Environment variables tried for API keys not given on the command line.
SOURCE_KEY_ENV = ("SOURCE_API_KEY", "ETHERSCAN_API_KEY")
TARGET_KEY_ENV = ("TARGET_API_KEY",)


def read_addresses_file(path: str) -> list[str]:
    """One address per line; blank lines and ``#`` comments are skipped."""
    out: list[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.split("#", 1)[0].strip()
        if line:
            out.append(line)
    return out


def build_parser() -> argparse.ArgumentParser:
    presets = ", ".join(EXPLORERS)
    parser = argparse.ArgumentParser(
        prog="verification-migrator",
        description="Copy verified contract source code from one block explorer to another.",
    )
    parser.add_argument("addresses", nargs="*", help="Contract addresses to migrate")
    parser.add_argument("--addresses-file", help="File with one contract address per line")

    parser.add_argument("--source-url", required=True, help=f"Source explorer API URL or preset ({presets})")
    parser.add_argument("--source-api-key", help="Source explorer API key (env: SOURCE_API_KEY, ETHERSCAN_API_KEY)")
    parser.add_argument("--source-chain-id", type=int, help="chainid parameter for multi-chain source APIs")
    parser.add_argument("--target-url", required=True, help=f"Target explorer API URL or preset ({presets})")
    parser.add_argument("--target-api-key", help="Target explorer API key (env: TARGET_API_KEY)")
    parser.add_argument("--target-chain-id", type=int, help="chainid parameter for multi-chain target APIs")

    parser.add_argument("--progress", action="store_true", help="Show per-contract progress on stderr")
    parser.add_argument(
        "--contract-name-policy",
        choices=[p.value for p in ContractNamePolicy],
        help="Submit the contract name as <Name>.sol:<Name> (qualified) or <Name> (plain)",
    )
    parser.add_argument("--max-workers", type=int, help="Cap on contracts migrated in parallel (default: all)")
    parser.add_argument("--poll-interval", type=float, help="Seconds between status checks (default: 10)")
    parser.add_argument("--max-poll-attempts", type=int, help="Status checks before giving up (default: 10)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    parser.add_argument("--trace", action="store_true", help="Emit OpenTelemetry spans per stage")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_results(results, as_json: bool = False, web_url=None) -> None:
    if as_json:
        print(json.dumps([r.to_dict() for r in results], indent=2))
        return
    for r in results:
        mark = "OK  " if r.ok else "FAIL"
        line = f"{mark} {r.address} - {r.describe()}"
        if r.ok and web_url:
            line += f" ({web_url}/address/{r.address}#code)"
        print(line)


def main(argv=None) -> int:
    # Load environment variables from .env if present so keys work out of the box.
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    get_migrator_logger(debug=args.debug, file_logging=not args.no_log_file)

    addresses = list(args.addresses)
    if args.addresses_file:
        try:
            from_file = read_addresses_file(args.addresses_file)
        except OSError as e:
            parser.error(f"cannot read addresses file: {e}")
        logger.info("Loaded %d address(es) from %s", len(from_file), args.addresses_file)
        addresses.extend(from_file)
    if not addresses:
        parser.error("no contract addresses given")

    if args.trace:
        configure_tracing(enabled=True)

    try:
        settings = MigrationSettings.from_env(
            poll_interval_s=args.poll_interval,
            max_poll_attempts=args.max_poll_attempts,
            max_workers=args.max_workers,
            contract_name_policy=args.contract_name_policy,
        )
        source = resolve_explorer(
            args.source_url, args.source_api_key, chain_id=args.source_chain_id, key_env=SOURCE_KEY_ENV,
        )
        target = resolve_explorer(
            args.target_url, args.target_api_key, chain_id=args.target_chain_id, key_env=TARGET_KEY_ENV,
        )
    except ValueError as e:
        parser.error(str(e))

    progress = ConsoleProgress() if args.progress else ProgressReporter()
    results = BatchOrchestrator(source, target, settings, progress=progress).migrate_all(addresses)
    print_results(results, as_json=args.json, web_url=get_explorer_web_url(args.target_url))

    return 0 if all(r.ok for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
