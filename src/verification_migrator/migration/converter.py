"""
Turn explorer source metadata into a target-explorer verification request.

Every submission uses the solidity-standard-json-input code format, since
some explorers (Blockscout among them) do not accept single-file sources
through the API. Each source encoding has its own conversion function:

- SingleFile: wrapped into a one-file standard-json document whose settings
  carry the optimizer and EVM version from the metadata.
- StandardJsonInput: passed through unchanged.
- SourcesMap: the file map is serialized as the document's ``sources``; no
  compiler settings are synthesized for it.
"""

import json
import logging
import posixpath
from typing import Any

from verification_migrator.config.settings import ContractNamePolicy
from verification_migrator.migration.errors import ConversionError
from verification_migrator.migration.types import (
    VERSION_MARKER,
    SingleFile,
    SourceMetadata,
    SourcesMap,
    StandardJsonInput,
    VerificationRequest,
    parse_address,
)

logger = logging.getLogger(__name__)


def normalize_compiler_version(version: str) -> str:
    """Prefix the version marker if it is missing (explorers sometimes drop it)."""
    version = (version or "").strip()
    if version.startswith(VERSION_MARKER):
        return version
    return VERSION_MARKER + version


def qualify_contract_name(name: str, policy: ContractNamePolicy, source_paths=()) -> str:
    """Return the contract name as the target explorer should see it.

    With the qualified policy the name becomes ``<file>.sol:<Name>``. When one
    of ``source_paths`` is a file named ``<Name>.sol`` that path is used as the
    file part, otherwise ``<Name>.sol``.
    """
    if ContractNamePolicy(policy) is ContractNamePolicy.PLAIN or ":" in name:
        return name
    file_name = f"{name}.sol"
    for path in source_paths:
        if posixpath.basename(path) == file_name:
            return f"{path}:{name}"
    return f"{file_name}:{name}"


def single_file_document(contract_key: str, metadata: SourceMetadata, content: str) -> dict[str, Any]:
    return {
        "language": "Solidity",
        "sources": {contract_key: {"content": content}},
        "settings": {
            "evm_version": metadata.evm_version,
            "libraries": {},
            "optimizer": {
                "enabled": metadata.optimizer_enabled,
                "runs": metadata.runs,
            },
            "remappings": [],
        },
    }


def sources_map_document(files: dict[str, str]) -> dict[str, Any]:
    return {
        "language": "Solidity",
        "sources": {path: {"content": content} for path, content in files.items()},
    }


def _source_paths(metadata: SourceMetadata) -> list[str]:
    source = metadata.source
    if isinstance(source, StandardJsonInput):
        sources = source.raw.get("sources")
        return list(sources) if isinstance(sources, dict) else []
    if isinstance(source, SourcesMap):
        return list(source.files)
    return []


def _serialize(document: Any) -> str:
    try:
        return json.dumps(document, ensure_ascii=False)
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"Cannot serialize source document: {exc}") from exc


def convert(
    address: str,
    metadata: SourceMetadata,
    name_policy: ContractNamePolicy = ContractNamePolicy.QUALIFIED,
) -> VerificationRequest:
    """Build the verification request for one contract.

    Raises:
        ConversionError: On an invalid address, an unknown source encoding or
            a document that cannot be serialized.
    """
    checksum_address = parse_address(address)
    contract_name = qualify_contract_name(metadata.contract_name, name_policy, _source_paths(metadata))

    source = metadata.source
    if isinstance(source, SingleFile):
        document = single_file_document(contract_name, metadata, source.content)
    elif isinstance(source, StandardJsonInput):
        document = source.raw
    elif isinstance(source, SourcesMap):
        document = sources_map_document(source.files)
    else:
        raise ConversionError(f"Unsupported source encoding: {type(source).__name__}")

    request = VerificationRequest(
        address=checksum_address,
        contract_name=contract_name,
        compiler_version=normalize_compiler_version(metadata.compiler_version),
        optimization_used=metadata.optimization_used,
        runs=metadata.runs,
        evm_version=metadata.evm_version,
        constructor_arguments=metadata.constructor_arguments.hex(),
        source=_serialize(document),
    )
    logger.debug(
        "Converted %s (%s) as %s, compiler %s",
        checksum_address, type(source).__name__, contract_name, request.compiler_version,
    )
    return request
