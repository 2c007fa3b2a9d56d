import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import requests

from verification_migrator.config.explorers import ExplorerConfig
from verification_migrator.config.settings import DEFAULT_REQUEST_TIMEOUT_S
from verification_migrator.migration.errors import (
    STAGE_FETCH,
    STAGE_POLL,
    STAGE_SUBMIT,
    FetchError,
    TransportError,
)
from verification_migrator.migration.types import (
    SingleFile,
    SourceEncoding,
    SourceMetadata,
    SourcesMap,
    StandardJsonInput,
    VerificationRequest,
)

USER_AGENT = "verification-migrator/1.0"

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionResponse:
    status: str
    message: str
    result: str


@dataclass(frozen=True)
class StatusReport:
    status: str
    message: str
    result: Optional[str]


# ---------- source decoding ----------

def decode_source_code(source_code: str) -> SourceEncoding:
    """Classify the explorer's ``SourceCode`` field into a source encoding.

    Etherscan wraps standard-json input in an extra pair of braces
    (``{{ ... }}``); a plain JSON object is either a standard-json document
    (has ``sources``) or a bare ``path -> {content}`` map. Anything that does
    not parse is a flattened single file.
    """
    text = (source_code or "").strip()
    candidate = text
    if text.startswith("{{") and text.endswith("}}"):
        candidate = text[1:-1].strip()

    if candidate.startswith("{"):
        try:
            data = json.loads(candidate)
        except ValueError:
            data = None
        if isinstance(data, dict) and data:
            if isinstance(data.get("sources"), dict):
                return StandardJsonInput(data)
            files: dict[str, str] = {}
            for path, entry in data.items():
                if isinstance(entry, dict) and "content" in entry:
                    files[str(path)] = str(entry.get("content") or "")
                elif isinstance(entry, str):
                    files[str(path)] = entry
                else:
                    files = {}
                    break
            if files:
                return SourcesMap(files)

    return SingleFile(source_code)


def _parse_int(value: Any, field: str) -> int:
    try:
        return int(str(value).strip() or 0)
    except ValueError:
        raise FetchError(f"Unexpected {field} value: {value!r}") from None


def _parse_hex(value: Any) -> bytes:
    text = str(value or "").strip()
    if text.startswith(("0x", "0X")):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError:
        raise FetchError(f"Constructor arguments are not hex: {value!r}") from None


def parse_source_record(record: dict[str, Any]) -> SourceMetadata:
    """Build SourceMetadata from one ``getsourcecode`` result record."""
    source_code = str(record.get("SourceCode") or "")
    abi = str(record.get("ABI") or "")
    if not source_code.strip() or "not verified" in abi.lower():
        raise FetchError("Contract source code not verified on source explorer")

    return SourceMetadata(
        contract_name=str(record.get("ContractName") or "").strip(),
        compiler_version=str(record.get("CompilerVersion") or "").strip(),
        evm_version=str(record.get("EVMVersion") or "").strip(),
        optimization_used=_parse_int(record.get("OptimizationUsed"), "OptimizationUsed"),
        runs=_parse_int(record.get("Runs"), "Runs"),
        constructor_arguments=_parse_hex(record.get("ConstructorArguments")),
        source=decode_source_code(source_code),
    )


def _text(value: Any) -> str:
    # Some explorers send status as a JSON number; 0 must stay "0".
    return "" if value is None else str(value).strip()


class ExplorerClient:
    """Minimal client for the Etherscan-compatible ``module=contract`` API."""

    def __init__(
        self,
        config: ExplorerConfig,
        timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S,
        session: Optional[requests.Session] = None,
    ):
        self.config = config
        self.timeout_s = timeout_s
        self.session = session or requests.Session()
        self.session.headers["User-Agent"] = USER_AGENT

    # ---------- helpers ----------

    def _params(self, **params: str) -> dict[str, str]:
        qp = {"module": "contract", **params}
        if self.config.api_key:
            qp["apikey"] = self.config.api_key
        if self.config.chain_id:
            qp["chainid"] = str(self.config.chain_id)
        return qp

    def _request(self, stage: str, method: str, **kwargs) -> dict[str, Any]:
        try:
            response = self.session.request(method, self.config.api_url, timeout=self.timeout_s, **kwargs)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.JSONDecodeError as exc:
            raise TransportError(f"Invalid JSON from {self.config.api_url}: {exc}", stage) from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request to {self.config.api_url} failed: {exc}", stage) from exc

        if not isinstance(data, dict):
            raise TransportError(f"Unexpected response from {self.config.api_url}: {data!r}", stage)
        return data

    # ---------- core ----------

    def fetch_source_metadata(self, address: str) -> SourceMetadata:
        logger.debug("getsourcecode %s from %s", address, self.config.api_url)
        data = self._request(STAGE_FETCH, "GET", params=self._params(action="getsourcecode", address=address))
        result = data.get("result")
        if not isinstance(result, list) or not result or not isinstance(result[0], dict):
            reason = result if isinstance(result, str) and result else data.get("message") or "no source record"
            raise FetchError(f"Source explorer returned no contract for {address}: {reason}")
        return parse_source_record(result[0])

    def submit_verification(self, request: VerificationRequest) -> SubmissionResponse:
        form = self._params(
            action="verifysourcecode",
            contractaddress=request.address,
            sourceCode=request.source,
            codeformat=request.code_format,
            contractname=request.contract_name,
            compilerversion=request.compiler_version,
            optimizationUsed=str(request.optimization_used),
            runs=str(request.runs),
            evmversion=request.evm_version,
            # Etherscan's historic spelling and Blockscout's corrected one.
            constructorArguements=request.constructor_arguments,
            constructorArguments=request.constructor_arguments,
        )
        logger.debug("verifysourcecode %s as %s to %s", request.address, request.contract_name, self.config.api_url)
        data = self._request(STAGE_SUBMIT, "POST", data=form)
        return SubmissionResponse(
            status=_text(data.get("status")),
            message=_text(data.get("message")),
            result=_text(data.get("result")),
        )

    def check_verification_status(self, guid: str) -> StatusReport:
        data = self._request(STAGE_POLL, "GET", params=self._params(action="checkverifystatus", guid=guid))
        result = data.get("result")
        return StatusReport(
            status=_text(data.get("status")),
            message=_text(data.get("message")),
            result=None if result is None else str(result),
        )

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
