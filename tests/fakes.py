"""Fake explorer clients and sample source metadata for the test suite."""

import time

from verification_migrator.helpers.explorer_api import StatusReport, SubmissionResponse
from verification_migrator.migration.types import SingleFile, SourceMetadata


ADDRESS = "0x7c07f7abe10ce8e33dc6c5ad68fe033085256a84"
OTHER_ADDRESS = "0xe592427a0aece92de3edee1f18e0157c05861564"

TOKEN_SOURCE = (
    "// SPDX-License-Identifier: MIT\n"
    "pragma solidity ^0.8.19;\n\n"
    "contract Token {\n"
    "    string public name = \"Tökén\";\n"
    "}\n"
)

PENDING = StatusReport(status="0", message="NOTOK", result="Pending in queue")
PASSED = StatusReport(status="1", message="OK", result="Pass - Verified")
SUBMITTED = SubmissionResponse(status="1", message="OK", result="guid-123")


def make_metadata(source=None, **overrides) -> SourceMetadata:
    values = {
        "contract_name": "Token",
        "compiler_version": "0.8.19+commit.7dd6d404",
        "evm_version": "paris",
        "optimization_used": 1,
        "runs": 200,
        "constructor_arguments": bytes.fromhex("00" * 12 + "ab" * 20),
        "source": source if source is not None else SingleFile(TOKEN_SOURCE),
    }
    values.update(overrides)
    return SourceMetadata(**values)


class FakeExplorerClient:
    """Stands in for ExplorerClient; records every call.

    ``metadata`` may be a SourceMetadata, an exception to raise, or a dict
    keyed by lowercase address. The last status response repeats once the
    list is exhausted. Exceptions in the response lists are raised.
    """

    def __init__(self, metadata=None, submit_response=SUBMITTED, status_responses=(PASSED,), fetch_delay=None):
        self.metadata = metadata if metadata is not None else make_metadata()
        self.submit_response = submit_response
        self.status_responses = list(status_responses)
        self.fetch_delay = fetch_delay or {}
        self.fetch_calls = []
        self.submit_calls = []
        self.status_calls = []
        self.closed = False

    def fetch_source_metadata(self, address):
        self.fetch_calls.append(address)
        delay = self.fetch_delay.get(address.lower())
        if delay:
            time.sleep(delay)
        metadata = self.metadata
        if isinstance(metadata, dict):
            metadata = metadata[address.lower()]
        if isinstance(metadata, Exception):
            raise metadata
        return metadata

    def submit_verification(self, request):
        self.submit_calls.append(request)
        if isinstance(self.submit_response, Exception):
            raise self.submit_response
        return self.submit_response

    def check_verification_status(self, guid):
        self.status_calls.append(guid)
        index = min(len(self.status_calls), len(self.status_responses)) - 1
        response = self.status_responses[index]
        if isinstance(response, Exception):
            raise response
        return response

    def close(self):
        self.closed = True


