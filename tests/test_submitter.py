"""Tests for verification submission and response classification."""

import pytest

from fakes import ADDRESS, FakeExplorerClient, make_metadata
from verification_migrator.helpers.explorer_api import SubmissionResponse
from verification_migrator.migration.converter import convert
from verification_migrator.migration.errors import SubmissionError, TransportError
from verification_migrator.migration.submitter import classify_submission, submit
from verification_migrator.migration.types import AlreadyVerified, Rejected, Submitted


@pytest.fixture
def request_():
    return convert(ADDRESS, make_metadata())


class TestClassifySubmission:
    def test_ok_with_guid(self):
        assert classify_submission("OK", "abc123") == Submitted("abc123")

    @pytest.mark.parametrize("result", [
        "Contract source code already verified",
        "ALREADY VERIFIED",
        "Smart-contract already verified.",
    ])
    def test_already_verified_any_case(self, result):
        assert classify_submission("NOTOK", result) == AlreadyVerified()

    def test_other_failure_rejected(self):
        assert classify_submission("NOTOK", "Invalid constructor arguments") == Rejected("Invalid constructor arguments")

    def test_ok_without_guid_rejected(self):
        assert isinstance(classify_submission("OK", ""), Rejected)


class TestSubmit:
    def test_submitted(self, request_):
        client = FakeExplorerClient()
        assert submit(request_, client) == Submitted("guid-123")
        assert client.submit_calls == [request_]

    def test_already_verified(self, request_):
        client = FakeExplorerClient(
            submit_response=SubmissionResponse("0", "NOTOK", "Contract source code already verified"),
        )
        assert submit(request_, client) == AlreadyVerified()

    def test_rejected_raises(self, request_):
        client = FakeExplorerClient(submit_response=SubmissionResponse("0", "NOTOK", "Invalid API Key"))
        with pytest.raises(SubmissionError, match="Invalid API Key") as exc_info:
            submit(request_, client)
        assert exc_info.value.stage == "submit"

    def test_transport_error_propagates(self, request_):
        client = FakeExplorerClient(submit_response=TransportError("connection reset", "submit"))
        with pytest.raises(TransportError):
            submit(request_, client)
        assert len(client.submit_calls) == 1
