"""End-to-end tests for a single contract migration."""

import json

import pytest

from fakes import ADDRESS, PASSED, PENDING, FakeExplorerClient, make_metadata
from verification_migrator.config.settings import MigrationSettings
from verification_migrator.helpers.explorer_api import StatusReport, SubmissionResponse
from verification_migrator.migration.errors import (
    ConversionError,
    FetchError,
    SubmissionError,
    TransportError,
)
from verification_migrator.migration.pipeline import ContractMigrationPipeline, migrate
from verification_migrator.migration.types import VerificationStatus


def run(source, target, sleeps, address=ADDRESS, **settings):
    pipeline = ContractMigrationPipeline(source, target, MigrationSettings(**settings), sleep=sleeps.append)
    return pipeline.migrate(address)


def test_single_file_submitted_then_verified(sleeps):
    source = FakeExplorerClient(metadata=make_metadata(optimization_used=1, runs=200))
    target = FakeExplorerClient(status_responses=[PASSED])

    outcome = run(source, target, sleeps)

    assert outcome.status is VerificationStatus.SUCCESS
    assert len(target.submit_calls) == 1
    assert target.status_calls == ["guid-123"]
    settings = json.loads(target.submit_calls[0].source)["settings"]
    assert settings["optimizer"] == {"enabled": True, "runs": 200}


def test_already_verified_skips_polling(sleeps):
    target = FakeExplorerClient(
        submit_response=SubmissionResponse("0", "NOTOK", "Contract source code already verified"),
    )

    outcome = run(FakeExplorerClient(), target, sleeps)

    assert outcome.status is VerificationStatus.ALREADY_VERIFIED
    assert target.status_calls == []


def test_unable_to_verify_fails_after_first_poll(sleeps):
    target = FakeExplorerClient(
        status_responses=[StatusReport("0", "NOTOK", "Unable to verify: compiler mismatch"), PASSED],
    )

    outcome = run(FakeExplorerClient(), target, sleeps)

    assert outcome.status is VerificationStatus.FAILED
    assert not outcome.ok
    assert len(target.status_calls) == 1
    assert sleeps == []


def test_times_out(sleeps):
    target = FakeExplorerClient(status_responses=[PENDING])

    outcome = run(FakeExplorerClient(), target, sleeps, max_poll_attempts=4, poll_interval_s=1.0)

    assert outcome.status is VerificationStatus.TIMED_OUT
    assert len(target.status_calls) == 4


def test_fetch_error_stops_pipeline(sleeps):
    source = FakeExplorerClient(metadata=FetchError("Contract source code not verified"))
    target = FakeExplorerClient()

    with pytest.raises(FetchError) as exc_info:
        run(source, target, sleeps)

    assert exc_info.value.stage == "fetch"
    assert target.submit_calls == []


def test_transport_error_tagged_with_stage(sleeps):
    source = FakeExplorerClient(metadata=TransportError("connection refused", "fetch"))

    with pytest.raises(TransportError) as exc_info:
        run(source, FakeExplorerClient(), sleeps)

    assert exc_info.value.stage == "fetch"


def test_rejected_submission(sleeps):
    target = FakeExplorerClient(submit_response=SubmissionResponse("0", "NOTOK", "Invalid compiler version"))

    with pytest.raises(SubmissionError):
        run(FakeExplorerClient(), target, sleeps)

    assert target.status_calls == []


def test_malformed_address_never_fetches(sleeps):
    source = FakeExplorerClient()

    with pytest.raises(ConversionError):
        run(source, FakeExplorerClient(), sleeps, address="not-an-address")

    assert source.fetch_calls == []


def test_fetch_uses_checksum_address(sleeps):
    source = FakeExplorerClient()
    run(source, FakeExplorerClient(), sleeps)
    assert source.fetch_calls == ["0x7C07F7aBe10CE8e33DC6C5aD68FE033085256A84"]


def test_plain_name_policy(sleeps):
    target = FakeExplorerClient()
    run(FakeExplorerClient(), target, sleeps, contract_name_policy="plain")
    assert target.submit_calls[0].contract_name == "Token"


def test_module_level_migrate():
    target = FakeExplorerClient()
    assert migrate(ADDRESS, FakeExplorerClient(), target).ok
    assert len(target.status_calls) == 1
