"""Contract verification migration: conversion, submission, polling, batching."""

from verification_migrator.migration.errors import (
    ConversionError,
    FetchError,
    MigrationError,
    PollError,
    SubmissionError,
    TransportError,
)
from verification_migrator.migration.types import (
    AlreadyVerified,
    MigrationResult,
    Rejected,
    SingleFile,
    SourceMetadata,
    SourcesMap,
    StandardJsonInput,
    Submitted,
    VerificationOutcome,
    VerificationRequest,
    VerificationStatus,
    parse_address,
)
from verification_migrator.migration.converter import convert, normalize_compiler_version
from verification_migrator.migration.submitter import submit
from verification_migrator.migration.poller import VerificationStatusPoller
from verification_migrator.migration.pipeline import ContractMigrationPipeline
from verification_migrator.migration.orchestrator import BatchOrchestrator, migrate_all

__all__ = [
    'ConversionError',
    'FetchError',
    'MigrationError',
    'PollError',
    'SubmissionError',
    'TransportError',
    'AlreadyVerified',
    'MigrationResult',
    'Rejected',
    'SingleFile',
    'SourceMetadata',
    'SourcesMap',
    'StandardJsonInput',
    'Submitted',
    'VerificationOutcome',
    'VerificationRequest',
    'VerificationStatus',
    'parse_address',
    'convert',
    'normalize_compiler_version',
    'submit',
    'VerificationStatusPoller',
    'ContractMigrationPipeline',
    'BatchOrchestrator',
    'migrate_all',
]
