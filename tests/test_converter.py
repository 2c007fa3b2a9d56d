"""Tests for converting explorer metadata into verification requests."""

import json

import pytest

from fakes import ADDRESS, TOKEN_SOURCE, make_metadata
from verification_migrator.config.settings import ContractNamePolicy
from verification_migrator.migration.converter import (
    convert,
    normalize_compiler_version,
    qualify_contract_name,
)
from verification_migrator.migration.errors import ConversionError
from verification_migrator.migration.types import SingleFile, SourcesMap, StandardJsonInput


STANDARD_JSON = {
    "language": "Solidity",
    "sources": {
        "contracts/Token.sol": {"content": "contract Token {}"},
        "contracts/lib/Math.sol": {"content": "library Math {}"},
    },
    "settings": {"optimizer": {"enabled": True, "runs": 1000000}, "evmVersion": "istanbul"},
}


class TestSingleFile:
    def test_source_keyed_by_qualified_name(self, metadata):
        request = convert(ADDRESS, metadata)
        document = json.loads(request.source)

        assert request.contract_name == "Token.sol:Token"
        assert list(document["sources"]) == ["Token.sol:Token"]
        assert document["sources"]["Token.sol:Token"]["content"] == TOKEN_SOURCE

    def test_plain_policy_keeps_bare_name(self, metadata):
        request = convert(ADDRESS, metadata, ContractNamePolicy.PLAIN)
        document = json.loads(request.source)

        assert request.contract_name == "Token"
        assert list(document["sources"]) == ["Token"]

    def test_settings_block(self, metadata):
        document = json.loads(convert(ADDRESS, metadata).source)

        assert document["language"] == "Solidity"
        assert document["settings"] == {
            "evm_version": "paris",
            "libraries": {},
            "optimizer": {"enabled": True, "runs": 200},
            "remappings": [],
        }

    def test_optimizer_disabled(self):
        metadata = make_metadata(optimization_used=0, runs=0)
        request = convert(ADDRESS, metadata)

        assert json.loads(request.source)["settings"]["optimizer"] == {"enabled": False, "runs": 0}
        assert request.optimization_used == 0

    @pytest.mark.parametrize("content", ["", "contract A {}", "// ünïcødé \r\n\tcontract B {}\n", "{not json"])
    def test_content_preserved_exactly(self, content):
        request = convert(ADDRESS, make_metadata(source=SingleFile(content)))
        assert json.loads(request.source)["sources"]["Token.sol:Token"]["content"] == content

    def test_request_fields(self, metadata):
        request = convert(ADDRESS, metadata)

        assert request.address == "0x7C07F7aBe10CE8e33DC6C5aD68FE033085256A84"
        assert request.compiler_version == "v0.8.19+commit.7dd6d404"
        assert request.constructor_arguments == "00" * 12 + "ab" * 20
        assert request.runs == 200
        assert request.evm_version == "paris"
        assert request.code_format == "solidity-standard-json-input"


class TestStandardJsonInput:
    def test_document_passed_through(self):
        request = convert(ADDRESS, make_metadata(source=StandardJsonInput(STANDARD_JSON)))
        assert json.loads(request.source) == STANDARD_JSON

    def test_name_qualified_with_matching_path(self):
        request = convert(ADDRESS, make_metadata(source=StandardJsonInput(STANDARD_JSON)))
        assert request.contract_name == "contracts/Token.sol:Token"


class TestSourcesMap:
    def test_files_serialized_as_sources_without_settings(self):
        files = {"src/Token.sol": "contract Token {}", "src/Base.sol": "contract Base {}"}
        request = convert(ADDRESS, make_metadata(source=SourcesMap(files)))
        document = json.loads(request.source)

        assert document == {
            "language": "Solidity",
            "sources": {
                "src/Token.sol": {"content": "contract Token {}"},
                "src/Base.sol": {"content": "contract Base {}"},
            },
        }
        assert request.contract_name == "src/Token.sol:Token"

    def test_name_falls_back_when_no_file_matches(self):
        request = convert(ADDRESS, make_metadata(source=SourcesMap({"a.sol": "contract X {}"})))
        assert request.contract_name == "Token.sol:Token"


class TestCompilerVersion:
    @pytest.mark.parametrize("version", [
        "0.8.19+commit.7dd6d404",
        "v0.8.19+commit.7dd6d404",
        "0.4.24",
        " 0.5.0 ",
        "",
    ])
    def test_normalize_is_idempotent_and_marked(self, version):
        once = normalize_compiler_version(version)
        assert once.startswith("v")
        assert normalize_compiler_version(once) == once

    def test_marked_version_unchanged(self):
        assert normalize_compiler_version("v0.8.19+commit.7dd6d404") == "v0.8.19+commit.7dd6d404"


class TestContractName:
    def test_already_qualified_name_kept(self):
        assert qualify_contract_name("a/B.sol:B", ContractNamePolicy.QUALIFIED) == "a/B.sol:B"

    def test_policy_accepts_string(self):
        assert qualify_contract_name("Token", "plain") == "Token"


class TestErrors:
    def test_invalid_address(self, metadata):
        with pytest.raises(ConversionError) as exc_info:
            convert("0x1234", metadata)
        assert exc_info.value.stage == "convert"

    def test_unknown_encoding(self):
        with pytest.raises(ConversionError):
            convert(ADDRESS, make_metadata(source=object()))

    def test_unserializable_document(self):
        source = StandardJsonInput({"sources": {"A.sol": {"content": b"raw bytes"}}})
        with pytest.raises(ConversionError):
            convert(ADDRESS, make_metadata(source=source))
