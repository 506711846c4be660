"""Tests for the vc-build command line."""

import json

import pytest
import respx
from click.testing import CliRunner
from httpx import Response

from vc_builder.cli import main


@pytest.fixture
def fields():
    return {
        "@context": ["https://www.w3.org/2018/credentials/v1"],
        "id": "urn:uuid:test-123",
        "type": ["VerifiableCredential"],
        "issuer": "did:web:example.com",
        "issuanceDate": "2025-01-01T00:00:00.250Z",
        "credentialSubject": {"id": "did:example:holder", "name": "Test User"},
        "proof": {
            "type": "DataIntegrityProof",
            "cryptosuite": "ecdsa-jcs-2022",
            "verificationMethod": "did:web:example.com#key-1",
            "proofPurpose": "assertionMethod",
            "proofValue": "z3FXQjecWufY46",
        },
    }


@pytest.fixture
def fields_file(tmp_path, fields):
    path = tmp_path / "fields.json"
    path.write_text(json.dumps(fields))
    return path


class TestCLI:
    """Tests for vc-build."""

    def test_canonical_output(self, fields_file):
        """Test canonical output from a file."""
        result = CliRunner().invoke(main, [str(fields_file), "--canonical"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["issuanceDate"] == "2025-01-01T00:00:00Z"
        assert data["credentialSubject"] == [{"id": "did:example:holder", "name": "Test User"}]
        assert data["proof"]["cryptosuite"] == "ecdsa-jcs-2022"

    def test_no_proof(self, fields_file):
        """Test stripping the proof."""
        result = CliRunner().invoke(main, [str(fields_file), "--canonical", "--no-proof"])

        assert result.exit_code == 0
        assert "proof" not in json.loads(result.output)

    def test_expiration_override(self, fields_file):
        """Test setting expirationDate from the command line."""
        result = CliRunner().invoke(
            main, [str(fields_file), "--canonical", "--expiration-date", "2030-01-01"]
        )

        assert result.exit_code == 0
        assert json.loads(result.output)["expirationDate"] == "2030-01-01T00:00:00Z"

    def test_stdin(self, fields):
        """Test reading fields from stdin."""
        result = CliRunner().invoke(main, ["-", "--canonical"], input=json.dumps(fields))

        assert result.exit_code == 0
        assert json.loads(result.output)["id"] == "urn:uuid:test-123"

    @respx.mock
    def test_url(self, fields):
        """Test fetching fields from a URL."""
        respx.get("https://example.com/credentials/123").mock(
            return_value=Response(200, json=fields)
        )

        result = CliRunner().invoke(main, ["https://example.com/credentials/123", "--canonical"])

        assert result.exit_code == 0
        assert json.loads(result.output)["issuer"] == "did:web:example.com"

    @respx.mock
    def test_url_http_error(self):
        """Test an HTTP failure exits with code 2."""
        respx.get("https://example.com/credentials/404").mock(return_value=Response(404))

        result = CliRunner().invoke(main, ["https://example.com/credentials/404"])

        assert result.exit_code == 2
        assert "HTTP error" in result.output

    def test_summary(self, fields_file):
        """Test the default summary panel."""
        result = CliRunner().invoke(main, [str(fields_file)])

        assert result.exit_code == 0
        assert "urn:uuid:test-123" in result.output
        assert "ecdsa-jcs-2022" in result.output

    def test_missing_field(self, tmp_path, fields):
        """Test a missing mandatory field exits with code 2."""
        del fields["issuer"]
        path = tmp_path / "fields.json"
        path.write_text(json.dumps(fields))

        result = CliRunner().invoke(main, [str(path), "--json-output"])

        assert result.exit_code == 2
        assert "issuer" in result.output

    def test_invalid_json(self):
        """Test invalid JSON input exits with code 2."""
        result = CliRunner().invoke(main, ["-"], input="{not json")

        assert result.exit_code == 2
        assert "Invalid JSON" in result.output

    def test_file_not_found(self, tmp_path):
        """Test a missing file is reported."""
        result = CliRunner().invoke(main, [str(tmp_path / "missing.json")])

        assert result.exit_code == 2
        assert "File not found" in result.output

    def test_numeric_issuance_date(self, tmp_path, fields):
        """Test a non-text issuanceDate exits with code 2."""
        fields["issuanceDate"] = 1704067200
        path = tmp_path / "fields.json"
        path.write_text(json.dumps(fields))

        result = CliRunner().invoke(main, [str(path)])

        assert result.exit_code == 2
        assert "Invalid date-time" in result.output

    def test_non_object_status_attached(self, tmp_path, fields):
        """Test a status array of URLs is attached and summarized."""
        fields["credentialStatus"] = ["https://example.com/status/1"]
        path = tmp_path / "fields.json"
        path.write_text(json.dumps(fields))

        result = CliRunner().invoke(main, [str(path)])

        assert result.exit_code == 0
        assert "https://example.com/status/1" in result.output

    @pytest.mark.parametrize("extra_args", [[], ["--canonical"]])
    def test_unrecognized_status_entry(self, tmp_path, fields, extra_args):
        """Test an incomplete StatusList2021Entry is attached in every output mode."""
        fields["credentialStatus"] = {"type": "StatusList2021Entry"}
        path = tmp_path / "fields.json"
        path.write_text(json.dumps(fields))

        result = CliRunner().invoke(main, [str(path), *extra_args])

        assert result.exit_code == 0
        assert "StatusList2021Entry" in result.output
