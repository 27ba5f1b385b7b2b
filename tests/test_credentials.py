"""
Test suite for EdgeGrid credential resolution

This module tests environment variable naming, edgerc parsing and the
environment-then-file resolution order.
"""

import os
import shutil
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from edgegrid_sdk.credentials import (
    EdgeGridCredentials,
    resolve_credentials,
    normalize_section,
    environment_variable_name,
    credentials_from_environment,
    parse_edgerc,
    read_edgerc,
    expand_user_path,
    merge_credential_values,
)
from edgegrid_sdk.exceptions import ConfigurationError, ErrorCodes


SAMPLE_EDGERC = """[default]
client_secret = S1
host = H1
access_token = A1
client_token = C1

[production]
client_secret = prod-secret
host = prod.luna.akamaiapis.net
access_token = prod-access
client_token = prod-client
account_key = prod-account

[prod]
client_secret = short-secret
host = short.luna.akamaiapis.net
access_token = short-access
client_token = short-client
"""

FULL_DEFAULT_ENVIRONMENT = {
    "AKAMAI_HOST": "env.luna.akamaiapis.net",
    "AKAMAI_CLIENT_TOKEN": "env-client",
    "AKAMAI_CLIENT_SECRET": "env-secret",
    "AKAMAI_ACCESS_TOKEN": "env-access",
}


class TestEnvironmentNames:
    """Test environment variable name derivation"""

    def test_default_section_has_no_segment(self):
        """Test that the default section maps to AKAMAI_<FIELD>"""
        assert environment_variable_name("default", "host") == "AKAMAI_HOST"
        assert environment_variable_name("default", "client_token") == "AKAMAI_CLIENT_TOKEN"

    def test_named_section_is_upper_cased(self):
        """Test that other sections map to AKAMAI_<SECTION>_<FIELD>"""
        assert environment_variable_name("appsec", "host") == "AKAMAI_APPSEC_HOST"
        assert environment_variable_name("appsec", "ACCOUNT_KEY") == "AKAMAI_APPSEC_ACCOUNT_KEY"

    def test_blank_section_uses_default(self):
        """Test that None, empty and whitespace sections fall back to default"""
        assert normalize_section(None) == "default"
        assert normalize_section("") == "default"
        assert normalize_section("   ") == "default"
        assert normalize_section("appsec") == "appsec"
        assert environment_variable_name("  ", "host") == "AKAMAI_HOST"

    def test_credentials_from_environment(self):
        """Test reading fields with missing variables as empty strings"""
        environ = {
            "AKAMAI_APPSEC_HOST": "appsec.example.com",
            "AKAMAI_APPSEC_CLIENT_SECRET": "appsec-secret",
            "AKAMAI_HOST": "ignored.example.com",
        }

        values = credentials_from_environment("appsec", environ)

        assert values["host"] == "appsec.example.com"
        assert values["client_secret"] == "appsec-secret"
        assert values["client_token"] == ""
        assert values["access_token"] == ""
        assert values["account_key"] == ""


class TestEdgercParsing:
    """Test edgerc file parsing"""

    def test_parse_default_section(self):
        """Test parsing the default section"""
        values = parse_edgerc(SAMPLE_EDGERC, "default")

        assert values == {
            "client_secret": "S1",
            "host": "H1",
            "access_token": "A1",
            "client_token": "C1",
        }

    def test_section_ends_at_next_header(self):
        """Test that parsing stops at the next section header"""
        values = parse_edgerc(SAMPLE_EDGERC, "production")

        assert values["host"] == "prod.luna.akamaiapis.net"
        assert values["account_key"] == "prod-account"
        assert values["client_secret"] == "prod-secret"

    def test_section_prefix_does_not_match_longer_name(self):
        """Test that [prod] does not match the [production] header"""
        values = parse_edgerc(SAMPLE_EDGERC, "prod")

        assert values["host"] == "short.luna.akamaiapis.net"
        assert "account_key" not in values

    def test_keys_are_case_insensitive_and_trimmed(self):
        """Test key normalization and whitespace trimming"""
        text = "[default]\n  HOST   =   h.example.com  \nClient_Token=ct\n"
        values = parse_edgerc(text)

        assert values["host"] == "h.example.com"
        assert values["client_token"] == "ct"

    def test_unknown_keys_and_comments_ignored(self):
        """Test that unknown keys, comments and malformed lines are skipped"""
        text = (
            "[default]\n"
            "; a comment\n"
            "# another comment\n"
            "max-body = 131072\n"
            "not an assignment\n"
            "\n"
            "host = h.example.com\n"
        )
        values = parse_edgerc(text)

        assert values == {"host": "h.example.com"}

    def test_value_may_contain_equals(self):
        """Test that only the first '=' separates key and value"""
        values = parse_edgerc("[default]\nclient_secret = abc=def==\n")

        assert values["client_secret"] == "abc=def=="

    def test_missing_section(self):
        """Test that a missing section raises ConfigurationError"""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_edgerc(SAMPLE_EDGERC, "staging")

        assert exc_info.value.error_code == ErrorCodes.SECTION_NOT_FOUND

    def test_windows_line_endings(self):
        """Test parsing content with CRLF line endings"""
        values = parse_edgerc("[default]\r\nhost = h.example.com\r\nclient_token = ct\r\n")

        assert values["host"] == "h.example.com"
        assert values["client_token"] == "ct"


class TestCredentialResolution:
    """Test environment and edgerc resolution order"""

    def setup_method(self):
        """Set up a temporary home directory"""
        self.temp_dir = tempfile.mkdtemp()
        self.home_patch = patch.dict(os.environ, {"HOME": self.temp_dir})
        self.home_patch.start()

    def teardown_method(self):
        """Clean up test fixtures"""
        self.home_patch.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_edgerc(self, content: str, name: str = ".edgerc") -> Path:
        path = Path(self.temp_dir) / name
        path.write_text(content, encoding="utf-8")
        return path

    def test_resolve_from_explicit_file(self):
        """Test resolving the documented sample section"""
        path = self.write_edgerc(SAMPLE_EDGERC)

        credentials = resolve_credentials(str(path), "default")

        assert credentials == EdgeGridCredentials(
            host="H1",
            client_token="C1",
            client_secret="S1",
            access_token="A1",
            account_key="",
        )

    def test_resolve_from_environment_only(self):
        """Test that a complete environment needs no edgerc file"""
        credentials = resolve_credentials(environ=FULL_DEFAULT_ENVIRONMENT)

        assert credentials.host == "env.luna.akamaiapis.net"
        assert credentials.client_token == "env-client"
        assert credentials.client_secret == "env-secret"
        assert credentials.access_token == "env-access"
        assert credentials.account_key == ""

    def test_named_section_environment(self):
        """Test that named sections read AKAMAI_<SECTION>_* variables"""
        environ = {
            "AKAMAI_APPSEC_HOST": "appsec.example.com",
            "AKAMAI_APPSEC_CLIENT_TOKEN": "appsec-client",
            "AKAMAI_APPSEC_CLIENT_SECRET": "appsec-secret",
            "AKAMAI_APPSEC_ACCESS_TOKEN": "appsec-access",
            "AKAMAI_APPSEC_ACCOUNT_KEY": "appsec-account",
        }

        credentials = resolve_credentials(section="appsec", environ=environ)

        assert credentials.host == "appsec.example.com"
        assert credentials.account_key == "appsec-account"

    def test_partial_environment_falls_back_to_default_file(self):
        """Test that ~/.edgerc fills and overrides a partial environment"""
        self.write_edgerc("[default]\nhost = file-host\nclient_secret = file-secret\n")
        environ = {
            "AKAMAI_HOST": "env-host",
            "AKAMAI_CLIENT_TOKEN": "env-client",
            "AKAMAI_ACCESS_TOKEN": "env-access",
        }

        credentials = resolve_credentials(environ=environ)

        assert credentials.host == "file-host"
        assert credentials.client_secret == "file-secret"
        assert credentials.client_token == "env-client"
        assert credentials.access_token == "env-access"

    def test_default_file_read_once(self):
        """Test that the fallback reads the edgerc file a single time"""
        self.write_edgerc(SAMPLE_EDGERC)

        with patch("edgegrid_sdk.credentials.resolver.read_edgerc", wraps=read_edgerc) as reader:
            credentials = resolve_credentials(environ={})

        assert reader.call_count == 1
        assert credentials.host == "H1"

    def test_complete_environment_skips_file(self):
        """Test that the edgerc file is not read when the environment is complete"""
        with patch("edgegrid_sdk.credentials.resolver.read_edgerc") as reader:
            resolve_credentials(environ=FULL_DEFAULT_ENVIRONMENT)

        reader.assert_not_called()

    def test_explicit_path_skips_environment(self):
        """Test that an explicit edgerc path ignores environment variables"""
        path = self.write_edgerc(SAMPLE_EDGERC, "custom.edgerc")

        credentials = resolve_credentials(str(path), environ=FULL_DEFAULT_ENVIRONMENT)

        assert credentials.host == "H1"
        assert credentials.client_secret == "S1"

    def test_explicit_path_missing_field_not_filled_from_environment(self):
        """Test that an explicit file lacking a field fails even with a full environment"""
        path = self.write_edgerc("[default]\nhost = H1\nclient_token = C1\naccess_token = A1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_credentials(str(path), environ=FULL_DEFAULT_ENVIRONMENT)

        assert exc_info.value.error_code == ErrorCodes.MISSING_CREDENTIALS
        assert exc_info.value.details["missing_fields"] == ["client_secret"]

    def test_tilde_expansion(self):
        """Test that a leading ~ is expanded to the home directory"""
        self.write_edgerc(SAMPLE_EDGERC, "custom.edgerc")

        credentials = resolve_credentials("~/custom.edgerc", "production")

        assert credentials.host == "prod.luna.akamaiapis.net"
        assert credentials.account_key == "prod-account"
        assert expand_user_path("~/custom.edgerc") == Path(self.temp_dir) / "custom.edgerc"

    def test_blank_section_resolves_default(self):
        """Test that a whitespace section name resolves the default section"""
        path = self.write_edgerc(SAMPLE_EDGERC)

        credentials = resolve_credentials(str(path), "  ")

        assert credentials.host == "H1"

    def test_no_environment_and_no_file(self):
        """Test failure when neither source provides credentials"""
        with pytest.raises(ConfigurationError):
            resolve_credentials(environ={})

    def test_missing_explicit_file(self):
        """Test that an unreadable file collapses into ConfigurationError"""
        missing = Path(self.temp_dir) / "does-not-exist"

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_credentials(str(missing))

        assert exc_info.value.error_code == ErrorCodes.EDGERC_UNREADABLE
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_missing_section_in_file(self):
        """Test that a missing section raises ConfigurationError"""
        path = self.write_edgerc(SAMPLE_EDGERC)

        with pytest.raises(ConfigurationError):
            resolve_credentials(str(path), "staging")

    def test_error_does_not_leak_secret(self):
        """Test that resolution errors never include secret values"""
        environ = {"AKAMAI_CLIENT_SECRET": "very-secret-value"}
        self.write_edgerc("[default]\nhost = H1\n")

        with pytest.raises(ConfigurationError) as exc_info:
            resolve_credentials(environ=environ)

        assert "very-secret-value" not in str(exc_info.value)
        assert set(exc_info.value.details["missing_fields"]) == {"client_token", "access_token"}

    def test_from_edgerc_classmethod(self):
        """Test the EdgeGridCredentials.from_edgerc shortcut"""
        path = self.write_edgerc(SAMPLE_EDGERC)

        credentials = EdgeGridCredentials.from_edgerc(str(path), "prod")

        assert credentials.client_token == "short-client"


class TestEdgeGridCredentials:
    """Test the credential value object"""

    def test_repr_hides_secret(self):
        """Test that the client secret never appears in repr()"""
        credentials = EdgeGridCredentials(
            host="example.com",
            client_token="ct",
            client_secret="super-secret",
            access_token="at",
        )

        assert "super-secret" not in repr(credentials)
        assert "ct" in repr(credentials)

    def test_immutable(self):
        """Test that credentials cannot be mutated"""
        credentials = EdgeGridCredentials("example.com", "ct", "cs", "at")

        with pytest.raises(AttributeError):
            credentials.host = "other.example.com"

    def test_is_complete(self):
        """Test the completeness check"""
        assert EdgeGridCredentials("example.com", "ct", "cs", "at").is_complete()
        assert not EdgeGridCredentials("example.com", "ct", "", "at").is_complete()

    def test_merge_credential_values(self):
        """Test left-to-right merge where empty values never clear fields"""
        merged = merge_credential_values(
            {"host": "env-host", "client_token": "env-client"},
            {"host": "file-host", "client_token": ""},
        )

        assert merged["host"] == "file-host"
        assert merged["client_token"] == "env-client"
        assert merged["account_key"] == ""
