"""Tests for directory identifier detection, name cleaning and address extraction."""

import pytest

from msg_harvest.parsers.identity import (
    clean_display_name,
    extract_email,
    is_directory_identifier,
)

EXCHANGE_DN = (
    "/o=ExchangeLabs/ou=Exchange Administrative Group (FYDIBOHF23SPDLT)"
    "/cn=Recipients/cn=3f2a9b8c7d6e4f-jane.doe"
)


class TestIsDirectoryIdentifier:
    """Test suite for directory identifier detection."""

    @pytest.mark.parametrize(
        "text",
        [
            "/O=ORG/OU=ADMIN/CN=RECIPIENTS/CN=JSMITH",
            "/o=org/ou=admin/cn=recipients/cn=jsmith",
            "/CN=Recipients/CN=jsmith",
            "/cn=jsmith",
            EXCHANGE_DN,
        ],
    )
    def test_recognizes_dn_prefixes(self, text):
        """Should flag /O= and /CN= prefixes in any case."""
        assert is_directory_identifier(text)

    def test_recognizes_embedded_exchangelabs(self):
        """Should flag text that contains an Exchange Online DN anywhere."""
        assert is_directory_identifier("EX:/O=EXCHANGELABS/OU=EXCHANGE/CN=RECIPIENTS/CN=ABC")

    @pytest.mark.parametrize(
        "text",
        ["jane@example.com", "Jane Doe", "Jane /O=ORG", " /O=ORG/CN=x", "", None],
    )
    def test_rejects_non_identifiers(self, text):
        """Should not flag addresses, names or empty values."""
        assert not is_directory_identifier(text)


class TestCleanDisplayName:
    """Test suite for display name cleaning."""

    def test_takes_last_cn_segment(self):
        """Should keep only the text after the last /cn= marker."""
        assert clean_display_name("/O=ORG/OU=X/CN=RECIPIENTS/CN=JSMITH") == "JSMITH"

    def test_strips_hex_object_prefix(self):
        """Should drop a 10+ character hex prefix followed by a hyphen."""
        assert clean_display_name(EXCHANGE_DN) == "jane.doe"

    def test_keeps_short_hex_prefix(self):
        """Should leave prefixes shorter than 10 hex characters alone."""
        assert clean_display_name("/o=org/cn=recipients/cn=abc123-john") == "abc123-john"

    def test_mixed_case_marker(self):
        """Should split on the segment marker regardless of case."""
        assert clean_display_name("/o=Org/Cn=Recipients/cN=Mary Major") == "Mary Major"

    def test_dn_without_cn_is_unchanged(self):
        """Should return a DN with no /cn= segment unchanged."""
        assert clean_display_name("/O=ORG/OU=ADMIN") == "/O=ORG/OU=ADMIN"

    def test_plain_name_is_unchanged(self):
        """Should return ordinary names untouched."""
        assert clean_display_name("Jane Doe") == "Jane Doe"
        assert clean_display_name("jane@example.com") == "jane@example.com"

    def test_empty(self):
        """Should return an empty string for missing input."""
        assert clean_display_name("") == ""
        assert clean_display_name(None) == ""


class TestExtractEmail:
    """Test suite for address extraction."""

    def test_plain_address(self):
        assert extract_email("jane@example.com") == "jane@example.com"

    def test_trims_whitespace(self):
        assert extract_email("  jane@example.com \n") == "jane@example.com"

    def test_name_and_brackets(self):
        """Should extract the address from "Name <address>"."""
        assert extract_email('"Doe, Jane" <jane.doe@example.com>') == "jane.doe@example.com"

    def test_prefers_bracketed_address(self):
        """Should prefer an address inside angle brackets over a bare one."""
        assert extract_email("alice@example.com <bob@example.com>") == "bob@example.com"

    def test_strips_mailto(self):
        """Should remove a mailto: prefix in any case."""
        assert extract_email("mailto:Jane@Example.com") == "Jane@Example.com"
        assert extract_email("MAILTO:ops@example.org") == "ops@example.org"

    def test_address_in_free_text(self):
        assert extract_email("contact: bob@example.org, thanks") == "bob@example.org"

    def test_rejects_bare_dn(self):
        """Should never return a directory identifier."""
        assert extract_email("/O=ORG/OU=X/CN=RECIPIENTS/CN=abc") is None
        assert extract_email(EXCHANGE_DN) is None

    def test_rejects_dn_after_mailto(self):
        assert extract_email("mailto:/O=ORG/CN=RECIPIENTS/CN=abc") is None

    def test_requires_top_level_domain(self):
        assert extract_email("root@localhost") is None

    def test_no_address(self):
        assert extract_email("Jane Doe") is None
        assert extract_email("") is None
        assert extract_email(None) is None

    @pytest.mark.parametrize(
        "text",
        [
            "jane@example.com",
            "Jane <jane@example.com>",
            "/O=ORG/CN=RECIPIENTS/CN=abc",
            "/O=ORG/CN=a@b.example.com",
            "not an address",
            "x@y",
            "mailto:",
        ],
    )
    def test_result_is_always_an_address(self, text):
        """Should return None or a value with '@' that is not a DN."""
        result = extract_email(text)
        assert result is None or ("@" in result and not is_directory_identifier(result))
