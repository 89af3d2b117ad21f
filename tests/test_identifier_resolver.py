"""Tests for identifier resolution and lookup query construction."""

from datetime import (
    UTC,
    datetime,
)

import pytest

from experiment_api.domain.entities import (
    DOCUMENT_ID_FIELD,
    AccessToken,
)
from experiment_api.domain.exceptions import (
    InvalidRequestError,
    MissingIdentifierError,
)
from experiment_api.domain.services.identifier_resolver import (
    build_query,
    is_valid_document_id,
    resolve,
)


def make_token(session_id: str) -> AccessToken:
    return AccessToken(session_id=session_id, expires_at=datetime(2099, 1, 1, tzinfo=UTC))


class TestResolve:
    """Test suite for canonical identifier resolution."""

    def test_plain_identifier_is_trimmed(self):
        assert resolve("  ABC  ") == "ABC"

    def test_plain_identifier_is_url_decoded(self):
        assert resolve("session%20one%2F2") == "session one/2"

    def test_token_session_overrides_path_identifier(self):
        assert resolve("from-path", make_token("from-token")) == "from-token"

    def test_token_without_session_falls_back_to_path(self):
        assert resolve("from-path", make_token("")) == "from-path"

    def test_missing_identifier(self):
        with pytest.raises(MissingIdentifierError):
            resolve("")

        with pytest.raises(MissingIdentifierError):
            resolve(None)

    def test_whitespace_identifier_is_missing(self):
        with pytest.raises(MissingIdentifierError):
            resolve("%20%20")

    def test_missing_identifier_is_an_invalid_request(self):
        with pytest.raises(InvalidRequestError):
            resolve("   ", None)


class TestDocumentIdValidity:
    """Test suite for the document id format check."""

    @pytest.mark.parametrize(
        "value",
        ["685df5cc14155de914b91550", "D615030F4886915F8327D59DD37C30FE", "abc", "a.b"],
    )
    def test_valid_ids(self, value):
        assert is_valid_document_id(value) is True

    @pytest.mark.parametrize(
        "value",
        ["", ".", "..", "a/b", "__reserved__", "x" * 1501],
    )
    def test_invalid_ids(self, value):
        assert is_valid_document_id(value) is False

    def test_length_limit_counts_utf8_bytes(self):
        # 3 bytes per character
        assert is_valid_document_id("实" * 500) is True
        assert is_valid_document_id("实" * 501) is False


class TestBuildQuery:
    """Test suite for lookup query construction."""

    def test_field_clauses_always_present(self):
        query = build_query("ABC")

        fields = [clause.field for clause in query.clauses]
        assert fields[:4] == ["sessionId", "SessionId", "externalId", "externalID"]
        assert all(clause.value == "ABC" for clause in query.clauses)

    def test_primary_key_clause_for_valid_document_id(self):
        query = build_query("685df5cc14155de914b91550")

        assert query.has_document_id_clause
        assert query.clauses[-1].field == DOCUMENT_ID_FIELD
        assert query.clauses[-1].value == "685df5cc14155de914b91550"

    @pytest.mark.parametrize("value", ["a/b", "..", "__name__", "y" * 2000])
    def test_no_primary_key_clause_for_invalid_document_id(self, value):
        query = build_query(value)

        assert not query.has_document_id_clause
        assert len(query.clauses) == 4
