"""Tests for the HTTP endpoints.

Covers the external experiment lookup and the link signing endpoint,
including the error envelope returned for each failure class.
"""

import time
from datetime import (
    UTC,
    datetime,
    timedelta,
)

from fastapi import status
from fastapi.testclient import TestClient

from experiment_api.dependencies import get_link_signer
from experiment_api.main import app
from experiment_api.shared.utils.link_tokens import LinkSigner
from tests.conftest import TEST_SECRET

SAMPLE_DOCUMENT = {
    "SessionId": "D615030F4886915F8327D59DD37C30FE",
    "UserId": "nO7sT0fMCsWDDWAp8hmcUwqlJ4U2",
    "sessionName": "Complete Session - 2025.06.27-09.37.14",
    "SmilePercentage": 70.21138,
    "NeutralPercentage": 1.07317,
    "SurprisedPercentage": 28.71545,
    "TotalExpressionCount": 3075,
    "chatMessages": [
        {"speaker": "Ai", "message": "Hello there.", "timestamp": "2025.06.27-09.35.02"},
        {"speaker": "User", "message": "Hi!", "timestamp": "2025.06.27-09.35.10"},
    ],
    "createdAt": "2025-06-27T01:37:16.335Z",
    "metadata": {"dataType": "completeSession"},
    "source": "UE5",
}


class TestExternalExperimentEndpoint:
    """Test suite for GET /api/experiments/external/{id}."""

    def test_lookup_by_plain_id(self, client: TestClient, experiment_repository):
        """Test a plain session id returns the normalized record."""
        experiment_repository.add({"SessionId": "ABC", "smilePercentage": 70.2})

        response = client.get("/api/experiments/external/ABC")

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["data"]["sessionId"] == "ABC"
        assert body["data"]["smilePercentage"] == 70.2
        assert body["data"]["chatMessages"] == []

    def test_lookup_returns_full_record(self, client: TestClient, experiment_repository):
        doc_id = experiment_repository.add(SAMPLE_DOCUMENT, doc_id="685df5cc14155de914b91550")

        response = client.get("/api/experiments/external/D615030F4886915F8327D59DD37C30FE")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["id"] == doc_id
        assert data["userId"] == "nO7sT0fMCsWDDWAp8hmcUwqlJ4U2"
        assert data["totalExpressionCount"] == 3075
        assert data["surprisedPercentage"] == 28.71545
        assert [m["speaker"] for m in data["chatMessages"]] == ["Ai", "User"]
        assert data["metadata"] == {"dataType": "completeSession"}

    def test_lookup_by_document_id(self, client: TestClient, experiment_repository):
        experiment_repository.add(SAMPLE_DOCUMENT, doc_id="685df5cc14155de914b91550")

        response = client.get("/api/experiments/external/685df5cc14155de914b91550")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "D615030F4886915F8327D59DD37C30FE"

    def test_lookup_url_encoded_id(self, client: TestClient, experiment_repository):
        experiment_repository.add({"externalId": "run 7"})

        response = client.get("/api/experiments/external/run%207")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["chatMessages"] == []

    def test_lookup_id_with_encoded_slash(self, client: TestClient, experiment_repository):
        """Test an id containing "/" reaches the lookup instead of missing the route."""
        experiment_repository.add({"externalId": "run/7", "sessionId": "S-7"})

        response = client.get("/api/experiments/external/run%2F7")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "S-7"
        assert not experiment_repository.queries[-1].has_document_id_clause

    def test_not_found(self, client: TestClient, experiment_repository):
        """Test an unknown id returns 404 with the error envelope."""
        experiment_repository.add({"sessionId": "ABC"})

        response = client.get("/api/experiments/external/ZZZ")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "RECORD_NOT_FOUND"
        assert body["message"] == "Experiment not found"

    def test_whitespace_id(self, client: TestClient, experiment_repository):
        """Test a whitespace-only id is rejected before reaching the store."""
        response = client.get("/api/experiments/external/%20")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Missing experiment id"
        assert experiment_repository.queries == []

    def test_storage_failure(self, client: TestClient, experiment_repository):
        """Test store failures surface as a generic 500."""
        experiment_repository.fail_with = ConnectionError("mongodb://admin:hunter2@db")

        response = client.get("/api/experiments/external/ABC")

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        body = response.json()
        assert body["message"] == "Internal server error"
        assert "hunter2" not in response.text

    def test_valid_token_overrides_path(self, client: TestClient, experiment_repository, signer):
        experiment_repository.add({"sessionId": "ABC", "smilePercentage": 70.2})
        token = signer.sign("ABC").token

        response = client.get(
            "/api/experiments/external/placeholder",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "ABC"

    def test_expired_token_falls_back_to_path(self, client: TestClient, experiment_repository):
        experiment_repository.add({"sessionId": "ABC"})
        experiment_repository.add({"sessionId": "anything", "source": "path"})
        issued = datetime.now(UTC) - timedelta(minutes=10)
        token = LinkSigner(TEST_SECRET, clock=lambda: issued).sign("ABC", ttl_seconds=60).token

        response = client.get(
            "/api/experiments/external/anything",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "anything"
        assert response.json()["data"]["source"] == "path"

    def test_invalid_token_with_valid_path(self, client: TestClient, experiment_repository):
        experiment_repository.add({"sessionId": "ABC"})

        response = client.get(
            "/api/experiments/external/ABC",
            headers={"Authorization": "Bearer not.a.token"},
        )

        assert response.status_code == status.HTTP_200_OK

    def test_non_bearer_scheme_is_ignored(self, client: TestClient, experiment_repository, signer):
        experiment_repository.add({"sessionId": "PATH"})
        token = signer.sign("TOKEN").token

        response = client.get(
            "/api/experiments/external/PATH",
            headers={"Authorization": f"Basic {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "PATH"

    def test_request_id_header(self, client: TestClient, experiment_repository):
        experiment_repository.add({"sessionId": "ABC"})

        response = client.get("/api/experiments/external/ABC")

        assert response.headers.get("X-Request-ID")


class TestSignLinkEndpoint:
    """Test suite for POST /api/links/sign."""

    def test_sign_link(self, client: TestClient, verifier):
        """Test a signed token verifies back to the requested session."""
        response = client.post(
            "/api/links/sign",
            json={"sessionId": "ABC", "userId": "u1", "expSec": 600},
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["expiresIn"] == 600
        grant = verifier.verify(body["token"])
        assert grant.session_id == "ABC"
        assert grant.user_id == "u1"

    def test_sign_link_default_lifetime(self, client: TestClient):
        response = client.post("/api/links/sign", json={"sessionId": "ABC"})

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["expiresIn"] == 300

    def test_signed_link_round_trip(self, client: TestClient, experiment_repository):
        experiment_repository.add({"SessionId": "ABC", "SmilePercentage": 70.2})
        token = client.post("/api/links/sign", json={"sessionId": "ABC"}).json()["token"]

        response = client.get(
            "/api/experiments/external/x",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["smilePercentage"] == 70.2

    def test_signed_link_expires(self, client: TestClient, experiment_repository):
        """Test a token past its lifetime no longer grants access."""
        experiment_repository.add({"sessionId": "ABC"})
        experiment_repository.add({"sessionId": "anything"})
        token = client.post(
            "/api/links/sign", json={"sessionId": "ABC", "expSec": 1}
        ).json()["token"]

        time.sleep(2)
        response = client.get(
            "/api/experiments/external/anything",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["sessionId"] == "anything"

    def test_missing_session_id(self, client: TestClient):
        response = client.post("/api/links/sign", json={"userId": "u1"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["message"] == "Missing sessionId"

    def test_missing_body(self, client: TestClient):
        response = client.post("/api/links/sign")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_invalid_lifetime(self, client: TestClient):
        response = client.post("/api/links/sign", json={"sessionId": "ABC", "expSec": 0})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        assert response.json()["details"]["errors"]

    def test_signing_unconfigured(self, client: TestClient):
        """Test signing fails closed without a secret."""
        app.dependency_overrides[get_link_signer] = lambda: LinkSigner(None)

        response = client.post("/api/links/sign", json={"sessionId": "ABC"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body["error"] == "SIGNING_UNAVAILABLE"
        assert body["message"] == "External link signing is not configured"

    def test_signing_unconfigured_checked_before_body(self, client: TestClient):
        """Test a missing secret wins over an invalid lifetime."""
        app.dependency_overrides[get_link_signer] = lambda: LinkSigner(None)

        response = client.post("/api/links/sign", json={"sessionId": "S", "expSec": 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["error"] == "SIGNING_UNAVAILABLE"

    def test_numeric_session_id(self, client: TestClient, verifier):
        response = client.post("/api/links/sign", json={"sessionId": 12345})

        assert response.status_code == status.HTTP_200_OK
        assert verifier.verify(response.json()["token"]).session_id == "12345"
