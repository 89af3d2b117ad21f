"""Configuration for pytest tests.

This file contains fixtures and setup configuration for all tests.
"""

import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Set test environment before the application reads its settings
os.environ["APP_ENV"] = "test"
os.environ["EXTERNAL_LINK_SECRET"] = "test-link-secret"
os.environ["LOG_FORMAT"] = "json"

from experiment_api.main import app  # noqa: E402
from experiment_api.shared.utils.link_tokens import (  # noqa: E402
    LinkSigner,
    LinkVerifier,
)
from tests.mocks import InMemoryExperimentRepository  # noqa: E402

TEST_SECRET = "test-link-secret"


@pytest.fixture
def experiment_repository() -> InMemoryExperimentRepository:
    """Create an empty in-memory experiment store."""
    return InMemoryExperimentRepository()


@pytest.fixture
def signer() -> LinkSigner:
    """Create a link signer using the test secret."""
    return LinkSigner(TEST_SECRET)


@pytest.fixture
def verifier() -> LinkVerifier:
    """Create a link verifier using the test secret."""
    return LinkVerifier(TEST_SECRET)


@pytest.fixture
def client(experiment_repository: InMemoryExperimentRepository) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI app backed by the in-memory store."""
    app.state.experiment_repository = experiment_repository
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        del app.state.experiment_repository
        app.dependency_overrides.clear()
