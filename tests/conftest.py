"""
Shared test fixtures and configuration for entire test suite.

Provides: temporary store directories, stub embedding and generation backends
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

import pytest

from tests.helpers import StubEmbeddingProvider, StubGenerationClient


@pytest.fixture
def store_dir(tmp_path):
    """Temporary directory for vector and metadata snapshots."""
    path = tmp_path / "store"
    path.mkdir()
    return path


@pytest.fixture
def stub_provider() -> StubEmbeddingProvider:
    """Embedding provider returning [1, 0, 0] for any text."""
    return StubEmbeddingProvider()


@pytest.fixture
def stub_client() -> StubGenerationClient:
    """Generation client streaming 'Hello', ', ', 'world'."""
    return StubGenerationClient()
