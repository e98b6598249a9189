"""
Shared fixtures for the gateway tests.
"""

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.core.errors import UpstreamFailureError
from app.main import create_app
from app.services.retrieval import RetrievalClient


class MockRetrievalClient(RetrievalClient):
    """Mock retrieval backend that records every query."""

    def __init__(self, result=None, error=None):
        self.result = result if result is not None else {"answer": "..."}
        self.error = error
        self.queries: list[str] = []
        self.closed = False

    async def search(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        return self.result

    async def aclose(self):
        self.closed = True


@pytest.fixture
def settings(tmp_path):
    static_dir = tmp_path / "public"
    static_dir.mkdir()
    (static_dir / "index.html").write_text("<html>tracking ui</html>")
    (static_dir / "chat.js").write_text("console.log('chat');")
    return Settings(
        cloudflare_account_id="acct-123",
        cloudflare_api_token="token-abc",
        system_prompt="You are a shipment tracking assistant.",
        static_dir=str(static_dir),
    )


@pytest.fixture
def retrieval():
    return MockRetrievalClient()


@pytest.fixture
def failing_retrieval():
    return MockRetrievalClient(
        error=UpstreamFailureError("shipment-tracking-proxy", "boom", status_code=502)
    )


@pytest.fixture
def client(settings, retrieval):
    app = create_app(settings, retrieval_client=retrieval)
    with TestClient(app) as test_client:
        yield test_client
