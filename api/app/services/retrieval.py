"""
Retrieval backend clients.

The gateway treats the RAG engine as a black box: one query string in,
one opaque JSON answer out. AutoRAGClient talks to a hosted AutoRAG
instance over its REST ``ai-search`` endpoint.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from app.core.config import Settings
from app.core.errors import UpstreamFailureError
from app.core.telemetry import get_tracer

logger = logging.getLogger(__name__)


class RetrievalClient(ABC):
    """A search capability that answers a single text query."""

    @abstractmethod
    async def search(self, query: str) -> Any:
        """Run a retrieval-augmented search.

        Args:
            query: The active user query.

        Returns:
            The backend's answer payload, passed through untouched.

        Raises:
            UpstreamFailureError: If the backend rejects or fails the search.
        """

    async def aclose(self) -> None:
        """Release any held resources."""


class AutoRAGClient(RetrievalClient):
    """Client for an AutoRAG instance addressed by name."""

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._rag_name = settings.autorag_name
        self._path = (
            f"/accounts/{settings.cloudflare_account_id}"
            f"/autorag/rags/{settings.autorag_name}/ai-search"
        )
        self._client = http_client or httpx.AsyncClient(
            base_url=settings.autorag_base_url,
            headers={"Authorization": f"Bearer {settings.cloudflare_api_token}"},
            timeout=settings.autorag_timeout_seconds,
        )
        self._tracer = get_tracer()

        if not settings.cloudflare_account_id or not settings.cloudflare_api_token:
            logger.warning(
                "AutoRAG credentials are not configured; searches against %s will fail.",
                self._rag_name,
            )

    @property
    def rag_name(self) -> str:
        return self._rag_name

    async def search(self, query: str) -> Any:
        with self._tracer.start_as_current_span("retrieval.search") as span:
            span.set_attribute("retrieval.backend", self._rag_name)
            span.set_attribute("retrieval.query_length", len(query))

            try:
                response = await self._client.post(self._path, json={"query": query})
                response.raise_for_status()
                envelope = response.json()
            except httpx.HTTPStatusError as e:
                raise UpstreamFailureError(
                    self._rag_name,
                    f"AutoRAG search failed: {e}",
                    status_code=e.response.status_code,
                ) from e
            except httpx.HTTPError as e:
                raise UpstreamFailureError(
                    self._rag_name, f"AutoRAG request error: {e}"
                ) from e
            except ValueError as e:
                raise UpstreamFailureError(
                    self._rag_name,
                    "AutoRAG returned a non-JSON body",
                    status_code=response.status_code,
                ) from e

            return self._unwrap(envelope)

    def _unwrap(self, envelope: Any) -> Any:
        """Extract ``result`` from the API envelope."""
        if not isinstance(envelope, dict):
            raise UpstreamFailureError(self._rag_name, "AutoRAG response is not an object")

        if envelope.get("success") is False:
            errors = envelope.get("errors") or []
            raise UpstreamFailureError(
                self._rag_name, f"AutoRAG reported failure: {errors}"
            )

        if "result" not in envelope:
            raise UpstreamFailureError(self._rag_name, "AutoRAG response has no result")

        logger.info("AutoRAG search on %s succeeded", self._rag_name)
        return envelope["result"]

    async def aclose(self) -> None:
        await self._client.aclose()
