"""
Conversation Mediator — core chat pipeline.

Turns one POST /api/chat body into one buffered JSON response:
1. Validate the body against the ChatRequest schema.
2. Make sure the instruction preamble leads the transcript.
3. Take the last message's content as the retrieval query.
4. Forward the query to the retrieval backend.
5. Return the backend answer verbatim, or the generic error body.

Despite the chat UI calling this a "stream", nothing is delivered
incrementally: the backend answer is awaited in full first.
"""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.errors import GENERIC_ERROR_MESSAGE, MalformedRequestError
from app.core.telemetry import get_tracer
from app.models.chat import ChatMessage, ChatRequest, ErrorResponse
from app.services.prompt import SYSTEM_PROMPT, ensure_system_prompt
from app.services.retrieval import RetrievalClient

logger = logging.getLogger(__name__)


class ConversationMediator:
    """Mediates between the chat client and the retrieval backend."""

    def __init__(
        self,
        retrieval: RetrievalClient,
        instruction: str = SYSTEM_PROMPT,
        require_user_message: bool = True,
    ) -> None:
        self._retrieval = retrieval
        self._instruction = instruction
        self._require_user_message = require_user_message
        self._tracer = get_tracer()

    async def handle(self, body: bytes) -> Any:
        """
        Run the chat pipeline for a raw request body.

        Args:
            body: The undecoded HTTP request body.

        Returns:
            The retrieval backend's answer payload.

        Raises:
            MalformedRequestError: If the body or transcript is unusable.
            UpstreamFailureError: If the retrieval backend fails.
        """
        with self._tracer.start_as_current_span("chat.handle") as span:
            request = self.parse_request(body)
            messages = ensure_system_prompt(request.messages, self._instruction)
            span.set_attribute("chat.message_count", len(messages))

            query = self._select_query(messages)
            span.set_attribute("chat.query_length", len(query))

            return await self._retrieval.search(query)

    async def respond(self, body: bytes) -> JSONResponse:
        """Run the pipeline and shape the outcome into an HTTP response."""
        try:
            result = await self.handle(body)
            return JSONResponse(content=result, status_code=status.HTTP_200_OK)
        except Exception:
            logger.exception("Error processing chat request")
            return JSONResponse(
                content=ErrorResponse(error=GENERIC_ERROR_MESSAGE).model_dump(),
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

    @staticmethod
    def parse_request(body: bytes) -> ChatRequest:
        """Decode and validate the body, failing closed on any schema error."""
        try:
            return ChatRequest.model_validate_json(body)
        except ValidationError as e:
            raise MalformedRequestError(
                "Request body is not a valid chat request",
                {"errors": e.errors(include_url=False)},
            ) from e

    def _select_query(self, messages: Sequence[ChatMessage]) -> str:
        """Return the content of the last message as the search query."""
        if not messages:
            raise MalformedRequestError("Transcript is empty")

        if self._require_user_message and all(
            msg.role == "system" for msg in messages
        ):
            raise MalformedRequestError("Transcript has no user or assistant message")

        query = messages[-1].content
        if self._require_user_message and not query.strip():
            raise MalformedRequestError("Query is blank")
        return query
