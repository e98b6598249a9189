"""
Chat router — the /api/* surface.

POST /api/chat runs the conversation mediator. Any other method on
/api/chat is answered with 405, any other /api/* path with 404, both as
plain text. The fallbacks are plain Starlette routes with no method
list, so they match every verb, extension methods included.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, Response
from starlette.routing import Route

from app.services.mediator import ConversationMediator

API_PREFIX = "/api"

router = APIRouter(prefix=API_PREFIX, tags=["chat"])


def get_mediator(request: Request) -> ConversationMediator:
    """
    Build a request-scoped mediator.

    The retrieval client and settings are created once in main.py and
    stored in app.state; the mediator itself carries no state across requests.
    """
    settings = request.app.state.settings
    return ConversationMediator(
        retrieval=request.app.state.retrieval_client,
        instruction=settings.system_prompt,
        require_user_message=settings.require_user_message,
    )


@router.post("/chat")
async def chat(
    request: Request,
    mediator: ConversationMediator = Depends(get_mediator),  # noqa: B008
) -> Response:
    """
    Ask the shipment tracking assistant a question.

    The body is read raw and validated by the mediator so that malformed
    JSON yields the generic 500 error body rather than a 422.
    """
    body = await request.body()
    return await mediator.respond(body)


async def chat_method_not_allowed(request: Request) -> PlainTextResponse:
    return PlainTextResponse(
        "Method not allowed",
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
    )


async def api_not_found(request: Request) -> PlainTextResponse:
    return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)


# Registered on the app after `router`, so POST /api/chat is matched first.
fallback_routes = [
    Route(f"{API_PREFIX}/chat", chat_method_not_allowed, include_in_schema=False),
    Route(f"{API_PREFIX}/{{path:path}}", api_not_found, include_in_schema=False),
]
