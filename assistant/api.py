"""
Django Ninja API for the workspace assistant.

``POST /api/ai/chat`` runs one tool-calling conversation for the session user.
"""

import logging

from ninja import Router

from accounts.utils import aget_authenticated_user
from llm_providers import (
    ConfigurationError,
    LLMProviderRegistry,
    MissingCredentialsError,
    ProviderNotFoundError,
    require_credentials,
    require_tool_support,
    resolve_llm_config,
)
from tasks.store import TaskStore

from .executor import ToolExecutor
from .orchestrator import ConversationOrchestrator
from .schemas import ChatRequest, ChatResponse, ErrorResponse

router = Router()
logger = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "AI service not configured. Set OPENAI_API_KEY environment variable."


def build_provider():
    """
    Create the configured LLM provider and check it can run the assistant.

    Raises:
        MissingCredentialsError: If the provider needs an API key and has none.
        ToolCallingNotSupportedError: If the configured model cannot call functions.
        ConfigurationError: If the provider rejects its configuration (e.g. endpoint).
        ProviderNotFoundError: If ``DEFAULT_LLM_PROVIDER`` names no registered provider.
    """
    config = resolve_llm_config()
    provider = LLMProviderRegistry.from_config(config)
    require_credentials(provider)
    require_tool_support(provider)
    return provider


@router.post(
    "/chat",
    response={
        200: ChatResponse,
        400: ErrorResponse,
        401: ErrorResponse,
        500: ErrorResponse,
    },
    exclude_none=True,
)
async def chat(request, payload: ChatRequest):
    """
    Send a message to the workspace assistant and get its final answer.

    The assistant may call task tools (list, create, complete, search,
    summarize, list users) several times before answering. History is
    supplied by the client on every request; nothing is stored server-side.
    """
    user = await aget_authenticated_user(request)
    if user is None:
        return 401, {"error": "Authentication required"}

    message = (payload.message or "").strip()
    if not message:
        return 400, {"error": "Message is required"}

    try:
        provider = build_provider()
    except MissingCredentialsError as e:
        logger.error("AI assistant is not configured: %s", e)
        return 500, {"error": NOT_CONFIGURED_MESSAGE}
    except (ConfigurationError, ProviderNotFoundError) as e:
        logger.error("AI assistant is misconfigured: %s", e)
        return 500, {"error": NOT_CONFIGURED_MESSAGE, "details": str(e)}

    orchestrator = ConversationOrchestrator(provider, ToolExecutor(TaskStore()))

    try:
        reply = await orchestrator.run(message, payload.conversation_history or [], user)
    except Exception as e:
        logger.error("AI chat failed for user %s: %s", user.pk, e, exc_info=True)
        return 500, {"error": "Failed to process AI request", "details": str(e)}

    return ChatResponse(response=reply.response, usage=reply.usage)
