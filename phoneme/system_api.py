"""
System API endpoints.

Operational checks for load balancers and for operators diagnosing the
assistant configuration.
"""

from django.db import connection
from ninja import Router
from pydantic import BaseModel, Field

from accounts.utils import aget_authenticated_user
from llm_providers import (
    ConfigurationError,
    LLMProviderError,
    LLMProviderRegistry,
    require_credentials,
    resolve_llm_config,
)

router = Router()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Service health status")
    database: str = Field(..., description="Database connection status")


class AssistantStatusResponse(BaseModel):
    """Non-secret view of the assistant's LLM configuration."""

    provider: str = Field(..., description="Configured provider name")
    model: str = Field(..., description="Configured model id")
    configured: bool = Field(..., description="Whether the provider can make calls")
    supports_tools: bool = Field(..., description="Whether the model is known to support function calling")


class ErrorResponse(BaseModel):
    error: str


@router.get("/health", response=HealthResponse)
def health_check(request):
    """
    Health check endpoint for load balancers.

    Verifies the service is running and can connect to the database.
    """
    db_status = "ok"
    try:
        connection.ensure_connection()
    except Exception:
        db_status = "error"

    return HealthResponse(status="ok", database=db_status)


@router.get("/assistant", response={200: AssistantStatusResponse, 401: ErrorResponse})
async def assistant_status(request):
    """
    Report which provider and model the assistant will use.

    Never exposes credentials; ``configured`` is False when the provider
    is unknown or lacks its API key.
    """
    user = await aget_authenticated_user(request)
    if user is None:
        return 401, {"error": "Authentication required"}

    config = resolve_llm_config()
    configured = False
    supports_tools = False
    try:
        provider = LLMProviderRegistry.from_config(config)
    except LLMProviderError:
        provider = None

    if provider is not None:
        model = provider.get_model(config.model_id)
        supports_tools = bool(model and model.supports_tools)
        try:
            require_credentials(provider)
        except ConfigurationError:
            configured = False
        else:
            configured = True

    return AssistantStatusResponse(
        provider=config.provider,
        model=config.model_id,
        configured=configured,
        supports_tools=supports_tools,
    )
