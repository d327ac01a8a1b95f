"""
AI completions proxy.

Forwards a prompt to OpenRouter with the server-held key. Upstream
errors are passed back with the upstream status code.
"""

from typing import Any, Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from modules.auth.models import UserProfile
from providers.openrouter import OpenRouterClient, UpstreamResponseError

from ..dependencies import get_openrouter_client
from ..middleware.auth import get_current_user
from ..models.errors import UpstreamErrorResponse

router = APIRouter()


class CompletionRequest(BaseModel):
    """Completion request body."""

    prompt: Optional[str] = None


@router.post("")
async def create_completion(
    request: CompletionRequest,
    user: UserProfile = Depends(get_current_user),
    client: OpenRouterClient = Depends(get_openrouter_client),
) -> Any:
    """
    Generate text for a prompt.

    Requires authentication.
    """
    if not request.prompt:
        return JSONResponse(status_code=400, content={"error": "Prompt is required."})

    try:
        return await client.complete(request.prompt)
    except UpstreamResponseError as e:
        body = UpstreamErrorResponse(error=e.message, details=e.body)
        return JSONResponse(status_code=e.status_code, content=body.model_dump())
