"""
Health check API endpoints.

Routes: GET /health, GET /system-prompt

Dependencies: rag_service.configs
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends

from rag_service import __version__
from rag_service.api.deps import get_settings_dependency
from rag_service.configs import Settings
from rag_service.models.common import HealthResponse, SystemPromptResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/system-prompt", response_model=SystemPromptResponse)
async def get_system_prompt(
    settings: Settings = Depends(get_settings_dependency),
) -> SystemPromptResponse:
    """Configured default system prompt."""
    return SystemPromptResponse(system_prompt=settings.rag.system_prompt)
