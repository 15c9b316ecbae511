"""Health check endpoints."""

from typing import Dict, Union

from fastapi import APIRouter

from ... import __version__
from ...infrastructure.dependencies import get_service_container

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> Dict[str, Union[str, Dict[str, bool]]]:
    """Check the health of the service and its reference providers.

    Returns:
        Service status, configured backend and provider activity
    """
    container = get_service_container()
    return {
        "status": "healthy",
        "version": __version__,
        "backend": container.settings.backend.value,
        "reference_providers": {
            name.title(): is_active
            for name, is_active in container.provider_status.items()
        },
    }
