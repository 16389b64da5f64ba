"""Health and error catalog endpoints"""

from fastapi import APIRouter

from src.core.config import get_settings
from src.shared.errors import BaseError, ErrorTypeInfo, get_message_catalog
from src.shared.schemas import HealthResponse

router = APIRouter(prefix="/observability", tags=["System"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for load balancer."""
    catalog = get_message_catalog()
    dependencies = {
        "message_catalog": ",".join(catalog.locales) if catalog else "pass-through",
    }
    return HealthResponse(
        status="healthy",
        version=get_settings().app.version,
        dependencies=dependencies,
    )


@router.get("/live")
async def liveness_check() -> dict[str, bool]:
    """Liveness check endpoint."""
    return {"alive": True}


@router.get("/errors", response_model=list[ErrorTypeInfo])
async def list_error_types() -> list[ErrorTypeInfo]:
    """Registered error conditions, for client-side message catalogs."""
    return [
        ErrorTypeInfo(
            code=code,
            name=error_type.__name__,
            category=str(error_type.category) if error_type.category else None,
            status_code=error_type.status_code,
            default_message=error_type.default_message,
        )
        for code, error_type in sorted(BaseError.registered_types().items())
    ]
