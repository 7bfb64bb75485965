import logging

from fastapi import APIRouter, HTTPException, Request

from simulark import __version__
from simulark.common.errors import UnknownProviderError

logger = logging.getLogger("Simulark")

router = APIRouter()


@router.get("/api/health")
async def get_health(request: Request):
    """Service status with per-provider circuit state and credential presence."""
    registry = request.app.state.registry
    breaker = request.app.state.circuit_breaker

    providers = {}
    for provider_id in registry.provider_ids:
        state = breaker.get_status(provider_id)
        providers[provider_id] = {
            "circuit": state.status,
            "failures": state.failures,
            "retry_after": breaker.retry_after(provider_id),
            "has_credential": registry.get(provider_id).has_credential,
        }

    return {
        "status": "ok",
        "version": __version__,
        "primary": registry.primary,
        "fallback": registry.fallback,
        "providers": providers,
    }


@router.post("/api/admin/circuits/{provider}/reset")
async def reset_circuit(provider: str, request: Request):
    registry = request.app.state.registry
    try:
        registry.get(provider)
    except UnknownProviderError:
        raise HTTPException(status_code=404, detail=f"Provider '{provider}' not found")

    request.app.state.circuit_breaker.reset(provider)
    return {"status": "success", "message": f"Circuit for '{provider}' reset."}
