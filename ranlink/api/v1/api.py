from fastapi import APIRouter

from .endpoints import lte, nr, presets, public_config, suggestions

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(nr.router, prefix="/nr", tags=["nr"])
api_router.include_router(lte.router, prefix="/lte", tags=["lte"])
api_router.include_router(presets.router, prefix="/presets", tags=["presets"])
api_router.include_router(suggestions.router, prefix="/suggestions", tags=["suggestions"])
api_router.include_router(public_config.router, prefix="/config", tags=["config"])  # /api/v1/config/public
