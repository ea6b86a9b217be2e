from __future__ import annotations

from fastapi import APIRouter, Depends

from ....core.config import Settings, get_settings_dep
from ....rf.propagation import COST231_THRESHOLD_MHZ

router = APIRouter()


@router.get("/public")
async def get_public_config(settings: Settings = Depends(get_settings_dep)):
    return {
        "project": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "cost231_threshold_mhz": COST231_THRESHOLD_MHZ,
        "suggestions_enabled": bool(settings.SUGGESTIONS_API_KEY),
    }
