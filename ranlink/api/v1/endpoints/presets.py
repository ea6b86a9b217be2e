from __future__ import annotations

from fastapi import APIRouter

from ....services.presets import LTE_BANDS, Technology, vendor_presets
from ..schemas import PresetsResponse

router = APIRouter()


@router.get("/{technology}", response_model=PresetsResponse)
async def get_presets(technology: Technology) -> PresetsResponse:
    vendors = {vendor.value: values for vendor, values in vendor_presets(technology).items()}
    return PresetsResponse(
        technology=technology,
        vendors=vendors,
        bands=dict(LTE_BANDS) if technology == Technology.LTE else None,
    )
