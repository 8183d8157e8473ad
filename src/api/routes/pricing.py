"""Pricing settings endpoints."""

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    get_app_settings,
    get_pricing_settings,
    get_update_tax_rate_use_case,
)
from src.application.dto.requests import UpdateTaxRateRequest
from src.application.dto.responses import ErrorResponse, PricingSettingsResponse
from src.application.use_cases import UpdateTaxRateUseCase
from src.config import Settings
from src.infrastructure.storage.sqlite import SQLiteSettingsStore

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/pricing", response_model=PricingSettingsResponse)
async def get_pricing(
    store: SQLiteSettingsStore = Depends(get_pricing_settings),
    settings: Settings = Depends(get_app_settings),
) -> PricingSettingsResponse:
    """Current tax rate and currency."""
    config = await store.get_pricing_config()
    return PricingSettingsResponse(
        tax_rate=config.tax_rate,
        currency=settings.pos.currency,
        seeded=config.seeded,
        updated_at=config.updated_at,
    )


@router.put(
    "/pricing",
    response_model=PricingSettingsResponse,
    responses={400: {"model": ErrorResponse}},
)
async def update_pricing(
    request: UpdateTaxRateRequest,
    use_case: UpdateTaxRateUseCase = Depends(get_update_tax_rate_use_case),
) -> PricingSettingsResponse:
    """Change the tax rate and recompute tax on every part."""
    result = await use_case.execute(request)
    return use_case.to_response(result)
