"""Parts catalog endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from src.api.dependencies import (
    get_add_part_use_case,
    get_import_parts_use_case,
    get_parts,
    get_seed_catalog_use_case,
    get_update_prices_use_case,
)
from src.application.dto.converters import part_to_response
from src.application.dto.requests import (
    CreatePartRequest,
    ImportPartsRequest,
    UpdatePricesRequest,
)
from src.application.dto.responses import (
    ErrorResponse,
    ImportPartsResponse,
    PartListResponse,
    PartResponse,
    SeedCatalogResponse,
    UpdatePricesResponse,
)
from src.application.use_cases import (
    AddPartUseCase,
    ImportPartsUseCase,
    SeedCatalogUseCase,
    UpdatePricesUseCase,
)
from src.infrastructure.storage.sqlite import SQLitePartStore

router = APIRouter(prefix="/api/parts", tags=["parts"])


@router.get("", response_model=PartListResponse)
async def list_parts(
    category: str | None = Query(None, description="Filter by category"),
    search: str | None = Query(None, description="Match name, part number or code"),
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    store: SQLitePartStore = Depends(get_parts),
) -> PartListResponse:
    """List catalog parts ordered by name."""
    parts = await store.list_parts(category=category, search=search, limit=limit, offset=offset)
    return PartListResponse(
        parts=[part_to_response(p) for p in parts],
        total=len(parts),
    )


@router.post(
    "",
    response_model=PartResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def add_part(
    request: CreatePartRequest,
    use_case: AddPartUseCase = Depends(get_add_part_use_case),
) -> PartResponse:
    """Add a part. The entered price is split into base price and tax."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post(
    "/import",
    response_model=ImportPartsResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def import_parts(
    request: ImportPartsRequest,
    use_case: ImportPartsUseCase = Depends(get_import_parts_use_case),
) -> ImportPartsResponse:
    """Import parts from parsed spreadsheet rows. Incomplete rows are skipped."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.post("/seed", response_model=SeedCatalogResponse)
async def seed_catalog(
    use_case: SeedCatalogUseCase = Depends(get_seed_catalog_use_case),
) -> SeedCatalogResponse:
    """Load the default catalog once. Later calls are no-ops."""
    result = await use_case.execute()
    return use_case.to_response(result)


@router.post(
    "/prices",
    response_model=UpdatePricesResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_prices(
    request: UpdatePricesRequest,
    use_case: UpdatePricesUseCase = Depends(get_update_prices_use_case),
) -> UpdatePricesResponse:
    """Change base prices. Tax and sale price are recomputed."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{part_id}",
    response_model=PartResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_part(
    part_id: str,
    store: SQLitePartStore = Depends(get_parts),
) -> PartResponse:
    """Get a part by ID."""
    part = await store.get_part(part_id)
    if part is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Part not found: {part_id}",
        )
    return part_to_response(part)
