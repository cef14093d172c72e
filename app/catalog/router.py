"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /categories                 : list the browsable categories
- GET  /categories/{slug}/plants   : one page of a category listing
- GET  /plants/{plant_id}          : normalized detail of one plant
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from ..config import get_settings
from .perenual_service import PerenualClient
from .pipelines import DetailPipeline, ListPipeline
from .schemas import (
    Category,
    CategoryListing,
    FetchStatus,
    PlantDetailScreen,
)
from .store import category_title, get_category, list_categories


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def get_perenual_client() -> PerenualClient:
    settings = get_settings()
    return PerenualClient(settings.perenual_api_key, settings.perenual_base_url)


def get_minimum_loading_ms() -> int:
    return get_settings().minimum_loading_ms


@router.get("/categories", response_model=List[Category])
def list_categories_api() -> List[Category]:
    return list_categories()


@router.get("/categories/{slug}/plants", response_model=CategoryListing)
async def list_category_plants(
    slug: str,
    page: int = Query(default=1, ge=1, description="Page number (1-indexed)"),
    source: PerenualClient = Depends(get_perenual_client),
    minimum_ms: int = Depends(get_minimum_loading_ms),
) -> CategoryListing:
    """Return one page of plants for a category.

    An unknown slug lists every plant and uses the slug itself as the
    page title.  A failed upstream fetch is reported as 502 with the
    generic message of the listing screen.
    """
    category = get_category(slug)
    category_filter = category.filter if category else ""
    pipeline = ListPipeline(source, minimum_ms=minimum_ms)
    screen = await pipeline.load_page(category_filter, page)
    if screen.state == FetchStatus.FAILED:
        raise HTTPException(status_code=502, detail=screen.message)
    return CategoryListing(slug=slug, title=category_title(slug), screen=screen)


@router.get("/plants/{plant_id}", response_model=PlantDetailScreen)
async def get_plant(
    plant_id: str = Path(..., min_length=1),
    source: PerenualClient = Depends(get_perenual_client),
    minimum_ms: int = Depends(get_minimum_loading_ms),
) -> PlantDetailScreen:
    pipeline = DetailPipeline(source, minimum_ms=minimum_ms)
    screen = await pipeline.load_detail(plant_id)
    if screen.state == FetchStatus.FAILED:
        raise HTTPException(status_code=502, detail=screen.message)
    if screen.not_found:
        raise HTTPException(status_code=404, detail="Plant not found")
    return screen
