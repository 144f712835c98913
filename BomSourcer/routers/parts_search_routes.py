"""
Parts Search Routes

Single-query search across the enabled suppliers, via query string (GET) or
JSON body (POST).
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from BomSourcer.routers.base import BaseRouter
from BomSourcer.schemas.response import PartsSearchResponse
from BomSourcer.schemas.search_schemas import PartsSearchRequest, parse_supplier_list
from BomSourcer.services.parts_search_service import PartsSearchService, get_parts_search_service
from BomSourcer.suppliers.base import DEFAULT_SEARCH_LIMIT

logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_search(request: PartsSearchRequest, service: PartsSearchService):
    configured = service.get_configuration_status()
    try:
        query = request.to_query()
        results = await service.search(query, enabled=request.suppliers)
        return PartsSearchResponse(
            query=query.to_dict(),
            results={supplier: [part.to_dict() for part in parts] for supplier, parts in results.items()},
            configured=configured,
        )
    except Exception as e:
        logger.error(f"Parts search failed: {e}", exc_info=True)
        return BaseRouter.build_error_response(str(e), status_code=500, configured=configured)


@router.get("/parts-search", response_model=PartsSearchResponse)
async def search_parts_get(
    value: Optional[str] = Query(""),
    footprint: Optional[str] = Query(""),
    component_type: Optional[str] = Query("", alias="componentType"),
    manufacturer: Optional[str] = Query(""),
    manufacturer_part_number: Optional[str] = Query("", alias="manufacturerPartNumber"),
    limit: Optional[int] = Query(DEFAULT_SEARCH_LIMIT),
    suppliers: Optional[str] = Query(None, description="Comma-separated supplier ids (default: all)"),
    service: PartsSearchService = Depends(get_parts_search_service),
):
    request = PartsSearchRequest(
        value=value,
        footprint=footprint,
        component_type=component_type,
        manufacturer=manufacturer,
        manufacturer_part_number=manufacturer_part_number,
        limit=limit,
        suppliers=parse_supplier_list(suppliers),
    )
    return await _run_search(request, service)


@router.post("/parts-search", response_model=PartsSearchResponse)
async def search_parts_post(
    request: PartsSearchRequest,
    service: PartsSearchService = Depends(get_parts_search_service),
):
    return await _run_search(request, service)
