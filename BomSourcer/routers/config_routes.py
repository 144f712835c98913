from fastapi import APIRouter, Depends

from BomSourcer.routers.base import standard_error_handling
from BomSourcer.schemas.response import SupplierConfigResponse
from BomSourcer.services.parts_search_service import PartsSearchService, get_parts_search_service

router = APIRouter()


@router.get("/config", response_model=SupplierConfigResponse)
@standard_error_handling
async def get_config(service: PartsSearchService = Depends(get_parts_search_service)):
    """Which suppliers have credentials, and how to configure the ones that don't"""
    return service.get_supplier_configuration()
