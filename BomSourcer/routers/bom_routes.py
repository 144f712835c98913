"""
BOM Upload Routes

Accepts a CSV bill of materials, sources every line and returns per-row
outcomes together with the sourced CSV.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from BomSourcer.exceptions import BomParseError
from BomSourcer.routers.base import BaseRouter, standard_error_handling
from BomSourcer.schemas.response import BomUploadResponse
from BomSourcer.services.bom import BomSourcingService
from BomSourcer.services.bom.bom_sourcing_service import EMPTY_BOM_MESSAGE
from BomSourcer.services.parts_search_service import PartsSearchService, get_parts_search_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/bom-upload", response_model=BomUploadResponse)
@standard_error_handling
async def upload_bom(
    file: Optional[UploadFile] = File(None, description="BOM exported as CSV"),
    service: PartsSearchService = Depends(get_parts_search_service),
):
    if file is None:
        return BaseRouter.build_error_response("No file uploaded", status_code=400)

    raw = await file.read()
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise BomParseError(EMPTY_BOM_MESSAGE, filename=file.filename)

    logger.info(f"Received BOM upload {file.filename} ({len(raw)} bytes)")

    report = await BomSourcingService(service).source_bom_file(file.filename, text)

    return BomUploadResponse(
        filename=report.filename,
        stats=report.stats,
        config=service.get_configuration_status(),
        results=[result.summary() for result in report.results],
        csv=report.csv,
    )
