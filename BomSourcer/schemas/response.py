from typing import Optional, Any, Dict, List
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[Any] = None


class SupplierStatus(BaseModel):
    name: str
    configured: bool
    note: str = ""


class SetupInstructions(BaseModel):
    steps: List[str]


class SupplierConfigResponse(BaseModel):
    suppliers: Dict[str, SupplierStatus]
    instructions: Dict[str, SetupInstructions] = {}


class PartsSearchResponse(BaseModel):
    success: bool = True
    query: Dict[str, Any]
    results: Dict[str, List[Dict[str, Any]]]
    configured: Dict[str, bool]


class MatchedPartSummary(BaseModel):
    partNumber: str
    lcscPart: Optional[str] = None
    manufacturer: str = ""
    manufacturerPartNumber: str = ""
    stock: int = 0
    price: float = 0.0


class RowResultSummary(BaseModel):
    reference: str
    value: str
    status: str
    notes: str
    matchedPart: Optional[MatchedPartSummary] = None


class BomUploadResponse(BaseModel):
    success: bool = True
    filename: str
    stats: Dict[str, int]
    config: Dict[str, bool]
    results: List[RowResultSummary]
    csv: str
