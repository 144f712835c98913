from .models import SourcingStatus, SourcingResult, RowPlan, BomSourcingReport
from .bom_sourcing_service import BomSourcingService

__all__ = [
    "SourcingStatus",
    "SourcingResult",
    "RowPlan",
    "BomSourcingReport",
    "BomSourcingService",
]
