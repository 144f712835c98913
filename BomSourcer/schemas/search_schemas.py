from typing import Optional, List

from pydantic import BaseModel, ConfigDict, Field

from BomSourcer.suppliers.base import SearchQuery, DEFAULT_SEARCH_LIMIT

ALL_SUPPLIERS = ["jlcpcb", "digikey", "mouser"]


class PartsSearchRequest(BaseModel):
    """Search request body; field names follow the camelCase wire form"""
    model_config = ConfigDict(populate_by_name=True)

    value: Optional[str] = ""
    footprint: Optional[str] = ""
    component_type: Optional[str] = Field(default="", alias="componentType")
    manufacturer: Optional[str] = ""
    manufacturer_part_number: Optional[str] = Field(default="", alias="manufacturerPartNumber")
    limit: Optional[int] = DEFAULT_SEARCH_LIMIT
    suppliers: List[str] = Field(default_factory=lambda: list(ALL_SUPPLIERS))

    def to_query(self) -> SearchQuery:
        return SearchQuery(
            value=self.value or "",
            footprint=self.footprint or "",
            component_type=self.component_type or "",
            manufacturer=self.manufacturer or "",
            manufacturer_part_number=self.manufacturer_part_number or "",
            limit=self.limit or DEFAULT_SEARCH_LIMIT,
        )


def parse_supplier_list(raw: Optional[str]) -> List[str]:
    """"jlcpcb, mouser" -> ["jlcpcb", "mouser"]; blank means every supplier"""
    if not raw or not raw.strip():
        return list(ALL_SUPPLIERS)
    return [name.strip() for name in raw.split(",") if name.strip()]
