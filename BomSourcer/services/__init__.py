from BomSourcer.services.parts_search_service import PartsSearchService, get_parts_search_service

__all__ = ["PartsSearchService", "get_parts_search_service"]
