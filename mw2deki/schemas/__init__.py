from mw2deki.schemas.schemas import (
    ConvertRequest, ConvertResponse,
    PageSummary, PageResponse,
)

__all__ = [
    "ConvertRequest", "ConvertResponse",
    "PageSummary", "PageResponse",
]
