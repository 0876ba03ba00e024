from mw2deki.models.models import CategoryLink, CurPage

__all__ = ["CategoryLink", "CurPage"]
