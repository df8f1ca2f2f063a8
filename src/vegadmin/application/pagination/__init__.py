"""Application pagination – offset page state."""
from vegadmin.application.pagination.page import PageState

__all__ = ["PageState"]
