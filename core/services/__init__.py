"""Application services."""

from .process_service import ProcessService

__all__ = ["ProcessService"]
