"""Pydantic schemas validated at the HTTP boundary."""

from .common import CamelModel, MessageResponse, Paginated

__all__ = ["CamelModel", "MessageResponse", "Paginated"]
