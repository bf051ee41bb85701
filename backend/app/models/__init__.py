"""Models package - re-exports API schema helpers for convenient imports."""

from app.models.base import CamelModel

__all__ = [
    "CamelModel",
]
