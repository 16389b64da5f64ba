"""API routers package."""

from src.api import system

__all__ = [
    "system",
]
