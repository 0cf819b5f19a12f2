"""Common middleware for Felicity."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
