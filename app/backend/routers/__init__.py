"""
Routers package for FastAPI endpoints.

Organized by domain:
- applications: Rental application extraction endpoints
"""

from . import applications

__all__ = ["applications"]
