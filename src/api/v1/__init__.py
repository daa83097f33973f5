"""
API v1 package.

Contains versioned API routes for the user registration API.
"""

from src.api.v1.routes import router, unsupported_method_handler

__all__ = ["router", "unsupported_method_handler"]
