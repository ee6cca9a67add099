"""
API route modules.
"""

from .simulations_routes import router as simulations_router

__all__ = ["simulations_router"]
