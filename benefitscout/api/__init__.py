"""
API Module Exports
"""

from .app import app
from .public import router as public_router
from .insights import router as insights_router

__all__ = ['app', 'public_router', 'insights_router']
