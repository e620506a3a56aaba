"""
API route modules.

Each module defines routes for one area.
"""

from routes.akeneo import router as akeneo_router
from routes.settings import router as settings_router
from routes.sync import router as sync_router

__all__ = [
    "akeneo_router",
    "settings_router",
    "sync_router",
]
