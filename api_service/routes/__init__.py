"""
List API route modules.

Each module handles the listings of one area of the marketplace.
"""

from .admin import router as admin_router
from .jobs import router as jobs_router
from .messages import router as messages_router
from .notifications import router as notifications_router
from .recruiters import router as recruiters_router
from .talents import router as talents_router
from .users import router as users_router

__all__ = [
    "admin_router",
    "jobs_router",
    "messages_router",
    "notifications_router",
    "recruiters_router",
    "talents_router",
    "users_router",
]
