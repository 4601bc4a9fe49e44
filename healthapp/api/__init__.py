"""API module."""

from .metrics import router as metrics_router
from .goals import router as goals_router
from .profile import router as profile_router
from .journals import router as journals_router
from .ai import router as ai_router
from .export import router as export_router
from .preferences import router as preferences_router

__all__ = [
    'metrics_router', 'goals_router', 'profile_router', 'journals_router',
    'ai_router', 'export_router', 'preferences_router',
]
