"""
Router package for the Gym Platform API.

This package contains all API routers organized by domain:
- health: Health check endpoint
- auth: Registration, login (password and QR) and token endpoints
- users: Profiles, listings, assignment and admin actions
- workouts: Trainer plan authoring, exercise catalog and stats
- client_workouts: Client plans, today's workout, logs and stats
"""

from api.routers.auth import router as auth_router
from api.routers.client_workouts import router as client_workouts_router
from api.routers.health import router as health_router
from api.routers.users import router as users_router
from api.routers.workouts import router as workouts_router

__all__ = [
    "health_router",
    "auth_router",
    "users_router",
    "workouts_router",
    "client_workouts_router",
]
