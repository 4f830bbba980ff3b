"""
Workout API request bodies.

Plan, exercise and log bodies use the command models of the plan,
exercise and logging use cases directly.
"""

from pydantic import BaseModel


class TogglePlanRequest(BaseModel):
    """Request body for PUT /workouts/plans/{id}/toggle."""
    is_active: bool
