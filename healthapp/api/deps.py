"""
Request dependencies.

Every request first rolls today over if the calendar day changed while the
app was running, so handlers always see the current day.
"""

from fastapi import Request

from ..core.app_state import AppState


def get_state(request: Request) -> AppState:
    state: AppState = request.app.state.health
    state.metrics.rollover()
    return state
