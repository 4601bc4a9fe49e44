"""
Export API endpoints - Write history projections to JSON files.
"""

from fastapi import APIRouter, HTTPException, Depends, status

from ..config import settings
from ..core.app_state import AppState
from ..services import ExportService, ExportError
from .deps import get_state

router = APIRouter(prefix="/export", tags=["export"])


def _export_service(state: AppState) -> ExportService:
    return ExportService(state.store, settings.export_path, clock=state.metrics.clock)


@router.post("/meal-log")
async def export_meal_log(state: AppState = Depends(get_state)):
    # Exports read the stored record, so pending writes go first
    await state.flush()
    try:
        path = await _export_service(state).export_meal_log()
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"path": str(path), "filename": path.name}


@router.post("/exercise-log")
async def export_exercise_log(state: AppState = Depends(get_state)):
    await state.flush()
    try:
        path = await _export_service(state).export_exercise_log()
    except ExportError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"path": str(path), "filename": path.name}
