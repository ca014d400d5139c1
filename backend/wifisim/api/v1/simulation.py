"""Signal map simulation API endpoints."""

from fastapi import APIRouter, HTTPException
from starlette.concurrency import run_in_threadpool
import logging

from wifisim.schemas.simulation import SignalMapRequest, SignalMapSummary, SimulationJob
from wifisim.services.heatmap_generator import generate_band_reports
from wifisim.services.signal_map_builder import compute_signal_map
from wifisim.tasks import simulation_task

logger = logging.getLogger(__name__)

router = APIRouter()


def _build_summary(request: SignalMapRequest) -> SignalMapSummary:
    signal_map = compute_signal_map(request.survey, request.resolution)
    return SignalMapSummary(
        cols=signal_map.cols,
        rows=signal_map.rows,
        resolution=signal_map.resolution,
        coverage=generate_band_reports(signal_map, request.band, request.threshold_dbm),
    )


@router.post("/signal-map", response_model=SignalMapSummary)
async def build_signal_map(request: SignalMapRequest):
    """
    Build a signal map synchronously and return grid size and coverage.

    Suitable for small floor plans; use `/jobs` for large ones.
    """
    if request.survey.floor_plan is None:
        raise HTTPException(status_code=400, detail="Survey has no floor plan")

    return await run_in_threadpool(_build_summary, request)


@router.post("/jobs", response_model=SimulationJob, status_code=202)
async def create_signal_map_job(request: SignalMapRequest):
    """
    Queue a signal map build on the Celery worker.

    Poll `/jobs/{task_id}` for the result.
    """
    if request.survey.floor_plan is None:
        raise HTTPException(status_code=400, detail="Survey has no floor plan")

    try:
        task_id = simulation_task.enqueue_signal_map(request.model_dump(mode="json"))
    except Exception as e:
        logger.error(f"Failed to queue signal map task: {e}")
        raise HTTPException(
            status_code=503,
            detail="Background task system unavailable"
        )

    return SimulationJob(task_id=task_id, status="pending")


@router.get("/jobs/{task_id}", response_model=SimulationJob)
async def get_signal_map_job(task_id: str):
    """Get the status, and once finished the result, of a queued build."""
    return SimulationJob(**simulation_task.get_job_state(task_id))
