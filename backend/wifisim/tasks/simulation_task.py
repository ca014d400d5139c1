"""Celery task for building signal maps off the request path."""

import logging
import os
from typing import Optional

from celery import Task

from wifisim.core.config import settings
from wifisim.schemas.simulation import SignalMapRequest, SignalMapSummary
from wifisim.services.heatmap_generator import generate_band_reports, generate_heatmap_image
from wifisim.services.signal_map_builder import compute_signal_map
from wifisim.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


class SimulationTask(Task):
    """Base task class that logs failures with the task id."""

    def on_failure(self, exc, task_id, args, kwargs, einfo):
        logger.error(f"Signal map task {task_id} failed: {exc}")


@celery_app.task(bind=True, base=SimulationTask, name='wifisim.tasks.simulation_task.compute_signal_map_task')
def compute_signal_map_task(self, payload: dict):
    """
    Background task to build a signal map and its coverage reports.

    Args:
        payload: JSON form of a SignalMapRequest

    Returns:
        JSON form of a SignalMapSummary
    """
    request = SignalMapRequest.model_validate(payload)
    task_id = self.request.id

    if task_id:
        self.update_state(state='PROGRESS', meta={'stage': 'simulating'})

    signal_map = compute_signal_map(request.survey, request.resolution)

    if task_id:
        self.update_state(state='PROGRESS', meta={'stage': 'reporting'})

    reports = generate_band_reports(signal_map, request.band, request.threshold_dbm)

    heatmap_path: Optional[str] = None
    if request.render_heatmap:
        filename = f"{task_id or 'signal_map'}.png"
        heatmap_path = generate_heatmap_image(
            signal_map,
            os.path.join(settings.HEATMAP_PATH, filename),
            band=request.band,
            ap_positions=[(ap.position.x, ap.position.y) for ap in request.survey.access_points],
        )

    logger.info(
        f"Signal map task {task_id} finished: {signal_map.cols}x{signal_map.rows} cells, "
        f"{len(reports)} report(s)"
    )

    summary = SignalMapSummary(
        cols=signal_map.cols,
        rows=signal_map.rows,
        resolution=signal_map.resolution,
        coverage=reports,
        heatmap_path=heatmap_path,
    )
    return summary.model_dump(mode='json')


def enqueue_signal_map(payload: dict) -> str:
    """Queue a signal map build and return the Celery task id."""
    result = compute_signal_map_task.delay(payload)
    return result.id


def get_job_state(task_id: str) -> dict:
    """Current status of a queued build, with its result once finished."""
    result = celery_app.AsyncResult(task_id)
    state = {"task_id": task_id, "status": result.status.lower()}
    if result.successful():
        state["result"] = result.result
    elif result.failed():
        state["error"] = str(result.result)
    return state
