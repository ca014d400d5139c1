"""Network performance API endpoints."""

from fastapi import APIRouter
from starlette.concurrency import run_in_threadpool

from wifisim.schemas.performance import NetworkPerformance
from wifisim.schemas.simulation import PerformanceRequest
from wifisim.services.network_performance import compute_network_performance

router = APIRouter()


@router.post("", response_model=NetworkPerformance)
async def compute_performance(request: PerformanceRequest):
    """
    Associate every client with an AP and estimate its throughput.

    - **disabled_client_ids**: clients that are listed but excluded from
      association and contention
    """
    return await run_in_threadpool(
        compute_network_performance,
        request.survey,
        frozenset(request.disabled_client_ids)
    )
