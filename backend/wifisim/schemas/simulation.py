"""Simulation request / response schemas for API validation."""

from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Dict, Any

from wifisim.schemas.access_point import AccessPoint, WiFiBand
from wifisim.schemas.survey import SurveySnapshot


class SignalMapRequest(BaseModel):
    """Request to build a signal map for a survey."""
    survey: SurveySnapshot
    resolution: Optional[int] = Field(
        None, gt=0, le=200, description="Floor-plan pixels per grid cell"
    )
    band: Optional[WiFiBand] = Field(
        None, description="Report on this band only; default reports every band plus best"
    )
    threshold_dbm: Optional[float] = Field(
        None, le=0, description="Minimum acceptable signal for coverage percentage"
    )
    render_heatmap: bool = Field(False, description="Also write a PNG heatmap")


class SignalMapSummary(BaseModel):
    """Grid metadata plus per-band coverage statistics."""
    cols: int
    rows: int
    resolution: int
    coverage: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="Coverage report keyed by band value, plus 'best' across bands"
    )
    heatmap_path: Optional[str] = None


class PerformanceRequest(BaseModel):
    """Request to compute association and throughput."""
    survey: SurveySnapshot
    disabled_client_ids: List[str] = Field(default_factory=list)


class SimulationJob(BaseModel):
    """Queued background signal map job."""
    task_id: str
    status: str
    result: Optional[SignalMapSummary] = None
    error: Optional[str] = None


class ApSpecSchema(BaseModel):
    """Catalogue entry for an AP model."""
    brand: str
    model: str
    antenna_gain_dbi: float
    supported_bands: List[WiFiBand]
    max_tx_power_dbm: float
    description: str = ""

    model_config = ConfigDict(from_attributes=True)


class ApInstantiateRequest(BaseModel):
    """Create an AccessPoint from a catalogue entry."""
    brand: str
    model: str
    ap_id: str = Field(..., min_length=1)
    x: float
    y: float


class ApInstantiateResponse(BaseModel):
    access_point: AccessPoint
