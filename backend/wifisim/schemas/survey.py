"""Survey snapshot schemas: the immutable input to every simulation."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from wifisim.core.config import settings
from wifisim.schemas.access_point import AccessPoint
from wifisim.schemas.client import ClientDevice
from wifisim.schemas.wall import WallSegment
from wifisim.schemas.zone import EnvironmentZone


class FloorPlan(BaseModel):
    """Floor plan dimensions in pixels plus the pixel-to-meter scale."""
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    pixels_per_meter: float = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def real_width_meters(self) -> float:
        return self.width / self.pixels_per_meter

    @property
    def real_height_meters(self) -> float:
        return self.height / self.pixels_per_meter


class SurveySnapshot(BaseModel):
    """Everything the engines read, captured at a single point in time."""
    floor_plan: Optional[FloorPlan] = None
    access_points: Tuple[AccessPoint, ...] = ()
    walls: Tuple[WallSegment, ...] = ()
    zones: Tuple[EnvironmentZone, ...] = ()
    clients: Tuple[ClientDevice, ...] = ()
    total_wan_bandwidth_mbps: Optional[float] = Field(
        None,
        ge=0,
        description="Survey-wide WAN bandwidth shared by APs without an explicit cap"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "SurveySnapshot":
        ap_ids = [ap.id for ap in self.access_points]
        if len(ap_ids) != len(set(ap_ids)):
            raise ValueError("Access point ids must be unique")
        client_ids = [c.id for c in self.clients]
        if len(client_ids) != len(set(client_ids)):
            raise ValueError("Client ids must be unique")
        return self

    @property
    def pixels_per_meter(self) -> float:
        if self.floor_plan is None:
            return settings.DEFAULT_PIXELS_PER_METER
        return self.floor_plan.pixels_per_meter

    def access_point(self, ap_id: str) -> Optional[AccessPoint]:
        for ap in self.access_points:
            if ap.id == ap_id:
                return ap
        return None
