"""Client device schemas."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from wifisim.schemas.access_point import Point, WiFiBand


class ClientDeviceType(str, Enum):
    LAPTOP = "laptop"
    SMARTPHONE = "smartphone"
    TABLET = "tablet"
    IOT_SENSOR = "iot_sensor"
    DESKTOP = "desktop"
    SMART_TV = "smart_tv"


class ClientDevice(BaseModel):
    """A virtual client device placed on the floor plan."""
    id: str = Field(..., min_length=1)
    name: str = ""
    type: ClientDeviceType = ClientDeviceType.LAPTOP
    position: Point
    preferred_band: Optional[WiFiBand] = Field(
        None,
        description="Forces this band when the chosen AP offers it (None = auto)"
    )
    manual_ap_id: Optional[str] = Field(
        None,
        description="Forces association to this AP when it is visible"
    )

    model_config = ConfigDict(frozen=True)
