"""Network performance result schemas."""

from types import MappingProxyType
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_validator

from wifisim.schemas.access_point import WiFiBand


class ClientPerf(BaseModel):
    """Computed RF and throughput metrics for a single client device."""
    client_id: str
    client_name: str = ""
    associated_ap_id: Optional[str] = None
    associated_band: Optional[WiFiBand] = None
    rssi_dbm: float
    snr_db: float
    mcs_index: int = Field(..., ge=0, le=9)
    phy_rate_mbps: float = Field(
        ...,
        description="PHY rate for this MCS and channel width before overhead and sharing"
    )
    effective_mbps: float = Field(
        ...,
        description="Throughput after protocol overhead, air-time sharing and WAN cap"
    )
    rf_max_mbps: float = Field(0.0, description="RF-only ceiling before the WAN cap")
    warnings: Tuple[str, ...] = ()
    is_disabled: bool = False
    is_wan_limited: bool = False
    active_zones: Tuple[str, ...] = ()
    zone_modifier_db: float = 0.0  # informational, already folded into rssi_dbm

    model_config = ConfigDict(frozen=True)


class ApPerf(BaseModel):
    """Aggregate performance metrics for a single access point."""
    ap_id: str
    ap_name: str
    client_ids: Tuple[str, ...] = ()
    allocated_mbps: Optional[float] = Field(
        None,
        description="Bandwidth allocated to this AP (None = unconstrained)"
    )
    utilised_mbps: float = 0.0
    utilisation_pct: float = Field(0.0, ge=0, le=1)
    warnings: Tuple[str, ...] = ()

    model_config = ConfigDict(frozen=True)


class NetworkPerformance(BaseModel):
    """A full snapshot of network performance for the current survey."""
    per_ap: Dict[str, ApPerf] = Field(default_factory=dict)
    per_client: Dict[str, ClientPerf] = Field(default_factory=dict)
    total_wan_mbps: Optional[float] = None
    total_utilised_mbps: float = 0.0

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def freeze_mappings(self) -> "NetworkPerformance":
        # Frozen only guards attribute assignment; the mappings need their own guard
        self.__dict__["per_ap"] = MappingProxyType(dict(self.per_ap))
        self.__dict__["per_client"] = MappingProxyType(dict(self.per_client))
        return self

    @field_serializer("per_ap", "per_client")
    def serialize_mapping(self, value):
        return dict(value)
