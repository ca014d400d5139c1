"""Access point and frequency band schemas."""

from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class Point(BaseModel):
    """2D point in floor-plan pixel coordinates."""
    x: float
    y: float

    model_config = ConfigDict(frozen=True)


class WiFiBand(str, Enum):
    """Supported WiFi frequency bands."""
    GHZ_24 = "ghz24"
    GHZ_5 = "ghz5"
    GHZ_6 = "ghz6"

    @property
    def label(self) -> str:
        return BAND_PROPERTIES[self].label

    @property
    def default_frequency_mhz(self) -> float:
        return BAND_PROPERTIES[self].frequency_mhz

    @property
    def default_channel_width_mhz(self) -> int:
        return BAND_PROPERTIES[self].channel_width_mhz


class BandProperties(NamedTuple):
    label: str
    frequency_mhz: float  # fixed center frequency used by the simulation
    channel_width_mhz: int


# 20 MHz for 2.4 GHz (interference-limited), 80 MHz for 5 / 6 GHz
BAND_PROPERTIES: Dict[WiFiBand, BandProperties] = {
    WiFiBand.GHZ_24: BandProperties("2.4 GHz", 2437.0, 20),  # channel 6
    WiFiBand.GHZ_5: BandProperties("5 GHz", 5180.0, 80),  # channel 36
    WiFiBand.GHZ_6: BandProperties("6 GHz", 5955.0, 80),  # channel 1
}

VALID_CHANNEL_WIDTHS_MHZ = (20, 40, 80, 160)

DEFAULT_TX_POWER_DBM = 20.0  # 100 mW
DEFAULT_ANTENNA_GAIN_DBI = 2.0  # typical omnidirectional AP


def band_for_frequency(frequency_mhz: float) -> WiFiBand:
    """Map a frequency to the band whose per-band constants apply to it."""
    if frequency_mhz < 3000:
        return WiFiBand.GHZ_24
    if frequency_mhz < 5900:
        return WiFiBand.GHZ_5
    return WiFiBand.GHZ_6


class BandConfig(BaseModel):
    """Configuration for a single frequency band on an access point."""
    band: WiFiBand
    enabled: bool = True
    tx_power_dbm: float = Field(DEFAULT_TX_POWER_DBM, ge=-10, le=36)
    channel_width_mhz: int = Field(
        None,
        description="Channel width in MHz: 20, 40, 80 or 160 (defaults per band)"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def default_channel_width(cls, data):
        if isinstance(data, dict) and data.get("channel_width_mhz") is None:
            band = WiFiBand(data["band"]) if "band" in data else None
            if band is not None:
                data = {**data, "channel_width_mhz": band.default_channel_width_mhz}
        return data

    @field_validator("channel_width_mhz")
    @classmethod
    def validate_channel_width(cls, value: int) -> int:
        if value not in VALID_CHANNEL_WIDTHS_MHZ:
            raise ValueError(
                f"channel_width_mhz must be one of {VALID_CHANNEL_WIDTHS_MHZ}, got {value}"
            )
        return value

    @property
    def frequency_mhz(self) -> float:
        return self.band.default_frequency_mhz


def default_bands() -> Tuple[BandConfig, ...]:
    return (BandConfig(band=WiFiBand.GHZ_24), BandConfig(band=WiFiBand.GHZ_5))


class AccessPoint(BaseModel):
    """A virtual access point placed on the floor plan."""
    id: str = Field(..., min_length=1)
    brand: str = ""
    model: str = ""
    position: Point
    bands: Tuple[BandConfig, ...] = Field(default_factory=default_bands)
    antenna_gain_dbi: float = Field(DEFAULT_ANTENNA_GAIN_DBI, ge=-10, le=20)
    speed_allocation_mbps: Optional[float] = Field(
        None,
        ge=0,
        description="Optional bandwidth cap for this AP in Mbps (None = no cap)"
    )

    model_config = ConfigDict(frozen=True)

    def band_config(self, band: WiFiBand) -> Optional[BandConfig]:
        """Return the enabled config for ``band``, or None if absent/disabled."""
        for config in self.bands:
            if config.band == band and config.enabled:
                return config
        return None

    @property
    def enabled_bands(self) -> Tuple[BandConfig, ...]:
        return tuple(b for b in self.bands if b.enabled)

    @property
    def display_name(self) -> str:
        name = " ".join(s for s in (self.brand, self.model) if s).strip()
        return name or "AP"
