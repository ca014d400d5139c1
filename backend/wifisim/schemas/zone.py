"""Environment zone schemas."""

from enum import Enum
from typing import Dict, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from wifisim.schemas.access_point import Point, WiFiBand, band_for_frequency


class Rect(NamedTuple):
    """Axis-aligned rectangle with normalized bounds (y grows downwards)."""
    left: float
    top: float
    right: float
    bottom: float

    def contains(self, x: float, y: float) -> bool:
        return self.left <= x <= self.right and self.top <= y <= self.bottom


class ZoneModifier(NamedTuple):
    label: str
    description: str
    base_dbm: float  # applied to every band
    extra_24ghz_dbm: float  # stacked on top of base_dbm
    extra_5ghz_dbm: float
    extra_6ghz_dbm: float


class ZoneType(str, Enum):
    """Environment zone types; positive modifiers boost, negative attenuate."""
    KITCHEN = "kitchen"
    OUTDOOR = "outdoor"
    TIMBER_FRAME = "timber_frame"
    STEEL_FRAME = "steel_frame"
    CONCRETE_BLOCK = "concrete_block"
    RF_INTERFERENCE = "rf_interference"

    @property
    def label(self) -> str:
        return ZONE_MODIFIERS[self].label

    def modifier_for_band(self, band: WiFiBand) -> float:
        modifier = ZONE_MODIFIERS[self]
        extra = {
            WiFiBand.GHZ_24: modifier.extra_24ghz_dbm,
            WiFiBand.GHZ_5: modifier.extra_5ghz_dbm,
            WiFiBand.GHZ_6: modifier.extra_6ghz_dbm,
        }[band]
        return modifier.base_dbm + extra

    def modifier_for_frequency(self, frequency_mhz: float) -> float:
        return self.modifier_for_band(band_for_frequency(frequency_mhz))


ZONE_MODIFIERS: Dict[ZoneType, ZoneModifier] = {
    ZoneType.KITCHEN: ZoneModifier(
        "Kitchen / Appliances",
        "Microwave ovens and appliances cause heavy 2.4 GHz interference.",
        -2.0, -5.0, -1.0, 0.0,
    ),
    ZoneType.OUTDOOR: ZoneModifier(
        "Outdoor Area",
        "Open air: lower path loss, signal travels farther.",
        4.0, 0.0, 0.0, 0.0,
    ),
    ZoneType.TIMBER_FRAME: ZoneModifier(
        "Timber Frame",
        "Light wood-frame construction. Minimal extra attenuation.",
        -2.0, 0.0, 0.0, 0.0,
    ),
    ZoneType.STEEL_FRAME: ZoneModifier(
        "Steel Frame",
        "Metal structural frame attenuates all bands, especially 5+ GHz.",
        -8.0, 0.0, -3.0, -5.0,
    ),
    ZoneType.CONCRETE_BLOCK: ZoneModifier(
        "Concrete / Masonry",
        "Dense concrete or block walls throughout.",
        -6.0, 0.0, -2.0, -3.0,
    ),
    ZoneType.RF_INTERFERENCE: ZoneModifier(
        "RF Interference",
        "General RF interference (industrial, medical equipment).",
        -4.0, -3.0, -1.0, 0.0,
    ),
}


class EnvironmentZone(BaseModel):
    """A rectangular area that modifies the local RF environment."""
    id: str = ""
    name: str = ""
    type: ZoneType
    corner1: Point = Field(..., description="First corner (order not guaranteed)")
    corner2: Point

    model_config = ConfigDict(frozen=True)

    @property
    def rect(self) -> Rect:
        return Rect(
            left=min(self.corner1.x, self.corner2.x),
            top=min(self.corner1.y, self.corner2.y),
            right=max(self.corner1.x, self.corner2.x),
            bottom=max(self.corner1.y, self.corner2.y),
        )

    @property
    def display_name(self) -> str:
        return self.name or self.type.label
