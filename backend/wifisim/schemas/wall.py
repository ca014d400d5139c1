"""Wall segment and building material schemas."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from wifisim.schemas.access_point import Point, WiFiBand, band_for_frequency


class WallMaterial(str, Enum):
    """Wall material types with catalogued per-band attenuation."""
    DRYWALL = "drywall"
    WOOD = "wood"
    GLASS_CLEAR = "glass_clear"
    GLASS_LOW_E = "glass_low_e"
    BRICK = "brick"
    CONCRETE_UNREINFORCED = "concrete_unreinforced"
    CONCRETE_REINFORCED = "concrete_reinforced"
    METAL = "metal"
    CUSTOM = "custom"

    @property
    def definition(self) -> "MaterialDefinition":
        return WALL_MATERIALS[self]

    @property
    def label(self) -> str:
        return WALL_MATERIALS[self].label


@dataclass(frozen=True)
class MaterialDefinition:
    """Per-band attenuation (dB per wall crossing) and physical properties."""
    label: str
    description: str
    typical_thickness_cm: float
    loss_24ghz_db: float
    loss_5ghz_db: float
    loss_6ghz_db: float

    def loss_for_band(self, band: WiFiBand) -> float:
        if band == WiFiBand.GHZ_24:
            return self.loss_24ghz_db
        if band == WiFiBand.GHZ_5:
            return self.loss_5ghz_db
        return self.loss_6ghz_db

    def loss_for_frequency(self, frequency_mhz: float) -> float:
        return self.loss_for_band(band_for_frequency(frequency_mhz))


# Midpoints of empirical attenuation ranges for each material.
WALL_MATERIALS: Dict[WallMaterial, MaterialDefinition] = {
    WallMaterial.DRYWALL: MaterialDefinition(
        "Drywall / Gypsum", "Standard interior partition wall (1-2 cm gypsum board).",
        1.5, 3.0, 5.0, 7.0,
    ),
    WallMaterial.WOOD: MaterialDefinition(
        "Wood / Timber", "Timber framing, wooden partition or furniture (2-5 cm).",
        3.5, 4.5, 8.0, 10.0,
    ),
    WallMaterial.GLASS_CLEAR: MaterialDefinition(
        "Glass (Clear)", "Standard clear glazing (0.5-1 cm).",
        0.75, 2.0, 4.0, 6.0,
    ),
    WallMaterial.GLASS_LOW_E: MaterialDefinition(
        "Tinted / Low-E Glass", "Glazing with a metallic coating; severe at 5/6 GHz.",
        0.5, 4.0, 16.0, 26.0,
    ),
    WallMaterial.BRICK: MaterialDefinition(
        "Brick (Solid Clay)", "Solid clay brick masonry (15-20 cm).",
        17.5, 11.0, 21.5, 33.0,
    ),
    WallMaterial.CONCRETE_UNREINFORCED: MaterialDefinition(
        "Concrete (Unreinforced)", "Plain concrete slab or block wall (~15 cm).",
        15.0, 12.5, 24.0, 38.5,
    ),
    WallMaterial.CONCRETE_REINFORCED: MaterialDefinition(
        "Concrete (Reinforced)", "Reinforced concrete with rebar (~15 cm).",
        15.0, 30.0, 37.5, 55.0,
    ),
    WallMaterial.METAL: MaterialDefinition(
        "Metal (Solid)", "Steel partitions, metal cladding or ductwork.",
        5.0, 40.0, 42.0, 47.0,
    ),
    WallMaterial.CUSTOM: MaterialDefinition(
        "Custom", "User-defined material with manually specified attenuation.",
        10.0, 0.0, 0.0, 0.0,
    ),
}

# Fallback losses for a custom wall with no user value for a band
DEFAULT_CUSTOM_LOSS_DB: Dict[WiFiBand, float] = {
    WiFiBand.GHZ_24: 5.0,
    WiFiBand.GHZ_5: 8.0,
    WiFiBand.GHZ_6: 10.0,
}


class WallClassification(str, Enum):
    EXTERIOR = "exterior"
    INTERIOR = "interior"
    UNCLASSIFIED = "unclassified"


class WallSegment(BaseModel):
    """A single wall segment between two floor-plan pixel coordinates."""
    id: str = ""
    start: Point
    end: Point
    material: WallMaterial = WallMaterial.DRYWALL
    inner_material: Optional[WallMaterial] = Field(
        None,
        description="Optional inner lining; its loss is added to the outer material's"
    )
    custom_loss_24ghz_db: Optional[float] = Field(None, ge=0)
    custom_loss_5ghz_db: Optional[float] = Field(None, ge=0)
    custom_loss_6ghz_db: Optional[float] = Field(None, ge=0)
    classification: WallClassification = WallClassification.UNCLASSIFIED

    model_config = ConfigDict(frozen=True)

    def _custom_loss(self, band: WiFiBand) -> float:
        value = {
            WiFiBand.GHZ_24: self.custom_loss_24ghz_db,
            WiFiBand.GHZ_5: self.custom_loss_5ghz_db,
            WiFiBand.GHZ_6: self.custom_loss_6ghz_db,
        }[band]
        return DEFAULT_CUSTOM_LOSS_DB[band] if value is None else value

    def attenuation_for_band(self, band: WiFiBand) -> float:
        """Total loss in dB for one crossing: outer layer plus inner lining."""
        if self.material == WallMaterial.CUSTOM:
            loss = self._custom_loss(band)
        else:
            loss = self.material.definition.loss_for_band(band)
        if self.inner_material is not None:
            loss += self.inner_material.definition.loss_for_band(band)
        return loss

    def attenuation_for_frequency(self, frequency_mhz: float) -> float:
        return self.attenuation_for_band(band_for_frequency(frequency_mhz))
