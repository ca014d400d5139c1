"""Built-in catalogue of real-world access point models."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from wifisim.schemas.access_point import AccessPoint, BandConfig, Point, WiFiBand

DUAL_BAND = (WiFiBand.GHZ_24, WiFiBand.GHZ_5)
TRI_BAND = (WiFiBand.GHZ_24, WiFiBand.GHZ_5, WiFiBand.GHZ_6)


@dataclass(frozen=True)
class ApSpec:
    """Datasheet values for one AP model."""
    brand: str
    model: str
    antenna_gain_dbi: float
    supported_bands: Tuple[WiFiBand, ...]
    max_tx_power_dbm: float = 20.0
    description: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.brand} {self.model}"

    def to_access_point(self, ap_id: str, x: float, y: float) -> AccessPoint:
        """Create an AP with every supported band enabled at max transmit power."""
        return AccessPoint(
            id=ap_id,
            brand=self.brand,
            model=self.model,
            position=Point(x=x, y=y),
            antenna_gain_dbi=self.antenna_gain_dbi,
            bands=tuple(
                BandConfig(band=band, tx_power_dbm=self.max_tx_power_dbm)
                for band in self.supported_bands
            ),
        )


CATALOGUE: Tuple[ApSpec, ...] = (
    # ==================== Ubiquiti UniFi ====================
    ApSpec("Ubiquiti", "UniFi AP Lite", 3.0, DUAL_BAND, 20.0, "Entry-level dual-band indoor AP"),
    ApSpec("Ubiquiti", "UniFi AP Pro", 3.0, DUAL_BAND, 22.0, "High-performance dual-band indoor AP"),
    ApSpec("Ubiquiti", "UniFi AP LR", 6.0, DUAL_BAND, 24.0, "Long-range dual-band indoor AP"),
    ApSpec("Ubiquiti", "UniFi WiFi 6", 3.0, DUAL_BAND, 22.0, "WiFi 6 dual-band indoor AP"),
    ApSpec("Ubiquiti", "UniFi WiFi 6E", 3.0, TRI_BAND, 22.0, "WiFi 6E tri-band indoor AP"),
    # ==================== Cisco Meraki ====================
    ApSpec("Cisco Meraki", "MR36", 5.0, DUAL_BAND, 20.0, "Cloud-managed WiFi 6 AP"),
    ApSpec("Cisco Meraki", "MR46", 5.0, DUAL_BAND, 22.0, "High-density WiFi 6 AP"),
    ApSpec("Cisco Meraki", "MR56", 5.0, TRI_BAND, 23.0, "WiFi 6E tri-band AP"),
    # ==================== Aruba ====================
    ApSpec("Aruba", "AP-505", 3.0, DUAL_BAND, 21.0, "Campus WiFi 6 AP"),
    ApSpec("Aruba", "AP-635", 4.0, TRI_BAND, 23.0, "Campus WiFi 6E AP"),
    # ==================== TP-Link Omada ====================
    ApSpec("TP-Link", "EAP225", 4.0, DUAL_BAND, 20.0, "Budget ceiling-mount AP"),
    ApSpec("TP-Link", "EAP670", 4.0, DUAL_BAND, 23.0, "WiFi 6 ceiling-mount AP"),
    ApSpec("TP-Link", "EAP773", 4.0, TRI_BAND, 23.0, "WiFi 7 tri-band AP"),
    # ==================== Netgear ====================
    ApSpec("Netgear", "WAX630", 4.0, TRI_BAND, 23.0, "Business WiFi 6E AP"),
    # ==================== Generic ====================
    ApSpec("Generic", "Custom AP", 2.0, DUAL_BAND, 20.0, "Generic dual-band AP"),
)


def get_brands() -> List[str]:
    """Brands in catalogue order, without duplicates."""
    return list(dict.fromkeys(spec.brand for spec in CATALOGUE))


def get_catalogue(brand: Optional[str] = None) -> List[ApSpec]:
    if brand is None:
        return list(CATALOGUE)
    return [spec for spec in CATALOGUE if spec.brand.lower() == brand.lower()]


def find_spec(brand: str, model: str) -> Optional[ApSpec]:
    for spec in CATALOGUE:
        if spec.brand.lower() == brand.lower() and spec.model.lower() == model.lower():
            return spec
    return None
