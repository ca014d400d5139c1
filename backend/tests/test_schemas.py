"""Validation tests for survey and request schemas."""

import json

import pytest
from pydantic import ValidationError

from wifisim.schemas.access_point import AccessPoint, BandConfig, Point, WiFiBand, band_for_frequency
from wifisim.schemas.performance import ApPerf, NetworkPerformance
from wifisim.schemas.simulation import SignalMapRequest
from wifisim.schemas.survey import FloorPlan, SurveySnapshot
from wifisim.schemas.wall import WallMaterial, WallSegment
from wifisim.schemas.zone import EnvironmentZone, Rect, ZoneType


@pytest.mark.parametrize("frequency, band", [
    (2412, WiFiBand.GHZ_24),
    (2437, WiFiBand.GHZ_24),
    (5180, WiFiBand.GHZ_5),
    (5825, WiFiBand.GHZ_5),
    (5955, WiFiBand.GHZ_6),
    (7115, WiFiBand.GHZ_6),
])
def test_band_for_frequency(frequency, band):
    assert band_for_frequency(frequency) == band


class TestBandConfig:
    def test_default_channel_width_per_band(self):
        assert BandConfig(band=WiFiBand.GHZ_24).channel_width_mhz == 20
        assert BandConfig(band=WiFiBand.GHZ_5).channel_width_mhz == 80
        assert BandConfig(band="ghz6").channel_width_mhz == 80

    def test_frequency_follows_band(self):
        assert BandConfig(band=WiFiBand.GHZ_6).frequency_mhz == 5955.0

    def test_rejects_invalid_channel_width(self):
        with pytest.raises(ValidationError):
            BandConfig(band=WiFiBand.GHZ_5, channel_width_mhz=60)


class TestAccessPoint:
    def test_defaults_to_dual_band(self):
        ap = AccessPoint(id="ap", position=Point(x=0, y=0))

        assert [b.band for b in ap.bands] == [WiFiBand.GHZ_24, WiFiBand.GHZ_5]
        assert ap.band_config(WiFiBand.GHZ_6) is None
        assert ap.display_name == "AP"

    def test_disabled_band_is_hidden(self):
        ap = AccessPoint(
            id="ap",
            position=Point(x=0, y=0),
            bands=(BandConfig(band=WiFiBand.GHZ_24, enabled=False), BandConfig(band=WiFiBand.GHZ_5)),
        )

        assert ap.band_config(WiFiBand.GHZ_24) is None
        assert [b.band for b in ap.enabled_bands] == [WiFiBand.GHZ_5]

    def test_is_immutable(self):
        ap = AccessPoint(id="ap", position=Point(x=0, y=0))
        with pytest.raises(ValidationError):
            ap.id = "other"

    def test_replace_on_edit(self):
        ap = AccessPoint(id="ap", position=Point(x=0, y=0))
        moved = ap.model_copy(update={"position": Point(x=5, y=5)})

        assert ap.position == Point(x=0, y=0)
        assert moved.position == Point(x=5, y=5)


class TestWalls:
    def test_catalogued_loss(self):
        wall = WallSegment(start=Point(x=0, y=0), end=Point(x=1, y=0), material=WallMaterial.GLASS_LOW_E)

        assert wall.attenuation_for_band(WiFiBand.GHZ_5) == 16.0
        assert wall.attenuation_for_frequency(5955) == 26.0

    def test_custom_loss_falls_back_to_defaults(self):
        wall = WallSegment(
            start=Point(x=0, y=0), end=Point(x=1, y=0),
            material=WallMaterial.CUSTOM, custom_loss_5ghz_db=12.0,
        )

        assert wall.attenuation_for_band(WiFiBand.GHZ_5) == 12.0
        assert wall.attenuation_for_band(WiFiBand.GHZ_24) == 5.0
        assert wall.attenuation_for_band(WiFiBand.GHZ_6) == 10.0


def test_zone_rect_is_normalized():
    zone = EnvironmentZone(type=ZoneType.OUTDOOR, corner1=Point(x=10, y=20), corner2=Point(x=0, y=5))

    assert zone.rect == Rect(left=0, top=5, right=10, bottom=20)
    assert zone.rect.contains(5, 5)
    assert zone.display_name == "Outdoor Area"


class TestSurvey:
    def test_rejects_non_positive_scale(self):
        with pytest.raises(ValidationError):
            FloorPlan(width=100, height=100, pixels_per_meter=0)

    def test_real_dimensions(self):
        plan = FloorPlan(width=1000, height=500, pixels_per_meter=50)
        assert (plan.real_width_meters, plan.real_height_meters) == (20.0, 10.0)

    def test_rejects_duplicate_ap_ids(self):
        ap = AccessPoint(id="dup", position=Point(x=0, y=0))
        with pytest.raises(ValidationError, match="unique"):
            SurveySnapshot(access_points=(ap, ap))

    def test_default_scale_without_floor_plan(self):
        assert SurveySnapshot().pixels_per_meter == 50.0

    def test_access_point_lookup(self):
        ap = AccessPoint(id="a", position=Point(x=0, y=0))
        survey = SurveySnapshot(access_points=(ap,))

        assert survey.access_point("a") is ap
        assert survey.access_point("b") is None

    def test_rejects_negative_wan(self):
        with pytest.raises(ValidationError):
            SurveySnapshot(total_wan_bandwidth_mbps=-1)


def test_signal_map_request_rejects_zero_resolution():
    with pytest.raises(ValidationError):
        SignalMapRequest(survey=SurveySnapshot(), resolution=0)


class TestNetworkPerformance:
    def performance(self):
        return NetworkPerformance(
            per_ap={"ap": ApPerf(ap_id="ap", ap_name="AP", client_ids=("c",))},
            total_wan_mbps=100,
        )

    def test_mappings_are_read_only(self):
        performance = self.performance()

        with pytest.raises(TypeError):
            performance.per_ap["other"] = performance.per_ap["ap"]
        with pytest.raises(TypeError):
            del performance.per_ap["ap"]
        assert performance.per_client == {}

    def test_serializes_mappings_as_objects(self):
        performance = self.performance()

        dumped = json.loads(performance.model_dump_json())

        assert dumped["per_ap"]["ap"]["client_ids"] == ["c"]
        assert dumped["per_client"] == {}
        assert NetworkPerformance.model_validate(dumped).per_ap["ap"].ap_name == "AP"
