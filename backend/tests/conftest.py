"""Shared builders for survey fixtures."""

import pytest

from wifisim.schemas.access_point import AccessPoint, BandConfig, Point, WiFiBand
from wifisim.schemas.client import ClientDevice
from wifisim.schemas.survey import FloorPlan, SurveySnapshot
from wifisim.schemas.wall import WallMaterial, WallSegment


@pytest.fixture
def make_ap():
    def _make_ap(ap_id="ap1", x=0.0, y=0.0, bands=None, **kwargs):
        if bands is not None:
            kwargs["bands"] = tuple(
                b if isinstance(b, BandConfig) else BandConfig(band=b) for b in bands
            )
        return AccessPoint(id=ap_id, position=Point(x=x, y=y), **kwargs)
    return _make_ap


@pytest.fixture
def make_client():
    def _make_client(client_id="c1", x=500.0, y=0.0, **kwargs):
        return ClientDevice(id=client_id, name=client_id, position=Point(x=x, y=y), **kwargs)
    return _make_client


@pytest.fixture
def make_wall():
    def _make_wall(x1, y1, x2, y2, material=WallMaterial.DRYWALL, **kwargs):
        return WallSegment(
            start=Point(x=x1, y=y1), end=Point(x=x2, y=y2), material=material, **kwargs
        )
    return _make_wall


@pytest.fixture
def floor_plan():
    # 20 m x 10 m at 100 px/m
    return FloorPlan(width=2000, height=1000, pixels_per_meter=100)


@pytest.fixture
def make_survey(floor_plan):
    def _make_survey(access_points=(), clients=(), walls=(), zones=(), **kwargs):
        kwargs.setdefault("floor_plan", floor_plan)
        return SurveySnapshot(
            access_points=tuple(access_points),
            clients=tuple(clients),
            walls=tuple(walls),
            zones=tuple(zones),
            **kwargs
        )
    return _make_survey


@pytest.fixture
def survey_payload():
    """JSON form of a one-AP, one-client survey as the API receives it."""
    return {
        "floor_plan": {"width": 400, "height": 200, "pixels_per_meter": 50},
        "access_points": [
            {
                "id": "ap1",
                "brand": "Generic",
                "model": "Custom AP",
                "position": {"x": 100, "y": 100},
            }
        ],
        "walls": [
            {
                "start": {"x": 200, "y": 0},
                "end": {"x": 200, "y": 200},
                "material": "brick",
            }
        ],
        "clients": [
            {"id": "laptop", "name": "Laptop", "position": {"x": 300, "y": 100}}
        ],
    }
