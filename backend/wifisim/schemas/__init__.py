# Pydantic schemas
from wifisim.schemas.access_point import AccessPoint, BandConfig, Point, WiFiBand, band_for_frequency
from wifisim.schemas.wall import WallMaterial, WallSegment, WallClassification
from wifisim.schemas.zone import EnvironmentZone, Rect, ZoneType
from wifisim.schemas.client import ClientDevice, ClientDeviceType
from wifisim.schemas.survey import FloorPlan, SurveySnapshot
from wifisim.schemas.signal_map import NO_SIGNAL_DBM, SignalMap
from wifisim.schemas.performance import ApPerf, ClientPerf, NetworkPerformance
