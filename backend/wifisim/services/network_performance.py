"""Client association and throughput estimation.

Runs in O(clients x APs), cheap enough to evaluate inline on every survey
change. Phases:

1. RSSI for every (client, AP, enabled band)
2. Association by best achievable PHY rate (not raw RSSI)
3. Contention grouping of enabled clients per AP
4. Per-AP bandwidth allocation (explicit cap, WAN split, or unconstrained)
5. Per-client throughput and warnings
6. Per-AP aggregation
"""

import logging
import math
from typing import AbstractSet, Dict, List, NamedTuple, Optional, Tuple

from wifisim.schemas.access_point import AccessPoint, BandConfig, WiFiBand
from wifisim.schemas.client import ClientDevice
from wifisim.schemas.performance import ApPerf, ClientPerf, NetworkPerformance
from wifisim.schemas.survey import SurveySnapshot
from wifisim.schemas.zone import EnvironmentZone
from wifisim.services.geometry import segment_intersects_rect_inclusive
from wifisim.services.rf_propagation import received_signal_dbm

logger = logging.getLogger(__name__)

# Thermal noise floor (dBm) used for SNR
NOISE_FLOOR_DBM = -95.0

# SNR (dB) at which each MCS index from 1 to 9 becomes available
MCS_SNR_THRESHOLDS_DB = (10.0, 15.0, 20.0, 25.0, 28.0, 30.0, 33.0, 35.0, 38.0)

# 802.11ac 1-spatial-stream PHY rates (Mbps) at 80 MHz for MCS 0..9
PHY_RATES_80MHZ_MBPS = (
    29.3,   # MCS 0 - BPSK 1/2
    58.5,   # MCS 1 - QPSK 1/2
    87.8,   # MCS 2 - QPSK 3/4
    117.0,  # MCS 3 - 16-QAM 1/2
    175.5,  # MCS 4 - 16-QAM 3/4
    234.0,  # MCS 5 - 64-QAM 2/3
    263.3,  # MCS 6 - 64-QAM 3/4
    292.5,  # MCS 7 - 64-QAM 5/6
    351.0,  # MCS 8 - 256-QAM 3/4
    390.0,  # MCS 9 - 256-QAM 5/6
)
REFERENCE_CHANNEL_WIDTH_MHZ = 80.0

# MAC / protocol overhead (CSMA/CA, ACKs, headers)
PROTOCOL_EFFICIENCY = 0.65

POOR_SIGNAL_DBM = -70.0
VERY_POOR_SIGNAL_DBM = -80.0
LOW_THROUGHPUT_MBPS = 5.0
OVERLOAD_UTILISATION = 0.8

WARNING_NO_COVERAGE = "No AP coverage"
WARNING_VERY_POOR_SIGNAL = "Very poor signal"
WARNING_POOR_SIGNAL = "Poor signal"
WARNING_LOW_THROUGHPUT = "Low throughput"
WARNING_WAN_LIMITED = "Speed capped by WAN limit"
WARNING_AP_OVERLOADED = "AP overloaded"
WARNING_NO_CLIENTS = "No clients"

# rssi_table[client_id][ap_id][band] = dBm
RssiTable = Dict[str, Dict[str, Dict[WiFiBand, float]]]


class Association(NamedTuple):
    ap_id: str
    band: WiFiBand
    rssi_dbm: float


def mcs_from_snr(snr_db: float) -> int:
    """Map SNR (dB) to MCS index 0-9."""
    mcs = 0
    for threshold in MCS_SNR_THRESHOLDS_DB:
        if snr_db >= threshold:
            mcs += 1
    return mcs


def scaled_phy_rate(mcs_index: int, channel_width_mhz: float) -> float:
    """PHY rate for ``mcs_index`` scaled from the 80 MHz table to the channel width."""
    return PHY_RATES_80MHZ_MBPS[mcs_index] * (channel_width_mhz / REFERENCE_CHANNEL_WIDTH_MHZ)


def achievable_rate(rssi_dbm: float, channel_width_mhz: float) -> float:
    return scaled_phy_rate(mcs_from_snr(rssi_dbm - NOISE_FLOOR_DBM), channel_width_mhz)


def best_band_by_throughput(
    rssi_by_band: Dict[WiFiBand, float],
    band_configs: Dict[WiFiBand, BandConfig],
    preferred_band: Optional[WiFiBand] = None
) -> Tuple[WiFiBand, float]:
    """
    Pick the band with the highest achievable PHY rate.

    A visible ``preferred_band`` is forced. Otherwise a weaker band with a
    wider channel can beat a stronger, narrower one. The first band wins ties.

    Returns:
        (band, rssi_dbm) of the chosen band
    """
    if preferred_band is not None and preferred_band in rssi_by_band:
        candidates = {preferred_band: rssi_by_band[preferred_band]}
    else:
        candidates = rssi_by_band

    best: Optional[Tuple[WiFiBand, float]] = None
    best_rate = -math.inf
    for band, rssi in candidates.items():
        config = band_configs.get(band)
        if config is None:
            continue
        rate = achievable_rate(rssi, config.channel_width_mhz)
        if rate > best_rate:
            best_rate = rate
            best = (band, rssi)

    if best is None:
        # Only reachable when no config matches; fall back to strongest RSSI
        best = max(rssi_by_band.items(), key=lambda item: item[1])
    return best


def build_rssi_table(survey: SurveySnapshot) -> RssiTable:
    """Phase A: RSSI per (client, AP, enabled band); absent bands are omitted."""
    pixels_per_meter = survey.pixels_per_meter
    table: RssiTable = {}

    for client in survey.clients:
        per_ap: Dict[str, Dict[WiFiBand, float]] = {}
        for ap in survey.access_points:
            per_band: Dict[WiFiBand, float] = {}
            for band_config in ap.enabled_bands:
                per_band[band_config.band] = received_signal_dbm(
                    band_config.tx_power_dbm,
                    ap.antenna_gain_dbi,
                    band_config.frequency_mhz,
                    ap.position.x, ap.position.y,
                    client.position.x, client.position.y,
                    pixels_per_meter,
                    survey.walls,
                    survey.zones,
                )
            if per_band:
                per_ap[ap.id] = per_band
        table[client.id] = per_ap

    return table


def _enabled_band_configs(ap: AccessPoint) -> Dict[WiFiBand, BandConfig]:
    return {b.band: b for b in ap.enabled_bands}


def associate_client(
    client: ClientDevice,
    rssi_by_ap: Dict[str, Dict[WiFiBand, float]],
    band_configs_by_ap: Dict[str, Dict[WiFiBand, BandConfig]]
) -> Optional[Association]:
    """Phase B: choose the (AP, band) pair with the highest achievable rate."""
    if client.manual_ap_id is not None:
        manual_bands = rssi_by_ap.get(client.manual_ap_id)
        configs = band_configs_by_ap.get(client.manual_ap_id)
        if manual_bands and configs:
            band, rssi = best_band_by_throughput(manual_bands, configs, client.preferred_band)
            return Association(client.manual_ap_id, band, rssi)

    best: Optional[Association] = None
    best_rate = -math.inf
    # rssi_by_ap preserves the survey's AP order, so the first AP wins ties
    for ap_id, rssi_by_band in rssi_by_ap.items():
        configs = band_configs_by_ap.get(ap_id)
        if not configs:
            continue
        band, rssi = best_band_by_throughput(rssi_by_band, configs, client.preferred_band)
        config = configs.get(band)
        rate = achievable_rate(rssi, config.channel_width_mhz) if config is not None else 0.0
        if rate > best_rate:
            best_rate = rate
            best = Association(ap_id, band, rssi)

    return best


def zones_on_path(
    ap: AccessPoint,
    client: ClientDevice,
    zones: Tuple[EnvironmentZone, ...],
    band: WiFiBand
) -> Tuple[float, Tuple[str, ...]]:
    """Net zone modifier and names of zones the AP -> client path touches."""
    modifier_db = 0.0
    names: List[str] = []
    for zone in zones:
        hit = segment_intersects_rect_inclusive(
            (ap.position.x, ap.position.y),
            (client.position.x, client.position.y),
            zone.rect,
        )
        if bool(hit):
            modifier_db += zone.type.modifier_for_band(band)
            names.append(zone.display_name)
    return modifier_db, tuple(names)


def _signal_warnings(rssi_dbm: float) -> List[str]:
    if rssi_dbm < VERY_POOR_SIGNAL_DBM:
        return [WARNING_VERY_POOR_SIGNAL]
    if rssi_dbm < POOR_SIGNAL_DBM:
        return [WARNING_POOR_SIGNAL]
    return []


def compute_network_performance(
    survey: SurveySnapshot,
    disabled_client_ids: AbstractSet[str] = frozenset()
) -> NetworkPerformance:
    """
    Compute association and throughput for every client in the survey.

    Args:
        survey: Immutable survey snapshot
        disabled_client_ids: Clients toggled off; they keep their RF metrics
            but get zero throughput and do not contend for air time

    Returns:
        NetworkPerformance with per-AP and per-client metrics
    """
    access_points = survey.access_points
    clients = survey.clients
    wan_mbps = survey.total_wan_bandwidth_mbps

    if not access_points or not clients:
        return NetworkPerformance(
            per_ap={},
            per_client={},
            total_wan_mbps=wan_mbps,
            total_utilised_mbps=0.0,
        )

    band_configs_by_ap = {ap.id: _enabled_band_configs(ap) for ap in access_points}
    ap_by_id = {ap.id: ap for ap in access_points}

    # Phase A
    rssi_table = build_rssi_table(survey)

    # Phase B
    associations: Dict[str, Association] = {}
    for client in clients:
        association = associate_client(client, rssi_table[client.id], band_configs_by_ap)
        if association is not None:
            associations[client.id] = association

    # Phase C: disabled clients do not contend for air time
    ap_clients: Dict[str, List[str]] = {ap.id: [] for ap in access_points}
    for client in clients:
        if client.id in disabled_client_ids:
            continue
        association = associations.get(client.id)
        if association is not None:
            ap_clients[association.ap_id].append(client.id)

    # Phase D
    active_ap_count = sum(1 for ap in access_points if ap_clients[ap.id])

    def ap_allocation(ap: AccessPoint) -> float:
        if ap.speed_allocation_mbps is not None:
            return ap.speed_allocation_mbps
        if wan_mbps is not None and active_ap_count > 0:
            return wan_mbps / active_ap_count
        return math.inf

    # Phase E
    per_client: Dict[str, ClientPerf] = {}
    for client in clients:
        is_disabled = client.id in disabled_client_ids
        association = associations.get(client.id)

        if association is None:
            per_client[client.id] = ClientPerf(
                client_id=client.id,
                client_name=client.name,
                rssi_dbm=NOISE_FLOOR_DBM,
                snr_db=0.0,
                mcs_index=0,
                phy_rate_mbps=0.0,
                effective_mbps=0.0,
                warnings=(WARNING_NO_COVERAGE,),
                is_disabled=is_disabled,
            )
            continue

        ap = ap_by_id[association.ap_id]
        band_config = band_configs_by_ap[ap.id][association.band]

        rssi = association.rssi_dbm
        snr = rssi - NOISE_FLOOR_DBM
        mcs = mcs_from_snr(snr)
        phy_rate = scaled_phy_rate(mcs, band_config.channel_width_mhz)

        zone_modifier_db, zone_names = zones_on_path(ap, client, survey.zones, association.band)
        warnings = _signal_warnings(rssi)

        if is_disabled:
            per_client[client.id] = ClientPerf(
                client_id=client.id,
                client_name=client.name,
                associated_ap_id=ap.id,
                associated_band=association.band,
                rssi_dbm=rssi,
                snr_db=snr,
                mcs_index=mcs,
                phy_rate_mbps=phy_rate,
                effective_mbps=0.0,
                warnings=tuple(warnings),
                is_disabled=True,
                active_zones=zone_names,
                zone_modifier_db=zone_modifier_db,
            )
            continue

        client_count = max(1, len(ap_clients[ap.id]))
        rf_share = phy_rate * PROTOCOL_EFFICIENCY / client_count

        allocation = ap_allocation(ap)
        wan_share = allocation / client_count if math.isfinite(allocation) else math.inf

        effective = min(rf_share, wan_share)
        is_wan_limited = math.isfinite(wan_share) and wan_share < rf_share

        if effective < LOW_THROUGHPUT_MBPS:
            warnings.append(WARNING_LOW_THROUGHPUT)
        if is_wan_limited:
            warnings.append(WARNING_WAN_LIMITED)

        per_client[client.id] = ClientPerf(
            client_id=client.id,
            client_name=client.name,
            associated_ap_id=ap.id,
            associated_band=association.band,
            rssi_dbm=rssi,
            snr_db=snr,
            mcs_index=mcs,
            phy_rate_mbps=phy_rate,
            effective_mbps=effective,
            rf_max_mbps=rf_share,
            warnings=tuple(warnings),
            is_wan_limited=is_wan_limited,
            active_zones=zone_names,
            zone_modifier_db=zone_modifier_db,
        )

    # Phase F
    per_ap: Dict[str, ApPerf] = {}
    for ap in access_points:
        client_ids = ap_clients[ap.id]
        allocation = ap_allocation(ap)
        utilised_mbps = sum(per_client[cid].effective_mbps for cid in client_ids)
        if math.isinf(allocation) or allocation <= 0:
            utilisation = 0.0
        else:
            utilisation = min(max(utilised_mbps / allocation, 0.0), 1.0)

        warnings = []
        if utilisation > OVERLOAD_UTILISATION:
            warnings.append(WARNING_AP_OVERLOADED)
        if not client_ids:
            warnings.append(WARNING_NO_CLIENTS)

        per_ap[ap.id] = ApPerf(
            ap_id=ap.id,
            ap_name=ap.display_name,
            client_ids=tuple(client_ids),
            allocated_mbps=None if math.isinf(allocation) else allocation,
            utilised_mbps=utilised_mbps,
            utilisation_pct=utilisation,
            warnings=tuple(warnings),
        )

    total_utilised = sum(c.effective_mbps for c in per_client.values())
    logger.debug(
        f"Network performance computed: {len(clients)} clients, "
        f"{len(associations)} associated, {len(disabled_client_ids)} disabled"
    )

    return NetworkPerformance(
        per_ap=per_ap,
        per_client=per_client,
        total_wan_mbps=wan_mbps,
        total_utilised_mbps=total_utilised,
    )
