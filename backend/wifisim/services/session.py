"""Live simulation state for an interactively edited survey."""

import logging
import threading
from typing import Callable, FrozenSet, Optional

from wifisim.schemas.performance import NetworkPerformance
from wifisim.schemas.signal_map import SignalMap
from wifisim.schemas.survey import SurveySnapshot
from wifisim.services.network_performance import compute_network_performance
from wifisim.services.recompute import RecomputeScheduler
from wifisim.services.signal_map_builder import compute_signal_map

logger = logging.getLogger(__name__)

Listener = Callable[["SimulationSession"], None]


class SimulationSession:
    """
    Keeps the latest signal map and network performance in step with edits.

    Every survey update restarts both debounced computations; the heavy
    signal map build runs on the scheduler's worker pool. The disabled-client
    set lives here and is passed to every performance computation.
    """

    def __init__(
        self,
        resolution: Optional[int] = None,
        debounce_seconds: Optional[float] = None,
        on_change: Optional[Listener] = None
    ):
        self.resolution = resolution
        self.on_change = on_change

        self._lock = threading.Lock()
        self._survey = SurveySnapshot()
        self._disabled_client_ids: FrozenSet[str] = frozenset()
        self._signal_map: Optional[SignalMap] = None
        self._performance: Optional[NetworkPerformance] = None

        self._signal_scheduler = RecomputeScheduler(
            self._build_signal_map,
            self._on_signal_map,
            on_error=self._on_error,
            debounce_seconds=debounce_seconds,
            name="signal-map",
        )
        self._performance_scheduler = RecomputeScheduler(
            compute_network_performance,
            self._on_performance,
            on_error=self._on_error,
            debounce_seconds=debounce_seconds,
            name="performance",
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def survey(self) -> SurveySnapshot:
        with self._lock:
            return self._survey

    @property
    def disabled_client_ids(self) -> FrozenSet[str]:
        with self._lock:
            return self._disabled_client_ids

    @property
    def signal_map(self) -> Optional[SignalMap]:
        with self._lock:
            return self._signal_map

    @property
    def performance(self) -> Optional[NetworkPerformance]:
        with self._lock:
            return self._performance

    @property
    def is_computing(self) -> bool:
        return self._signal_scheduler.is_computing or self._performance_scheduler.is_computing

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def update_survey(self, survey: SurveySnapshot) -> None:
        """Replace the survey snapshot and schedule recomputation."""
        with self._lock:
            self._survey = survey
        self._schedule_signal_map(survey)
        self._schedule_performance()

    def toggle_client_disabled(self, client_id: str) -> bool:
        """Flip a client on/off; returns True if it is now disabled."""
        with self._lock:
            disabled = client_id not in self._disabled_client_ids
        self.set_client_disabled(client_id, disabled)
        return disabled

    def set_client_disabled(self, client_id: str, disabled: bool) -> None:
        with self._lock:
            if disabled:
                self._disabled_client_ids = self._disabled_client_ids | {client_id}
            else:
                self._disabled_client_ids = self._disabled_client_ids - {client_id}
        # Only contention changes; the signal map is unaffected
        self._schedule_performance()

    def close(self) -> None:
        self._signal_scheduler.shutdown(wait=False)
        self._performance_scheduler.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Scheduling
    # ------------------------------------------------------------------

    def _schedule_signal_map(self, survey: SurveySnapshot) -> None:
        if survey.floor_plan is None or not survey.access_points:
            # Nothing to simulate: drop any pending build and clear the map
            self._signal_scheduler.invalidate()
            self._on_signal_map(None)
            return
        self._signal_scheduler.request(survey)

    def _schedule_performance(self) -> None:
        with self._lock:
            survey = self._survey
            disabled = self._disabled_client_ids
        self._performance_scheduler.request(survey, disabled)

    def _build_signal_map(self, survey: SurveySnapshot) -> SignalMap:
        return compute_signal_map(survey, self.resolution)

    def _on_signal_map(self, signal_map: Optional[SignalMap]) -> None:
        with self._lock:
            self._signal_map = signal_map
        self._notify()

    def _on_performance(self, performance: NetworkPerformance) -> None:
        with self._lock:
            self._performance = performance
        self._notify()

    def _on_error(self, error: BaseException) -> None:
        logger.warning(f"Simulation update failed: {error}")
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
