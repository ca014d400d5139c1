"""Debounced background recomputation with last-writer-wins delivery."""

import itertools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from wifisim.core.config import settings

logger = logging.getLogger(__name__)


class RecomputeScheduler:
    """
    Runs ``compute_fn`` off the calling thread and delivers only the newest result.

    ``request`` coalesces bursts of calls (an AP being dragged) into one
    computation after ``debounce_seconds`` of quiet. Every dispatched call
    gets a sequence number; a computation that finishes after a newer one was
    dispatched is dropped instead of reaching ``on_result``. In-flight
    computations are not interrupted.
    """

    def __init__(
        self,
        compute_fn: Callable[..., Any],
        on_result: Callable[[Any], None],
        on_error: Optional[Callable[[BaseException], None]] = None,
        debounce_seconds: Optional[float] = None,
        executor: Optional[Executor] = None,
        name: str = "recompute"
    ):
        self.compute_fn = compute_fn
        self.on_result = on_result
        self.on_error = on_error
        self.debounce_seconds = (
            settings.RECOMPUTE_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        )
        self.name = name

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=settings.SIMULATION_WORKERS,
            thread_name_prefix=name,
        )
        self._lock = threading.Lock()
        # Serializes delivery so an older result can never land after a newer one
        self._delivery_lock = threading.RLock()
        self._sequence = itertools.count(1)
        self._latest = 0
        self._timer: Optional[threading.Timer] = None
        self._timer_token: Optional[object] = None
        self._in_flight = 0
        self._closed = False

    @property
    def latest_sequence(self) -> int:
        """Sequence number of the most recently dispatched computation (0 = none)."""
        with self._lock:
            return self._latest

    @property
    def is_computing(self) -> bool:
        """True while a request is pending or a computation is running."""
        with self._lock:
            return self._timer is not None or self._in_flight > 0

    def request(self, *args, **kwargs) -> None:
        """Schedule a computation once no further request arrives for the debounce window."""
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Scheduler '{self.name}' is shut down")
            self._cancel_timer()
            token = object()
            timer = threading.Timer(self.debounce_seconds, self._fire, args=(token, args, kwargs))
            timer.daemon = True
            self._timer = timer
            self._timer_token = token
        timer.start()

    def run_now(self, *args, **kwargs) -> Future:
        """Dispatch a computation immediately, superseding any earlier one."""
        with self._lock:
            self._cancel_timer()
        return self._dispatch(args, kwargs)

    def cancel_pending(self) -> None:
        """Drop a debounced request that has not fired yet."""
        with self._lock:
            self._cancel_timer()

    def invalidate(self) -> None:
        """Drop any pending request and make in-flight results stale.

        Returns only after any delivery already in progress has finished, so
        the caller may publish its own state without being overwritten.
        """
        with self._delivery_lock:
            with self._lock:
                self._cancel_timer()
                self._latest = next(self._sequence)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            self._closed = True
            self._cancel_timer()
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def _cancel_timer(self) -> None:
        # Caller holds self._lock
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._timer_token = None

    def _fire(self, token, args, kwargs) -> None:
        with self._lock:
            # A timer that was superseded after it started running must not
            # clear or outrun the newer pending request
            if token is not self._timer_token or self._closed:
                return
            self._timer = None
            self._timer_token = None
            sequence = self._next_sequence()
        self._submit(sequence, args, kwargs)

    def _dispatch(self, args, kwargs) -> Future:
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Scheduler '{self.name}' is shut down")
            sequence = self._next_sequence()
        return self._submit(sequence, args, kwargs)

    def _next_sequence(self) -> int:
        # Caller holds self._lock
        sequence = next(self._sequence)
        self._latest = sequence
        self._in_flight += 1
        return sequence

    def _submit(self, sequence: int, args, kwargs) -> Future:
        try:
            future = self._executor.submit(self.compute_fn, *args, **kwargs)
        except RuntimeError:
            # Executor shut down between the closed check and the submit
            with self._lock:
                self._in_flight -= 1
            raise
        future.add_done_callback(lambda f: self._complete(sequence, f))
        return future

    def _is_latest(self, sequence: int) -> bool:
        with self._lock:
            return sequence == self._latest and not self._closed

    def _complete(self, sequence: int, future: Future) -> None:
        with self._lock:
            self._in_flight -= 1

        if future.cancelled():
            return

        error = future.exception()
        if error is not None:
            logger.error(
                f"[{self.name}] computation #{sequence} failed",
                exc_info=(type(error), error, error.__traceback__),
            )

        with self._delivery_lock:
            if not self._is_latest(sequence):
                if error is None:
                    logger.debug(f"[{self.name}] discarding stale result #{sequence}")
                return
            if error is not None:
                if self.on_error is not None:
                    self.on_error(error)
                return
            self.on_result(future.result())
