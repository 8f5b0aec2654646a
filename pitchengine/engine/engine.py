"""PitchEngine - ordered, staged pitch detection over a signal source.

Frames flow through three execution contexts:

1. Capture: the source's own thread (or the caller) hands each frame to
   ``_on_frame``, which measures its level and enqueues it.
2. Worker: a single thread transforms, estimates and maps frames one at a
   time, turning each into a Notification.
3. Delivery: a single thread passes notifications to the consumer.

Stages talk only through FIFO queues, so consumers see notifications in frame
arrival order. Threshold skips travel through the worker queue as well.
The queues are unbounded: a worker slower than the source makes latency grow,
and a BacklogWarning is raised each time the backlog crosses
``backlog_warning`` frames.
"""

import queue
import threading
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from .config import EngineConfig
from .level import level_db
from .notifications import Notification
from ..core import (
    SourceError,
    PermissionDeniedError,
    BacklogWarning,
    ConsumerWarning,
    DEFAULT_FRAME_SIZE,
)
from ..core.constants import DEFAULT_BACKLOG_WARNING, SILENCE_LEVEL
from ..estimation import EstimationStrategy
from ..input import SignalSource, SourceMode, Frame, MicrophoneSource
from ..pitch import Pitch, FrequencyValidator


NotificationCallback = Callable[[Notification], None]
PitchMapper = Callable[[float], Pitch]

# Closes a stage queue
_STOP = object()


class PitchEngineDelegate(ABC):
    """Receives engine notifications on the delivery thread."""

    @abstractmethod
    def pitch_engine_did_receive(self, engine: "PitchEngine", notification: Notification) -> None:
        pass


@dataclass(frozen=True, eq=False)
class _Job:
    sequence: int
    frame: Frame
    level: float
    skip: bool


class PitchEngine:
    """Detects the pitch of incoming frames and notifies a consumer in order."""

    def __init__(
        self,
        source: Optional[SignalSource] = None,
        strategy: EstimationStrategy = EstimationStrategy.YIN,
        frame_size: int = DEFAULT_FRAME_SIZE,
        level_threshold: Optional[float] = None,
        delegate: Optional[PitchEngineDelegate] = None,
        callback: Optional[NotificationCallback] = None,
        pitch_mapper: Optional[PitchMapper] = None,
        permission_check: Optional[Callable[[], bool]] = None,
        backlog_warning: int = DEFAULT_BACKLOG_WARNING,
    ):
        """
        Initialize PitchEngine.

        Args:
            source: Frame producer (default: MicrophoneSource)
            strategy: Estimation strategy, fixed for the engine's lifetime
            frame_size: Samples per frame for the default source
            level_threshold: Frames at or below this level (dBFS) are skipped
            delegate: Consumer object notified on the delivery thread
            callback: Consumer function notified on the delivery thread
            pitch_mapper: Maps an in-range frequency to a Pitch
            permission_check: Gate run before starting a playback source
                (default: ``source.check_permission``)
            backlog_warning: Pending frames that trigger a BacklogWarning (0 = never)
        """
        if source is None:
            source = MicrophoneSource(frame_size=frame_size)

        self.source = source
        self.frame_size = source.frame_size
        self.strategy = strategy
        self.estimator = strategy.estimator
        self.transformer = self.estimator.transformer
        self.pitch_mapper = pitch_mapper or Pitch.from_frequency
        self.permission_check = permission_check or source.check_permission

        self.level_threshold = level_threshold
        self.backlog_warning = backlog_warning

        # Consumer handles; cleared by detach()
        self.delegate = delegate
        self.callback = callback

        self._active = False
        self._signal_level = SILENCE_LEVEL
        self._sequence = 0
        self._backlog_warned = False

        self._lock = threading.Lock()
        self._work_queue: Optional[queue.Queue] = None
        self._worker: Optional[threading.Thread] = None
        self._deliverer: Optional[threading.Thread] = None

    @classmethod
    def from_config(cls, config: EngineConfig, **kwargs) -> "PitchEngine":
        """Build an engine and its source from an EngineConfig."""
        return cls(
            source=config.create_source(),
            strategy=config.strategy,
            level_threshold=config.level_threshold,
            backlog_warning=config.backlog_warning,
            **kwargs,
        )

    @property
    def active(self) -> bool:
        return self._active

    @property
    def mode(self) -> SourceMode:
        return self.source.mode

    @property
    def signal_level(self) -> float:
        """Level of the most recent frame in dBFS."""
        return self._signal_level

    @property
    def pending_frames(self) -> int:
        """Frames waiting for the worker."""
        work_queue = self._work_queue
        return work_queue.qsize() if work_queue is not None else 0

    # Lifecycle

    def start(self) -> None:
        """
        Start the source and the worker/delivery stages.

        No-op while active. A playback source must pass the permission check
        first; a refused check or a source that fails to start is reported as
        a failure notification and leaves the engine inactive.
        """
        if self._active:
            return

        self._open_stages()

        if self.mode is SourceMode.PLAYBACK and not self.permission_check():
            self._fail_start(PermissionDeniedError(f"Permission denied for {self.source!r}"))
            return

        self._active = True
        try:
            self.source.start(self._on_frame, self._on_source_error)
        except SourceError as e:
            self._active = False
            self._fail_start(e)

    def stop(self) -> None:
        """
        Stop the source and close the stages.

        Frames already queued are still analyzed and delivered; use ``join``
        to wait for them. No-op while inactive.
        """
        if not self._active:
            return

        self._active = False
        self.source.stop()
        self._close_stages()

    def join(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the worker and delivery stages to drain after ``stop``.

        Returns:
            True if both stages finished within the timeout
        """
        current = threading.current_thread()
        threads = [t for t in (self._worker, self._deliverer) if t is not None]

        for thread in threads:
            if thread is not current:
                thread.join(timeout)

        return not any(t.is_alive() for t in threads if t is not current)

    def detach(self) -> None:
        """Drop the consumer handles; later notifications go nowhere."""
        self.delegate = None
        self.callback = None

    def __enter__(self) -> "PitchEngine":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
        self.join()

    # Capture context

    def _on_frame(self, frame: Frame) -> None:
        work_queue = self._work_queue
        if not self._active or work_queue is None:
            return

        level = level_db(frame.samples)
        self._signal_level = level

        threshold = self.level_threshold
        skip = threshold is not None and not level > threshold

        work_queue.put(_Job(sequence=self._sequence, frame=frame, level=level, skip=skip))
        self._sequence += 1

        self._check_backlog(work_queue.qsize())

    def _on_source_error(self, error: SourceError) -> None:
        if not self._active:
            return

        self._active = False
        work_queue = self._work_queue
        if work_queue is not None:
            work_queue.put(Notification.failure(error))
        self._close_stages()

    def _check_backlog(self, pending: int) -> None:
        if not self.backlog_warning:
            return

        if pending < self.backlog_warning:
            self._backlog_warned = False
        elif not self._backlog_warned:
            self._backlog_warned = True
            warnings.warn(
                f"{pending} frames waiting for analysis; notification latency is growing",
                BacklogWarning,
                stacklevel=2,
            )

    # Worker context

    def _work(self, work_queue: queue.Queue, delivery_queue: queue.Queue) -> None:
        while True:
            item = work_queue.get()
            if item is _STOP:
                delivery_queue.put(_STOP)
                return

            if isinstance(item, Notification):
                delivery_queue.put(item)
            else:
                delivery_queue.put(self._analyze(item))

    def _analyze(self, job: _Job) -> Notification:
        frame = job.frame
        if job.skip:
            return Notification.skip(job.sequence, frame.time, job.level)

        frequency = None
        try:
            buffer = self.transformer.transform(frame.samples)
            frequency = self.estimator.estimate(frame.sample_rate, buffer)
            FrequencyValidator.validate(frequency)
            pitch = self.pitch_mapper(frequency)
        except Exception as e:
            # Per-frame errors never stop the worker
            return Notification.failure(
                e,
                sequence=job.sequence,
                time=frame.time,
                level=job.level,
                frequency=frequency,
            )

        return Notification.success(pitch, job.sequence, frame.time, job.level)

    # Delivery context

    def _deliver(self, delivery_queue: queue.Queue) -> None:
        while True:
            notification = delivery_queue.get()
            if notification is _STOP:
                return
            self._notify(notification)

    def _notify(self, notification: Notification) -> None:
        delegate = self.delegate
        callback = self.callback

        if delegate is not None:
            self._call_consumer(delegate.pitch_engine_did_receive, self, notification)
        if callback is not None:
            self._call_consumer(callback, notification)

    @staticmethod
    def _call_consumer(consumer: Callable, *args) -> None:
        notification = args[-1]
        try:
            consumer(*args)
        except Exception as e:
            warnings.warn(
                f"Consumer raised {type(e).__name__} for {notification.kind.value}: {e}",
                ConsumerWarning,
            )

    # Stage management

    def _open_stages(self) -> None:
        with self._lock:
            if self._work_queue is not None:
                return

        # Previous stages finish delivering before new ones start
        self.join()

        work_queue: queue.Queue = queue.Queue()
        delivery_queue: queue.Queue = queue.Queue()

        self._worker = threading.Thread(
            target=self._work,
            args=(work_queue, delivery_queue),
            name="pitch-engine-worker",
            daemon=True,
        )
        self._deliverer = threading.Thread(
            target=self._deliver,
            args=(delivery_queue,),
            name="pitch-engine-delivery",
            daemon=True,
        )
        self._worker.start()
        self._deliverer.start()

        with self._lock:
            self._work_queue = work_queue

    def _close_stages(self) -> None:
        with self._lock:
            work_queue = self._work_queue
            self._work_queue = None

        if work_queue is not None:
            work_queue.put(_STOP)

    def _fail_start(self, error: SourceError) -> None:
        work_queue = self._work_queue
        if work_queue is not None:
            work_queue.put(Notification.failure(error))
        self._close_stages()
