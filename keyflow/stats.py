"""Session statistics: an append-only event log and derived metrics."""

from __future__ import annotations

import time
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple


class StatsEvent(Enum):
    ENTRY = "entry"
    MISTAKE = "mistake"
    CORRECTED_MISTAKE = "corrected_mistake"


@dataclass(frozen=True)
class StatsSnapshot:
    entries: int
    mistakes: int
    corrected_mistakes: int
    minutes: int
    raw_wpm: Optional[float]
    net_wpm: Optional[float]
    accuracy: Optional[float]

    @property
    def uncorrected_mistakes(self) -> int:
        return max(0, self.mistakes - self.corrected_mistakes)

    def counts(self) -> Dict[str, int]:
        return {
            StatsEvent.ENTRY.value: self.entries,
            StatsEvent.MISTAKE.value: self.mistakes,
            StatsEvent.CORRECTED_MISTAKE.value: self.corrected_mistakes,
        }


class SessionStats:
    """Event log for one session.

    The start timestamp is taken once at construction and never reset, so
    elapsed time is monotonic for the life of the session. Metrics follow the
    usual typing-test definitions:
      * raw WPM = entries / 5 / minutes
      * net WPM = raw WPM - uncorrected mistakes / minutes
      * accuracy = (entries - (uncorrected + corrected)) / entries
    Each metric is None while minutes or entries is zero.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._start_time = clock()
        self._events: List[StatsEvent] = []

    @property
    def start_time(self) -> float:
        return self._start_time

    @property
    def events(self) -> tuple:
        return tuple(self._events)

    def record(self, event: StatsEvent) -> None:
        self._events.append(event)

    def count(self, kind: StatsEvent) -> int:
        return sum(1 for e in self._events if e is kind)

    @property
    def entries(self) -> int:
        return self.count(StatsEvent.ENTRY)

    @property
    def mistakes(self) -> int:
        return self.count(StatsEvent.MISTAKE)

    @property
    def corrected_mistakes(self) -> int:
        return self.count(StatsEvent.CORRECTED_MISTAKE)

    @property
    def uncorrected_mistakes(self) -> int:
        return max(0, self.mistakes - self.corrected_mistakes)

    def seconds_elapsed(self) -> float:
        return max(0.0, self._clock() - self._start_time)

    def minutes_elapsed(self) -> int:
        return int(self.seconds_elapsed() // 60)

    def raw_wpm(self) -> Optional[float]:
        return self._metrics(self.minutes_elapsed())[0]

    def net_wpm(self) -> Optional[float]:
        return self._metrics(self.minutes_elapsed())[1]

    def accuracy(self) -> Optional[float]:
        return self._metrics(self.minutes_elapsed())[2]

    def _metrics(
        self, minutes: int, counts: Optional[Counter] = None
    ) -> Tuple[Optional[float], Optional[float], Optional[float]]:
        # one clock reading per call, so minutes and metrics always agree
        counts = Counter(self._events) if counts is None else counts
        entries = counts[StatsEvent.ENTRY]
        corrected = counts[StatsEvent.CORRECTED_MISTAKE]
        uncorrected = max(0, counts[StatsEvent.MISTAKE] - corrected)
        if minutes == 0 or entries == 0:
            return None, None, None
        raw = entries / 5 / minutes
        net = raw - uncorrected / minutes
        accuracy = (entries - (uncorrected + corrected)) / entries
        return raw, net, accuracy

    def snapshot(self) -> StatsSnapshot:
        counts = Counter(self._events)
        minutes = self.minutes_elapsed()
        raw, net, accuracy = self._metrics(minutes, counts)
        return StatsSnapshot(
            entries=counts[StatsEvent.ENTRY],
            mistakes=counts[StatsEvent.MISTAKE],
            corrected_mistakes=counts[StatsEvent.CORRECTED_MISTAKE],
            minutes=minutes,
            raw_wpm=raw,
            net_wpm=net,
            accuracy=accuracy,
        )
