"""Tests for keyflow.stats – the event log and derived metrics."""

from __future__ import annotations

from keyflow.stats import SessionStats, StatsEvent


def _record(stats, entries=0, mistakes=0, corrected=0):
    for _ in range(entries):
        stats.record(StatsEvent.ENTRY)
    for _ in range(mistakes):
        stats.record(StatsEvent.MISTAKE)
    for _ in range(corrected):
        stats.record(StatsEvent.CORRECTED_MISTAKE)


class TestEventLog:
    def test_counts(self, clock):
        stats = SessionStats(clock=clock)
        _record(stats, entries=3, mistakes=2, corrected=1)
        assert stats.entries == 3
        assert stats.mistakes == 2
        assert stats.corrected_mistakes == 1
        assert stats.uncorrected_mistakes == 1

    def test_log_is_append_only(self, clock):
        stats = SessionStats(clock=clock)
        stats.record(StatsEvent.ENTRY)
        stats.record(StatsEvent.MISTAKE)
        assert stats.events == (StatsEvent.ENTRY, StatsEvent.MISTAKE)

    def test_uncorrected_never_negative(self, clock):
        stats = SessionStats(clock=clock)
        _record(stats, corrected=2)
        assert stats.uncorrected_mistakes == 0


class TestElapsed:
    def test_start_time_from_clock(self, clock):
        stats = SessionStats(clock=clock)
        assert stats.start_time == clock.now

    def test_minutes_truncate(self, clock):
        stats = SessionStats(clock=clock)
        clock.advance(59.9)
        assert stats.minutes_elapsed() == 0
        clock.advance(60.0)
        assert stats.minutes_elapsed() == 1
        clock.advance(60.2)
        assert stats.minutes_elapsed() == 2


class TestMetrics:
    def test_values(self, clock):
        stats = SessionStats(clock=clock)
        _record(stats, entries=10, mistakes=2, corrected=1)
        clock.advance(120)
        assert stats.raw_wpm() == 1.0
        assert stats.net_wpm() == 0.5
        assert stats.accuracy() == 0.8

    def test_unavailable_before_first_minute(self, clock):
        stats = SessionStats(clock=clock)
        _record(stats, entries=25, mistakes=3)
        clock.advance(30)
        assert stats.raw_wpm() is None
        assert stats.net_wpm() is None
        assert stats.accuracy() is None

    def test_unavailable_without_entries(self, clock):
        stats = SessionStats(clock=clock)
        clock.advance(300)
        assert stats.raw_wpm() is None
        assert stats.net_wpm() is None
        assert stats.accuracy() is None

    def test_snapshot(self, clock):
        stats = SessionStats(clock=clock)
        _record(stats, entries=5, mistakes=1)
        clock.advance(60)
        snap = stats.snapshot()
        assert snap.counts() == {"entry": 5, "mistake": 1, "corrected_mistake": 0}
        assert snap.minutes == 1
        assert snap.raw_wpm == 1.0
        assert snap.net_wpm == 0.0
        assert snap.accuracy == 0.8
        assert snap.uncorrected_mistakes == 1


class SteppingClock:
    """Returns the next reading on every call, then repeats the last one."""

    def __init__(self, readings):
        self._readings = list(readings)

    def __call__(self):
        if len(self._readings) > 1:
            return self._readings.pop(0)
        return self._readings[0]


class TestSnapshotConsistency:
    def test_minute_boundary_during_snapshot(self):
        stats = SessionStats(clock=SteppingClock([0.0, 59.99, 60.0, 60.0]))
        _record(stats, entries=10)
        snap = stats.snapshot()
        assert snap.minutes == 0
        assert snap.raw_wpm is None
        assert snap.net_wpm is None
        assert snap.accuracy is None

    def test_metrics_match_minutes_after_boundary(self):
        stats = SessionStats(clock=SteppingClock([0.0, 60.0, 119.0, 120.0]))
        _record(stats, entries=10)
        snap = stats.snapshot()
        assert snap.minutes == 1
        assert snap.raw_wpm == 2.0
