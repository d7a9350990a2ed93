"""Tests for request pacing."""

import threading
import time

import httpx
import pytest

from fio_api.client.pacer import REQUEST_RATE, RequestPacer


class FakeClock:
    """Monotonic clock advanced only by sleep() and tick()"""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def tick(self, seconds: float) -> None:
        self.now += seconds


class Recorder:
    """Dispatch callable returning scripted status codes and recording dispatch times"""

    def __init__(self, clock, statuses=(200,)):
        self.clock = clock
        self.statuses = list(statuses)
        self.times = []

    def __call__(self) -> httpx.Response:
        self.times.append(self.clock())
        status = self.statuses.pop(0) if self.statuses else 200
        return httpx.Response(status)


class TestRequestPacer:
    """Minimum interval between calls"""

    def setup_method(self):
        self.clock = FakeClock()
        self.pacer = RequestPacer(REQUEST_RATE, clock=self.clock, sleep=self.clock.sleep)

    def test_first_call_does_not_wait(self):
        recorder = Recorder(self.clock)
        response = self.pacer.call(recorder)

        assert response.status_code == 200
        assert self.clock.sleeps == []
        assert self.pacer.last_call == 1000.0

    def test_back_to_back_calls_are_spaced(self):
        recorder = Recorder(self.clock)
        self.pacer.call(recorder)
        self.clock.tick(5.0)
        self.pacer.call(recorder)

        assert self.clock.sleeps == [pytest.approx(25.0)]
        assert recorder.times[1] - recorder.times[0] >= REQUEST_RATE

    def test_deadline_is_recorded_not_wake_up_time(self):
        recorder = Recorder(self.clock)
        self.pacer.call(recorder)
        self.pacer.call(recorder)

        assert self.pacer.last_call == 1000.0 + REQUEST_RATE

    def test_no_wait_after_interval_elapsed(self):
        recorder = Recorder(self.clock)
        self.pacer.call(recorder)
        self.clock.tick(45.0)
        self.pacer.call(recorder)

        assert self.clock.sleeps == []
        assert self.pacer.last_call == 1045.0

    def test_many_calls_never_closer_than_interval(self):
        recorder = Recorder(self.clock)
        for step in (0.0, 1.0, 29.0, 31.0, 0.5):
            self.clock.tick(step)
            self.pacer.call(recorder)

        gaps = [b - a for a, b in zip(recorder.times, recorder.times[1:])]
        assert all(gap >= REQUEST_RATE for gap in gaps)

    def test_too_soon_is_retried_once(self):
        recorder = Recorder(self.clock, statuses=[409, 200])
        response = self.pacer.call(recorder, "GET /last")

        assert response.status_code == 200
        assert len(recorder.times) == 2
        # the retry waits a full interval from the rejected call
        assert recorder.times[1] - recorder.times[0] == pytest.approx(REQUEST_RATE)

    def test_retry_is_logged(self, caplog):
        recorder = Recorder(self.clock, statuses=[409, 200])
        with caplog.at_level("WARNING", logger="fio_api.client.pacer"):
            self.pacer.call(recorder, "https://example/last/*CENSORED*/transactions.csv")

        assert "Retrying command" in caplog.text
        assert "*CENSORED*" in caplog.text

    def test_other_errors_are_returned(self):
        recorder = Recorder(self.clock, statuses=[500])
        response = self.pacer.call(recorder)

        assert response.status_code == 500
        assert len(recorder.times) == 1

    def test_dispatch_exception_propagates(self):
        def failing():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            self.pacer.call(failing)
        # the lock is released again
        assert self.pacer.call(Recorder(self.clock)).status_code == 200


def test_threads_are_serialized():
    pacer = RequestPacer(0.0)
    active = []
    overlaps = []
    calls = []
    lock = threading.Lock()

    def dispatch():
        with lock:
            active.append(1)
            if len(active) > 1:
                overlaps.append(True)
        # hold the dispatch open
        time.sleep(0.01)
        with lock:
            active.pop()
            calls.append(1)
        return httpx.Response(200)

    threads = [threading.Thread(target=pacer.call, args=(dispatch,)) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert overlaps == []
    assert len(calls) == 8
