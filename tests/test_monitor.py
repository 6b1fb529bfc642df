import logging

from pressureram.errors import SampleError, SampleErrorKind
from pressureram.models import MemorySample, PressureLevel, SwapUsage

N, C, S, U = (PressureLevel.NORMAL, PressureLevel.CAUTION,
              PressureLevel.SEVERE, PressureLevel.UNKNOWN)


def test_pressure_emitted_only_on_transition(make_monitor):
    monitor, _, rec = make_monitor(codes=[1, 1, 2, 2, 3, 1])
    for _ in range(6):
        monitor.tick()
    assert rec.pressure == [N, C, S, N]


def test_first_tick_always_emits(make_monitor):
    monitor, _, rec = make_monitor(codes=[1])
    assert monitor.last_pressure is None
    monitor.tick()
    assert rec.pressure == [N]
    assert monitor.last_pressure is N


def test_swap_emitted_every_tick(make_monitor):
    swaps = [SwapUsage(1048576, 1 << 30)] * 5
    monitor, _, rec = make_monitor(codes=[1] * 5, swaps=swaps)
    for _ in range(5):
        monitor.tick()
    assert rec.swap == ["1.00 MB"] * 5


def test_tick_returns_sample(make_monitor):
    monitor, _, _ = make_monitor(codes=[3], swaps=[SwapUsage(1572864, 1 << 30)])
    sample = monitor.tick()
    assert isinstance(sample, MemorySample)
    assert sample.pressure is S
    assert sample.swap_used_bytes == 1572864
    assert sample.swap_total_bytes == 1 << 30


def test_pressure_failure_is_unknown_and_swap_still_emitted(make_monitor, caplog):
    monitor, _, rec = make_monitor(codes=[1, SampleError("boom"), 1])
    with caplog.at_level(logging.WARNING, logger="pressureram.monitor"):
        monitor.tick()
        monitor.tick()
        monitor.tick()
    assert rec.pressure == [N, U, N]
    assert len(rec.swap) == 3
    assert SampleErrorKind.KERNEL_QUERY_FAILED.value in caplog.text


def test_swap_failure_reports_zero(make_monitor):
    monitor, _, rec = make_monitor(codes=[1], swaps=[SampleError("no swap")])
    sample = monitor.tick()
    assert rec.swap == ["0.00 MB"]
    assert (sample.swap_used_bytes, sample.swap_total_bytes) == (0, 0)


def test_unrecognized_code_and_failure_look_the_same(make_monitor):
    monitor, _, rec = make_monitor(codes=[7, SampleError()])
    monitor.tick()
    monitor.tick()
    assert rec.pressure == [U]


def test_refresh_does_not_touch_pressure(make_monitor):
    monitor, sampler, rec = make_monitor(codes=[2, 2])
    monitor.tick()
    for _ in range(4):
        monitor.request_swap_refresh()
    monitor.tick()
    assert rec.pressure == [C]
    assert monitor.last_pressure is C
    assert sampler.pressure_calls == 2
    assert len(rec.swap) == 6


def test_refresh_before_first_tick(make_monitor):
    monitor, _, rec = make_monitor()
    monitor.request_swap_refresh()
    assert rec.pressure == []
    assert rec.swap == ["1.00 MB"]
    assert monitor.last_pressure is None


def test_reentrant_tick_is_skipped(make_monitor):
    monitor, sampler, rec = make_monitor(codes=[1, 2])
    nested = []
    monitor.pressure_changed.connect(lambda level: nested.append(monitor.tick()))
    monitor.tick()
    assert nested == [None]
    assert sampler.pressure_calls == 1
    assert rec.pressure == [N]


def test_start_samples_immediately(make_monitor):
    monitor, _, rec = make_monitor(codes=[3])
    monitor.start()
    assert monitor.is_running
    assert rec.pressure == [S]
    assert len(rec.swap) == 1


def test_timer_drives_ticks(make_monitor, qtbot):
    monitor, sampler, rec = make_monitor(codes=[1, 2, 3], interval_ms=10)
    monitor.start()
    qtbot.waitUntil(lambda: len(rec.swap) >= 3, timeout=2000)
    assert rec.pressure[:3] == [N, C, S]


def test_stop_cancels_pending_ticks(make_monitor, qtbot):
    monitor, sampler, rec = make_monitor(interval_ms=10)
    monitor.start()
    monitor.stop()
    assert not monitor.is_running
    calls = sampler.pressure_calls
    qtbot.wait(100)
    assert sampler.pressure_calls == calls
    assert monitor.tick() is None
    monitor.request_swap_refresh()
    assert len(rec.swap) == 1


def test_stop_during_tick_discards_result(make_monitor):
    monitor, _, rec = make_monitor(codes=[1])

    class Stopping:
        def pressure_code(self):
            monitor.stop()
            return 1

    monitor._sampler = Stopping()
    assert monitor.tick() is None
    assert rec.pressure == []
    assert rec.swap == []
    assert monitor.last_pressure is None


def test_refresh_does_not_reset_timer(make_monitor, qtbot):
    monitor, sampler, rec = make_monitor(interval_ms=1000)
    monitor.start()
    qtbot.wait(300)
    before = monitor._timer.remainingTime()
    assert 0 <= before < 1000

    monitor.request_swap_refresh()
    assert monitor._timer.remainingTime() <= before
    assert sampler.pressure_calls == 1
    assert len(rec.swap) == 2

    # the scheduled tick still lands about 1 s after start()
    qtbot.waitUntil(lambda: sampler.pressure_calls == 2, timeout=before + 300)
    assert len(rec.swap) == 3
