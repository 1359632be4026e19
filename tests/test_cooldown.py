from use_cases.cooldown import CooldownTimer


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_inactive_until_started():
    timer = CooldownTimer()
    assert timer.is_active() is False
    assert timer.remaining == 0


def test_becomes_inactive_exactly_after_last_tick():
    timer = CooldownTimer()
    timer.start(60)

    for _ in range(59):
        timer.tick()
        assert timer.is_active() is True

    timer.tick()
    assert timer.is_active() is False
    assert timer.remaining == 0


def test_no_underflow():
    timer = CooldownTimer()
    timer.start(2)
    for _ in range(5):
        timer.tick()
    assert timer.remaining == 0


def test_start_supersedes_running_countdown():
    timer = CooldownTimer()
    timer.start(60)
    for _ in range(50):
        timer.tick()

    timer.start(60)
    assert timer.remaining == 60


def test_cancel_stops_further_ticks():
    clock = FakeClock()
    timer = CooldownTimer(clock)
    timer.start(60)
    timer.cancel()

    clock.now = 10
    assert timer.sync() == 0
    assert timer.is_active() is False


def test_sync_applies_whole_elapsed_seconds():
    clock = FakeClock()
    timer = CooldownTimer(clock)
    timer.start(60)

    clock.now = 2.5
    assert timer.sync() == 58
    clock.now = 3.0
    assert timer.sync() == 57
    clock.now = 500
    assert timer.sync() == 0
    assert timer.is_active() is False
