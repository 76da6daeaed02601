"""SamplePlaybackScheduler 테스트: 미리듣기 후 플레이어 상태 복원."""

from __future__ import annotations

import pytest

from subwave.services.sample_playback import SamplePlaybackScheduler, clamp_sample_duration


@pytest.fixture
def scheduler(qapp, fake_player):
    sched = SamplePlaybackScheduler(fake_player)
    yield sched
    sched.cancel(restore=False)


class TestClampSampleDuration:
    def test_within_limit(self):
        assert clamp_sample_duration(1000, 2000, 5000) == 1000

    def test_clamped_to_stop(self):
        assert clamp_sample_duration(2000, 4500, 5000) == 500

    def test_no_limit(self):
        assert clamp_sample_duration(2000, 4500, None) == 2000

    @pytest.mark.parametrize("duration", [None, 0, -10])
    def test_disabled(self, duration):
        assert clamp_sample_duration(duration, 0, 5000) == 0

    def test_start_past_stop(self):
        assert clamp_sample_duration(1000, 6000, 5000) == 0


class TestPlaySample:
    def test_jump_only_when_disabled(self, scheduler, fake_player):
        assert scheduler.play_sample(3000, 0) is None
        assert fake_player.calls == [("jump", 3000)]
        assert not fake_player.playing

    def test_starts_playback_and_disables_modes(self, scheduler, fake_player):
        fake_player.looping = True
        fake_player.syncing = True
        session = scheduler.play_sample(3000, 500)

        assert session is not None
        assert session.saved_loop_mode and session.saved_sync_mode
        assert fake_player.calls == [("jump", 3000), ("unpause",)]
        assert fake_player.playing
        assert not fake_player.looping
        assert not fake_player.syncing

    def test_restores_after_duration(self, scheduler, fake_player, qtbot):
        fake_player.looping = True
        fake_player.syncing = True

        with qtbot.waitSignal(scheduler.sample_finished, timeout=2000) as blocker:
            scheduler.play_sample(3000, 50)

        assert blocker.args == [3000]
        assert not fake_player.playing
        assert fake_player.position == 3000
        assert fake_player.looping
        assert fake_player.syncing
        assert scheduler.session is None

    def test_position_and_modes_restored_after_sample(self, scheduler, fake_player, qtbot):
        fake_player.jump(1000)
        fake_player.looping = True
        with qtbot.waitSignal(scheduler.sample_finished, timeout=2000):
            scheduler.play_sample(1000, 500)
        assert fake_player.position == 1000
        assert fake_player.looping
        assert not fake_player.syncing

    def test_modes_left_off_when_they_were_off(self, scheduler, fake_player, qtbot):
        with qtbot.waitSignal(scheduler.sample_finished, timeout=2000):
            scheduler.play_sample(1000, 20)
        assert not fake_player.looping
        assert not fake_player.syncing

    def test_duration_clamped_to_entry_stop(self, scheduler, qtbot):
        with qtbot.waitSignal(scheduler.sample_started, timeout=1000) as blocker:
            scheduler.play_sample(4900, 2000, stop_limit_ms=5000)
        assert blocker.args == [4900, 100]

    def test_start_at_entry_stop_only_jumps(self, scheduler, fake_player):
        assert scheduler.play_sample(5000, 2000, stop_limit_ms=5000) is None
        assert fake_player.calls == [("jump", 5000)]


class TestSupersession:
    def test_new_sample_inherits_saved_modes(self, scheduler, fake_player, qtbot):
        fake_player.looping = True
        fake_player.syncing = True
        first = scheduler.play_sample(1000, 5000)
        second = scheduler.play_sample(2000, 50)

        assert first.timer is None
        assert second.saved_loop_mode and second.saved_sync_mode

        qtbot.waitUntil(lambda: scheduler.session is None, timeout=2000)
        assert fake_player.position == 2000
        assert fake_player.looping
        assert fake_player.syncing

    def test_only_one_restore_for_two_samples(self, scheduler, fake_player, qtbot):
        finished = []
        scheduler.sample_finished.connect(lambda ms: finished.append(ms))
        scheduler.play_sample(1000, 30)
        scheduler.play_sample(2000, 60)
        qtbot.waitUntil(lambda: finished == [2000], timeout=2000)
        qtbot.wait(100)
        assert finished == [2000]

    def test_disabled_sample_restores_pending_session(self, scheduler, fake_player):
        fake_player.looping = True
        scheduler.play_sample(1000, 5000)
        scheduler.play_sample(2500, 0)

        assert scheduler.session is None
        assert fake_player.looping
        assert fake_player.position == 2500
        assert not fake_player.playing


class TestCancel:
    def test_cancel_restores(self, scheduler, fake_player):
        fake_player.syncing = True
        scheduler.play_sample(1000, 5000)
        scheduler.cancel()
        assert fake_player.syncing
        assert fake_player.position == 1000
        assert not fake_player.playing

    def test_cancel_without_restore(self, scheduler, fake_player):
        fake_player.syncing = True
        scheduler.play_sample(1000, 5000)
        scheduler.cancel(restore=False)
        assert scheduler.session is None
        assert not fake_player.syncing

    def test_cancel_when_idle(self, scheduler, fake_player):
        scheduler.cancel()
        assert fake_player.calls == []
