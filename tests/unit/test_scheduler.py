import logging
import time
from unittest.mock import Mock

import pytest

from formcoach.domain.coaching.scheduler import CoachingScheduler
from formcoach.schemas.coach_dto import CoachEventType, Priority
from tests.test_helpers import FakeClock, FixedRandom


class TestRateLimit:

    def test_second_emission_within_interval_suppressed(self, scheduler, clock):
        first = scheduler.try_emit(CoachEventType.REP_COMPLETED, "1")
        clock.advance(500)
        second = scheduler.try_emit(CoachEventType.REP_COMPLETED, "2")

        assert first is not None
        assert second is None

    def test_emits_again_after_interval(self, scheduler, clock):
        assert scheduler.try_emit(CoachEventType.REP_COMPLETED, "1") is not None
        clock.advance(800)
        assert scheduler.try_emit(CoachEventType.REP_COMPLETED, "2") is not None

    def test_intervals_are_per_type(self, scheduler):
        assert scheduler.try_emit(CoachEventType.REP_COMPLETED, "1") is not None
        assert scheduler.try_emit(CoachEventType.HALFWAY) is not None

    def test_generator_not_called_when_throttled(self, scheduler):
        scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "Slow down.")
        generator = Mock(return_value="Easy now.")

        assert scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, generator) is None
        generator.assert_not_called()


class TestEscalation:

    def test_bad_form_ramp_up_scenario(self, scheduler, clock):
        """500ms마다 bad_form, 처음 두 번은 억제, 이후 간격당 최대 1회"""
        results = []
        for i in range(13):  # 0 ~ 6000ms
            results.append((clock.now, scheduler.try_emit(CoachEventType.BAD_FORM, f"Fix your posture {i}")))
            clock.advance(500)

        assert results[0][1] is None
        assert results[1][1] is None
        assert results[2][1] is not None

        emitted_at = [t for t, m in results if m is not None]
        assert emitted_at == [1000, 3500, 6000]
        assert all(b - a >= 2500 for a, b in zip(emitted_at, emitted_at[1:]))

    def test_warn_form_needs_more_history(self, scheduler, clock):
        results = []
        for i in range(4):
            results.append(scheduler.try_emit(CoachEventType.WARN_FORM, f"Watch it {i}"))
            clock.advance(100)

        assert results[:3] == [None, None, None]
        assert results[3] is not None

    def test_good_form_resets_history(self, scheduler):
        scheduler.try_emit(CoachEventType.BAD_FORM, "a")
        scheduler.try_emit(CoachEventType.BAD_FORM, "b")
        assert scheduler.consecutive_form_issues == 2

        scheduler.try_emit(CoachEventType.GOOD_FORM)
        assert scheduler.consecutive_form_issues == 0
        assert scheduler.try_emit(CoachEventType.BAD_FORM, "c") is None

    def test_hold_form_does_not_touch_history(self, scheduler):
        scheduler.try_emit(CoachEventType.WARN_FORM, "a")
        scheduler.try_emit(CoachEventType.HOLD_FORM)
        assert scheduler.consecutive_form_issues == 1


class TestGoodFormSampling:

    def test_dropped_most_of_the_time(self, clock):
        scheduler = CoachingScheduler(clock=clock, rng=FixedRandom(0.5))
        assert scheduler.try_emit(CoachEventType.GOOD_FORM, "Nice!") is None

    def test_occasionally_emitted(self, clock):
        scheduler = CoachingScheduler(clock=clock, rng=FixedRandom(0.95))
        message = scheduler.try_emit(CoachEventType.GOOD_FORM, "Nice!")
        assert message is not None
        assert message.priority == Priority.LOW


class TestAntiRepeat:

    @pytest.fixture
    def fast_scheduler(self, clock):
        return CoachingScheduler(clock=clock, intervals={"movement_too_fast": 0})

    def test_same_text_three_times_surfaces_once(self, fast_scheduler):
        results = [fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "Slow down.") for _ in range(3)]
        assert sum(r is not None for r in results) == 1

    def test_repeat_allowed_after_five_distinct(self, fast_scheduler):
        fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "Slow down.")
        for i in range(4):
            assert fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, f"other {i}") is not None
        assert fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "Slow down.") is None

        fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "other 4")
        assert fast_scheduler.try_emit(CoachEventType.MOVEMENT_TOO_FAST, "Slow down.") is not None

    def test_hold_form_may_repeat(self, scheduler, clock):
        assert scheduler.try_emit(CoachEventType.HOLD_FORM, "Hold it there.") is not None
        clock.advance(700)
        assert scheduler.try_emit(CoachEventType.HOLD_FORM, "Hold it there.") is not None


class TestTextAndMessage:

    def test_unknown_event_type_logged(self, scheduler, caplog):
        with caplog.at_level(logging.WARNING):
            assert scheduler.try_emit("jumping_for_joy", "Yay") is None
        assert "unknown coach event type" in caplog.text

    def test_string_event_type_accepted(self, scheduler):
        message = scheduler.try_emit("halfway")
        assert message.type == CoachEventType.HALFWAY

    @pytest.mark.parametrize("text", ["", "   "])
    def test_empty_text_suppressed(self, scheduler, text):
        assert scheduler.try_emit(CoachEventType.HALFWAY, text) is None

    def test_no_text_and_no_catalog_entry(self, scheduler):
        assert scheduler.try_emit(CoachEventType.REP_COMPLETED) is None

    def test_failing_generator_suppressed(self, scheduler):
        def boom():
            raise RuntimeError("nope")

        assert scheduler.try_emit(CoachEventType.HALFWAY, boom) is None

    def test_generator_returning_none_uses_catalog(self, scheduler):
        message = scheduler.try_emit(CoachEventType.HALFWAY, lambda: None)
        assert message.text == "Halfway there!"

    def test_message_fields(self, scheduler, clock):
        clock.advance(1234)
        before = time.time() * 1000
        a = scheduler.try_emit(CoachEventType.HALFWAY)
        after = time.time() * 1000
        b = scheduler.try_emit(CoachEventType.ALMOST_DONE, priority=Priority.HIGH)

        assert a.id != b.id
        # 표시용 timestamp는 wall-clock, rate limit clock과 무관
        assert before <= a.timestamp <= after
        assert scheduler.last_emit_time[CoachEventType.HALFWAY] == 1234
        assert a.priority == Priority.LOW
        assert b.priority == Priority.HIGH

    def test_message_is_immutable(self, scheduler):
        message = scheduler.try_emit(CoachEventType.HALFWAY)
        with pytest.raises(Exception):
            message.text = "changed"


class TestLifecycle:

    def test_reset_clears_state(self, scheduler):
        scheduler.try_emit(CoachEventType.REP_COMPLETED, "1")
        scheduler.try_emit(CoachEventType.BAD_FORM, "x")
        scheduler.reset()

        assert scheduler.last_emit_time == {}
        assert scheduler.consecutive_form_issues == 0
        assert len(scheduler.recent_texts) == 0
        assert scheduler.try_emit(CoachEventType.REP_COMPLETED, "1") is not None

    def test_disposed_scheduler_emits_nothing(self, scheduler):
        scheduler.dispose()
        assert scheduler.try_emit(CoachEventType.HALFWAY) is None

    def test_default_clock_is_monotonic_ms(self):
        scheduler = CoachingScheduler.create()
        message = scheduler.try_emit(CoachEventType.HALFWAY)
        assert message is not None
        assert message.timestamp > 0
        assert scheduler.last_emit_time[CoachEventType.HALFWAY] <= time.monotonic() * 1000
