"""
Coaching Scheduler
이벤트 타입별 rate limit + 자세 문제 누적 게이트 + 반복 방지 필터
"""
from __future__ import annotations

import logging
import random
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional, Union

from formcoach.constants import (
    EVENT_INTERVAL_MS,
    FORM_ISSUE_MIN_COUNT,
    HISTORY_SIZE,
    REPEAT_EXEMPT_EVENTS,
    DEFAULT_GOOD_FORM_DROP_RATE,
)
from formcoach.domain.coaching import messages
from formcoach.schemas.coach_dto import CoachEventType, CoachMessage, Priority

logger = logging.getLogger(__name__)

TextSource = Union[str, Callable[[], Optional[str]], None]
Clock = Callable[[], float]

DEFAULT_PRIORITY: Dict[CoachEventType, Priority] = {
    CoachEventType.BAD_FORM: Priority.HIGH,
    CoachEventType.HOLD_FORM: Priority.HIGH,
    CoachEventType.TARGET_REPS_REACHED: Priority.HIGH,
    CoachEventType.EXERCISE_COMPLETE: Priority.HIGH,
    CoachEventType.SESSION_COMPLETE: Priority.HIGH,
    CoachEventType.WARN_FORM: Priority.MEDIUM,
    CoachEventType.REP_COMPLETED: Priority.MEDIUM,
    CoachEventType.MOVEMENT_TOO_FAST: Priority.MEDIUM,
    CoachEventType.MOVEMENT_TOO_SLOW: Priority.MEDIUM,
    CoachEventType.MOVEMENT_JERKY: Priority.MEDIUM,
    CoachEventType.NO_MOTION: Priority.MEDIUM,
    CoachEventType.EXERCISE_START: Priority.MEDIUM,
    CoachEventType.SESSION_START: Priority.MEDIUM,
    CoachEventType.HALFWAY: Priority.LOW,
    CoachEventType.ALMOST_DONE: Priority.LOW,
    CoachEventType.GOOD_FORM: Priority.LOW,
    CoachEventType.MOVEMENT_SMOOTH: Priority.LOW,
}


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


class CoachingScheduler:
    """
    코칭 메시지 발화 여부 결정기

    세션 시작 시 create(), 재시작 시 reset(), 종료 시 dispose().
    모든 억제 경로는 None을 반환하고 예외를 던지지 않는다.

    escalation 규칙: 이번 호출 직전까지 누적된 연속 자세 문제 수가
    FORM_ISSUE_MIN_COUNT를 초과해야 warn/bad 메시지를 낸다
    (bad: 이전 2회 이상, warn: 이전 3회 이상).
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
        intervals: Optional[Dict[str, int]] = None,
        good_form_drop_rate: float = DEFAULT_GOOD_FORM_DROP_RATE,
    ):
        self._clock = clock or _monotonic_ms
        self._rng = rng or random.Random()
        self._intervals = {**EVENT_INTERVAL_MS, **(intervals or {})}
        self.good_form_drop_rate = good_form_drop_rate

        self.last_emit_time: Dict[CoachEventType, float] = {}
        self.consecutive_form_issues: int = 0
        self.recent_texts: Deque[str] = deque(maxlen=HISTORY_SIZE)
        self._disposed = False

    @classmethod
    def create(cls, **kwargs) -> "CoachingScheduler":
        return cls(**kwargs)

    def reset(self) -> None:
        """세션 재시작: 상태 초기화 (dispose 해제 포함)"""
        self.last_emit_time.clear()
        self.consecutive_form_issues = 0
        self.recent_texts.clear()
        self._disposed = False

    def dispose(self) -> None:
        self.reset()
        self._disposed = True

    # ─────────────────────────────────────────────────────
    # try_emit
    # ─────────────────────────────────────────────────────
    def try_emit(
        self,
        event_type: Union[CoachEventType, str],
        text: TextSource = None,
        priority: Optional[Priority] = None,
    ) -> Optional[CoachMessage]:
        """
        이벤트 → 메시지 발화 시도

        Args:
            event_type: 코칭 이벤트 타입
            text: 문구, 문구 생성 함수(모든 게이트 통과 후 호출), 또는 None(카탈로그 기본 문구)
            priority: 우선순위 (없으면 이벤트 타입 기본값)

        Returns:
            CoachMessage, 억제되면 None
        """
        if self._disposed:
            return None

        try:
            event_type = CoachEventType(event_type)
        except ValueError:
            logger.warning(f"⚠️ unknown coach event type: {event_type!r}")
            return None

        now = self._clock()
        prior_issues = self._track_form(event_type)

        # 1) rate limit
        last = self.last_emit_time.get(event_type)
        interval = self._intervals.get(event_type.value, 0)
        if last is not None and now - last < interval:
            logger.debug(f"throttled: {event_type.value} ({now - last:.0f}ms < {interval}ms)")
            return None

        # 2) escalation gate (warn/bad)
        min_issues = FORM_ISSUE_MIN_COUNT.get(event_type.value)
        if min_issues is not None and prior_issues <= min_issues:
            logger.debug(f"ramp-up: {event_type.value} (issues={prior_issues})")
            return None

        # 3) good_form sampling
        if event_type == CoachEventType.GOOD_FORM and self._rng.random() < self.good_form_drop_rate:
            return None

        resolved = self._resolve_text(event_type, text)
        if not resolved:
            return None

        # 4) anti-repeat
        if event_type.value not in REPEAT_EXEMPT_EVENTS and resolved in self.recent_texts:
            logger.debug(f"repeat suppressed: {resolved!r}")
            return None

        # 5) commit
        self.last_emit_time[event_type] = now
        self.recent_texts.append(resolved)
        message = CoachMessage(
            text=resolved,
            type=event_type,
            priority=priority or DEFAULT_PRIORITY.get(event_type, Priority.MEDIUM),
        )
        logger.info(f"🗣️ [{event_type.value}] {resolved}")
        return message

    def _track_form(self, event_type: CoachEventType) -> int:
        """연속 자세 문제 카운터 갱신, 갱신 전 값을 반환"""
        prior = self.consecutive_form_issues
        if event_type in (CoachEventType.WARN_FORM, CoachEventType.BAD_FORM):
            self.consecutive_form_issues += 1
        elif event_type == CoachEventType.GOOD_FORM:
            self.consecutive_form_issues = 0
        return prior

    def _resolve_text(self, event_type: CoachEventType, text: TextSource) -> Optional[str]:
        if callable(text):
            try:
                text = text()
            except Exception:
                logger.exception(f"text generator failed: {event_type.value}")
                return None
        if text is None:
            text = messages.pick(event_type, self._rng)
        if not text or not text.strip():
            return None
        return text.strip()
