"""
코칭 세션 Service Layer
프레임마다 자세 분석 + 분류기 신호 → 코칭 메시지 → 음성 재생 큐
"""
import logging
from typing import Any, List, Optional

from formcoach.domain.coaching import messages
from formcoach.domain.coaching.scheduler import CoachingScheduler, TextSource
from formcoach.domain.correction.engine import worst
from formcoach.domain.pose.converter import to_skeleton
from formcoach.schemas.coach_dto import (
    CoachEventType,
    CoachMessage,
    FormQuality,
    FrameAnalysis,
    FrameSignal,
    MotionQuality,
    Priority,
    TempoQuality,
)
from formcoach.schemas.correction_dto import JointCorrection, Severity
from formcoach.services.playback import PlaybackSerializer
from formcoach.services.pose_analysis_service import PoseAnalysisService

logger = logging.getLogger(__name__)

_PRIORITY_ORDER = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}

_FORM_EVENTS = {
    FormQuality.GOOD: CoachEventType.GOOD_FORM,
    FormQuality.WARN: CoachEventType.WARN_FORM,
    FormQuality.BAD: CoachEventType.BAD_FORM,
}

_TEMPO_EVENTS = {
    TempoQuality.PERFECT: CoachEventType.MOVEMENT_SMOOTH,
    TempoQuality.TOO_FAST: CoachEventType.MOVEMENT_TOO_FAST,
    TempoQuality.TOO_SLOW: CoachEventType.MOVEMENT_TOO_SLOW,
    TempoQuality.INCONSISTENT: CoachEventType.MOVEMENT_JERKY,
}

_MOTION_EVENTS = {
    MotionQuality.SMOOTH: CoachEventType.MOVEMENT_SMOOTH,
    MotionQuality.JERKY: CoachEventType.MOVEMENT_JERKY,
    MotionQuality.STILL: CoachEventType.NO_MOTION,
}


class CoachingSession:
    """
    실시간 코칭 세션 (세션 1개 = 인스턴스 1개)

    책임:
    - 프레임별 기하 분석 결과와 분류기 신호를 코칭 이벤트로 변환
    - 스케줄러 통과 메시지를 우선순위 순으로 재생 큐에 전달
    - mute / unmute / clear 제어를 재생 큐로 전달
    """

    def __init__(
        self,
        pose_service: PoseAnalysisService,
        scheduler: CoachingScheduler,
        playback: Optional[PlaybackSerializer] = None,
        target_reps: int = 10,
    ):
        """
        Args:
            pose_service: 프레임 기하 분석 서비스
            scheduler: 코칭 메시지 스케줄러 (세션 소유)
            playback: 음성 재생 큐 (None이면 메시지만 반환)
            target_reps: 운동별 목표 반복 수
        """
        self.pose_service = pose_service
        self.scheduler = scheduler
        self.playback = playback
        self.target_reps = target_reps
        self._started_exercise: Optional[str] = None

    # ─────────────────────────────────────────────────────
    # lifecycle
    # ─────────────────────────────────────────────────────
    def start(self) -> List[CoachMessage]:
        """세션 시작 (스케줄러 상태 초기화 + 환영 메시지)"""
        self.scheduler.reset()
        self._started_exercise = None
        return self._dispatch([self.scheduler.try_emit(CoachEventType.SESSION_START)])

    def complete_exercise(self, reps: int) -> List[CoachMessage]:
        self._started_exercise = None
        return self._dispatch([
            self.scheduler.try_emit(
                CoachEventType.EXERCISE_COMPLETE, messages.exercise_complete(reps)
            )
        ])

    def end(self) -> List[CoachMessage]:
        """세션 종료 메시지 후 스케줄러 폐기 (재생 큐는 남은 문구를 마저 재생)"""
        emitted = self._dispatch([self.scheduler.try_emit(CoachEventType.SESSION_COMPLETE)])
        self.scheduler.dispose()
        return emitted

    def mute(self) -> None:
        if self.playback is not None:
            self.playback.mute()

    def unmute(self) -> None:
        if self.playback is not None:
            self.playback.unmute()

    def clear(self) -> None:
        if self.playback is not None:
            self.playback.clear()

    # ─────────────────────────────────────────────────────
    # per-frame
    # ─────────────────────────────────────────────────────
    def process_frame(self, landmarks: Any, signal: FrameSignal) -> FrameAnalysis:
        """
        프레임 1개 처리

        Args:
            landmarks: 관절 이름 dict 또는 MediaPipe 33개 리스트 (일부 누락 가능)
            signal: 외부 분류기 신호 (운동, 단계, 반복 수, 자세/템포 품질)

        Returns:
            FrameAnalysis (overlay용 target_pose/corrections + 이번 프레임 메시지)
        """
        skeleton = to_skeleton(landmarks)
        profile, target_pose, corrections = self.pose_service.analyze(
            skeleton, signal.exercise_type, signal.target_stage
        )

        candidates: List[Optional[CoachMessage]] = []
        if skeleton and self._started_exercise != signal.exercise_type:
            self._started_exercise = signal.exercise_type
            candidates.append(self.scheduler.try_emit(
                CoachEventType.EXERCISE_START, messages.exercise_start(signal.exercise_type)
            ))

        candidates.extend(self._rep_events(signal))

        if signal.holding:
            candidates.append(self.scheduler.try_emit(CoachEventType.HOLD_FORM))

        candidates.append(self._form_event(signal, target_pose is not None, corrections))
        candidates.extend(self._tempo_events(signal))

        return FrameAnalysis(
            profile=profile,
            target_pose=target_pose,
            corrections=corrections,
            messages=self._dispatch(candidates),
        )

    def _rep_events(self, signal: FrameSignal) -> List[Optional[CoachMessage]]:
        if not signal.rep_completed:
            return []
        reps = signal.reps
        emitted = [
            self.scheduler.try_emit(CoachEventType.REP_COMPLETED, messages.rep_count(reps))
        ]
        target = self.target_reps
        if reps == target:
            emitted.append(self.scheduler.try_emit(
                CoachEventType.TARGET_REPS_REACHED, messages.target_reached(reps)
            ))
        elif target >= 4 and reps == target // 2:
            emitted.append(self.scheduler.try_emit(CoachEventType.HALFWAY))
        elif target > 2 and reps == target - 2:
            emitted.append(self.scheduler.try_emit(CoachEventType.ALMOST_DONE))
        return emitted

    def _form_event(
        self,
        signal: FrameSignal,
        has_target: bool,
        corrections: List[JointCorrection],
    ) -> Optional[CoachMessage]:
        quality = signal.form_quality
        if quality is None:
            if not has_target:
                return None
            quality = _quality_from(corrections)

        text: TextSource = None
        if quality != FormQuality.GOOD:
            text = signal.suggestion or self._hint_text(corrections)
        return self.scheduler.try_emit(_FORM_EVENTS[quality], text)

    @staticmethod
    def _hint_text(corrections: List[JointCorrection]) -> TextSource:
        target = worst(corrections)
        if target is None:
            return None
        # 카탈로그 기본 문구로 대체되도록 None 반환 가능
        return lambda: messages.correction_hint_text(target)

    def _tempo_events(self, signal: FrameSignal) -> List[Optional[CoachMessage]]:
        events = []
        if signal.tempo_quality in _TEMPO_EVENTS:
            events.append(_TEMPO_EVENTS[signal.tempo_quality])
        if signal.motion_quality in _MOTION_EVENTS:
            event = _MOTION_EVENTS[signal.motion_quality]
            if event not in events:
                events.append(event)
        return [self.scheduler.try_emit(event) for event in events]

    def _dispatch(self, candidates: List[Optional[CoachMessage]]) -> List[CoachMessage]:
        emitted = [m for m in candidates if m is not None]
        emitted.sort(key=lambda m: _PRIORITY_ORDER[m.priority])
        if self.playback is not None:
            for message in emitted:
                try:
                    self.playback.enqueue(message.text)
                except Exception:
                    logger.exception("playback enqueue failed")
        return emitted


def _quality_from(corrections: List[JointCorrection]) -> FormQuality:
    if any(c.severity == Severity.ERROR for c in corrections):
        return FormQuality.BAD
    if corrections:
        return FormQuality.WARN
    return FormQuality.GOOD
