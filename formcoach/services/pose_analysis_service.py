"""
자세 분석 Service Layer
Profiler → TargetPoseSynthesizer → CorrectionEngine 조합 (프레임 단위, 상태 없음)
"""
from typing import List, Optional, Tuple

from formcoach.domain.correction.engine import CorrectionEngine, actionable
from formcoach.domain.pose.profiler import BoneLengthProfiler
from formcoach.domain.target.synthesizer import TargetPoseSynthesizer
from formcoach.schemas.correction_dto import JointCorrection
from formcoach.schemas.pose_dto import BoneLengthProfile, Skeleton, TargetPose


class PoseAnalysisService:
    """
    프레임 1개의 기하 분석

    책임:
    - 체형 측정 → 목표 자세 → 관절별 교정
    - 음성/스케줄링과 무관 (TTS 장애가 overlay 계산에 영향 없음)
    """

    def __init__(
        self,
        profiler: BoneLengthProfiler,
        synthesizer: TargetPoseSynthesizer,
        correction_engine: CorrectionEngine,
    ):
        self.profiler = profiler
        self.synthesizer = synthesizer
        self.correction_engine = correction_engine

    def analyze(
        self,
        skeleton: Skeleton,
        exercise_type: str,
        target_stage: str,
        include_ok: bool = False,
    ) -> Tuple[BoneLengthProfile, Optional[TargetPose], List[JointCorrection]]:
        """
        Args:
            skeleton: 현재 프레임 관절 위치
            exercise_type: 운동 종류
            target_stage: 목표 단계
            include_ok: True면 ok 판정 관절도 반환

        Returns:
            (profile, target_pose | None, corrections)
        """
        profile = self.profiler.profile(skeleton)
        target_pose = self.synthesizer.synthesize(skeleton, exercise_type, target_stage, profile)
        if target_pose is None:
            return profile, None, []

        corrections = self.correction_engine.correct(skeleton, target_pose)
        if not include_ok:
            corrections = actionable(corrections)
        return profile, target_pose, corrections
