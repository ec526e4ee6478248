"""
Target Pose Synthesizer
현재 anchor(어깨/엉덩이) 위치 + 체형 프로파일 → 목표 자세
"""
import logging
from typing import Dict, List, Mapping, Optional

import numpy as np

from formcoach.constants import ANCHOR_JOINTS, SEGMENTS, DEFAULT_MIN_VISIBILITY
from formcoach.domain.pose.converter import visible_xy
from formcoach.domain.pose.profiler import BoneLengthProfiler
from formcoach.domain.target.offsets import EXERCISE_OFFSETS, ExerciseOffsets
from formcoach.schemas.pose_dto import BoneLengthProfile, Point2D, Skeleton, TargetPose

logger = logging.getLogger(__name__)


class TargetPoseSynthesizer:
    """
    운동/단계별 목표 자세 생성기

    offset이 사용자 본인의 segment 길이 비율로 정의되므로
    카메라 거리나 체형이 달라도 목표 자세가 같은 비율로 스케일/이동된다.
    """

    def __init__(
        self,
        registry: Optional[Mapping[str, ExerciseOffsets]] = None,
        min_visibility: float = DEFAULT_MIN_VISIBILITY,
    ):
        self.min_visibility = min_visibility
        self.profiler = BoneLengthProfiler(min_visibility=min_visibility)
        self._registry: Dict[str, ExerciseOffsets] = {}
        source = EXERCISE_OFFSETS if registry is None else registry
        for exercise_type, stages in source.items():
            self.register(exercise_type, stages)

    # ─────────────────────────────────────────────────────
    # registry
    # ─────────────────────────────────────────────────────
    def register(self, exercise_type: str, stages: ExerciseOffsets) -> None:
        """
        운동 offset 테이블 등록 (기존 항목은 교체)

        Raises:
            ValueError: anchor 관절을 움직이려 하거나, 아직 배치되지 않은 부모를 참조할 때
        """
        for stage, offsets in stages.items():
            placed = set(ANCHOR_JOINTS)
            for off in offsets:
                if off.joint in ANCHOR_JOINTS:
                    raise ValueError(
                        f"{exercise_type}/{stage}: anchor joint '{off.joint}' cannot be offset"
                    )
                if off.parent not in placed:
                    raise ValueError(
                        f"{exercise_type}/{stage}: parent '{off.parent}' of '{off.joint}' is not placed yet"
                    )
                if off.segment not in SEGMENTS:
                    raise ValueError(f"{exercise_type}/{stage}: unknown segment '{off.segment}'")
                placed.add(off.joint)
        self._registry[exercise_type] = dict(stages)

    def exercise_types(self) -> List[str]:
        return list(self._registry)

    def stages(self, exercise_type: str) -> List[str]:
        return list(self._registry.get(exercise_type, {}))

    # ─────────────────────────────────────────────────────
    # synthesize
    # ─────────────────────────────────────────────────────
    def synthesize(
        self,
        skeleton: Skeleton,
        exercise_type: str,
        target_stage: str,
        profile: Optional[BoneLengthProfile] = None,
    ) -> Optional[TargetPose]:
        """
        목표 자세 생성

        Args:
            skeleton: 현재 프레임 관절 위치
            exercise_type: 운동 종류
            target_stage: 목표 단계 (up/down/center/left/right ...)
            profile: 체형 프로파일 (없으면 skeleton에서 측정)

        Returns:
            TargetPose, anchor 누락/미지원 운동·단계면 None (이번 프레임 overlay 없음)
        """
        stages = self._registry.get(exercise_type)
        if stages is None:
            logger.debug(f"unknown exercise_type: {exercise_type}")
            return None
        offsets = stages.get(target_stage)
        if offsets is None:
            logger.debug(f"unknown target_stage: {exercise_type}/{target_stage}")
            return None

        anchors = {
            joint: visible_xy(skeleton, joint, self.min_visibility)
            for joint in ANCHOR_JOINTS
        }
        if any(p is None for p in anchors.values()):
            return None

        if profile is None:
            profile = self.profiler.profile(skeleton)

        positions: Dict[str, np.ndarray] = dict(anchors)
        for off in offsets:
            length = profile.length(off.segment)
            positions[off.joint] = positions[off.parent] + np.array([off.dx, off.dy]) * length

        # anchor는 원본 Landmark 값 그대로 복사 (부동소수 오차 없이)
        joints = {
            joint: Point2D(x=float(p[0]), y=float(p[1]))
            for joint, p in positions.items()
            if joint not in ANCHOR_JOINTS
        }
        for joint in ANCHOR_JOINTS:
            lm = skeleton[joint]
            joints[joint] = Point2D(x=lm.x, y=lm.y)

        return TargetPose(
            exercise_type=exercise_type,
            target_stage=target_stage,
            joints=joints,
        )
