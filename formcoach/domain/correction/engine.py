"""
자세 교정 Domain Logic
현재 Skeleton vs TargetPose → 관절별 교정 벡터 / 심각도
"""
from typing import List, Optional

import numpy as np

from formcoach.constants import (
    DEFAULT_WARN_THRESHOLD,
    DEFAULT_ERROR_THRESHOLD,
    DEFAULT_DIRECTION_HINT_THRESHOLD,
    DEFAULT_MIN_VISIBILITY,
)
from formcoach.domain.pose.converter import visible_xy
from formcoach.schemas.correction_dto import JointCorrection, Severity
from formcoach.schemas.pose_dto import Point2D, Skeleton, TargetPose


class CorrectionEngine:
    """관절별 교정 계산기"""

    def __init__(
        self,
        warn_threshold: float = DEFAULT_WARN_THRESHOLD,
        error_threshold: float = DEFAULT_ERROR_THRESHOLD,
        hint_threshold: float = DEFAULT_DIRECTION_HINT_THRESHOLD,
        min_visibility: float = DEFAULT_MIN_VISIBILITY,
    ):
        if not 0.0 <= warn_threshold < error_threshold:
            raise ValueError(
                f"warn_threshold({warn_threshold}) must be < error_threshold({error_threshold})"
            )
        self.warn_threshold = warn_threshold
        self.error_threshold = error_threshold
        self.hint_threshold = hint_threshold
        self.min_visibility = min_visibility

    def correct(self, skeleton: Skeleton, target_pose: TargetPose) -> List[JointCorrection]:
        """
        관절별 교정 정보 계산

        Args:
            skeleton: 현재 프레임 관절 위치
            target_pose: 목표 자세

        Returns:
            skeleton과 target_pose 양쪽에 있는 관절마다 1개씩 (ok 포함)
        """
        corrections = []
        for joint, target in target_pose.joints.items():
            current = visible_xy(skeleton, joint, self.min_visibility)
            if current is None:
                continue

            delta = np.array([target.x, target.y]) - current
            distance = float(np.linalg.norm(delta))
            corrections.append(
                JointCorrection(
                    joint=joint,
                    current_pos=Point2D(x=float(current[0]), y=float(current[1])),
                    target_pos=Point2D(x=target.x, y=target.y),
                    distance=distance,
                    direction=self.direction_hints(delta),
                    severity=self.severity(distance),
                )
            )
        return corrections

    def severity(self, distance: float) -> Severity:
        """거리 → 심각도 (warn 경계는 포함, error는 초과)"""
        if distance < self.warn_threshold:
            return Severity.OK
        if distance > self.error_threshold:
            return Severity.ERROR
        return Severity.WARN

    def direction_hints(self, delta: np.ndarray) -> List[str]:
        """
        (target - current) → 방향 힌트 (최대 2개, 이동량 큰 축 먼저)

        y축은 화면 아래가 + 이므로 dy < 0 이면 "up".
        """
        dx, dy = float(delta[0]), float(delta[1])
        hints = []
        if abs(dx) > self.hint_threshold:
            hints.append((abs(dx), "left" if dx < 0 else "right"))
        if abs(dy) > self.hint_threshold:
            hints.append((abs(dy), "up" if dy < 0 else "down"))
        hints.sort(key=lambda h: h[0], reverse=True)
        return [h[1] for h in hints]


def actionable(corrections: List[JointCorrection]) -> List[JointCorrection]:
    """ok 판정을 제외한 교정만 (렌더링/음성 피드백 대상)"""
    return [c for c in corrections if c.severity != Severity.OK]


def worst(corrections: List[JointCorrection]) -> Optional[JointCorrection]:
    """가장 많이 벗어난 교정 대상 관절 (없으면 None)"""
    candidates = actionable(corrections)
    if not candidates:
        return None
    return max(candidates, key=lambda c: c.distance)
