"""
Bone-Length Profiler
현재 프레임 Skeleton → segment 길이 프로파일
"""
import numpy as np

from formcoach.constants import (
    SEGMENTS,
    DEFAULT_BONE_LENGTHS,
    DEFAULT_MIN_VISIBILITY,
    DEGENERATE_EPS,
)
from formcoach.domain.pose.converter import visible_xy
from formcoach.schemas.pose_dto import BoneLengthProfile, Skeleton


def _default_length(segment: str) -> float:
    # "left_upper_arm" → "upper_arm"
    _, kind = segment.split("_", 1)
    return DEFAULT_BONE_LENGTHS[kind]


class BoneLengthProfiler:
    """
    사용자 체형 측정기

    매 프레임 다시 계산한다 (카메라 거리 변화에 따라 길이가 바뀌므로 캐시하지 않음).
    측정할 수 없는 segment는 평균 체형 기본값으로 채운다.
    """

    def __init__(self, min_visibility: float = DEFAULT_MIN_VISIBILITY):
        self.min_visibility = min_visibility

    def profile(self, skeleton: Skeleton) -> BoneLengthProfile:
        """
        segment별 길이 측정

        Args:
            skeleton: 현재 프레임 관절 위치 (일부 누락 가능)

        Returns:
            BoneLengthProfile (누락/퇴화 segment는 기본값)
        """
        lengths = {
            segment: self._measure(skeleton, segment, proximal, distal)
            for segment, (proximal, distal) in SEGMENTS.items()
        }
        return BoneLengthProfile(**lengths)

    def _measure(
        self, skeleton: Skeleton, segment: str, proximal: str, distal: str
    ) -> float:
        p1 = visible_xy(skeleton, proximal, self.min_visibility)
        p2 = visible_xy(skeleton, distal, self.min_visibility)
        if p1 is None or p2 is None:
            return _default_length(segment)

        length = float(np.linalg.norm(p2 - p1))
        if length < DEGENERATE_EPS:
            return _default_length(segment)
        return length


def default_profile() -> BoneLengthProfile:
    """모든 segment가 기본값인 프로파일"""
    return BoneLengthProfile(
        **{segment: _default_length(segment) for segment in SEGMENTS}
    )
