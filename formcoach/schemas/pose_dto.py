"""
포즈 / 목표 포즈 관련 DTO
BoneLengthProfiler, TargetPoseSynthesizer 입출력용
"""
from typing import Dict, Optional

from pydantic import BaseModel, Field


class Landmark(BaseModel):
    """단일 관절 위치 (정규화 카메라 좌표)"""
    x: float = Field(..., description="정규화된 X 좌표 (대체로 0~1, 화면 밖이면 범위 초과 가능)")
    y: float = Field(..., description="정규화된 Y 좌표 (아래로 갈수록 증가)")
    z: Optional[float] = Field(None, description="깊이 (상대적)")
    visibility: float = Field(1.0, ge=0.0, le=1.0, description="가시성 점수")


# 관절 이름 → Landmark (프레임 단위, 호출자 소유)
Skeleton = Dict[str, Landmark]


class Point2D(BaseModel):
    x: float
    y: float


class BoneLengthProfile(BaseModel):
    """프레임별 측정된 segment 길이 (정규화 단위)"""
    left_upper_arm: float
    right_upper_arm: float
    left_forearm: float
    right_forearm: float
    left_thigh: float
    right_thigh: float
    left_shin: float
    right_shin: float

    def length(self, segment: str) -> float:
        """segment 이름으로 길이 조회 (예: 'left_thigh')"""
        if segment not in type(self).model_fields:
            raise KeyError(f"unknown segment: {segment}")
        return getattr(self, segment)


class TargetPose(BaseModel):
    """운동/단계별 목표 자세 (anchor 관절은 입력 그대로)"""
    exercise_type: str
    target_stage: str
    joints: Dict[str, Point2D] = Field(default_factory=dict)
