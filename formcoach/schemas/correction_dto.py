"""
자세 교정 DTO
CorrectionEngine 출력용
"""
from enum import Enum
from typing import List

from pydantic import BaseModel, Field

from formcoach.schemas.pose_dto import Point2D


class Severity(str, Enum):
    OK = "ok"
    WARN = "warn"
    ERROR = "error"


class JointCorrection(BaseModel):
    """관절 1개의 현재 위치 → 목표 위치 교정 정보"""
    joint: str
    current_pos: Point2D
    target_pos: Point2D
    distance: float = Field(..., ge=0.0, description="정규화 좌표계 유클리드 거리")
    direction: List[str] = Field(
        default_factory=list,
        description="이동 방향 힌트 (left/right/up/down, 우세 축 먼저, 최대 2개)",
    )
    severity: Severity
