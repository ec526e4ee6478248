"""
POST /pose/analyze 요청/응답 DTO
"""
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field

from formcoach.schemas.correction_dto import JointCorrection
from formcoach.schemas.pose_dto import BoneLengthProfile, Landmark, TargetPose


class PoseAnalyzeRequest(BaseModel):
    exercise_type: str = Field(..., description="운동 종류 (예: arm_raise)")
    target_stage: str = Field(..., description="목표 단계 (예: up)")
    landmarks: Union[Dict[str, Landmark], List[Landmark]] = Field(
        ..., description="관절 이름 매핑 또는 MediaPipe 33개 랜드마크 리스트"
    )
    include_ok: bool = Field(False, description="true면 ok 판정 관절도 포함")


class PoseAnalyzeResponse(BaseModel):
    profile: BoneLengthProfile
    target_pose: Optional[TargetPose] = None
    corrections: List[JointCorrection] = Field(default_factory=list)


class ExerciseInfo(BaseModel):
    exercise_type: str
    stages: List[str]
