from functools import lru_cache
from typing import List
import logging

from fastapi import APIRouter, Depends

from formcoach.domain.pose.converter import to_skeleton
from formcoach.schemas.analyze_dto import ExerciseInfo, PoseAnalyzeRequest, PoseAnalyzeResponse
from formcoach.services.pose_analysis_service import PoseAnalysisService
from formcoach.services.service_factory import create_pose_analysis_service

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Pose Guide"])


@lru_cache(maxsize=1)
def get_pose_service() -> PoseAnalysisService:
    return create_pose_analysis_service()


# ========== API Endpoint ==========
@router.get("/exercises", response_model=List[ExerciseInfo])
def list_exercises(service: PoseAnalysisService = Depends(get_pose_service)):
    synthesizer = service.synthesizer
    return [
        ExerciseInfo(exercise_type=name, stages=synthesizer.stages(name))
        for name in synthesizer.exercise_types()
    ]


@router.post("/pose/analyze", response_model=PoseAnalyzeResponse)
def analyze_pose(
        req: PoseAnalyzeRequest,
        service: PoseAnalysisService = Depends(get_pose_service),
) -> PoseAnalyzeResponse:
    """
    프레임 1개 자세 분석 (overlay 렌더링용)

    미지원 운동/단계 또는 어깨·엉덩이 누락 시 target_pose=null, corrections=[]
    """
    skeleton = to_skeleton(req.landmarks)
    profile, target_pose, corrections = service.analyze(
        skeleton, req.exercise_type, req.target_stage, include_ok=req.include_ok
    )
    if target_pose is None:
        logger.info(f"🚫 target pose 없음: {req.exercise_type}/{req.target_stage}")
    return PoseAnalyzeResponse(
        profile=profile,
        target_pose=target_pose,
        corrections=corrections,
    )
