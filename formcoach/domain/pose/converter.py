"""
랜드마크 입력 정규화
MediaPipe 33개 리스트 / 관절 이름 dict → Skeleton
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np

from formcoach.constants import JOINT_INDEX, NUM_LANDMARKS, TRACKED_JOINTS, DEFAULT_MIN_VISIBILITY
from formcoach.schemas.pose_dto import Landmark, Skeleton

logger = logging.getLogger(__name__)

LandmarkInput = Union[Landmark, Mapping[str, Any]]


def _as_landmark(value: LandmarkInput) -> Landmark:
    if isinstance(value, Landmark):
        return value
    return Landmark(**value)


def to_skeleton(
    landmarks: Union[Mapping[str, LandmarkInput], Sequence[LandmarkInput], None]
) -> Skeleton:
    """
    외부 포즈 소스 출력을 Skeleton(dict)으로 변환

    Args:
        landmarks: 관절 이름 → 랜드마크 매핑, 또는 MediaPipe 33개 랜드마크 리스트

    Returns:
        추적 관절만 담은 Skeleton (없는 관절은 생략)
    """
    if not landmarks:
        return {}

    if isinstance(landmarks, Mapping):
        return {
            name: _as_landmark(lm)
            for name, lm in landmarks.items()
            if name in TRACKED_JOINTS and lm is not None
        }

    if len(landmarks) != NUM_LANDMARKS:
        logger.warning(
            f"⚠️ 랜드마크 개수 불일치: expected={NUM_LANDMARKS}, got={len(landmarks)}"
        )

    skeleton: Skeleton = {}
    for name, idx in JOINT_INDEX.items():
        if idx < len(landmarks) and landmarks[idx] is not None:
            skeleton[name] = _as_landmark(landmarks[idx])
    return skeleton


def visible_xy(
    skeleton: Skeleton,
    joint: str,
    min_visibility: float = DEFAULT_MIN_VISIBILITY,
) -> Optional[np.ndarray]:
    """가시성 기준을 통과한 관절의 (x, y) 좌표, 아니면 None"""
    lm = skeleton.get(joint)
    if lm is None or lm.visibility < min_visibility:
        return None
    return np.array([lm.x, lm.y], dtype=float)
