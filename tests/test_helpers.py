"""
Test Helper Utilities

재사용 가능한 테스트 헬퍼 함수들을 모아놓은 모듈입니다.
"""
import random
from typing import Dict, Iterable, List, Optional, Tuple

from formcoach.constants import JOINT_INDEX, NUM_LANDMARKS
from formcoach.schemas.pose_dto import Landmark, Skeleton


# ========================================
# Pose Data Generators
# ========================================

# 카메라 정면, 팔을 내린 채 서 있는 자세 (사용자 왼쪽 = 화면 +x)
STANDING_POSE: Dict[str, Tuple[float, float]] = {
    "left_shoulder": (0.60, 0.30),
    "right_shoulder": (0.40, 0.30),
    "left_elbow": (0.62, 0.42),
    "right_elbow": (0.38, 0.42),
    "left_wrist": (0.63, 0.55),
    "right_wrist": (0.37, 0.55),
    "left_hip": (0.56, 0.55),
    "right_hip": (0.44, 0.55),
    "left_knee": (0.56, 0.75),
    "right_knee": (0.44, 0.75),
    "left_ankle": (0.56, 0.95),
    "right_ankle": (0.44, 0.95),
}

ANCHORS_ONLY = ("left_shoulder", "right_shoulder", "left_hip", "right_hip")


def make_skeleton(
    scale: float = 1.0,
    offset: Tuple[float, float] = (0.0, 0.0),
    omit: Iterable[str] = (),
    only: Optional[Iterable[str]] = None,
    visibility: float = 1.0,
    overrides: Optional[Dict[str, Tuple[float, float]]] = None,
) -> Skeleton:
    """
    서 있는 자세 Skeleton 생성

    Args:
        scale: (0.5, 0.5) 기준 균일 스케일 (카메라 거리 시뮬레이션)
        offset: 평행 이동
        omit: 제외할 관절
        only: 지정 시 이 관절만 포함
        visibility: 모든 관절 가시성
        overrides: 특정 관절 좌표 덮어쓰기 (스케일 적용 전)

    Returns:
        Skeleton (관절 이름 → Landmark)
    """
    pose = {**STANDING_POSE, **(overrides or {})}
    names = set(only) if only is not None else set(pose)
    names -= set(omit)

    skeleton = {}
    for name in names:
        x, y = pose[name]
        skeleton[name] = Landmark(
            x=0.5 + scale * (x - 0.5) + offset[0],
            y=0.5 + scale * (y - 0.5) + offset[1],
            z=0.0,
            visibility=visibility,
        )
    return skeleton


def to_mediapipe_frame(skeleton: Skeleton) -> List[Dict[str, float]]:
    """Skeleton → MediaPipe 33개 랜드마크 리스트 (나머지는 원점, 가시성 0)"""
    frame = [
        {"x": 0.0, "y": 0.0, "z": 0.0, "visibility": 0.0}
        for _ in range(NUM_LANDMARKS)
    ]
    for name, lm in skeleton.items():
        frame[JOINT_INDEX[name]] = lm.model_dump()
    return frame


def skeleton_payload(skeleton: Skeleton) -> Dict[str, Dict[str, float]]:
    """API 요청 body용 dict"""
    return {name: lm.model_dump() for name, lm in skeleton.items()}


def distance(a, b) -> float:
    return ((a.x - b.x) ** 2 + (a.y - b.y) ** 2) ** 0.5


# ========================================
# Scheduler Test Doubles
# ========================================

class FakeClock:
    """수동으로 진행시키는 ms 시계"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FixedRandom(random.Random):
    """random()이 항상 같은 값을 반환 (good_form 샘플링 제어용)"""

    def __init__(self, value: float):
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value
