"""
운동별 목표 자세 offset 테이블

각 offset은 (관절, 부모 관절, 기준 segment, dx, dy)로,
목표 위치 = 부모 목표 위치 + (dx, dy) * segment 길이.
dx/dy는 왼쪽 기준 값이며 오른쪽은 x 부호를 뒤집어 만든다 (바깥쪽 = 왼쪽 +x).
"""
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class JointOffset:
    joint: str
    parent: str
    segment: str
    dx: float
    dy: float


StageOffsets = Tuple[JointOffset, ...]
ExerciseOffsets = Dict[str, StageOffsets]


def _side(
    side: str, joint: str, parent: str, segment: str, dx: float, dy: float
) -> JointOffset:
    sign = 1.0 if side == "left" else -1.0
    return JointOffset(
        joint=f"{side}_{joint}",
        parent=f"{side}_{parent}",
        segment=f"{side}_{segment}",
        dx=sign * dx,
        dy=dy,
    )


def mirrored(joint: str, parent: str, segment: str, dx: float, dy: float) -> StageOffsets:
    """좌/우 대칭 offset 한 쌍"""
    return (
        _side("left", joint, parent, segment, dx, dy),
        _side("right", joint, parent, segment, dx, dy),
    )


def one_side(
    side: str, joint: str, parent: str, segment: str, dx: float, dy: float
) -> StageOffsets:
    return (_side(side, joint, parent, segment, dx, dy),)


# ─────────────────────────────────────────────────────────
# 공용 팔/다리 자세 블록
# ─────────────────────────────────────────────────────────
ARMS_UP: StageOffsets = (
    *mirrored("elbow", "shoulder", "upper_arm", 0.3, -0.9),
    *mirrored("wrist", "elbow", "forearm", 0.2, -0.95),
)

ARMS_DOWN: StageOffsets = (
    *mirrored("elbow", "shoulder", "upper_arm", 0.15, 0.95),
    *mirrored("wrist", "elbow", "forearm", 0.1, 0.95),
)

LEGS_STRAIGHT: StageOffsets = (
    *mirrored("knee", "hip", "thigh", 0.0, 1.0),
    *mirrored("ankle", "knee", "shin", 0.0, 1.0),
)

LEGS_SQUAT: StageOffsets = (
    *mirrored("knee", "hip", "thigh", 0.35, 0.7),
    *mirrored("ankle", "knee", "shin", -0.1, 0.95),
)

# 왼쪽 무릎을 들어 올린 자세 (발목은 엉덩이 기준)
LEFT_KNEE_UP: StageOffsets = (
    *one_side("left", "knee", "hip", "thigh", 0.0, -0.3),
    *one_side("left", "ankle", "hip", "shin", -0.1, 0.2),
    *one_side("right", "knee", "hip", "thigh", 0.0, 1.0),
    *one_side("right", "ankle", "knee", "shin", 0.0, 1.0),
)

# 허리 높이를 넘기는 high knee (무릎이 엉덩이보다 위)
LEFT_HIGH_KNEE_UP: StageOffsets = (
    *one_side("left", "knee", "hip", "thigh", 0.1, -0.5),
    *one_side("left", "ankle", "knee", "shin", -0.05, 0.95),
    *one_side("right", "knee", "hip", "thigh", 0.0, 1.0),
    *one_side("right", "ankle", "knee", "shin", 0.0, 1.0),
)

# 비틀기: 어깨/엉덩이는 고정, 가슴 앞 팔을 회전 방향으로 이동
ARMS_FRONT: StageOffsets = (
    *mirrored("elbow", "shoulder", "upper_arm", 0.2, 0.9),
    *mirrored("wrist", "elbow", "forearm", -0.6, -0.5),
)


def _arms_twist(toward: str) -> StageOffsets:
    away = "right" if toward == "left" else "left"
    return (
        *one_side(toward, "elbow", "shoulder", "upper_arm", 0.7, 0.6),
        *one_side(toward, "wrist", "elbow", "forearm", 0.9, -0.1),
        *one_side(away, "elbow", "shoulder", "upper_arm", -0.4, 0.8),
        *one_side(away, "wrist", "elbow", "forearm", -0.95, 0.0),
    )


ARMS_TWIST_LEFT = _arms_twist("left")
ARMS_TWIST_RIGHT = _arms_twist("right")


# ─────────────────────────────────────────────────────────
# exercise_type → {target_stage → offsets}
# ─────────────────────────────────────────────────────────
EXERCISE_OFFSETS: Dict[str, ExerciseOffsets] = {
    "arm_raise": {
        "up": ARMS_UP,
        "down": ARMS_DOWN,
    },
    "torso_twist": {
        "center": ARMS_FRONT,
        "left": ARMS_TWIST_LEFT,
        "right": ARMS_TWIST_RIGHT,
    },
    "knee_raise": {
        "up": LEFT_KNEE_UP,
        "down": LEGS_STRAIGHT,
    },
    "squat_arm_raise": {
        "down": ARMS_UP + LEGS_SQUAT,
        "up": ARMS_DOWN + LEGS_STRAIGHT,
    },
    "squat_twist": {
        "down_center": ARMS_FRONT + LEGS_SQUAT,
        "down_left": ARMS_TWIST_LEFT + LEGS_SQUAT,
        "down_right": ARMS_TWIST_RIGHT + LEGS_SQUAT,
    },
    "high_knee_raise": {
        "up": LEFT_HIGH_KNEE_UP,
        "down": LEGS_STRAIGHT,
    },
}
