"""
코칭 문구 카탈로그
이벤트 타입별 기본 문구 풀 + 숫자/관절이 들어가는 포맷 함수
"""
import random
from typing import Dict, List, Optional

from formcoach.schemas.coach_dto import CoachEventType
from formcoach.schemas.correction_dto import JointCorrection

EXERCISE_NAMES = {
    "arm_raise": "arm raises",
    "torso_twist": "torso twists",
    "knee_raise": "knee raises",
    "squat_arm_raise": "squats with arm raise",
    "squat_twist": "squats with twist",
    "high_knee_raise": "high knee raises",
}

MESSAGE_POOLS: Dict[CoachEventType, List[str]] = {
    CoachEventType.GOOD_FORM: [
        "Great form, keep it up!",
        "Nice and controlled.",
        "Perfect posture!",
        "You're doing great.",
    ],
    CoachEventType.WARN_FORM: [
        "Almost there, adjust your posture a little.",
        "Watch your form.",
        "Keep your body aligned.",
    ],
    CoachEventType.BAD_FORM: [
        "Check your posture, follow the guide.",
        "Slow down and fix your form.",
        "Match the target pose on screen.",
    ],
    CoachEventType.HOLD_FORM: [
        "Hold it there.",
    ],
    CoachEventType.MOVEMENT_TOO_FAST: [
        "Slow down a bit.",
        "Too fast, control the movement.",
    ],
    CoachEventType.MOVEMENT_TOO_SLOW: [
        "Pick up the pace a little.",
        "A bit faster now.",
    ],
    CoachEventType.MOVEMENT_SMOOTH: [
        "Smooth movement, well done.",
        "Nice steady rhythm.",
    ],
    CoachEventType.MOVEMENT_JERKY: [
        "Move more smoothly.",
        "Try not to jerk, keep it steady.",
    ],
    CoachEventType.NO_MOTION: [
        "Let's keep moving.",
        "Ready when you are, start moving.",
    ],
    CoachEventType.HALFWAY: [
        "Halfway there!",
    ],
    CoachEventType.ALMOST_DONE: [
        "Almost done, just a few more!",
    ],
    CoachEventType.SESSION_START: [
        "Welcome! Let's get started.",
    ],
    CoachEventType.SESSION_COMPLETE: [
        "Session complete. Great work today!",
    ],
}


def rep_count(n: int) -> str:
    return str(n)


def target_reached(n: int) -> str:
    return f"{n} reps, target reached!"


def exercise_start(exercise_type: str) -> str:
    name = EXERCISE_NAMES.get(exercise_type, exercise_type.replace("_", " "))
    return f"Let's start {name}."


def exercise_complete(n: int) -> str:
    return f"Exercise complete, {n} reps done!"


_JOINT_LABELS = {
    "shoulder": "shoulder",
    "elbow": "elbow",
    "wrist": "hand",
    "hip": "hip",
    "knee": "knee",
    "ankle": "foot",
}

_HINT_VERBS = {
    "up": "Raise your {joint}",
    "down": "Lower your {joint}",
    "left": "Move your {joint} to the left",
    "right": "Move your {joint} to the right",
}


def joint_label(joint: str) -> str:
    """'left_wrist' → 'left hand'"""
    side, _, part = joint.partition("_")
    return f"{side} {_JOINT_LABELS.get(part, part)}"


def correction_hint_text(correction: JointCorrection) -> Optional[str]:
    """가장 큰 이동 방향 기준 교정 문구 (방향 힌트 없으면 None)"""
    if not correction.direction:
        return None
    template = _HINT_VERBS[correction.direction[0]]
    return template.format(joint=joint_label(correction.joint)) + "."


def pick(event_type: CoachEventType, rng: Optional[random.Random] = None) -> Optional[str]:
    """이벤트 타입 기본 문구 중 하나 (풀이 없으면 None)"""
    pool = MESSAGE_POOLS.get(event_type)
    if not pool:
        return None
    return (rng or random).choice(pool)
