"""
코칭 메시지 / 프레임 신호 DTO
CoachingScheduler, CoachingSession 입출력용
"""
import time
import uuid
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from formcoach.schemas.correction_dto import JointCorrection
from formcoach.schemas.pose_dto import BoneLengthProfile, TargetPose


class CoachEventType(str, Enum):
    # form quality
    GOOD_FORM = "good_form"
    WARN_FORM = "warn_form"
    BAD_FORM = "bad_form"
    HOLD_FORM = "hold_form"
    # tempo / motion
    MOVEMENT_TOO_FAST = "movement_too_fast"
    MOVEMENT_TOO_SLOW = "movement_too_slow"
    MOVEMENT_SMOOTH = "movement_smooth"
    MOVEMENT_JERKY = "movement_jerky"
    NO_MOTION = "no_motion"
    # rep / session lifecycle
    REP_COMPLETED = "rep_completed"
    TARGET_REPS_REACHED = "target_reps_reached"
    HALFWAY = "halfway"
    ALMOST_DONE = "almost_done"
    EXERCISE_START = "exercise_start"
    EXERCISE_COMPLETE = "exercise_complete"
    SESSION_START = "session_start"
    SESSION_COMPLETE = "session_complete"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CoachMessage(BaseModel):
    """발화 1회분 메시지 (생성 후 불변)"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    type: CoachEventType
    timestamp: float = Field(default_factory=lambda: time.time() * 1000)
    priority: Priority = Priority.MEDIUM


class FormQuality(str, Enum):
    GOOD = "good"
    WARN = "warn"
    BAD = "bad"


class TempoQuality(str, Enum):
    PERFECT = "perfect"
    GOOD = "good"
    TOO_FAST = "too_fast"
    TOO_SLOW = "too_slow"
    INCONSISTENT = "inconsistent"


class MotionQuality(str, Enum):
    SMOOTH = "smooth"
    JERKY = "jerky"
    STILL = "still"


class FrameSignal(BaseModel):
    """외부 stage/rep 분류기가 프레임마다 넘겨주는 신호"""
    exercise_type: str
    current_stage: Optional[str] = None
    target_stage: str
    form_quality: Optional[FormQuality] = None
    tempo_quality: Optional[TempoQuality] = None
    motion_quality: Optional[MotionQuality] = None
    reps: int = Field(0, ge=0)
    rep_completed: bool = False
    holding: bool = False
    suggestion: Optional[str] = Field(None, description="분류기가 제안한 교정 문구 (있으면 자세 메시지로 사용)")


class FrameAnalysis(BaseModel):
    """프레임 1개의 분석 결과 (렌더링/UI 소비용)"""
    profile: BoneLengthProfile
    target_pose: Optional[TargetPose] = None
    corrections: List[JointCorrection] = Field(default_factory=list)
    messages: List[CoachMessage] = Field(default_factory=list)
