# re-exports: 다른 모듈에서 짧게 import 하도록

from .mediapipe_indices import (
    L_SHOULDER, R_SHOULDER, L_ELBOW, R_ELBOW, L_WRIST, R_WRIST,
    L_HIP, R_HIP, L_KNEE, R_KNEE, L_ANKLE, R_ANKLE,
    NUM_LANDMARKS, JOINT_INDEX,
)

from .joints import (
    LEFT_SHOULDER, RIGHT_SHOULDER, LEFT_ELBOW, RIGHT_ELBOW,
    LEFT_WRIST, RIGHT_WRIST, LEFT_HIP, RIGHT_HIP,
    LEFT_KNEE, RIGHT_KNEE, LEFT_ANKLE, RIGHT_ANKLE,
    ANCHOR_JOINTS, TRACKED_JOINTS, SEGMENTS,
)

from .coach_params import (
    DEFAULT_BONE_LENGTHS,
    DEFAULT_MIN_VISIBILITY,
    DEFAULT_WARN_THRESHOLD,
    DEFAULT_ERROR_THRESHOLD,
    DEFAULT_DIRECTION_HINT_THRESHOLD,
    DEGENERATE_EPS,
    EVENT_INTERVAL_MS,
    FORM_ISSUE_MIN_COUNT,
    HISTORY_SIZE,
    REPEAT_EXEMPT_EVENTS,
    DEFAULT_GOOD_FORM_DROP_RATE,
)
