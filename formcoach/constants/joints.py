# 추적 관절 이름 (snake_case 통일)
LEFT_SHOULDER, RIGHT_SHOULDER = "left_shoulder", "right_shoulder"
LEFT_ELBOW,    RIGHT_ELBOW    = "left_elbow", "right_elbow"
LEFT_WRIST,    RIGHT_WRIST    = "left_wrist", "right_wrist"
LEFT_HIP,      RIGHT_HIP      = "left_hip", "right_hip"
LEFT_KNEE,     RIGHT_KNEE     = "left_knee", "right_knee"
LEFT_ANKLE,    RIGHT_ANKLE    = "left_ankle", "right_ankle"

# 목표 포즈의 기준점: 항상 입력 그대로 복사
ANCHOR_JOINTS = (LEFT_SHOULDER, RIGHT_SHOULDER, LEFT_HIP, RIGHT_HIP)

TRACKED_JOINTS = (
    LEFT_SHOULDER, RIGHT_SHOULDER,
    LEFT_ELBOW, RIGHT_ELBOW,
    LEFT_WRIST, RIGHT_WRIST,
    LEFT_HIP, RIGHT_HIP,
    LEFT_KNEE, RIGHT_KNEE,
    LEFT_ANKLE, RIGHT_ANKLE,
)

# segment 이름 → (근위 관절, 원위 관절)
SEGMENTS = {
    "left_upper_arm": (LEFT_SHOULDER, LEFT_ELBOW),
    "right_upper_arm": (RIGHT_SHOULDER, RIGHT_ELBOW),
    "left_forearm": (LEFT_ELBOW, LEFT_WRIST),
    "right_forearm": (RIGHT_ELBOW, RIGHT_WRIST),
    "left_thigh": (LEFT_HIP, LEFT_KNEE),
    "right_thigh": (RIGHT_HIP, RIGHT_KNEE),
    "left_shin": (LEFT_KNEE, LEFT_ANKLE),
    "right_shin": (RIGHT_KNEE, RIGHT_ANKLE),
}
