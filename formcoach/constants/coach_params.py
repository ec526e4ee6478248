# Fallback defaults (settings에서 ENV 미지정 시 사용)
DEFAULT_MIN_VISIBILITY = 0.5
DEFAULT_WARN_THRESHOLD = 0.05
DEFAULT_ERROR_THRESHOLD = 0.08
DEFAULT_DIRECTION_HINT_THRESHOLD = 0.03
DEFAULT_GOOD_FORM_DROP_RATE = 0.9

# 측정 불가 시 사용하는 평균 체형 (정규화 좌표 기준)
DEFAULT_BONE_LENGTHS = {
    "upper_arm": 0.12,
    "forearm": 0.13,
    "thigh": 0.20,
    "shin": 0.20,
}

# 이 값보다 짧은 segment는 측정 실패로 간주
DEGENERATE_EPS = 1e-6

# 이벤트 타입별 최소 발화 간격 (ms)
EVENT_INTERVAL_MS = {
    "hold_form": 700,
    "rep_completed": 800,
    "warn_form": 2000,
    "bad_form": 2500,
    "movement_too_fast": 2500,
    "movement_too_slow": 2500,
    "movement_jerky": 2500,
    "no_motion": 2500,
    "good_form": 8000,
    "movement_smooth": 15000,
    "target_reps_reached": 2000,
    "halfway": 2000,
    "almost_done": 2000,
    "exercise_start": 2000,
    "exercise_complete": 2000,
    "session_start": 2000,
    "session_complete": 2000,
}

# 연속 자세 문제 누적 기준 (이 값을 초과해야 발화)
FORM_ISSUE_MIN_COUNT = {
    "warn_form": 2,
    "bad_form": 1,
}

# 최근 발화 문장 기록 크기 (반복 방지)
HISTORY_SIZE = 5

# 반복 방지 예외 (짧은 카운트/유지 신호)
REPEAT_EXEMPT_EVENTS = ("hold_form", "rep_completed")
