from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# helpers
from formcoach.config.env_utils import env_bool, env_float, env_int, env_list, env_str
from formcoach.constants import (
    DEFAULT_MIN_VISIBILITY,
    DEFAULT_WARN_THRESHOLD,
    DEFAULT_ERROR_THRESHOLD,
    DEFAULT_DIRECTION_HINT_THRESHOLD,
    DEFAULT_GOOD_FORM_DROP_RATE,
)


# ─────────────────────────────────────────────────────────
# Project root 탐색
#   - .git / pyproject.toml / requirements.txt 중 하나가 보이는 최상단을 루트로 간주
#   - 실패 시 BASE_DIR 환경변수, 그것도 없으면 현재 작업 디렉토리
# ─────────────────────────────────────────────────────────
def find_project_root() -> Path:
    cur = Path(__file__).resolve()
    for parent in cur.parents:
        if any(
            (parent / m).exists()
            for m in (".git", "pyproject.toml", "requirements.txt")
        ):
            return parent
    env_root = os.getenv("BASE_DIR")
    if env_root:
        return Path(env_root).resolve()
    # site-packages 설치 환경에서는 마커가 없으므로 cwd 사용
    return Path.cwd()


ROOT: Path = find_project_root()

# ─────────────────────────────────────────────────────────
# .env 로딩
#   - ENV_FILE 지정 시 우선
#   - 없으면 ROOT/.env.<ENV> → 없으면 ROOT/.env
# ─────────────────────────────────────────────────────────
_DEFAULT_ENV = os.getenv("ENV", "test")
_env_file_candidate = ROOT / f".env.{_DEFAULT_ENV}"
_ENV_FILE = (
    Path(os.getenv("ENV_FILE")).resolve()
    if os.getenv("ENV_FILE")
    else (_env_file_candidate if _env_file_candidate.exists() else (ROOT / ".env"))
)
load_dotenv(dotenv_path=_ENV_FILE, override=False)


def _default_player_command() -> list[str]:
    if sys.platform == "darwin":
        return ["afplay"]
    return ["aplay", "-q"]


class Settings:
    # ── App / Runtime ─────────────────────────────────────
    ENV: str = os.getenv("ENV", _DEFAULT_ENV)
    FASTAPI_PORT: int = env_int("FASTAPI_PORT", 8000)
    DEBUG_MODE: bool = env_bool("DEBUG_MODE", False)
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # ── Base Paths ────────────────────────────────────────
    ROOT: Path = ROOT

    # ── Pose / Correction ─────────────────────────────────
    MIN_VISIBILITY: float = env_float("MIN_VISIBILITY", DEFAULT_MIN_VISIBILITY)
    WARN_THRESHOLD: float = env_float("WARN_THRESHOLD", DEFAULT_WARN_THRESHOLD)
    ERROR_THRESHOLD: float = env_float("ERROR_THRESHOLD", DEFAULT_ERROR_THRESHOLD)
    DIRECTION_HINT_THRESHOLD: float = env_float(
        "DIRECTION_HINT_THRESHOLD", DEFAULT_DIRECTION_HINT_THRESHOLD
    )

    # ── Coaching ──────────────────────────────────────────
    TARGET_REPS: int = env_int("TARGET_REPS", 10)
    GOOD_FORM_DROP_RATE: float = env_float("GOOD_FORM_DROP_RATE", DEFAULT_GOOD_FORM_DROP_RATE)

    # ── Remote TTS ────────────────────────────────────────
    TTS_URL: Optional[str] = env_str("TTS_URL")
    TTS_API_KEY: Optional[str] = env_str("TTS_API_KEY")
    TTS_SPEAKER: str = os.getenv("TTS_SPEAKER", "nana")
    TTS_INSTRUCTION: Optional[str] = env_str("TTS_INSTRUCTION")
    TTS_TIMEOUT: float = env_float("TTS_TIMEOUT", 35.0)

    # ── Voice clone TTS (REFERENCE_AUDIO_URL 지정 시 우선 사용) ──
    VOICE_CLONE_URL: Optional[str] = env_str("VOICE_CLONE_URL")
    VOICE_CLONE_TIMEOUT: float = env_float("VOICE_CLONE_TIMEOUT", 60.0)
    REFERENCE_AUDIO_URL: Optional[str] = env_str("REFERENCE_AUDIO_URL")
    REFERENCE_TEXT: Optional[str] = env_str("REFERENCE_TEXT")
    VOICE_CLONE_NFE_STEPS: int = env_int("VOICE_CLONE_NFE_STEPS", 32)
    VOICE_SPEED: float = env_float("VOICE_SPEED", 1.0)

    # ── Playback ──────────────────────────────────────────
    PLAYBACK_QUEUE_CAPACITY: int = env_int("PLAYBACK_QUEUE_CAPACITY", 4)
    PLAYBACK_TIMEOUT: float = env_float("PLAYBACK_TIMEOUT", 10.0)
    PLAYBACK_DRAIN_DELAY: float = env_float("PLAYBACK_DRAIN_DELAY", 0.1)
    AUDIO_PLAYER_COMMAND = env_list("AUDIO_PLAYER_COMMAND", _default_player_command())

    # ── On-device fallback voice ──────────────────────────
    FALLBACK_LOCALE: str = os.getenv("FALLBACK_LOCALE", "en-US")
    FALLBACK_RATE: float = env_float("FALLBACK_RATE", 1.0)

    @property
    def use_voice_clone(self) -> bool:
        return bool(self.VOICE_CLONE_URL and self.REFERENCE_AUDIO_URL)


# 전역 싱글톤처럼 사용
settings = Settings()
