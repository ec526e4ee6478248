import os
from typing import Optional

"""환경 변수에서 bool 타입을 안전하게 읽는다."""


def env_bool(name: str, default: bool = False) -> bool:
    v = os.getenv(name)
    if v is None:
        return default
    return str(v).strip().lower() in ("1", "true", "yes", "y", "on")


"""환경 변수에서 float 값을 읽는다. 비었거나 파싱 실패 시 default."""


def env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is None or not str(v).strip():
        return default
    try:
        return float(v)
    except ValueError:
        return default


"""환경 변수에서 int 값을 읽는다. 비었거나 파싱 실패 시 default."""


def env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is None or not str(v).strip():
        return default
    try:
        return int(v)
    except ValueError:
        return default


"""빈 문자열은 None으로 취급하는 문자열 조회."""


def env_str(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    if v is None or not v.strip():
        return default
    return v.strip()


"""환경 변수에서 공백/콤마 구분 리스트를 안전하게 읽는다. (명령행 인자용)"""


def env_list(name: str, default_list):
    v = os.getenv(name)
    if not v:
        return list(default_list)
    parts = [p.strip() for p in v.replace(",", " ").split() if p.strip()]
    return parts or list(default_list)
