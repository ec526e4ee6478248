"""
On-device fallback 음성 (pyttsx3)
원격 TTS가 실패하거나 설정되지 않았을 때 같은 문구를 로컬 엔진으로 읽는다.
pyttsx3는 첫 발화 시점에 한 번만 import 시도하고, 설치되지 않은 환경에서는 speak()가 RuntimeError를 낸다.
"""

from __future__ import annotations
import asyncio, importlib, threading, logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)
_lock = threading.Lock()

_cache: Dict[str, Any] = {
    "module": None,  # pyttsx3 모듈
    "available": None,  # import 가능 여부
}

# pyttsx3 기본 속도(wpm) = rate 1.0
BASE_RATE_WPM = 160


def _import_pyttsx3() -> Optional[Any]:
    if _cache["available"] is True:
        return _cache["module"]
    if _cache["available"] is False:
        return None
    with _lock:
        if _cache["available"] is not None:
            return _cache["module"]
        try:
            mod = importlib.import_module("pyttsx3")
            _cache["module"] = mod
            _cache["available"] = True
            logger.info("[TTS] pyttsx3 loaded (lazy)")
            return mod
        except Exception as e:
            _cache["available"] = False
            logger.warning(f"[TTS] pyttsx3 import failed: {e}")
            return None


class LocalSpeechSynthesizer:
    """
    on-device 음성 합성 (텍스트 + locale + rate)

    엔진은 발화마다 worker thread 안에서 생성한다 (pyttsx3 엔진은 스레드 간 공유 불가).
    """

    def __init__(self, locale: str = "en-US", rate: float = 1.0):
        self.locale = locale
        self.rate = rate
        self._engine: Optional[Any] = None
        self._engine_lock = threading.Lock()

    async def speak(self, text: str) -> None:
        """
        발화가 끝날 때까지 대기

        Raises:
            RuntimeError: pyttsx3 사용 불가 시
        """
        await asyncio.to_thread(self._speak_blocking, text)

    def stop(self) -> None:
        """진행 중인 발화 중단 (없으면 no-op)"""
        with self._engine_lock:
            engine = self._engine
        if engine is not None:
            try:
                engine.stop()
            except Exception as e:
                logger.warning(f"⚠️ fallback voice stop failed: {e}")

    def _speak_blocking(self, text: str) -> None:
        pyttsx3 = _import_pyttsx3()
        if pyttsx3 is None:
            raise RuntimeError("pyttsx3 unavailable")

        engine = pyttsx3.init()
        engine.setProperty("rate", int(BASE_RATE_WPM * self.rate))
        voice_id = self._select_voice(engine)
        if voice_id:
            engine.setProperty("voice", voice_id)

        with self._engine_lock:
            self._engine = engine
        try:
            engine.say(text)
            engine.runAndWait()
        finally:
            with self._engine_lock:
                self._engine = None

    def _select_voice(self, engine: Any) -> Optional[str]:
        """locale(예: en-US)과 언어가 맞는 첫 번째 음성"""
        lang = self.locale.split("-")[0].lower()
        for voice in engine.getProperty("voices") or []:
            tags = [str(v).lower() for v in (getattr(voice, "languages", None) or [])]
            tags.append(str(getattr(voice, "id", "")).lower())
            if any(lang in tag for tag in tags):
                return voice.id
        return None
