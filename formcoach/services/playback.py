"""
Playback Serializer
코칭 문구를 한 번에 하나씩 음성으로 재생하는 단일 출력 채널
"""
import asyncio
import base64
import binascii
import logging
from collections import deque
from typing import Deque, Optional

from formcoach.infrastructure.audio.player import SubprocessAudioPlayer
from formcoach.infrastructure.tts.local_speech import LocalSpeechSynthesizer
from formcoach.infrastructure.tts.speech_client import SpeechClient

logger = logging.getLogger(__name__)


class PlaybackSerializer:
    """
    음성 재생 큐 (FIFO, 동시 재생 1개)

    - enqueue: 중복 무시, 용량 초과 시 가장 오래된 항목 제거
    - process_queue: 소비 루프 1개만 활성 (is_speaking 플래그로 배타)
    - 원격 TTS / decode / 재생 실패 → on-device 음성으로 1회 대체 (원격 재시도 없음)
    - clear: 큐 비우기 + 진행 중 재생 취소 (여러 번 호출해도 안전)
    """

    def __init__(
        self,
        speech_client: Optional[SpeechClient] = None,
        player: Optional[SubprocessAudioPlayer] = None,
        fallback: Optional[LocalSpeechSynthesizer] = None,
        capacity: int = 4,
        playback_timeout: float = 10.0,
        drain_delay: float = 0.1,
    ):
        """
        Args:
            speech_client: 원격 TTS (None이면 항상 fallback 음성)
            player: base64 decode된 오디오 재생기
            fallback: on-device 음성
            capacity: 대기 큐 최대 길이
            playback_timeout: 재생 watchdog(초), 초과 시 해당 문구 skip
            drain_delay: 항목 사이 대기(초)
        """
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1 (got {capacity})")
        self.speech_client = speech_client
        self.player = player or SubprocessAudioPlayer()
        self.fallback = fallback
        self.capacity = capacity
        self.playback_timeout = playback_timeout
        self.drain_delay = drain_delay

        self.queue: Deque[str] = deque()
        self.is_speaking = False
        self.muted = False

        self._driver: Optional[asyncio.Task] = None
        self._playback: Optional[asyncio.Future] = None
        # clear() 마다 증가, 취소된 소비 루프가 새 루프 상태를 덮어쓰지 않도록
        self._generation = 0

    # ─────────────────────────────────────────────────────
    # public API
    # ─────────────────────────────────────────────────────
    def enqueue(self, text: str) -> None:
        if self.muted or not text or not text.strip():
            return
        if text in self.queue:
            return
        if len(self.queue) >= self.capacity:
            dropped = self.queue.popleft()
            logger.debug(f"queue full, dropped oldest: {dropped!r}")
        self.queue.append(text)
        self._schedule()

    async def process_queue(self) -> None:
        """대기 문구를 하나씩 재생 (이미 재생 중이거나 큐가 비었으면 즉시 반환)"""
        if self.is_speaking or not self.queue:
            return

        generation = self._generation
        self.is_speaking = True
        try:
            while self.queue and generation == self._generation:
                text = self.queue.popleft()
                await self._speak(text)
                if self.queue:
                    await asyncio.sleep(self.drain_delay)
        finally:
            if generation == self._generation:
                self.is_speaking = False

    def clear(self) -> None:
        self.queue.clear()
        self._generation += 1
        if self._playback is not None and not self._playback.done():
            self._playback.cancel()
        self._playback = None
        driver = self._driver
        self._driver = None
        if driver is not None and not driver.done() and driver is not _current_task():
            driver.cancel()
        if self.fallback is not None:
            self.fallback.stop()
        self.is_speaking = False

    def mute(self) -> None:
        self.muted = True
        self.clear()

    def unmute(self) -> None:
        self.muted = False

    async def join(self) -> None:
        """현재 소비 루프가 끝날 때까지 대기"""
        while self._driver is not None and not self._driver.done():
            await asyncio.wait({self._driver})

    async def aclose(self) -> None:
        self.clear()
        if self.speech_client is not None:
            await self.speech_client.aclose()

    # ─────────────────────────────────────────────────────
    # internals
    # ─────────────────────────────────────────────────────
    def _schedule(self) -> None:
        if self.is_speaking or (self._driver is not None and not self._driver.done()):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("no running event loop, playback deferred")
            return
        self._driver = loop.create_task(self.process_queue())

    async def _speak(self, text: str) -> None:
        generation = self._generation
        audio = await self._synthesize(text)
        if generation != self._generation:
            return
        if audio is not None:
            try:
                if not await self._play_with_watchdog(audio):
                    logger.info(f"🛑 playback cleared: {text!r}")
                return
            except asyncio.TimeoutError:
                logger.warning(f"⏱️ playback watchdog expired ({self.playback_timeout}s), skipped: {text!r}")
                return
            except Exception as e:
                logger.warning(f"⚠️ playback failed, using fallback voice: {e}")
        await self._speak_fallback(text)

    async def _synthesize(self, text: str) -> Optional[bytes]:
        if self.speech_client is None:
            return None
        try:
            response = await self.speech_client.synthesize(text)
            return base64.b64decode(response.audio_base64, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning(f"⚠️ TTS audio decode failed: {e}")
        except Exception as e:
            logger.warning(f"⚠️ remote TTS failed: {e}")
        return None

    async def _play_with_watchdog(self, audio: bytes) -> bool:
        """
        재생 1건 (watchdog 초과 시 TimeoutError)

        Returns:
            False: clear()로 재생만 취소된 경우 (호출한 task 자체는 취소되지 않음)
        """
        playback = asyncio.ensure_future(self.player.play(audio))
        self._playback = playback
        try:
            await asyncio.wait_for(playback, timeout=self.playback_timeout)
        except asyncio.CancelledError:
            task = asyncio.current_task()
            if playback.cancelled() and task is not None and task.cancelling() == 0:
                return False
            raise
        finally:
            if self._playback is playback:
                self._playback = None
        return True

    async def _speak_fallback(self, text: str) -> None:
        if self.fallback is None:
            logger.warning(f"🔇 no fallback voice, skipped: {text!r}")
            return
        try:
            await asyncio.wait_for(self.fallback.speak(text), timeout=self.playback_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"⏱️ fallback voice timed out, skipped: {text!r}")
            self.fallback.stop()
        except Exception as e:
            logger.warning(f"⚠️ fallback voice failed: {e}")


def _current_task() -> Optional[asyncio.Task]:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None
