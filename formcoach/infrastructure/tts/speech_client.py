import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from formcoach.schemas.speech_dto import SpeechRequest, SpeechResponse, VoiceCloneRequest

logger = logging.getLogger(__name__)


class SpeechSynthesisError(Exception):
    """원격 TTS 실패 (네트워크, 타임아웃, success=false, 응답 형식 오류)"""


class SpeechClient(ABC):
    """원격 TTS 엔드포인트 공용 POST 로직"""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 35.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            url: TTS 엔드포인트 전체 URL
            api_key: API 키 (optional)
            timeout: 요청 전체 타임아웃(초)
            transport: 테스트용 httpx transport 주입
        """
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @abstractmethod
    async def synthesize(self, text: str) -> SpeechResponse:
        """문구 1건 합성 (실패 시 SpeechSynthesisError)"""

    async def _post(self, payload: Dict[str, Any]) -> SpeechResponse:
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        try:
            response = await asyncio.wait_for(
                self._client.post(self.url, json=payload, headers=headers),
                timeout=self.timeout,
            )
            response.raise_for_status()
            result = SpeechResponse.model_validate(response.json())
        except asyncio.TimeoutError as e:
            raise SpeechSynthesisError(f"TTS timeout after {self.timeout}s") from e
        except httpx.HTTPError as e:
            raise SpeechSynthesisError(f"TTS request failed: {e}") from e
        except (ValueError, ValidationError) as e:
            raise SpeechSynthesisError(f"TTS response malformed: {e}") from e

        if not result.success or not result.audio_base64:
            raise SpeechSynthesisError(result.error or "TTS returned no audio")
        return result

    async def aclose(self) -> None:
        await self._client.aclose()


class RemoteSpeechClient(SpeechClient):
    """화자(speaker) 지정 TTS 클라이언트"""

    def __init__(
        self,
        url: str,
        speaker: str = "nana",
        instruction: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: float = 35.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(url, api_key=api_key, timeout=timeout, transport=transport)
        self.speaker = speaker
        self.instruction = instruction
        logger.info(f"🔈 TTS Client: {url} / speaker={speaker}")

    async def synthesize(self, text: str) -> SpeechResponse:
        """
        텍스트 → base64 음성

        Raises:
            SpeechSynthesisError: 실패 시 (재시도 없음, 상위에서 fallback)
        """
        request = SpeechRequest(text=text, speaker=self.speaker, instruction=self.instruction)
        return await self._post(request.model_dump(exclude_none=True))


class VoiceCloneClient(SpeechClient):
    """참조 음성 기반 voice clone TTS 클라이언트"""

    def __init__(
        self,
        url: str,
        reference_audio_url: str,
        reference_text: str = "",
        nfe_steps: int = 32,
        speed: float = 1.0,
        seed: Optional[int] = None,
        api_key: Optional[str] = None,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(url, api_key=api_key, timeout=timeout, transport=transport)
        self.reference_audio_url = reference_audio_url
        self.reference_text = reference_text
        # 원격 API 허용 범위로 보정
        self.nfe_steps = min(64, max(16, int(nfe_steps)))
        self.speed = min(2.0, max(0.5, float(speed)))
        self.seed = seed
        logger.info(f"🔈 Voice clone Client: {url} / nfe_steps={self.nfe_steps}")

    async def synthesize(self, text: str) -> SpeechResponse:
        request = VoiceCloneRequest(
            text=text,
            reference_audio_url=self.reference_audio_url,
            reference_text=self.reference_text,
            nfe_steps=self.nfe_steps,
            speed=self.speed,
            seed=self.seed,
        )
        return await self._post(request.model_dump(by_alias=True, exclude_none=True))
