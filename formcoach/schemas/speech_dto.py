"""
원격 TTS 요청/응답 DTO
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SpeechRequest(BaseModel):
    text: str
    speaker: str = "nana"
    instruction: Optional[str] = None


class VoiceCloneRequest(BaseModel):
    """참조 음성 기반 voice clone 요청 (필드명은 원격 API 규약 그대로)"""
    model_config = ConfigDict(populate_by_name=True)

    text: str
    reference_audio_url: str = Field(..., alias="referenceAudioUrl")
    reference_text: str = Field("", alias="referenceText")
    nfe_steps: int = Field(32, ge=16, le=64, alias="nfeSteps")
    speed: float = Field(1.0, ge=0.5, le=2.0)
    seed: Optional[int] = None


class SpeechResponse(BaseModel):
    success: bool = False
    audio_base64: Optional[str] = None
    error: Optional[str] = None
