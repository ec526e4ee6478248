import random
from typing import Optional

from formcoach.config.settings import settings
from formcoach.domain.coaching.scheduler import CoachingScheduler
from formcoach.domain.correction.engine import CorrectionEngine
from formcoach.domain.pose.profiler import BoneLengthProfiler
from formcoach.domain.target.synthesizer import TargetPoseSynthesizer
from formcoach.infrastructure.audio.player import SubprocessAudioPlayer
from formcoach.infrastructure.tts.local_speech import LocalSpeechSynthesizer
from formcoach.infrastructure.tts.speech_client import (
    RemoteSpeechClient,
    SpeechClient,
    VoiceCloneClient,
)
from formcoach.services.coaching_session import CoachingSession
from formcoach.services.playback import PlaybackSerializer
from formcoach.services.pose_analysis_service import PoseAnalysisService


def create_pose_analysis_service(
        min_visibility: Optional[float] = None,
) -> PoseAnalysisService:
    """
    PoseAnalysisService 인스턴스 생성

    Args:
        min_visibility: 관절 가시성 임계값 (None이면 settings)

    Returns:
        PoseAnalysisService 인스턴스
    """
    visibility = settings.MIN_VISIBILITY if min_visibility is None else min_visibility
    return PoseAnalysisService(
        profiler=BoneLengthProfiler(min_visibility=visibility),
        synthesizer=TargetPoseSynthesizer(min_visibility=visibility),
        correction_engine=CorrectionEngine(
            warn_threshold=settings.WARN_THRESHOLD,
            error_threshold=settings.ERROR_THRESHOLD,
            hint_threshold=settings.DIRECTION_HINT_THRESHOLD,
            min_visibility=visibility,
        ),
    )


def create_speech_client() -> Optional[SpeechClient]:
    """voice clone 설정이 있으면 우선, 없으면 일반 TTS, 둘 다 없으면 None (on-device만 사용)"""
    if settings.use_voice_clone:
        return VoiceCloneClient(
            url=settings.VOICE_CLONE_URL,
            reference_audio_url=settings.REFERENCE_AUDIO_URL,
            reference_text=settings.REFERENCE_TEXT or "",
            nfe_steps=settings.VOICE_CLONE_NFE_STEPS,
            speed=settings.VOICE_SPEED,
            api_key=settings.TTS_API_KEY,
            timeout=settings.VOICE_CLONE_TIMEOUT,
        )
    if settings.TTS_URL:
        return RemoteSpeechClient(
            url=settings.TTS_URL,
            speaker=settings.TTS_SPEAKER,
            instruction=settings.TTS_INSTRUCTION,
            api_key=settings.TTS_API_KEY,
            timeout=settings.TTS_TIMEOUT,
        )
    return None


def create_playback_serializer() -> PlaybackSerializer:
    return PlaybackSerializer(
        speech_client=create_speech_client(),
        player=SubprocessAudioPlayer(command=settings.AUDIO_PLAYER_COMMAND),
        fallback=LocalSpeechSynthesizer(
            locale=settings.FALLBACK_LOCALE,
            rate=settings.FALLBACK_RATE,
        ),
        capacity=settings.PLAYBACK_QUEUE_CAPACITY,
        playback_timeout=settings.PLAYBACK_TIMEOUT,
        drain_delay=settings.PLAYBACK_DRAIN_DELAY,
    )


def create_coaching_session(
        target_reps: Optional[int] = None,
        with_audio: bool = True,
        rng: Optional[random.Random] = None,
) -> CoachingSession:
    """
    CoachingSession 인스턴스 생성

    Args:
        target_reps: 목표 반복 수 (None이면 settings)
        with_audio: False면 재생 큐 없이 메시지만 반환
        rng: 스케줄러 난수원 (테스트 재현용)

    Returns:
        CoachingSession 인스턴스
    """
    scheduler = CoachingScheduler.create(
        rng=rng,
        good_form_drop_rate=settings.GOOD_FORM_DROP_RATE,
    )
    return CoachingSession(
        pose_service=create_pose_analysis_service(),
        scheduler=scheduler,
        playback=create_playback_serializer() if with_audio else None,
        target_reps=settings.TARGET_REPS if target_reps is None else target_reps,
    )
