"""
Pytest Configuration & Shared Fixtures

이 파일은 모든 테스트에서 재사용 가능한 fixture를 정의합니다.
"""
import pytest
from fastapi.testclient import TestClient

from formcoach.domain.coaching.scheduler import CoachingScheduler
from formcoach.domain.correction.engine import CorrectionEngine
from formcoach.domain.pose.profiler import BoneLengthProfiler
from formcoach.domain.target.synthesizer import TargetPoseSynthesizer
from formcoach.services.pose_analysis_service import PoseAnalysisService
from tests.test_helpers import FakeClock, FixedRandom, make_skeleton


# ========================================
# Application Fixtures
# ========================================

@pytest.fixture(scope="session")
def app():
    """FastAPI 애플리케이션 인스턴스"""
    from formcoach.main import app as fastapi_app
    return fastapi_app


@pytest.fixture(scope="session")
def client(app):
    """FastAPI TestClient (API 테스트용)"""
    return TestClient(app)


# ========================================
# Domain Object Fixtures
# ========================================

@pytest.fixture
def standing_skeleton():
    """팔을 내리고 서 있는 전신 Skeleton"""
    return make_skeleton()


@pytest.fixture
def profiler():
    return BoneLengthProfiler()


@pytest.fixture
def synthesizer():
    return TargetPoseSynthesizer()


@pytest.fixture
def engine():
    return CorrectionEngine()


@pytest.fixture
def pose_service(profiler, synthesizer, engine):
    return PoseAnalysisService(
        profiler=profiler,
        synthesizer=synthesizer,
        correction_engine=engine,
    )


# ========================================
# Scheduler Fixtures
# ========================================

@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    """good_form은 항상 drop (random=0.5 < 0.9)"""
    return CoachingScheduler.create(clock=clock, rng=FixedRandom(0.5))
