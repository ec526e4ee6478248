import logging

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from formcoach.api import include_all_routers
from formcoach.config.settings import settings

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

# 앱 생성
app = FastAPI(debug=settings.DEBUG_MODE)

# 자동으로 formcoach/api/* 모듈을 스캔해 라우터 전부 등록
include_all_routers(app)

app.openapi = lambda: get_openapi(
    title="Realtime Form Coach API",
    version="0.1.0",
    description="실시간 운동 자세 가이드 / 교정 API",
    routes=app.routes,
)
