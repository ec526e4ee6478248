from formcoach.config.settings import settings
from formcoach.main import app

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "formcoach.main:app",
        host="0.0.0.0",
        port=settings.FASTAPI_PORT,
        reload=settings.DEBUG_MODE,
    )
