import importlib
import pkgutil

from fastapi import APIRouter, FastAPI


def include_all_routers(app: FastAPI) -> None:
    """formcoach.api 하위 모듈의 module-level `router`를 app에 등록"""
    for modinfo in pkgutil.iter_modules(__path__):
        if modinfo.name.startswith("_"):
            continue
        module = importlib.import_module(f"{__name__}.{modinfo.name}")
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            app.include_router(router)
