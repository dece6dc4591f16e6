# backend/zephyr/main.py
"""FastAPI 應用程式入口"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zephyr import __version__
from zephyr.api.v1 import statistics, weather
from zephyr.config import settings

app = FastAPI(
    title=settings.app_name,
    description="天氣資料快取與歷史溫度統計 API",
    version=__version__,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """健康檢查端點"""
    return {"status": "ok", "version": __version__}


# 註冊 API 路由
app.include_router(
    weather.router,
    prefix="/api/v1",
    tags=["weather"]
)
app.include_router(
    statistics.router,
    prefix="/api/v1",
    tags=["statistics"]
)
