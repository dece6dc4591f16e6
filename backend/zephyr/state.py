"""程序層級狀態管理

快取與統計紀錄庫只存在記憶體中，隨程序啟動建立、結束消失。
這裡同時提供 FastAPI 依賴注入用的取得函式。
"""

from functools import lru_cache

from fastapi import HTTPException

from zephyr.cache.entity import MasterCaches
from zephyr.cache.statistics import StatisticStore
from zephyr.config import settings
from zephyr.services.openweather import OpenWeatherClient, ProviderError
from zephyr.services.statistics import StatisticsService
from zephyr.services.weather import WeatherService


caches = MasterCaches()

stat_store = StatisticStore(
    window_days=settings.stats_window_days,
    min_records=settings.stats_min_records,
)


@lru_cache
def get_client() -> OpenWeatherClient:
    """取得 OpenWeatherMap 客戶端（首次呼叫時建立）"""
    return OpenWeatherClient.from_settings(settings)


def get_weather_service() -> WeatherService:
    """取得天氣查詢服務（FastAPI 依賴注入用）

    Raises:
        HTTPException: 無法建立上游客戶端時（如未設定 API 金鑰）回傳 400
    """
    try:
        client = get_client()
    except ProviderError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return WeatherService(
        caches=caches,
        stat_store=stat_store,
        client=client,
        ttl_hours=settings.cache_ttl,
    )


def get_statistics_service() -> StatisticsService:
    """取得溫度統計服務（FastAPI 依賴注入用）"""
    return StatisticsService(stat_store, anomaly_threshold=settings.anomaly_threshold)
