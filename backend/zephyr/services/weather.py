"""天氣查詢服務

先查快取，未命中或已過期時才向上游查詢並寫回快取。
即時天氣查詢會額外把當日平均溫度寫入統計紀錄庫；
快取寫入與統計寫入彼此獨立，不保證同時成功。
"""

import logging
from datetime import date
from typing import Awaitable, Callable, TypeVar

from zephyr.cache.entity import EntityCache, MasterCaches, normalize_key
from zephyr.cache.statistics import StatisticStore
from zephyr.models.weather import DailyForecast, HourlyForecast, Metrics, Moon, Weather, Wind
from zephyr.services.openweather import OpenWeatherClient

logger = logging.getLogger(__name__)

T = TypeVar("T")

# 月相與地點無關，使用固定鍵值
MOON_KEY = "moon"


class WeatherService:
    """天氣查詢服務

    Attributes:
        caches: 各實體快取
        stat_store: 統計紀錄庫
        client: 上游 API 客戶端
        ttl_hours: 快取存活時間（小時）
    """

    def __init__(
        self,
        caches: MasterCaches,
        stat_store: StatisticStore,
        client: OpenWeatherClient,
        ttl_hours: int,
        today_func: Callable[[], date] = date.today,
    ):
        self.caches = caches
        self.stat_store = stat_store
        self.client = client
        self.ttl_hours = ttl_hours
        self._today_func = today_func

    async def _cached(
        self,
        cache: EntityCache[T],
        key: str,
        fetch: Callable[[], Awaitable[T]],
    ) -> T:
        value, found = cache.get(key, self.ttl_hours)
        if found:
            return value

        logger.info("Refreshing %s for %s", cache.name, normalize_key(key))
        value = await fetch()
        cache.put(key, value)
        return value

    async def get_weather(self, city_name: str) -> Weather:
        """取得即時天氣，並記錄當日平均溫度"""
        value, found = self.caches.weather.get(city_name, self.ttl_hours)
        if found:
            return value

        logger.info("Refreshing weather for %s", normalize_key(city_name))
        city = await self.client.get_coordinates(city_name)
        weather, daily_temp = await self.client.get_weather(city)

        self.caches.weather.put(city_name, weather)
        self.stat_store.record(normalize_key(city_name), self._today_func(), daily_temp)

        return weather

    async def get_metrics(self, city_name: str) -> Metrics:
        async def fetch() -> Metrics:
            city = await self.client.get_coordinates(city_name)
            return await self.client.get_metrics(city)

        return await self._cached(self.caches.metrics, city_name, fetch)

    async def get_wind(self, city_name: str) -> Wind:
        async def fetch() -> Wind:
            city = await self.client.get_coordinates(city_name)
            return await self.client.get_wind(city)

        return await self._cached(self.caches.wind, city_name, fetch)

    async def get_daily_forecast(self, city_name: str) -> DailyForecast:
        async def fetch() -> DailyForecast:
            city = await self.client.get_coordinates(city_name)
            return await self.client.get_daily_forecast(city)

        return await self._cached(self.caches.daily_forecast, city_name, fetch)

    async def get_hourly_forecast(self, city_name: str) -> HourlyForecast:
        async def fetch() -> HourlyForecast:
            city = await self.client.get_coordinates(city_name)
            return await self.client.get_hourly_forecast(city)

        return await self._cached(self.caches.hourly_forecast, city_name, fetch)

    async def get_moon(self) -> Moon:
        return await self._cached(self.caches.moon, MOON_KEY, self.client.get_moon)

