"""天氣實體快取

每一種天氣實體（即時天氣、氣象指標、風況、每日預報、逐時預報、月相）
各自擁有一個獨立的 EntityCache，鍵值為正規化後的地點名稱。

過期採惰性判定：讀取時才比對時間戳記，過期項目不會被刪除，
只會在下一次寫入同一鍵值時被覆蓋。
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Generic, Optional, TypeVar

from zephyr.models.weather import (
    DailyForecast,
    HourlyForecast,
    Metrics,
    Moon,
    Weather,
    Wind,
)
from zephyr.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def normalize_key(key: str) -> str:
    """正規化快取鍵值

    1. 移除前後空白
    2. 以 '+' 取代中間的空白
    3. 轉為大寫

    重複套用結果不變，且不分大小寫（"Rome" 與 "ROME" 得到相同鍵值）。
    """
    return key.strip().replace(" ", "+").upper()


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """快取項目：值與寫入時間，整筆替換、不可就地修改"""

    value: T
    captured_at: datetime


class EntityCache(Generic[T]):
    """單一實體類型的快取

    Attributes:
        name: 快取名稱（僅用於日誌）
    """

    def __init__(self, name: str = "", time_func: Callable[[], datetime] = utc_now):
        self.name = name
        self._time_func = time_func
        self._lock = ReadWriteLock()
        self._data: dict[str, CacheEntry[T]] = {}

    def get(self, key: str, ttl_hours: int) -> tuple[Optional[T], bool]:
        """讀取快取

        Args:
            key: 地點名稱（會先正規化）
            ttl_hours: 存活時間（小時）

        Returns:
            (值, 是否命中)；不存在或已過期時回傳 (None, False)
        """
        normalized = normalize_key(key)

        with self._lock.read_locked():
            entry = self._data.get(normalized)

        if entry is None:
            logger.debug("%s cache miss for %s", self.name, normalized)
            return None, False

        elapsed = self._time_func() - entry.captured_at
        if elapsed > timedelta(hours=ttl_hours):
            logger.debug("%s cache entry for %s expired (age %s)", self.name, normalized, elapsed)
            return None, False

        logger.debug("%s cache hit for %s", self.name, normalized)
        return entry.value, True

    def put(self, key: str, value: T) -> None:
        """寫入快取，無條件覆蓋同一鍵值的舊項目"""
        normalized = normalize_key(key)
        entry = CacheEntry(value=value, captured_at=self._time_func())

        with self._lock.write_locked():
            self._data[normalized] = entry

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._data)


class MasterCaches:
    """所有天氣實體快取的集合，各快取互不干擾"""

    def __init__(self, time_func: Callable[[], datetime] = utc_now):
        self.weather: EntityCache[Weather] = EntityCache("weather", time_func)
        self.metrics: EntityCache[Metrics] = EntityCache("metrics", time_func)
        self.wind: EntityCache[Wind] = EntityCache("wind", time_func)
        self.daily_forecast: EntityCache[DailyForecast] = EntityCache("daily_forecast", time_func)
        self.hourly_forecast: EntityCache[HourlyForecast] = EntityCache("hourly_forecast", time_func)
        self.moon: EntityCache[Moon] = EntityCache("moon", time_func)
