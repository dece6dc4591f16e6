"""快取模組

包含天氣實體快取與每日溫度統計紀錄庫。
"""

from zephyr.cache.entity import CacheEntry, EntityCache, MasterCaches, normalize_key
from zephyr.cache.statistics import StatisticRecord, StatisticStore

__all__ = [
    "CacheEntry",
    "EntityCache",
    "MasterCaches",
    "normalize_key",
    "StatisticRecord",
    "StatisticStore",
]
