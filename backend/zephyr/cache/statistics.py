"""每日溫度統計紀錄庫

以 (日期, 地點) 為唯一鍵，儲存每個地點每天的日平均溫度。
同一地點同一天只保留第一次觀測到的值，之後的寫入一律忽略。
資料僅存在記憶體中，程序結束即消失。
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Callable, Union

from zephyr.cache.entity import normalize_key
from zephyr.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

# 充足性判定預設值：近 2 天內至少 2 筆紀錄
DEFAULT_WINDOW_DAYS = 2
DEFAULT_MIN_RECORDS = 2


@dataclass(frozen=True)
class StatisticRecord:
    """單筆統計紀錄"""

    location: str
    date: date
    temperature: float


def parse_record_date(value: Union[date, str]) -> date:
    """將 date 或 'YYYY-MM-DD' 字串轉為 date

    Raises:
        ValueError: 字串無法解析時
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid statistic date {value!r}, expected YYYY-MM-DD") from exc


class StatisticStore:
    """統計紀錄庫

    Attributes:
        window_days: 充足性判定的回溯天數
        min_records: 視窗內至少需要的紀錄筆數
    """

    def __init__(
        self,
        window_days: int = DEFAULT_WINDOW_DAYS,
        min_records: int = DEFAULT_MIN_RECORDS,
        today_func: Callable[[], date] = date.today,
    ):
        self.window_days = window_days
        self.min_records = min_records
        self._today_func = today_func
        self._lock = ReadWriteLock()
        # location -> {date: temperature}，保持插入順序
        self._db: dict[str, dict[date, float]] = {}

    def record(self, location: str, record_date: Union[date, str], temperature: float) -> bool:
        """新增一筆紀錄

        Args:
            location: 地點名稱
            record_date: 觀測日期
            temperature: 日平均溫度 (°C)

        Returns:
            是否實際寫入（鍵值已存在時回傳 False）

        Raises:
            ValueError: 日期字串無法解析時
        """
        key = normalize_key(location)
        parsed = parse_record_date(record_date)

        with self._lock.write_locked():
            days = self._db.setdefault(key, {})
            if parsed in days:
                return False
            days[parsed] = float(temperature)

        logger.info("Recorded %.2f°C for %s on %s", temperature, key, parsed.isoformat())
        return True

    def is_sufficient(self, location: str) -> bool:
        """判斷指定地點是否有足夠的近期紀錄

        視窗為 [今天 - window_days, 今天]（含兩端），
        找到 min_records 筆即提早返回。
        """
        key = normalize_key(location)
        today = self._today_func()
        threshold = today - timedelta(days=self.window_days)

        with self._lock.read_locked():
            days = self._db.get(key, {})
            valid = 0
            for record_date in days:
                if threshold <= record_date <= today:
                    valid += 1
                    if valid >= self.min_records:
                        return True

        return False

    def records(self, location: str) -> list[StatisticRecord]:
        """取得指定地點的完整歷史紀錄（依寫入順序）"""
        key = normalize_key(location)

        with self._lock.read_locked():
            days = dict(self._db.get(key, {}))

        return [
            StatisticRecord(location=key, date=record_date, temperature=temperature)
            for record_date, temperature in days.items()
        ]

    def __len__(self) -> int:
        with self._lock.read_locked():
            return sum(len(days) for days in self._db.values())
