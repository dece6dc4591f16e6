"""溫度統計服務

結合統計紀錄庫與統計引擎，計算指定地點的歷史溫度統計。
資料不足時直接拒絕，不回傳部分結果。
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Callable, Optional

import numpy as np

from zephyr.analytics import engine
from zephyr.cache.statistics import StatisticStore

logger = logging.getLogger(__name__)

INSUFFICIENT_DATA_MESSAGE = "insufficient or outdated data to perform statistical analysis"


class InsufficientDataError(Exception):
    """指定地點的近期紀錄不足，暫時無法計算統計"""

    def __init__(self, location: str):
        super().__init__(INSUFFICIENT_DATA_MESSAGE)
        self.location = location


@dataclass(frozen=True)
class Anomaly:
    """異常紀錄"""
    date: date
    temperature: float


@dataclass(frozen=True)
class StatResult:
    """統計結果（每次查詢即時計算，不保存）"""
    min: float
    max: float
    count: int
    mean: float
    stddev: float
    median: float
    mode: float
    anomalies: Optional[tuple[Anomaly, ...]]  # 沒有異常時為 None


class StatisticsService:
    """溫度統計服務

    Attributes:
        store: 統計紀錄庫
        anomaly_threshold: 異常判定的標準差倍數
    """

    def __init__(
        self,
        store: StatisticStore,
        anomaly_threshold: float = engine.DEFAULT_ANOMALY_THRESHOLD,
    ):
        self.store = store
        self.anomaly_threshold = anomaly_threshold

    def get_statistics(self, location: str) -> StatResult:
        """計算指定地點的溫度統計

        Args:
            location: 地點名稱

        Returns:
            統計結果

        Raises:
            InsufficientDataError: 近期紀錄不足時
        """
        if not self.store.is_sufficient(location):
            logger.info("Not enough recent statistics for %s", location)
            raise InsufficientDataError(location)

        records = self.store.records(location)
        temps = [record.temperature for record in records]

        sample_mean = engine.mean(temps)
        sample_stddev = engine.stddev(temps)

        anomalies = engine.detect_anomalies(
            records,
            sample_mean=sample_mean,
            sample_stddev=sample_stddev,
            threshold=self.anomaly_threshold,
        )

        return StatResult(
            min=min(temps),
            max=max(temps),
            count=len(records),
            mean=sample_mean,
            stddev=sample_stddev,
            median=engine.median(temps),
            mode=engine.mode(temps),
            anomalies=tuple(Anomaly(date=d, temperature=t) for d, t in anomalies) or None,
        )


def seed_statistics(
    store: StatisticStore,
    location: str,
    count: int,
    mean: float,
    stddev: float,
    rng: Optional[np.random.Generator] = None,
    today_func: Callable[[], date] = date.today,
) -> int:
    """以常態分佈亂數填入歷史紀錄（開發與展示用）

    從昨天開始往前，每天一筆。

    Args:
        store: 統計紀錄庫
        location: 地點名稱
        count: 紀錄筆數
        mean: 平均溫度 (°C)
        stddev: 標準差 (°C)
        rng: 亂數產生器（測試時可固定種子）
        today_func: 取得今天日期的函式

    Returns:
        實際寫入的筆數（已存在的日期會被略過）
    """
    rng = rng or np.random.default_rng()
    start = today_func() - timedelta(days=1)
    temps = rng.normal(mean, stddev, count)

    inserted = 0
    for offset, temperature in enumerate(temps):
        if store.record(location, start - timedelta(days=offset), float(temperature)):
            inserted += 1

    logger.info("Seeded %d statistics for %s", inserted, location)
    return inserted
