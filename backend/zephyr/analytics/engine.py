"""統計分析引擎

提供每日平均溫度序列的統計計算功能，包括：
- 基本統計量（mean, stddev, median, mode）
- 異常偵測（偏離平均值超過 k 倍標準差）

定義：
- 標準差採母體標準差（除以 N），樣本即為完整已知的資料集
- 眾數平手時取最小值，結果與輸入順序無關
- 異常：|溫度 - 平均| > k × 標準差，預設 k = 2.0

所有函式都要求至少一筆樣本；空序列屬於呼叫端錯誤，
會拋出 EmptySampleError，而不是回傳 0 或 NaN。
"""

from datetime import date
from typing import Iterable, Optional, Sequence, Union

import numpy as np

from zephyr.cache.statistics import StatisticRecord


# ============================================================================
# 常數定義
# ============================================================================

# 異常判定的標準差倍數（雙標準差法則）
DEFAULT_ANOMALY_THRESHOLD = 2.0


class EmptySampleError(ValueError):
    """以空樣本呼叫統計函式（呼叫端應先檢查資料充足性）"""


Sample = Union[StatisticRecord, tuple[date, float]]


def _as_array(samples: Iterable[float]) -> np.ndarray:
    data = np.asarray(list(samples), dtype=float)
    if data.size == 0:
        raise EmptySampleError("statistics require at least one sample")
    return data


# ============================================================================
# 基本統計函式
# ============================================================================


def mean(samples: Sequence[float]) -> float:
    """算術平均數"""
    return float(np.mean(_as_array(samples)))


def stddev(samples: Sequence[float]) -> float:
    """母體標準差（ddof=0）"""
    return float(np.std(_as_array(samples), ddof=0))


def median(samples: Sequence[float]) -> float:
    """中位數

    奇數筆取中間值，偶數筆取中間兩值的平均。
    """
    return float(np.median(_as_array(samples)))


def mode(samples: Sequence[float]) -> float:
    """眾數

    出現次數最多的值；多個值同為最多時取最小者。
    """
    # np.unique 結果已遞增排序，argmax 取第一個最大值即為最小的眾數
    values, counts = np.unique(_as_array(samples), return_counts=True)
    return float(values[np.argmax(counts)])


# ============================================================================
# 異常偵測
# ============================================================================


def _unpack(sample: Sample) -> tuple[date, float]:
    if isinstance(sample, StatisticRecord):
        return sample.date, float(sample.temperature)
    sample_date, temperature = sample
    return sample_date, float(temperature)


def detect_anomalies(
    samples: Sequence[Sample],
    sample_mean: Optional[float] = None,
    sample_stddev: Optional[float] = None,
    threshold: float = DEFAULT_ANOMALY_THRESHOLD,
) -> list[tuple[date, float]]:
    """偵測偏離平均值過大的樣本

    Args:
        samples: (日期, 溫度) 序列或 StatisticRecord 序列
        sample_mean: 預先計算的平均值（省略時自行計算）
        sample_stddev: 預先計算的母體標準差（省略時自行計算）
        threshold: 標準差倍數 k

    Returns:
        被判定為異常的 (日期, 溫度) 列表，保持原始順序；
        沒有異常或標準差為 0 時回傳空列表
    """
    pairs = [_unpack(sample) for sample in samples]
    temps = _as_array(temp for _, temp in pairs)

    mu = float(np.mean(temps)) if sample_mean is None else sample_mean
    sigma = float(np.std(temps, ddof=0)) if sample_stddev is None else sample_stddev

    # 所有值相同時不存在異常
    if sigma == 0:
        return []

    mask = np.abs(temps - mu) > threshold * sigma
    return [pair for pair, flagged in zip(pairs, mask) if flagged]
