"""統計分析模組

提供每日溫度序列的統計分析功能。
"""

from zephyr.analytics.engine import (
    DEFAULT_ANOMALY_THRESHOLD,
    EmptySampleError,
    detect_anomalies,
    mean,
    median,
    mode,
    stddev,
)

__all__ = [
    "DEFAULT_ANOMALY_THRESHOLD",
    "EmptySampleError",
    "detect_anomalies",
    "mean",
    "median",
    "mode",
    "stddev",
]
