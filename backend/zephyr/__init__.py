"""Zephyr：天氣資料快取與溫度統計服務"""

__version__ = "0.1.0"
