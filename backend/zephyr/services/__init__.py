"""服務模組

包含上游 API 客戶端、天氣查詢與溫度統計等業務邏輯服務。
"""

from zephyr.services.openweather import OpenWeatherClient, ProviderError
from zephyr.services.statistics import InsufficientDataError, StatisticsService, StatResult
from zephyr.services.weather import WeatherService

__all__ = [
    "InsufficientDataError",
    "OpenWeatherClient",
    "ProviderError",
    "StatisticsService",
    "StatResult",
    "WeatherService",
]
