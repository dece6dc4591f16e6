"""Pydantic Schema 模組"""

from zephyr.schemas.weather import (
    AnomalyResponse,
    ApiResponse,
    DailyForecastItem,
    DailyForecastResponse,
    HourlyForecastItem,
    HourlyForecastResponse,
    MetricsResponse,
    MoonResponse,
    StatisticsResponse,
    WeatherAlertResponse,
    WeatherResponse,
    WindResponse,
)

__all__ = [
    "AnomalyResponse",
    "ApiResponse",
    "DailyForecastItem",
    "DailyForecastResponse",
    "HourlyForecastItem",
    "HourlyForecastResponse",
    "MetricsResponse",
    "MoonResponse",
    "StatisticsResponse",
    "WeatherAlertResponse",
    "WeatherResponse",
    "WindResponse",
]
