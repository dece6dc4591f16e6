"""資料模型模組

包含天氣領域的不可變值物件。
"""

from zephyr.models.weather import (
    City,
    DailyForecast,
    DailyForecastEntry,
    HourlyForecast,
    HourlyForecastEntry,
    Metrics,
    Moon,
    Weather,
    WeatherAlert,
    Wind,
)

__all__ = [
    "City",
    "DailyForecast",
    "DailyForecastEntry",
    "HourlyForecast",
    "HourlyForecastEntry",
    "Metrics",
    "Moon",
    "Weather",
    "WeatherAlert",
    "Wind",
]
