"""天氣領域模型

上游回應解析後的值物件，數值一律以公制原始值保存（°C、m/s、hPa、公尺），
顯示用的單位換算與字串格式化在 API 層處理。
所有物件皆不可變，可安全地放入快取並在多個請求間共用。
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class City:
    """地點名稱與座標"""

    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class WeatherAlert:
    """天氣警特報"""

    event: str
    start: datetime
    end: datetime
    description: str


@dataclass(frozen=True)
class Weather:
    """即時天氣"""

    date: date
    temperature: float
    min: float
    max: float
    condition: str
    feels_like: float
    emoji: str
    alerts: tuple[WeatherAlert, ...] = ()


@dataclass(frozen=True)
class Metrics:
    """濕度、氣壓等氣象指標"""

    humidity: float  # %
    pressure: float  # hPa
    dew_point: float  # °C
    uv_index: float
    visibility: Optional[float]  # 公尺


@dataclass(frozen=True)
class Wind:
    """風況"""

    arrow: str
    direction: str
    speed: float  # m/s


@dataclass(frozen=True)
class DailyForecastEntry:
    """單日預報"""

    date: date
    min: float
    max: float
    condition: str
    emoji: str
    feels_like: float
    wind: Wind
    rain_probability: int  # %


@dataclass(frozen=True)
class DailyForecast:
    forecast: tuple[DailyForecastEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class HourlyForecastEntry:
    """單小時預報"""

    time: datetime
    temperature: float
    condition: str
    emoji: str
    wind: Wind
    rain_probability: int  # %


@dataclass(frozen=True)
class HourlyForecast:
    forecast: tuple[HourlyForecastEntry, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Moon:
    """月相"""

    icon: str
    phase: str
    percentage: int
