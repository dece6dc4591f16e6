"""OpenWeatherMap API 服務

從 One Call API 取得即時天氣、氣象指標、風況、預報與月相，
並透過 Geocoding API 將地點名稱轉為座標。

解析函式皆為純函式，只負責把原始 JSON 轉成領域模型，方便單獨測試。
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from zephyr.config import Settings
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
from zephyr.utils.formatting import (
    get_cardinal_direction,
    get_emoji,
    get_moon_phase,
    resolve_condition,
    round_half_away,
)

logger = logging.getLogger(__name__)

# 預報範圍：跳過今天，取之後 4 天；逐時取 9 小時
DAILY_FORECAST_SLICE = slice(1, 5)
HOURLY_FORECAST_SLICE = slice(0, 9)


class ProviderError(RuntimeError):
    """上游天氣服務錯誤"""


# ============================================================================
# 解析函式
# ============================================================================


def _utc(timestamp: int) -> datetime:
    return datetime.fromtimestamp(int(timestamp), tz=timezone.utc)


def _condition(raw: dict) -> tuple[str, str, bool]:
    """解析天氣描述

    Returns:
        (主分類, 表情符號用的狀況, 是否為夜間)
    """
    weather = raw["weather"][0]
    title = weather["main"]
    condition = resolve_condition(title, weather.get("description", ""))
    is_night = weather.get("icon", "").endswith("n")
    return title, condition, is_night


def _wind(raw: dict) -> Wind:
    direction, arrow = get_cardinal_direction(float(raw.get("wind_deg", 0)))
    return Wind(arrow=arrow, direction=direction, speed=float(raw.get("wind_speed", 0)))


def _rain_probability(raw: dict) -> int:
    return round_half_away(float(raw.get("pop", 0)) * 100)


def parse_city(payload: Any, city_name: str) -> City:
    """解析 Geocoding API 回應

    Raises:
        ProviderError: 查無地點或格式不符時
    """
    if not isinstance(payload, list) or not payload:
        raise ProviderError("cannot find this city")

    try:
        first = payload[0]
        return City(
            name=first.get("name") or city_name,
            lat=float(first["lat"]),
            lon=float(first["lon"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ProviderError("unexpected geocoding response") from exc


def parse_alert(raw: dict) -> WeatherAlert:
    """解析天氣警特報，描述只保留第一行"""
    return WeatherAlert(
        event=raw.get("event", ""),
        start=_utc(raw["start"]),
        end=_utc(raw["end"]),
        description=(raw.get("description") or "").split("\n")[0],
    )


def parse_weather(payload: dict) -> tuple[Weather, float]:
    """解析即時天氣

    Returns:
        (即時天氣, 當日平均溫度)；後者用於統計紀錄

    Raises:
        ProviderError: 格式不符時
    """
    try:
        current = payload["current"]
        today = payload["daily"][0]
        title, condition, is_night = _condition(current)

        weather = Weather(
            date=_utc(current["dt"]).date(),
            temperature=float(current["temp"]),
            min=float(today["temp"]["min"]),
            max=float(today["temp"]["max"]),
            condition=title,
            feels_like=float(current["feels_like"]),
            emoji=get_emoji(condition, is_night),
            alerts=tuple(parse_alert(alert) for alert in payload.get("alerts") or []),
        )
        daily_temp = float(today["temp"]["day"])
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected weather response") from exc

    return weather, daily_temp


def parse_metrics(payload: dict) -> Metrics:
    """解析氣象指標"""
    try:
        current = payload["current"]
        visibility = current.get("visibility")
        return Metrics(
            humidity=float(current["humidity"]),
            pressure=float(current["pressure"]),
            dew_point=float(current["dew_point"]),
            uv_index=float(current["uvi"]),
            visibility=float(visibility) if visibility is not None else None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected metrics response") from exc


def parse_wind(payload: dict) -> Wind:
    """解析即時風況"""
    try:
        return _wind(payload["current"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected wind response") from exc


def parse_daily_forecast(payload: dict) -> DailyForecast:
    """解析每日預報（跳過今天）"""
    try:
        entries = []
        for raw in payload["daily"][DAILY_FORECAST_SLICE]:
            title, condition, _ = _condition(raw)
            entries.append(DailyForecastEntry(
                date=_utc(raw["dt"]).date(),
                min=float(raw["temp"]["min"]),
                max=float(raw["temp"]["max"]),
                condition=title,
                emoji=get_emoji(condition, False),
                feels_like=float(raw["feels_like"]["day"]),
                wind=_wind(raw),
                rain_probability=_rain_probability(raw),
            ))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected daily forecast response") from exc

    return DailyForecast(forecast=tuple(entries))


def parse_hourly_forecast(payload: dict) -> HourlyForecast:
    """解析逐時預報"""
    try:
        entries = []
        for raw in payload["hourly"][HOURLY_FORECAST_SLICE]:
            title, condition, is_night = _condition(raw)
            entries.append(HourlyForecastEntry(
                time=_utc(raw["dt"]),
                temperature=float(raw["temp"]),
                condition=title,
                emoji=get_emoji(condition, is_night),
                wind=_wind(raw),
                rain_probability=_rain_probability(raw),
            ))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected hourly forecast response") from exc

    return HourlyForecast(forecast=tuple(entries))


def parse_moon(payload: dict) -> Moon:
    """解析月相"""
    try:
        phase, icon, percentage = get_moon_phase(float(payload["daily"][0]["moon_phase"]))
    except (KeyError, IndexError, TypeError, ValueError) as exc:
        raise ProviderError("unexpected moon response") from exc

    return Moon(icon=icon, phase=phase, percentage=percentage)


# ============================================================================
# API 客戶端
# ============================================================================


class OpenWeatherClient:
    """OpenWeatherMap API 客戶端

    Attributes:
        token: API 金鑰
        base_url: One Call API 端點
        geo_url: Geocoding API 端點
        timeout: 請求逾時（秒）
        moon_city: 月相查詢使用的參考座標
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.openweathermap.org/data/3.0/onecall",
        geo_url: str = "https://api.openweathermap.org/geo/1.0/direct",
        timeout: float = 10.0,
        moon_city: Optional[City] = None,
    ):
        if not token:
            raise ProviderError("ZEPHYR_TOKEN not set")

        self.token = token
        self.base_url = base_url
        self.geo_url = geo_url
        self.timeout = timeout
        self.moon_city = moon_city or City(name="moon", lat=41.8933, lon=12.4829)

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenWeatherClient":
        return cls(
            token=settings.token,
            base_url=settings.owm_base_url,
            geo_url=settings.owm_geo_url,
            timeout=settings.request_timeout,
            moon_city=City(name="moon", lat=settings.moon_latitude, lon=settings.moon_longitude),
        )

    async def _get(self, url: str, params: dict) -> Any:
        """送出 GET 請求並解析 JSON

        Raises:
            ProviderError: 連線失敗、HTTP 錯誤或回應不是合法 JSON 時
        """
        params = {**params, "appid": self.token}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url, params=params)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 401:
                logger.error("OpenWeatherMap rejected the API key (401)")
            else:
                logger.warning("OpenWeatherMap HTTP error: %s", status)
            raise ProviderError(f"upstream returned HTTP {status}") from e
        except httpx.HTTPError as e:
            logger.warning("OpenWeatherMap request failed: %s", e)
            raise ProviderError(f"upstream request failed: {e}") from e
        except ValueError as e:
            raise ProviderError("upstream returned invalid JSON") from e

    async def _onecall(self, city: City, exclude: str) -> dict:
        logger.info("Fetching %s from OpenWeatherMap (exclude=%s)", city.name, exclude)
        return await self._get(self.base_url, {
            "lat": city.lat,
            "lon": city.lon,
            "units": "metric",
            "exclude": exclude,
        })

    async def get_coordinates(self, city_name: str) -> City:
        """將地點名稱轉為座標"""
        payload = await self._get(self.geo_url, {"q": city_name, "limit": 1})
        return parse_city(payload, city_name)

    async def get_weather(self, city: City) -> tuple[Weather, float]:
        return parse_weather(await self._onecall(city, "minutely,hourly"))

    async def get_metrics(self, city: City) -> Metrics:
        return parse_metrics(await self._onecall(city, "minutely,hourly,daily,alerts"))

    async def get_wind(self, city: City) -> Wind:
        return parse_wind(await self._onecall(city, "minutely,hourly,daily,alerts"))

    async def get_daily_forecast(self, city: City) -> DailyForecast:
        return parse_daily_forecast(await self._onecall(city, "current,minutely,hourly,alerts"))

    async def get_hourly_forecast(self, city: City) -> HourlyForecast:
        return parse_hourly_forecast(await self._onecall(city, "current,minutely,daily,alerts"))

    async def get_moon(self) -> Moon:
        return parse_moon(await self._onecall(self.moon_city, "current,minutely,hourly,alerts"))
