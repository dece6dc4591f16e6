"""天氣查詢 API 路由"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from zephyr.models.weather import (
    DailyForecast,
    HourlyForecast,
    Metrics,
    Moon,
    Weather,
    Wind,
)
from zephyr.schemas.weather import (
    ApiResponse,
    DailyForecastItem,
    DailyForecastResponse,
    HourlyForecastItem,
    HourlyForecastResponse,
    MetricsResponse,
    MoonResponse,
    WeatherAlertResponse,
    WeatherResponse,
    WindResponse,
)
from zephyr.services.openweather import ProviderError
from zephyr.services.weather import WeatherService
from zephyr.state import get_weather_service
from zephyr.utils.formatting import (
    fmt_alert_date,
    fmt_date,
    fmt_number,
    fmt_percentage,
    fmt_pressure,
    fmt_temperature,
    fmt_time,
    fmt_visibility,
    fmt_wind,
)

router = APIRouter()


def _city_name(city: str) -> str:
    """驗證地點名稱"""
    name = city.strip()
    if not name:
        raise HTTPException(status_code=400, detail="specify city name")
    return name


def _provider_error(exc: ProviderError) -> HTTPException:
    return HTTPException(status_code=400, detail=str(exc))


def _wind_to_response(wind: Wind, is_imperial: bool) -> WindResponse:
    return WindResponse(
        arrow=wind.arrow,
        direction=wind.direction,
        speed=fmt_wind(wind.speed, is_imperial),
    )


def _weather_to_response(weather: Weather, is_imperial: bool) -> WeatherResponse:
    """將即時天氣轉換為 API 回應"""
    return WeatherResponse(
        date=fmt_date(weather.date),
        temperature=fmt_temperature(weather.temperature, is_imperial),
        min=fmt_temperature(weather.min, is_imperial),
        max=fmt_temperature(weather.max, is_imperial),
        condition=weather.condition,
        feels_like=fmt_temperature(weather.feels_like, is_imperial),
        emoji=weather.emoji,
        alerts=[
            WeatherAlertResponse(
                event=alert.event,
                start_date=fmt_alert_date(alert.start),
                end_date=fmt_alert_date(alert.end),
                description=alert.description,
            )
            for alert in weather.alerts
        ],
    )


def _metrics_to_response(metrics: Metrics, is_imperial: bool) -> MetricsResponse:
    return MetricsResponse(
        humidity=fmt_percentage(metrics.humidity),
        pressure=fmt_pressure(metrics.pressure),
        dew_point=fmt_temperature(metrics.dew_point, is_imperial),
        uv_index=fmt_number(metrics.uv_index),
        visibility=fmt_visibility(metrics.visibility),
    )


def _daily_to_response(forecast: DailyForecast, is_imperial: bool) -> DailyForecastResponse:
    return DailyForecastResponse(forecast=[
        DailyForecastItem(
            date=fmt_date(entry.date),
            min=fmt_temperature(entry.min, is_imperial),
            max=fmt_temperature(entry.max, is_imperial),
            condition=entry.condition,
            emoji=entry.emoji,
            feels_like=fmt_temperature(entry.feels_like, is_imperial),
            wind=_wind_to_response(entry.wind, is_imperial),
            rain_probability=fmt_percentage(entry.rain_probability),
        )
        for entry in forecast.forecast
    ])


def _hourly_to_response(forecast: HourlyForecast, is_imperial: bool) -> HourlyForecastResponse:
    return HourlyForecastResponse(forecast=[
        HourlyForecastItem(
            time=fmt_time(entry.time),
            temperature=fmt_temperature(entry.temperature, is_imperial),
            condition=entry.condition,
            emoji=entry.emoji,
            wind=_wind_to_response(entry.wind, is_imperial),
            rain_probability=fmt_percentage(entry.rain_probability),
        )
        for entry in forecast.forecast
    ])


def _moon_to_response(moon: Moon) -> MoonResponse:
    return MoonResponse(
        icon=moon.icon,
        phase=moon.phase,
        percentage=fmt_percentage(moon.percentage),
    )


@router.get(
    "/weather/{city}",
    response_model=ApiResponse[WeatherResponse],
    summary="查詢即時天氣",
    description="查詢指定地點的即時天氣；加上 ?i 參數改用英制單位",
)
async def get_weather(
    city: str = Path(..., description="地點名稱", example="Rome"),
    i: Optional[str] = Query(None, description="存在時使用英制單位"),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[WeatherResponse]:
    """查詢即時天氣

    查詢成功時會同時記錄當日平均溫度，供統計 API 使用。

    Raises:
        400: 地點名稱為空或上游查詢失敗
    """
    try:
        weather = await service.get_weather(_city_name(city))
    except ProviderError as exc:
        raise _provider_error(exc) from exc

    return ApiResponse(success=True, data=_weather_to_response(weather, i is not None))


@router.get(
    "/metrics/{city}",
    response_model=ApiResponse[MetricsResponse],
    summary="查詢氣象指標",
    description="查詢指定地點的濕度、氣壓、露點、紫外線指數與能見度",
)
async def get_metrics(
    city: str = Path(..., description="地點名稱", example="Rome"),
    i: Optional[str] = Query(None, description="存在時使用英制單位"),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[MetricsResponse]:
    try:
        metrics = await service.get_metrics(_city_name(city))
    except ProviderError as exc:
        raise _provider_error(exc) from exc

    return ApiResponse(success=True, data=_metrics_to_response(metrics, i is not None))


@router.get(
    "/wind/{city}",
    response_model=ApiResponse[WindResponse],
    summary="查詢風況",
)
async def get_wind(
    city: str = Path(..., description="地點名稱", example="Rome"),
    i: Optional[str] = Query(None, description="存在時使用英制單位"),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[WindResponse]:
    try:
        wind = await service.get_wind(_city_name(city))
    except ProviderError as exc:
        raise _provider_error(exc) from exc

    return ApiResponse(success=True, data=_wind_to_response(wind, i is not None))


@router.get(
    "/forecast/{city}",
    response_model=ApiResponse[Union[DailyForecastResponse, HourlyForecastResponse]],
    summary="查詢天氣預報",
    description="預設回傳未來 4 天的每日預報；加上 ?h 參數改為未來 9 小時的逐時預報",
)
async def get_forecast(
    city: str = Path(..., description="地點名稱", example="Rome"),
    i: Optional[str] = Query(None, description="存在時使用英制單位"),
    h: Optional[str] = Query(None, description="存在時回傳逐時預報"),
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[Union[DailyForecastResponse, HourlyForecastResponse]]:
    name = _city_name(city)
    is_imperial = i is not None

    try:
        if h is not None:
            hourly = await service.get_hourly_forecast(name)
            return ApiResponse(success=True, data=_hourly_to_response(hourly, is_imperial))

        daily = await service.get_daily_forecast(name)
    except ProviderError as exc:
        raise _provider_error(exc) from exc

    return ApiResponse(success=True, data=_daily_to_response(daily, is_imperial))


@router.get(
    "/moon",
    response_model=ApiResponse[MoonResponse],
    summary="查詢月相",
)
async def get_moon(
    service: WeatherService = Depends(get_weather_service),
) -> ApiResponse[MoonResponse]:
    try:
        moon = await service.get_moon()
    except ProviderError as exc:
        raise _provider_error(exc) from exc

    return ApiResponse(success=True, data=_moon_to_response(moon))
