# backend/tests/test_api.py
"""天氣與統計 API 測試"""

from datetime import date, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from zephyr.api.v1 import statistics as statistics_api
from zephyr.api.v1 import weather as weather_api
from zephyr.cache.entity import MasterCaches
from zephyr.cache.statistics import StatisticStore
from zephyr.config import settings
from zephyr.main import app
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
from zephyr.services.openweather import ProviderError
from zephyr.services.statistics import InsufficientDataError, StatisticsService
from zephyr.services.weather import WeatherService
from zephyr.state import get_client, get_statistics_service, get_weather_service

TODAY = date(2024, 3, 10)
WIND = Wind(arrow="↓", direction="N", speed=10.0)
WEATHER = Weather(
    date=TODAY,
    temperature=12.0,
    min=8.0,
    max=16.0,
    condition="Clear",
    feels_like=11.0,
    emoji="☀️",
    alerts=(WeatherAlert(
        event="Wind warning",
        start=datetime(2024, 3, 10, 9, 30, tzinfo=timezone.utc),
        end=datetime(2024, 3, 10, 15, 0, tzinfo=timezone.utc),
        description="Strong winds expected",
    ),),
)
DAILY = DailyForecast(forecast=(DailyForecastEntry(
    date=date(2024, 3, 11), min=7.0, max=15.0, condition="Rain", emoji="🌧️",
    feels_like=10.0, wind=WIND, rain_probability=80,
),))
HOURLY = HourlyForecast(forecast=(HourlyForecastEntry(
    time=datetime(2024, 3, 10, 15, 4, tzinfo=timezone.utc), temperature=12.0,
    condition="Clear", emoji="☀️", wind=WIND, rain_probability=0,
),))


@pytest.fixture
def upstream():
    """模擬上游客戶端"""
    mock = MagicMock()
    mock.get_coordinates = AsyncMock(return_value=City(name="Rome", lat=41.89, lon=12.48))
    mock.get_weather = AsyncMock(return_value=(WEATHER, 14.5))
    mock.get_metrics = AsyncMock(return_value=Metrics(70.0, 1015.0, 6.8, 1.2, 10000.0))
    mock.get_wind = AsyncMock(return_value=WIND)
    mock.get_daily_forecast = AsyncMock(return_value=DAILY)
    mock.get_hourly_forecast = AsyncMock(return_value=HOURLY)
    mock.get_moon = AsyncMock(return_value=Moon(icon="🌕", phase="Full Moon", percentage=50))
    return mock


@pytest.fixture
def store():
    return StatisticStore(today_func=lambda: TODAY)


@pytest.fixture
def client(upstream, store):
    """覆蓋服務依賴的測試客戶端"""
    weather_service = WeatherService(
        MasterCaches(), store, upstream, ttl_hours=3, today_func=lambda: TODAY
    )
    statistics_service = StatisticsService(store)

    app.dependency_overrides[get_weather_service] = lambda: weather_service
    app.dependency_overrides[get_statistics_service] = lambda: statistics_service
    yield TestClient(app)
    app.dependency_overrides.clear()


def _fill(store, temps, location="ROME"):
    for offset, temp in enumerate(temps):
        store.record(location, TODAY - timedelta(days=offset), temp)


def test_health(client):
    """測試健康檢查"""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestWeatherApi:
    """測試天氣查詢 API"""

    def test_get_weather(self, client):
        """測試即時天氣"""
        response = client.get("/api/v1/weather/Rome")

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["data"]["date"] == "Sunday, 2024/03/10"
        assert data["data"]["temperature"] == "12°C"
        assert data["data"]["min"] == "8°C"
        assert data["data"]["emoji"] == "☀️"

        alert = data["data"]["alerts"][0]
        assert alert["event"] == "Wind warning"
        assert alert["start_date"] == "Sunday, 2024/03/10 9:30 AM"
        assert alert["end_date"] == "Sunday, 2024/03/10 3:00 PM"

    def test_get_weather_imperial(self, client):
        """測試英制單位"""
        response = client.get("/api/v1/weather/Rome?i=")

        assert response.status_code == 200
        assert response.json()["data"]["temperature"] == "54°F"

    def test_get_weather_records_statistic(self, client, store):
        """測試即時天氣查詢會寫入統計紀錄"""
        client.get("/api/v1/weather/Rome")

        assert [r.temperature for r in store.records("Rome")] == [14.5]

    def test_blank_city(self, client):
        """測試空白地點名稱"""
        response = client.get("/api/v1/weather/%20")

        assert response.status_code == 400
        assert response.json()["detail"] == "specify city name"

    def test_provider_error(self, client, upstream):
        """測試上游錯誤轉為 400"""
        upstream.get_coordinates.side_effect = ProviderError("cannot find this city")

        response = client.get("/api/v1/weather/Atlantis")

        assert response.status_code == 400
        assert response.json()["detail"] == "cannot find this city"

    def test_get_metrics(self, client):
        """測試氣象指標"""
        response = client.get("/api/v1/metrics/Rome")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data == {
            "humidity": "70%",
            "pressure": "1015 hPa",
            "dew_point": "7°C",
            "uv_index": "1.2",
            "visibility": "10km",
        }

    def test_get_wind(self, client):
        """測試風況公制與英制"""
        metric = client.get("/api/v1/wind/Rome").json()["data"]
        imperial = client.get("/api/v1/wind/Rome?i=").json()["data"]

        assert metric == {"arrow": "↓", "direction": "N", "speed": "36.0 km/h"}
        assert imperial["speed"] == "22.4 mph"

    def test_get_daily_forecast(self, client):
        """測試每日預報"""
        response = client.get("/api/v1/forecast/Rome")

        assert response.status_code == 200
        entry = response.json()["data"]["forecast"][0]
        assert entry["date"] == "Monday, 2024/03/11"
        assert entry["rain_probability"] == "80%"
        assert entry["wind"]["speed"] == "36.0 km/h"

    def test_get_hourly_forecast(self, client, upstream):
        """測試逐時預報"""
        response = client.get("/api/v1/forecast/Rome?h=")

        assert response.status_code == 200
        entry = response.json()["data"]["forecast"][0]
        assert entry["time"] == "3:04 PM"
        assert entry["rain_probability"] == "0%"
        upstream.get_daily_forecast.assert_not_awaited()

    def test_get_moon(self, client):
        """測試月相"""
        response = client.get("/api/v1/moon")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "icon": "🌕",
            "phase": "Full Moon",
            "percentage": "50%",
        }


class TestMissingToken:
    """測試未設定 API 金鑰時的回應"""

    @pytest.fixture
    def bare_client(self, monkeypatch):
        """不覆蓋天氣服務依賴、且沒有 API 金鑰的測試客戶端"""
        monkeypatch.setattr(settings, "token", "")
        get_client.cache_clear()
        yield TestClient(app, raise_server_exceptions=False)
        get_client.cache_clear()

    @pytest.mark.parametrize("path", [
        "/api/v1/weather/Rome",
        "/api/v1/metrics/Rome",
        "/api/v1/wind/Rome",
        "/api/v1/forecast/Rome",
        "/api/v1/moon",
    ])
    def test_weather_routes_return_400(self, bare_client, path):
        """測試天氣路由回傳 400 而非 500"""
        response = bare_client.get(path)

        assert response.status_code == 400
        assert response.json()["detail"] == "ZEPHYR_TOKEN not set"


class TestStatisticsApi:
    """測試溫度統計 API"""

    def test_insufficient_data(self, client):
        """測試沒有紀錄時回傳 400"""
        response = client.get("/api/v1/stats/Rome")

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "insufficient or outdated data to perform statistical analysis"
        )

    def test_statistics(self, client, store):
        """測試統計結果格式"""
        _fill(store, [10.0, 12.0, 12.0, 14.0, 16.0, 20.0])

        response = client.get("/api/v1/stats/rome")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["min"] == "10°C"
        assert data["max"] == "20°C"
        assert data["count"] == 6
        assert data["mean"] == "14°C"
        assert data["std_dev"] == "3.2660°C"
        assert data["median"] == "13°C"
        assert data["mode"] == "12°C"
        assert data["anomaly"] is None

    def test_statistics_imperial(self, client, store):
        """測試英制統計"""
        _fill(store, [10.0, 12.0, 12.0, 14.0, 16.0, 20.0])

        data = client.get("/api/v1/stats/Rome?i=").json()["data"]

        assert data["mean"] == "57°F"
        assert data["std_dev"] == "5.8788°F"

    def test_statistics_anomaly(self, client, store):
        """測試異常紀錄"""
        _fill(store, [20.0, 21.0, 19.0, 20.0, 85.0, 20.0])

        data = client.get("/api/v1/stats/Rome").json()["data"]

        assert data["anomaly"] == [
            {"date": "Wednesday, 2024/03/06", "temperature": "85°C"}
        ]

    def test_weather_then_statistics(self, client, store):
        """測試即時天氣累積的紀錄可供統計使用"""
        store.record("Rome", TODAY - timedelta(days=1), 13.5)
        client.get("/api/v1/weather/Rome")

        response = client.get("/api/v1/stats/Rome")

        assert response.status_code == 200
        assert response.json()["data"]["count"] == 2

    def test_multi_word_city(self, client, store):
        """測試含空白的地點名稱"""
        _fill(store, [10.0, 12.0], location="New York")

        response = client.get("/api/v1/stats/new%20york")

        assert response.status_code == 200
        assert response.json()["data"]["count"] == 2


class TestErrorChaining:
    """測試 HTTP 錯誤保留原始例外"""

    @pytest.mark.asyncio
    async def test_provider_error_cause(self, upstream, store):
        upstream.get_coordinates.side_effect = ProviderError("cannot find this city")
        service = WeatherService(MasterCaches(), store, upstream, ttl_hours=3)

        with pytest.raises(HTTPException) as exc_info:
            await weather_api.get_weather(city="Atlantis", i=None, service=service)

        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value.__cause__, ProviderError)

    @pytest.mark.asyncio
    async def test_insufficient_data_cause(self, store):
        with pytest.raises(HTTPException) as exc_info:
            await statistics_api.get_statistics(
                city="Rome", i=None, service=StatisticsService(store)
            )

        assert isinstance(exc_info.value.__cause__, InsufficientDataError)

    def test_missing_token_cause(self, monkeypatch):
        monkeypatch.setattr(settings, "token", "")
        get_client.cache_clear()
        try:
            with pytest.raises(HTTPException) as exc_info:
                get_weather_service()
        finally:
            get_client.cache_clear()

        assert isinstance(exc_info.value.__cause__, ProviderError)
