"""天氣 API Pydantic Schema 定義

所有數值皆已依公制 / 英制格式化為顯示字串。
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class WeatherAlertResponse(BaseModel):
    """天氣警特報"""

    event: str = Field(..., description="事件名稱")
    start_date: str = Field(..., description="開始時間")
    end_date: str = Field(..., description="結束時間")
    description: str = Field(..., description="描述（第一行）")


class WeatherResponse(BaseModel):
    """即時天氣回應"""

    date: str = Field(..., description="觀測日期")
    temperature: str = Field(..., description="目前溫度")
    min: str = Field(..., description="今日最低溫")
    max: str = Field(..., description="今日最高溫")
    condition: str = Field(..., description="天氣狀況")
    feels_like: str = Field(..., description="體感溫度")
    emoji: str = Field(..., description="天氣表情符號")
    alerts: list[WeatherAlertResponse] = Field(default_factory=list, description="天氣警特報")

    class Config:
        json_schema_extra = {
            "example": {
                "date": "Monday, 2024/01/01",
                "temperature": "12°C",
                "min": "8°C",
                "max": "14°C",
                "condition": "Clear",
                "feels_like": "11°C",
                "emoji": "☀️",
                "alerts": [],
            }
        }


class MetricsResponse(BaseModel):
    """氣象指標回應"""

    humidity: str = Field(..., description="相對濕度")
    pressure: str = Field(..., description="氣壓")
    dew_point: str = Field(..., description="露點溫度")
    uv_index: str = Field(..., description="紫外線指數")
    visibility: str = Field(..., description="能見度")


class WindResponse(BaseModel):
    """風況回應"""

    arrow: str = Field(..., description="風向箭頭")
    direction: str = Field(..., description="風向方位")
    speed: str = Field(..., description="風速")


class DailyForecastItem(BaseModel):
    """單日預報"""

    date: str
    min: str
    max: str
    condition: str
    emoji: str
    feels_like: str
    wind: WindResponse
    rain_probability: str


class DailyForecastResponse(BaseModel):
    """每日預報回應"""

    forecast: list[DailyForecastItem] = Field(..., description="未來 4 天預報")


class HourlyForecastItem(BaseModel):
    """單小時預報"""

    time: str
    temperature: str
    condition: str
    emoji: str
    wind: WindResponse
    rain_probability: str


class HourlyForecastResponse(BaseModel):
    """逐時預報回應"""

    forecast: list[HourlyForecastItem] = Field(..., description="未來 9 小時預報")


class MoonResponse(BaseModel):
    """月相回應"""

    icon: str = Field(..., description="月相圖示")
    phase: str = Field(..., description="月相名稱")
    percentage: str = Field(..., description="月相進度")


class AnomalyResponse(BaseModel):
    """異常紀錄"""

    date: str = Field(..., description="日期")
    temperature: str = Field(..., description="當日平均溫度")


class StatisticsResponse(BaseModel):
    """溫度統計回應"""

    min: str = Field(..., description="最低日平均溫度")
    max: str = Field(..., description="最高日平均溫度")
    count: int = Field(..., ge=0, description="紀錄筆數")
    mean: str = Field(..., description="平均值")
    std_dev: str = Field(..., description="母體標準差")
    median: str = Field(..., description="中位數")
    mode: str = Field(..., description="眾數")
    anomaly: Optional[list[AnomalyResponse]] = Field(None, description="異常紀錄（無異常時為 null）")

    class Config:
        json_schema_extra = {
            "example": {
                "min": "8°C",
                "max": "16°C",
                "count": 14,
                "mean": "12°C",
                "std_dev": "2.1380°C",
                "median": "12°C",
                "mode": "11°C",
                "anomaly": None,
            }
        }


class ApiResponse(BaseModel, Generic[T]):
    """API 回應包裝"""

    success: bool = Field(True, description="請求是否成功")
    data: Optional[T] = Field(None, description="回應資料")
    error: Optional[str] = Field(None, description="錯誤訊息")

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {},
                "error": None
            }
        }
