"""應用程式設定模組

使用 pydantic-settings 管理應用程式配置，
支援從環境變數（前綴 ZEPHYR_）和 .env 檔案載入設定。
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """應用程式設定類別

    Attributes:
        app_name: 應用程式名稱
        debug: 是否啟用除錯模式
        host: 伺服器監聽位址
        port: 伺服器監聽埠號
        token: OpenWeatherMap API 金鑰
        cache_ttl: 快取存活時間（小時）
        owm_base_url: One Call API 端點
        owm_geo_url: Geocoding API 端點
        request_timeout: 上游請求逾時（秒）
        moon_latitude: 月相查詢使用的參考緯度
        moon_longitude: 月相查詢使用的參考經度
        anomaly_threshold: 異常判定的標準差倍數
        stats_window_days: 資料充足性判定的回溯天數
        stats_min_records: 回溯視窗內至少需要的紀錄筆數
        log_level: 日誌等級
    """

    app_name: str = "Zephyr API"
    debug: bool = False
    host: str = "127.0.0.1"
    port: int = Field(3000, ge=1, le=65535)
    token: str = ""
    cache_ttl: int = Field(3, ge=1, le=127)

    owm_base_url: str = "https://api.openweathermap.org/data/3.0/onecall"
    owm_geo_url: str = "https://api.openweathermap.org/geo/1.0/direct"
    request_timeout: float = 10.0

    # 月相與地點無關，任選一組座標即可
    moon_latitude: float = 41.8933
    moon_longitude: float = 12.4829

    anomaly_threshold: float = Field(2.0, gt=0)
    stats_window_days: int = Field(2, ge=0)
    stats_min_records: int = Field(2, ge=1)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="ZEPHYR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# 全域設定實例
settings = Settings()
