"""顯示格式化工具

單位換算（公制 / 英制）、顯示字串、天氣表情符號、風向與月相對照。
"""

import math
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional


# 1 m/s = 3.6 km/h = 2.23694 mph
MS_TO_KMH = 3.6
MS_TO_MPH = 2.23694


def round_half_away(value: float) -> int:
    """四捨五入到整數（.5 遠離 0）"""
    return int(Decimal(repr(float(value))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def fmt_temperature(value: float, is_imperial: bool = False) -> str:
    """溫度字串，如 '12°C' 或 '54°F'"""
    if is_imperial:
        return f"{round_half_away(celsius_to_fahrenheit(value))}°F"
    return f"{round_half_away(value)}°C"


def fmt_std_dev(value: float, is_imperial: bool = False) -> str:
    """標準差字串，保留 4 位小數

    標準差是溫差而非溫度，英制只做比例換算，不加 32 的偏移。
    """
    if is_imperial:
        return f"{value * 9 / 5:.4f}°F"
    return f"{value:.4f}°C"


def fmt_wind(speed_ms: float, is_imperial: bool = False) -> str:
    """風速字串，輸入單位為 m/s"""
    if is_imperial:
        return f"{speed_ms * MS_TO_MPH:.1f} mph"
    return f"{speed_ms * MS_TO_KMH:.1f} km/h"


def fmt_number(value: float) -> str:
    """去除多餘小數的數字字串（10.0 -> '10'，10.5 -> '10.5'）"""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def fmt_percentage(value: float) -> str:
    return f"{fmt_number(value)}%"


def fmt_pressure(value: float) -> str:
    return f"{fmt_number(value)} hPa"


def fmt_visibility(meters: Optional[float]) -> str:
    """能見度字串，輸入單位為公尺"""
    if meters is None:
        return "N/A"
    return f"{fmt_number(meters / 1000)}km"


def _fmt_clock(value: datetime) -> str:
    hour = value.hour % 12 or 12
    return f"{hour}:{value:%M} {'AM' if value.hour < 12 else 'PM'}"


def fmt_date(value: date) -> str:
    """'Monday, 2024/01/01'"""
    return value.strftime("%A, %Y/%m/%d")


def fmt_time(value: datetime) -> str:
    """'3:04 PM'"""
    return _fmt_clock(value)


def fmt_alert_date(value: datetime) -> str:
    """'Monday, 2024/01/01 3:04 PM'"""
    return f"{fmt_date(value)} {_fmt_clock(value)}"


# ============================================================================
# 天氣狀況
# ============================================================================

# 描述文字對應的天氣狀況（其餘沿用主分類）
CONDITION_OVERRIDES = {
    "few clouds": "SunWithCloud",
    "broken clouds": "CloudWithSun",
}

_CONDITION_EMOJI = {
    "Thunderstorm": "⛈️",
    "Drizzle": "🌦️",
    "Rain": "🌧️",
    "Snow": "☃️",
    "Tornado": "🌪️",
    "SunWithCloud": "🌤️",
    "CloudWithSun": "🌥️",
}

_CLOUDY_CONDITIONS = {
    "Mist", "Smoke", "Haze", "Dust", "Fog", "Sand", "Ash", "Squall", "Clouds",
}


def resolve_condition(title: str, description: str) -> str:
    """依天氣描述決定狀況分類"""
    return CONDITION_OVERRIDES.get(description, title)


def get_emoji(condition: str, is_night: bool = False) -> str:
    """天氣狀況對應的表情符號"""
    if condition == "Clear":
        return "🌙" if is_night else "☀️"
    if condition in _CLOUDY_CONDITIONS:
        return "☁️"
    return _CONDITION_EMOJI.get(condition, "❓")


# ============================================================================
# 風向
# ============================================================================

# 八方位與箭頭（箭頭指向風吹往的方向）
_COMPASS = [
    ("N", "↓"),
    ("NE", "↙"),
    ("E", "←"),
    ("SE", "↖"),
    ("S", "↑"),
    ("SW", "↗"),
    ("W", "→"),
    ("NW", "↘"),
]


def get_cardinal_direction(degrees: float) -> tuple[str, str]:
    """將風向角度轉為 (方位, 箭頭)

    Args:
        degrees: 風的來向角度，0 為北風，順時針遞增

    Returns:
        (方位, 箭頭)，如 ("N", "↓")
    """
    index = int(math.floor((degrees % 360) / 45 + 0.5)) % len(_COMPASS)
    return _COMPASS[index]


# ============================================================================
# 月相
# ============================================================================


def get_moon_phase(fraction: float) -> tuple[str, str, int]:
    """將 0~1 的月相值轉為 (名稱, 圖示, 百分比)"""
    if not 0.0 <= fraction <= 1.0:
        raise ValueError(f"moon phase must be within [0, 1], got {fraction}")

    percentage = round_half_away(fraction * 100)

    if fraction in (0.0, 1.0):
        name, icon = "New Moon", "🌑"
    elif fraction == 0.25:
        name, icon = "First Quarter", "🌓"
    elif fraction == 0.5:
        name, icon = "Full Moon", "🌕"
    elif fraction == 0.75:
        name, icon = "Last Quarter", "🌗"
    elif fraction < 0.25:
        name, icon = "Waxing Crescent", "🌒"
    elif fraction < 0.5:
        name, icon = "Waxing Gibbous", "🌔"
    elif fraction < 0.75:
        name, icon = "Waning Gibbous", "🌖"
    else:
        name, icon = "Waning Crescent", "🌘"

    return name, icon, percentage
