"""溫度統計 API 路由"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from zephyr.cache.entity import normalize_key
from zephyr.schemas.weather import AnomalyResponse, ApiResponse, StatisticsResponse
from zephyr.services.statistics import InsufficientDataError, StatisticsService, StatResult
from zephyr.state import get_statistics_service
from zephyr.utils.formatting import fmt_date, fmt_std_dev, fmt_temperature

router = APIRouter()


def _stats_to_response(stats: StatResult, is_imperial: bool) -> StatisticsResponse:
    """將統計結果轉換為 API 回應

    Args:
        stats: 統計結果
        is_imperial: 是否使用英制單位

    Returns:
        API 回應物件；沒有異常時 anomaly 為 None
    """
    anomaly = None
    if stats.anomalies:
        anomaly = [
            AnomalyResponse(
                date=fmt_date(item.date),
                temperature=fmt_temperature(item.temperature, is_imperial),
            )
            for item in stats.anomalies
        ]

    return StatisticsResponse(
        min=fmt_temperature(stats.min, is_imperial),
        max=fmt_temperature(stats.max, is_imperial),
        count=stats.count,
        mean=fmt_temperature(stats.mean, is_imperial),
        std_dev=fmt_std_dev(stats.stddev, is_imperial),
        median=fmt_temperature(stats.median, is_imperial),
        mode=fmt_temperature(stats.mode, is_imperial),
        anomaly=anomaly,
    )


@router.get(
    "/stats/{city}",
    response_model=ApiResponse[StatisticsResponse],
    summary="查詢歷史溫度統計",
    description="根據累積的每日平均溫度計算統計量與異常紀錄；近 2 天內少於 2 筆紀錄時無法計算",
)
async def get_statistics(
    city: str = Path(..., description="地點名稱", example="Rome"),
    i: Optional[str] = Query(None, description="存在時使用英制單位"),
    service: StatisticsService = Depends(get_statistics_service),
) -> ApiResponse[StatisticsResponse]:
    """查詢歷史溫度統計

    Raises:
        400: 地點名稱為空或資料不足
    """
    name = city.strip()
    if not name:
        raise HTTPException(status_code=400, detail="specify city name")

    try:
        stats = service.get_statistics(normalize_key(name))
    except InsufficientDataError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ApiResponse(success=True, data=_stats_to_response(stats, i is not None))
