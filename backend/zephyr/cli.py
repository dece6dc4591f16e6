"""CLI 命令列工具

提供啟動 API 伺服器等命令列功能。
"""

import logging

import click
import uvicorn

from zephyr.config import settings
from zephyr.services.statistics import seed_statistics
from zephyr.state import stat_store


def setup_logging(level: str) -> None:
    """設定全域日誌格式與等級"""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


@click.group()
def cli():
    """Zephyr CLI 工具"""
    pass


@cli.command()
@click.option("--host", default=None, help="監聽位址（預設讀取 ZEPHYR_HOST）")
@click.option("--port", default=None, type=int, help="監聽埠號（預設讀取 ZEPHYR_PORT）")
@click.option("--seed", "seed_cities", multiple=True, help="啟動前為指定地點填入模擬統計資料，可重複指定")
@click.option("--seed-count", default=30, show_default=True, help="每個地點的模擬紀錄筆數")
@click.option("--seed-mean", default=15.0, show_default=True, help="模擬溫度平均值 (°C)")
@click.option("--seed-stddev", default=5.0, show_default=True, help="模擬溫度標準差 (°C)")
def serve(host, port, seed_cities, seed_count, seed_mean, seed_stddev):
    """啟動 API 伺服器"""
    setup_logging(settings.log_level)

    if not settings.token:
        raise click.ClickException("ZEPHYR_TOKEN not set")

    for city in seed_cities:
        inserted = seed_statistics(stat_store, city, seed_count, seed_mean, seed_stddev)
        click.echo(f"已為 {city} 填入 {inserted} 筆模擬統計資料")

    uvicorn.run(
        "zephyr.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
