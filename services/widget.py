# services/widget.py
# Um ciclo de atualização: fetch -> tendência -> gráfico -> widget

from __future__ import annotations
from datetime import datetime
from typing import Awaitable, Callable, Optional

from loguru import logger
from starlette.concurrency import run_in_threadpool

from services import config
from services.charts import resolve_smoothing
from services.errors import FetchFailure, InsufficientSamples
from services.goldfeed import fetch_gold_series
from services.models import Series, Widget
from services.rendering import render_chart
from services.trend import evaluate_trend
import utils

TITLE = "黄金 (XAU/CNH)"
SUBTITLE = "人民币 / 克"
BACKGROUND = ("#191a19", "#0d0d0d")
ERROR_BACKGROUND = ("#551111", "#330000")
MSG_NO_DATA = "无法获取足够黄金数据进行比较。"
MSG_ONE_POINT = "仅获取到1个数据点，无法计算变化。"

Fetcher = Callable[[int, int], Awaitable[Series]]

def error_widget(message: str, now: Optional[datetime] = None) -> Widget:
    return Widget(background=ERROR_BACKGROUND, error=message, next_refresh=utils.next_refresh(now))

async def build_widget(smooth_param: Optional[str] = None, *, fetch: Fetcher = fetch_gold_series,
                       now: Optional[datetime] = None) -> Widget:
    """
    Monta o widget. Nunca levanta por falta de dados: falha de fetch ou série
    com menos de 2 pontos viram widget de erro.
    """
    smooth = resolve_smoothing(smooth_param if smooth_param is not None else config.WIDGET_PARAMETER)

    try:
        series = await fetch(config.NUM_POINTS, config.KLINE_TYPE)
        trend = evaluate_trend(series)
    except FetchFailure as e:
        logger.error("failed to fetch gold data: {}", e.reason)
        return error_widget(MSG_NO_DATA, now)
    except InsufficientSamples as e:
        logger.error("failed to fetch enough data points (need >= 2), got {}", e.count)
        return error_widget(MSG_ONE_POINT if e.count == 1 else MSG_NO_DATA, now)

    current = series[-1]
    chart = await run_in_threadpool(
        render_chart, [s.price for s in series], trend.color, width=config.CHART_WIDTH,
        height=config.CHART_HEIGHT, line_width=config.LINE_WIDTH, smooth=smooth,
    )
    widget = Widget(
        background=BACKGROUND,
        title=TITLE,
        subtitle=SUBTITLE,
        trend_label=utils.fmt_trend(trend),
        price_label=utils.fmt_price(current.price),
        color=trend.color,
        chart_png=chart,
        update_time=utils.fmt_update_time(current.timestamp),
        next_refresh=utils.next_refresh(now),
        trend=trend,
    )
    logger.info("widget refreshed: {} {} ({} points)", widget.price_label, widget.trend_label, len(series))
    return widget
