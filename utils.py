from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from loguru import logger

from services import config
from services.models import TrendDirection, TrendResult

UPDATE_NA = "更新时间: N/A"

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def fmt_price(v) -> str:
    return f"{float(v):.2f}"

def fmt_trend(t: TrendResult) -> str:
    if t.direction is TrendDirection.UP:
        return f"↑ +{t.percent_change:.2f}%"
    if t.direction is TrendDirection.DOWN:
        return f"↓ {t.percent_change:.2f}%"
    if t.direction is TrendDirection.FLAT:
        return "→ 0.00%"
    return "-"

def fmt_update_time(ts: Optional[int], tz: str = config.TZ) -> str:
    """Horário do candle atual (HH:MM) no fuso do widget; "N/A" se não der para ler."""
    if ts is None:
        logger.warning("timestamp missing in current sample")
        return UPDATE_NA
    try:
        when = datetime.fromtimestamp(int(ts), tz=ZoneInfo(tz))
    except (ValueError, OverflowError, OSError, KeyError) as e:
        logger.warning("timestamp {!r} unparseable: {}", ts, e)
        return UPDATE_NA
    return f"更新: {when:%H:%M}"

def next_refresh(now: Optional[datetime] = None) -> datetime:
    now = now or utcnow()
    return now + timedelta(minutes=config.UPDATE_MINUTES + config.OFFSET_MINUTES)
