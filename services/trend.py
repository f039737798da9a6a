# services/trend.py
# Tendência: último candle vs. anterior (cores padrão A-share: alta vermelha, baixa verde)

from __future__ import annotations
import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Sequence

from loguru import logger

from services.errors import InsufficientSamples
from services.models import TREND_COLORS, Sample, TrendDirection, TrendResult

def _pct_change(current: float, previous: float) -> float:
    # Two decimals, half away from zero (Decimal's ROUND_HALF_UP)
    basis = (current / previous - 1) * 10000
    if not math.isfinite(basis):
        return basis
    with localcontext() as ctx:
        ctx.prec = 400  # enough integer digits for any finite float
        rounded = Decimal(repr(basis)).quantize(Decimal(1), rounding=ROUND_HALF_UP)
    return float(rounded) / 100 + 0.0  # no -0.0

def _result(direction: TrendDirection, pct: float) -> TrendResult:
    return TrendResult(direction, pct, TREND_COLORS[direction])

def evaluate_trend(series: Sequence[Sample]) -> TrendResult:
    if len(series) < 2:
        raise InsufficientSamples(len(series))
    current, previous = series[-1], series[-2]

    if previous.price <= 0:
        logger.warning("previous price {} invalid, trend unavailable", previous.price)
        return _result(TrendDirection.UNAVAILABLE, 0.0)

    pct = _pct_change(current.price, previous.price)
    if not math.isfinite(pct):
        logger.warning("change {} -> {} not representable, trend unavailable", previous.price, current.price)
        return _result(TrendDirection.UNAVAILABLE, 0.0)
    if current.price > previous.price:
        return _result(TrendDirection.UP, pct)
    if current.price < previous.price:
        return _result(TrendDirection.DOWN, pct)
    return _result(TrendDirection.FLAT, 0.0)
