# services/goldfeed.py
# Coleta de candles XAU/CNH no alltick.co, convertidos para CNH/grama

import math
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from services import config
from services.errors import FetchFailure
from services.models import Sample, Series

GRAMS_PER_OUNCE = 31.1034768
HEADERS = {
    "Content-Type": "application/json",
    "Referer": "https://alltick.co/",
    "Origin": "https://alltick.co/",
    "User-Agent": "Mozilla/5.0",
}

def _payload(num_points: int, kline_type: int) -> Dict[str, Any]:
    return {
        "data": {
            "code": config.GOLD_CODE,
            "kline_type": str(kline_type),
            "kline_timestamp_end": "0",
            "query_kline_num": str(num_points),
            "adjust_type": "0",
            "isStock": False,
        }
    }

def _timestamp(raw: Any) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError, OverflowError):
        return None

def parse_klines(js: Any) -> Series:
    """
    Valida a resposta e devolve a série em ordem cronológica (mais antigo primeiro).
    Só exige ret == 200 e kline_list não vazia.
    """
    if not isinstance(js, dict) or js.get("ret") != 200:
        raise FetchFailure(f"bad status: {js.get('ret') if isinstance(js, dict) else js!r}")
    data = js.get("data") or {}
    if not isinstance(data, dict):
        raise FetchFailure(f"malformed payload: data is {type(data).__name__}")
    rows = data.get("kline_list") or []
    if not isinstance(rows, list):
        raise FetchFailure(f"malformed payload: kline_list is {type(rows).__name__}")
    if not rows:
        raise FetchFailure("empty kline_list")

    out: List[Sample] = []
    for it in rows:
        try:
            price = float(it["close_price"]) / GRAMS_PER_OUNCE
        except (KeyError, TypeError, ValueError) as e:
            raise FetchFailure(f"malformed kline {it!r}: {e}") from e
        if not math.isfinite(price):
            raise FetchFailure(f"malformed kline {it!r}: close_price not finite")
        out.append(Sample(price, _timestamp(it.get("timestamp"))))

    # alltick costuma mandar do mais antigo ao mais novo; ordena quando dá
    if all(s.timestamp is not None for s in out):
        out.sort(key=lambda s: s.timestamp)
    return out

async def fetch_gold_series(num_points: int = config.NUM_POINTS, kline_type: int = config.KLINE_TYPE,
                            *, client: Optional[httpx.AsyncClient] = None) -> Series:
    payload = _payload(num_points, kline_type)
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=config.HTTP_TIMEOUT, headers=HEADERS) as c:
                r = await c.post(config.ALLTICK_URL, json=payload)
        else:
            r = await client.post(config.ALLTICK_URL, json=payload, headers=HEADERS)
        r.raise_for_status()
        js = r.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("alltick fetch fail (kline_type={}, num={}): {}", kline_type, num_points, e)
        raise FetchFailure(f"network or parsing error: {e}") from e

    try:
        return parse_klines(js)
    except FetchFailure as e:
        logger.warning("alltick no data (kline_type={}, num={}): {}", kline_type, num_points, e.reason)
        raise
