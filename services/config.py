from __future__ import annotations
import os

VERSION = "1.5.1"

def env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name, default)
    if v is not None and isinstance(v, str):
        v = v.strip()
    return v

def env_float(name: str, default: float) -> float:
    try:
        return float(env(name) or default)
    except ValueError:
        return default

def env_int(name: str, default: int) -> int:
    try:
        return int(env(name) or default)
    except ValueError:
        return default

# Upstream kline API
ALLTICK_URL = env("ALLTICK_URL", "https://alltick.co/quote/kline")
GOLD_CODE = env("GOLD_CODE", "XAUCNH")
HTTP_TIMEOUT = env_float("HTTP_TIMEOUT", 8.0)
NUM_POINTS = env_int("NUM_POINTS", 50)
KLINE_TYPE = env_int("KLINE_TYPE", 1)  # 1 = 1-minute candles

# Refresh hint (minutes)
UPDATE_MINUTES = env_int("UPDATE_MINUTES", 5)
OFFSET_MINUTES = env_int("OFFSET_MINUTES", 0)

# Chart
DEFAULT_SMOOTH_PATH = env_int("DEFAULT_SMOOTH_PATH", 0)
WIDGET_PARAMETER = env("WIDGET_PARAMETER")
CHART_WIDTH = env_float("CHART_WIDTH", 535.0)
CHART_HEIGHT = env_float("CHART_HEIGHT", 80.0)
LINE_WIDTH = env_float("LINE_WIDTH", 5.5)

TZ = env("WIDGET_TZ", "Asia/Shanghai")
