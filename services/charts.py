from __future__ import annotations
from typing import List, Optional, Sequence

from loguru import logger

from services import config
from services.models import ChartPath, CurveTo, LineTo, MoveTo, Point2D

FLAT_THRESHOLD = 0.1
FLAT_PADDING = 0.5
RANGE_PADDING = 0.05

def normalize(values: Sequence[float], width: float, height: float) -> List[Point2D]:
    """
    Escala a série para a caixa (width, height), eixo y invertido.

    Séries quase planas (amplitude < 0.1) ganham ±0.5 de folga; as demais, 5%
    da amplitude em cada lado. Um único ponto fica em x = width.
    """
    if not values:
        return []

    lo, hi = min(values), max(values)
    spread = hi - lo
    if spread < FLAT_THRESHOLD:
        lo -= FLAT_PADDING; hi += FLAT_PADDING
    else:
        lo -= spread * RANGE_PADDING; hi += spread * RANGE_PADDING
    spread = hi - lo

    count = len(values)
    points = []
    for i, v in enumerate(values):
        ratio = 0.5 if spread == 0 else (v - lo) / spread
        y = height - ratio * height
        y = max(0.0, min(height, y))  # clamp overshoot
        x = width * i / (count - 1) if count > 1 else width
        points.append(Point2D(x, y))
    return points

def build_path(points: Sequence[Point2D], smooth: bool = False) -> ChartPath:
    if not points:
        return ChartPath()
    ins = [MoveTo(points[0])]
    if smooth:
        for a, b in zip(points, points[1:]):
            mid = a.midpoint(b)
            ins.append(CurveTo(b, mid.midpoint(a), mid.midpoint(b)))
    else:
        ins.extend(LineTo(p) for p in points[1:])
    return ChartPath(tuple(ins))

def resolve_smoothing(raw: Optional[str], default: int = config.DEFAULT_SMOOTH_PATH) -> bool:
    """Widget parameter -> smoothing flag. Aceita só "0" ou "1"."""
    if raw is None or not str(raw).strip():
        return default == 1
    try:
        mode = int(str(raw).strip())
    except ValueError:
        mode = None
    if mode not in (0, 1):
        logger.warning("invalid smoothPath parameter {!r}, using default {}", raw, default)
        return default == 1
    return mode == 1
