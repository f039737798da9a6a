# services/models.py
# Tipos do widget: amostras, pontos, caminho do gráfico, tendência e widget composto

from __future__ import annotations
import base64
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from matplotlib.path import Path as MplPath

# iOS system palette
RED = "#FF3B30"
GREEN = "#34C759"
ORANGE = "#FF9500"
GRAY = "#8E8E93"
WHITE = "#FFFFFF"


@dataclass(frozen=True)
class Sample:
    price: float
    timestamp: Optional[int]  # None when upstream value is unparseable


Series = List[Sample]


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    def midpoint(self, other: "Point2D") -> "Point2D":
        return Point2D((self.x + other.x) / 2, (self.y + other.y) / 2)


@dataclass(frozen=True)
class MoveTo:
    point: Point2D


@dataclass(frozen=True)
class LineTo:
    point: Point2D


@dataclass(frozen=True)
class CurveTo:
    point: Point2D
    cp1: Point2D
    cp2: Point2D


Instruction = Union[MoveTo, LineTo, CurveTo]


@dataclass(frozen=True)
class ChartPath:
    instructions: Tuple[Instruction, ...] = ()

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self):
        return iter(self.instructions)

    def to_mpl(self) -> MplPath:
        """Convert to a matplotlib Path (MOVETO / LINETO / CURVE4 codes)."""
        verts: List[Tuple[float, float]] = []
        codes: List[int] = []
        for ins in self.instructions:
            if isinstance(ins, MoveTo):
                verts.append((ins.point.x, ins.point.y)); codes.append(MplPath.MOVETO)
            elif isinstance(ins, LineTo):
                verts.append((ins.point.x, ins.point.y)); codes.append(MplPath.LINETO)
            else:
                # CURVE4 takes control points first, end point last
                for p in (ins.cp1, ins.cp2, ins.point):
                    verts.append((p.x, p.y)); codes.append(MplPath.CURVE4)
        if not verts:
            return MplPath([(0.0, 0.0)], [MplPath.MOVETO])
        return MplPath(verts, codes)


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    FLAT = "flat"
    UNAVAILABLE = "unavailable"


TREND_COLORS = {
    TrendDirection.UP: RED,
    TrendDirection.DOWN: GREEN,
    TrendDirection.FLAT: ORANGE,
    TrendDirection.UNAVAILABLE: GRAY,
}


@dataclass(frozen=True)
class TrendResult:
    direction: TrendDirection
    percent_change: float
    color: str


@dataclass
class Widget:
    """Widget composto; mesmo nos caminhos de erro sempre é renderizável."""
    background: Tuple[str, str]
    title: str = ""
    subtitle: str = ""
    trend_label: str = ""
    price_label: str = ""
    color: str = WHITE
    chart_png: Optional[bytes] = None
    update_time: str = ""
    next_refresh: Optional[datetime] = None
    trend: Optional[TrendResult] = None
    error: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "ok": not self.is_error,
            "background": list(self.background),
            "next_refresh": self.next_refresh.isoformat() if self.next_refresh else None,
        }
        if self.is_error:
            out["error"] = self.error
            return out
        out.update({
            "title": self.title,
            "subtitle": self.subtitle,
            "trend_label": self.trend_label,
            "price_label": self.price_label,
            "color": self.color,
            "update_time": self.update_time,
            "chart_png": base64.b64encode(self.chart_png).decode("ascii") if self.chart_png else None,
        })
        if self.trend:
            out["trend"] = {
                "direction": self.trend.direction.value,
                "percent_change": self.trend.percent_change,
                "color": self.trend.color,
            }
        return out
