# services/rendering.py
# Desenha o ChartPath em PNG transparente (ou o placeholder de dados insuficientes)
import io
from typing import Sequence
import matplotlib
matplotlib.use("Agg")
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch

from services import config
from services.charts import build_path, normalize
from services.models import GRAY, ChartPath

PLACEHOLDER_TEXT = "图表数据不足"
DPI = 100

def _canvas(width: float, height: float):
    fig = Figure(figsize=(width / DPI, height / DPI), dpi=DPI)
    fig.patch.set_alpha(0)
    ax = fig.add_axes([0, 0, 1, 1])
    ax.set_xlim(0, width)
    ax.set_ylim(height, 0)  # device coords: y grows downward
    ax.set_axis_off()
    ax.patch.set_alpha(0)
    return fig, ax

def _png(fig) -> bytes:
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=DPI, transparent=True)
    return buf.getvalue()

def render_chart_png(path: ChartPath, color: str, line_width: float,
                     width: float = config.CHART_WIDTH, height: float = config.CHART_HEIGHT) -> bytes:
    fig, ax = _canvas(width, height)
    if len(path) > 1:
        patch = PathPatch(path.to_mpl(), fill=False, edgecolor=color, linewidth=line_width,
                          capstyle="round", joinstyle="round")
        patch.set_clip_on(False)
        ax.add_patch(patch)
    return _png(fig)

def render_placeholder_png(message: str = PLACEHOLDER_TEXT,
                           width: float = config.CHART_WIDTH, height: float = config.CHART_HEIGHT) -> bytes:
    fig, ax = _canvas(width, height)
    ax.text(width / 2, height / 2, message, ha="center", va="center", color=GRAY, fontsize=10)
    return _png(fig)

def render_chart(values: Sequence[float], color: str, *, width: float = config.CHART_WIDTH,
                 height: float = config.CHART_HEIGHT, line_width: float = config.LINE_WIDTH,
                 smooth: bool = False) -> bytes:
    """Normalizer -> path builder -> PNG. Menos de 2 pontos vira placeholder."""
    if len(values) < 2:
        return render_placeholder_png(width=width, height=height)
    path = build_path(normalize(values, width, height), smooth)
    return render_chart_png(path, color, line_width, width, height)
