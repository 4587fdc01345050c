import io
import logging
from dataclasses import dataclass

import matplotlib

matplotlib.use("Agg")  # no display inside Lambda
import matplotlib.pyplot as plt  # noqa: E402

from billing_report.errors import RenderError  # noqa: E402

logger = logging.getLogger(__name__)

# Services below this share of the total (in %) go into the Others slice
OTHERS_THRESHOLD = 1.0
OTHERS_LABEL = "Others"

CHART_SIZE_PX = 512
CHART_DPI = 128


@dataclass
class Slice:
    label: str
    value: float


def build_slices(entries):
    """One slice per service at or above the threshold, plus a trailing Others slice."""
    slices = []
    others = Slice(label=OTHERS_LABEL, value=0.0)
    for entry in entries:
        if entry.ratio < OTHERS_THRESHOLD:
            others.value += entry.cost
            continue
        slices.append(Slice(label=entry.name, value=entry.cost))
    slices.append(others)
    return slices


def draw_pie_chart(entries):
    """Render the cost entries as a 512x512 PNG pie chart in memory."""
    if not entries:
        raise RenderError("No cost entries to draw")
    slices = build_slices(entries)
    if not any(s.value for s in slices):
        raise RenderError("All pie chart slices are zero")

    size = CHART_SIZE_PX / CHART_DPI
    fig = plt.figure(figsize=(size, size), dpi=CHART_DPI)
    try:
        ax = fig.add_subplot(1, 1, 1)
        colors = plt.colormaps["tab20"](range(len(slices)))
        ax.pie(
            [s.value for s in slices],
            labels=[s.label for s in slices],
            colors=colors,
            startangle=90,
            counterclock=False,
            textprops={"fontsize": 8},
        )
        ax.axis("equal")

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=CHART_DPI)
    except (ValueError, TypeError, RuntimeError) as e:
        logger.error(f"render error = {e}")
        raise RenderError(f"Could not draw pie chart: {e}") from e
    finally:
        plt.close(fig)

    buffer.seek(0)
    return buffer
