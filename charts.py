# Geometry for the hand-drawn charts. Nothing here touches Tk, so the
# numbers can be checked without a display.

import math
from collections import namedtuple

# Dracula palette: purple, cyan, pink, green, orange, yellow
CHART_COLORS = ["#bd93f9", "#8be9fd", "#ff79c6", "#50fa7b", "#ffb86c", "#f1fa8c"]

PieSlice = namedtuple("PieSlice", "label value start extent fraction")
Bar = namedtuple("Bar", "label value length")


def color_for_index(index):
    return CHART_COLORS[index % len(CHART_COLORS)]


def format_currency(value, symbol="$"):
    return f"{symbol}{value:,.2f}"


def format_percent(fraction):
    return f"{fraction * 100:.1f}%"


def pie_slices(data):
    """
    Turn {label: value} into slices for Canvas.create_arc.

    Angles are in degrees, counter-clockwise from 3 o'clock, the way Tk
    expects them. Non-positive values get no slice; an empty or all-zero
    mapping gives an empty list.
    """
    values = [(label, value) for label, value in data.items() if value > 0]
    total = sum(value for _, value in values)
    if total <= 0:
        return []
    slices = []
    start = 0.0
    for label, value in values:
        fraction = value / total
        extent = 360.0 * fraction
        slices.append(PieSlice(label, value, start, extent, fraction))
        start += extent
    return slices


def slice_label_point(cx, cy, radius, pie_slice):
    """Point on the bisector of a slice, `radius` away from the centre."""
    angle = math.radians(pie_slice.start + pie_slice.extent / 2)
    # canvas y grows downwards
    return cx + radius * math.cos(angle), cy - radius * math.sin(angle)


def bar_lengths(data, max_length):
    """Scale {label: value} so the largest value spans max_length pixels."""
    if not data:
        return []
    peak = max(data.values())
    bars = []
    for label, value in data.items():
        length = int(value / peak * max_length) if peak > 0 else 0
        bars.append(Bar(label, value, max(length, 0)))
    return bars
