"""Time label shown under the cursor on the bottom axis."""

from __future__ import annotations

from klinebacktest.datafile import DataFile
from klinebacktest.datawindow import DataWindow


def time_label(data: DataFile, window: DataWindow, x: int) -> str | None:
    """Time of the bar at ``x`` while the cross is shown; None when nothing is shown."""
    if not window.cross:
        return None
    layout = window.layout
    if x < layout.margin_left or x > layout.grid_width + layout.margin_left:
        return None
    return data.kline[window.index_at(x)].time