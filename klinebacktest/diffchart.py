"""Chart of the simple strategy's capital deviation from its average, with its drawdown."""

from __future__ import annotations

import math
from dataclasses import dataclass

from klinebacktest.datafile import DataFile
from klinebacktest.datawindow import DataWindow

POSITIVE_COLOR = "#55FCFC"
NEGATIVE_COLOR = "red"
BACKTRACK_COLOR = "yellow"
MIN_LINE_WIDTH = 3
BAR_GAP_RATIO = 0.2
TICK_LABEL_OFFSET = 10

Point = tuple[int, int]


@dataclass(frozen=True)
class DiffBar:
    """Outline of one deviation bar between the zero line and ``top``."""

    index: int
    left: int
    right: int
    top: int
    zero: int
    positive: bool
    color: str


class CapitalDiffChart:
    """Works out what the capital deviation chart shows for the visible window."""

    def __init__(self, data: DataFile, window: DataWindow) -> None:
        self.data = data
        self.window = window
        self.max_volume = 0.0
        self.highest_backtrack = 0.0
        self.lowest_backtrack = math.inf
        self.yp_zero_line = 0
        self.line_width = MIN_LINE_WIDTH

    def _visible(self):
        return range(max(self.window.begin, 0), self.window.end)

    def compute_ranges(self) -> None:
        """Largest absolute deviation, drawdown range, zero line and bar width."""
        layout = self.window.layout
        self.max_volume = 0.0
        self.highest_backtrack = 0.0
        self.lowest_backtrack = math.inf
        for i in self._visible():
            bar = self.data.kline[i]
            self.max_volume = max(self.max_volume, abs(bar.capital_avg_diff_for_simple_strategy))
            backtrack = bar.capital_backtrack_for_simple_strategy
            if backtrack > self.highest_backtrack:
                self.highest_backtrack = backtrack
            elif backtrack < self.lowest_backtrack:
                self.lowest_backtrack = backtrack
        self.yp_zero_line = int(layout.height - layout.grid_height / 2)
        width = int(layout.grid_width / self.window.total) if self.window.total else 0
        width = int(width - BAR_GAP_RATIO * width)
        self.line_width = max(width, MIN_LINE_WIDTH)

    def y_ticks(self) -> list[tuple[str, int, int]]:
        """Axis labels as ``(text, x, y)``: from the zero line upwards, then downwards."""
        self.compute_ranges()
        layout = self.window.layout
        x = int(layout.width - layout.margin_right + TICK_LABEL_OFFSET)
        half = layout.h_grid_num // 2
        ystep = self.max_volume / half if half else 0.0
        atom = layout.atom_grid_height
        ticks = [
            (str(int(i * ystep)), x, int(self.yp_zero_line - i * atom))
            for i in range(layout.h_grid_num + 1)
        ]
        ticks.extend(
            (str(int(i * ystep)), x, int(self.yp_zero_line + i * atom))
            for i in range(1, layout.h_grid_num + 1)
        )
        return ticks

    def bars(self) -> list[DiffBar]:
        """One outlined bar per visible bar, rising above or falling below zero."""
        self.compute_ranges()
        layout = self.window.layout
        xstep = layout.grid_width / self.window.total
        yscale = layout.grid_height / 2.0 / self.max_volume if self.max_volume > 0.0 else 0.0
        zero = int(self.yp_zero_line - layout.margin_bottom)
        result = []
        for i in self._visible():
            value = self.data.kline[i].capital_avg_diff_for_simple_strategy
            left = layout.margin_left + xstep * (i - self.window.begin)
            positive = value > 0.0
            result.append(
                DiffBar(
                    index=i,
                    left=int(left),
                    right=int(left + self.line_width),
                    top=int(self.yp_zero_line - value * yscale - layout.margin_bottom),
                    zero=zero,
                    positive=positive,
                    color=POSITIVE_COLOR if positive else NEGATIVE_COLOR,
                )
            )
        return result

    def backtrack_points(self) -> list[Point]:
        """Polyline of the simple strategy's drawdown over the whole grid height."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        layout = self.window.layout
        low = self.lowest_backtrack if math.isfinite(self.lowest_backtrack) else 0.0
        span = self.highest_backtrack - low
        scale = layout.grid_height / span if span > 0.0 else 0.0
        xstep = layout.grid_width / self.window.total
        points = []
        for i in self._visible():
            value = self.data.kline[i].capital_backtrack_for_simple_strategy
            x = int(layout.margin_left + xstep * (i - self.window.begin) + 0.5 * self.line_width)
            y = int(layout.height - (value - low) * scale - layout.margin_bottom)
            points.append((x, y))
        return points

    def top_info(self) -> str:
        """Deviation and drawdown of the bar under the cursor."""
        bar = self.data.kline[self.window.index_at(self.window.mouse_x)]
        return (
            f"Diff: {bar.capital_avg_diff_for_simple_strategy:.2f}"
            f"\t Backtrack: {bar.capital_backtrack_for_simple_strategy:.2f}"
        )

    def tip_value(self, y: int) -> float:
        """Absolute deviation at vertical position ``y``."""
        self.compute_ranges()
        half = self.window.layout.grid_height / 2
        if half == 0:
            return 0.0
        return abs(y - self.yp_zero_line) * self.max_volume / half