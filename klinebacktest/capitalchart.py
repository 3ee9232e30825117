"""Capital curve chart: the strategy's capital, its averages and trade signals."""

from __future__ import annotations

import math
from dataclasses import dataclass

from klinebacktest.datafile import DataFile
from klinebacktest.datawindow import DataWindow

DEFAULT_AVERAGE_INTERVAL = 250
SIMPLE_AVERAGE_COLOR = "red"
ADJUSTMENT_SIGNAL_COLOR = "white"
ADJUSTMENT_SIGNAL_OFFSET = 35
TRADING_SIGNAL_OFFSET = 50
TRADING_SIGNAL_MARK = "*"
TICK_LABEL_OFFSET = 10

Point = tuple[int, int]


@dataclass(frozen=True)
class SignalMarker:
    """A text mark drawn above a bar: an adjustment code or a trade star."""

    index: int
    x: int
    y: int
    text: str
    color: str


def _scale(height: float, high: float, low: float) -> float:
    span = high - low
    if not math.isfinite(span) or span <= 0.0:
        return 0.0
    return height / span


class CapitalLineChart:
    """Works out what the capital chart shows for the visible window."""

    def __init__(self, data: DataFile, window: DataWindow) -> None:
        self.data = data
        self.window = window
        self.avg_interval = DEFAULT_AVERAGE_INTERVAL
        self.line_width = 0
        self.highest_capital = 0.0
        self.lowest_capital = math.inf
        self.highest_capital_simple = 0.0
        self.lowest_capital_simple = math.inf
        self.yscale = 0.0
        self.yscale_simple = 0.0

    def _visible(self):
        window = self.window
        return range(max(window.begin, 0), window.end)

    def compute_ranges(self) -> None:
        """Find the capital ranges of the visible bars and the derived scales."""
        layout = self.window.layout
        self.line_width = int(layout.grid_width / self.window.total) if self.window.total else 0
        self.highest_capital = 0.0
        self.lowest_capital = math.inf
        self.highest_capital_simple = 0.0
        self.lowest_capital_simple = math.inf
        for i in self._visible():
            bar = self.data.kline[i]
            self.highest_capital = max(self.highest_capital, bar.capital)
            self.lowest_capital = min(self.lowest_capital, bar.capital)
            self.highest_capital_simple = max(
                self.highest_capital_simple, bar.capital_for_simple_strategy
            )
            self.lowest_capital_simple = min(
                self.lowest_capital_simple, bar.capital_for_simple_strategy
            )
        self.yscale = _scale(layout.grid_height, self.highest_capital, self.lowest_capital)
        self.yscale_simple = _scale(
            layout.grid_height, self.highest_capital_simple, self.lowest_capital_simple
        )

    def y_ticks(self) -> list[tuple[str, int, int]]:
        """Axis labels as ``(text, x, y)``."""
        self.compute_ranges()
        layout = self.window.layout
        x = int(layout.width - layout.margin_right + TICK_LABEL_OFFSET)
        bottom = layout.height - layout.margin_bottom
        if layout.h_grid_num == 0:
            return [
                (f"{self.lowest_capital:.2f}", x, bottom),
                (f"{self.highest_capital:.2f}", x, layout.margin_top),
            ]
        ystep = (self.highest_capital - self.lowest_capital) / layout.h_grid_num
        return [
            (
                f"{self.lowest_capital + i * ystep:.2f}",
                x,
                int(bottom - i * layout.atom_grid_height),
            )
            for i in range(layout.h_grid_num)
        ]

    def _x(self, index: int) -> int:
        layout = self.window.layout
        xstep = layout.grid_width / self.window.total
        return int(layout.margin_left + xstep * (index - self.window.begin) + 0.5 * self.line_width)

    def _y(self, value: float, low: float, scale: float) -> int:
        layout = self.window.layout
        return int(layout.height - (value - low) * scale - layout.margin_bottom)

    def _polyline(self, values, low: float, scale: float) -> list[Point]:
        if self.window.begin < 0:
            return []
        return [(self._x(i), self._y(values(i), low, scale)) for i in self._visible()]

    def capital_points(self) -> list[Point]:
        """Polyline of the capital of the strategy with adjustments."""
        self.compute_ranges()
        return self._polyline(
            lambda i: self.data.kline[i].capital, self.lowest_capital, self.yscale
        )

    def simple_capital_points(self) -> list[Point]:
        """Polyline of the capital of the simple strategy."""
        self.compute_ranges()
        return self._polyline(
            lambda i: self.data.kline[i].capital_for_simple_strategy,
            self.lowest_capital_simple,
            self.yscale_simple,
        )

    def _average_lines(self, attribute: str, low: float, scale: float, colors) -> list:
        if self.window.begin < 0:
            return []
        lines = []
        for line, color in zip(range(len(self.data.capital_average_line_periods)), colors):
            points = []
            for j in self._visible():
                value = getattr(self.data.kline[j], attribute)[line]
                if value <= 0.0:
                    continue
                points.append((self._x(j), self._y(value, low, scale)))
            lines.append((color, points))
        return lines

    def average_points(self) -> list[tuple[str, list[Point]]]:
        """``(color, polyline)`` for each capital moving average."""
        self.compute_ranges()
        return self._average_lines(
            "capital_avgs",
            self.lowest_capital,
            self.yscale,
            self.data.capital_average_line_colors,
        )

    def simple_average_points(self) -> list[tuple[str, list[Point]]]:
        """``(color, polyline)`` for each moving average of the simple capital."""
        self.compute_ranges()
        count = len(self.data.capital_average_line_periods)
        return self._average_lines(
            "capital_avgs_for_simple_strategy",
            self.lowest_capital_simple,
            self.yscale_simple,
            [SIMPLE_AVERAGE_COLOR] * count,
        )

    def signal_markers(self) -> list[SignalMarker]:
        """Adjustment codes and trade stars for the visible bars."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        top = self.window.layout.margin_top
        markers = []
        for i in self._visible():
            bar = self.data.kline[i]
            x = self._x(i) - 2
            if bar.adjustment_signal:
                markers.append(
                    SignalMarker(
                        i, x, top + ADJUSTMENT_SIGNAL_OFFSET,
                        bar.adjustment_signal, ADJUSTMENT_SIGNAL_COLOR,
                    )
                )
            if bar.trading_signal:
                color = self.data.trading_signal_colors.get(bar.trading_signal)
                if color is not None:
                    markers.append(
                        SignalMarker(
                            i, x, top + TRADING_SIGNAL_OFFSET, TRADING_SIGNAL_MARK, color
                        )
                    )
        return markers

    def top_info(self) -> list[str]:
        """Average values and trading signal of the bar under the cursor."""
        bar = self.data.kline[self.window.index_at(self.window.mouse_x)]
        lines = [
            f"MA{period} {value:.2f}"
            for period, value in zip(self.data.capital_average_line_periods, bar.capital_avgs)
        ]
        lines.append("tradingSignal: " + bar.trading_signal)
        return lines

    def tip_value(self, y: int) -> float:
        """Capital value at vertical position ``y``."""
        self.compute_ranges()
        if self.yscale == 0.0:
            return self.highest_capital
        return self.highest_capital - (y - self.window.layout.margin_top) / self.yscale

    def set_average_interval(self, interval: int) -> bool:
        """Change the first capital average period; True when it was recomputed."""
        if interval <= 0 or interval == self.avg_interval:
            return False
        self.avg_interval = interval
        self.data.capital_average_line_periods[0] = interval
        self.data.calc_capital_average_lines()
        return True