"""Candlestick chart: price bars, price averages and the simple strategy's capital."""

from __future__ import annotations

import math
from dataclasses import dataclass

from klinebacktest.capitalchart import SignalMarker
from klinebacktest.datafile import DataFile
from klinebacktest.datawindow import DataWindow

RISING_COLOR = "red"
FALLING_COLOR = "#55FCFC"
CAPITAL_LINE_COLOR = "darkGreen"
UP_COLOR = "#FF0000"
DOWN_COLOR = "#00FF00"
INFO_COLOR = "#02E2F4"
PLAIN_COLOR = "#FFFFFF"
MIN_LINE_WIDTH = 3
BAR_GAP_RATIO = 0.2
TRADING_SIGNAL_OFFSET = 35
TRADING_SIGNAL_MARK = "*"
TICK_LABEL_OFFSET = 10

Point = tuple[int, int]


@dataclass(frozen=True)
class Candle:
    """Geometry of one price bar.

    ``left``/``right`` bound the body, ``x`` is the wick's position and the
    ``*_y`` values are the pixel rows of the open, close, high and low.
    """

    index: int
    x: int
    left: int
    right: int
    open_y: int
    close_y: int
    high_y: int
    low_y: int
    width: int
    rising: bool
    color: str


@dataclass(frozen=True)
class BarDetail:
    """Values of the bar under the cursor, each with the colour it is shown in."""

    time: str
    time_color: str
    price: float
    price_color: str
    opening: float
    opening_color: str
    highest: float
    highest_color: str
    lowest: float
    lowest_color: str
    closing: float
    closing_color: str
    increase: float
    increase_color: str
    amplitude: float
    amplitude_color: str
    total_volume: str
    total_volume_color: str
    total_amount: str
    total_amount_color: str
    turnover_rate: float
    turnover_rate_color: str
    signal: str
    signal_color: str


def _scale(height: float, high: float, low: float) -> float:
    span = high - low
    if not math.isfinite(span) or span <= 0.0:
        return 0.0
    return height / span


class KLineChart:
    """Works out what the candlestick chart shows for the visible window."""

    def __init__(self, data: DataFile, window: DataWindow) -> None:
        self.data = data
        self.window = window
        self.line_width = MIN_LINE_WIDTH
        self.highest_bid = 0.0
        self.lowest_bid = math.inf
        self.highest_capital = 0.0
        self.lowest_capital = math.inf
        self.yscale = 0.0
        self.capital_yscale = 0.0

    def _visible(self):
        return range(max(self.window.begin, 0), self.window.end)

    def compute_ranges(self) -> None:
        """Find price and capital ranges of the visible bars, scales and bar width."""
        layout = self.window.layout
        width = int(layout.grid_width / self.window.total) if self.window.total else 0
        width = int(width - BAR_GAP_RATIO * width)
        self.line_width = max(width, MIN_LINE_WIDTH)
        self.highest_bid = 0.0
        self.lowest_bid = math.inf
        self.highest_capital = 0.0
        self.lowest_capital = math.inf
        for i in self._visible():
            bar = self.data.kline[i]
            self.highest_bid = max(self.highest_bid, bar.highest_bid)
            self.lowest_bid = min(self.lowest_bid, bar.lowest_bid)
            self.highest_capital = max(self.highest_capital, bar.capital_for_simple_strategy)
            self.lowest_capital = min(self.lowest_capital, bar.capital_for_simple_strategy)
        self.yscale = _scale(layout.grid_height, self.highest_bid, self.lowest_bid)
        self.capital_yscale = _scale(
            layout.grid_height, self.highest_capital, self.lowest_capital
        )

    def y_ticks(self) -> list[tuple[str, int, int]]:
        """Price axis labels as ``(text, x, y)``."""
        self.compute_ranges()
        layout = self.window.layout
        x = int(layout.width - layout.margin_right + TICK_LABEL_OFFSET)
        bottom = layout.height - layout.margin_bottom
        if layout.h_grid_num == 0:
            return [
                (f"{self.lowest_bid:.2f}", x, bottom),
                (f"{self.highest_bid:.2f}", x, layout.margin_top),
            ]
        ystep = (self.highest_bid - self.lowest_bid) / layout.h_grid_num
        return [
            (
                f"{self.lowest_bid + i * ystep:.2f}",
                x,
                int(bottom - i * layout.atom_grid_height),
            )
            for i in range(layout.h_grid_num)
        ]

    def _left(self, index: int) -> float:
        layout = self.window.layout
        xstep = layout.grid_width / self.window.total
        return layout.margin_left + xstep * (index - self.window.begin)

    def _x(self, index: int) -> int:
        return int(self._left(index) + 0.5 * self.line_width)

    def _y(self, value: float, low: float, scale: float) -> int:
        layout = self.window.layout
        return int(layout.height - (value - low) * scale - layout.margin_bottom)

    def _price_y(self, value: float) -> int:
        return self._y(value, self.lowest_bid, self.yscale)

    def candles(self) -> list[Candle]:
        """Body and wick geometry of every visible bar."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        result = []
        for i in self._visible():
            bar = self.data.kline[i]
            rising = not bar.opening_price > bar.closing_price
            left = self._left(i)
            result.append(
                Candle(
                    index=i,
                    x=self._x(i),
                    left=int(left),
                    right=int(left + self.line_width),
                    open_y=self._price_y(bar.opening_price),
                    close_y=self._price_y(bar.closing_price),
                    high_y=self._price_y(bar.highest_bid),
                    low_y=self._price_y(bar.lowest_bid),
                    width=self.line_width,
                    rising=rising,
                    color=RISING_COLOR if rising else FALLING_COLOR,
                )
            )
        return result

    def average_points(self) -> list[tuple[str, list[Point]]]:
        """``(color, polyline)`` for each price moving average."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        lines = []
        for line, color in zip(
            range(len(self.data.average_line_periods)), self.data.average_line_colors
        ):
            points = []
            for j in self._visible():
                value = self.data.kline[j].averages[line]
                if value <= 0.0:
                    continue
                points.append((self._x(j), self._price_y(value)))
            lines.append((color, points))
        return lines

    def capital_points(self) -> list[Point]:
        """Polyline of the simple strategy's capital on its own scale."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        return [
            (
                self._x(i),
                self._y(
                    self.data.kline[i].capital_for_simple_strategy,
                    self.lowest_capital,
                    self.capital_yscale,
                ),
            )
            for i in self._visible()
        ]

    def signal_markers(self) -> list[SignalMarker]:
        """Stars for the simple strategy's trade signals on visible bars."""
        self.compute_ranges()
        if self.window.begin < 0:
            return []
        top = self.window.layout.margin_top
        markers = []
        for i in self._visible():
            signal = self.data.kline[i].trading_signal_for_simple_strategy
            color = self.data.trading_signal_colors.get(signal)
            if color is None:
                continue
            markers.append(
                SignalMarker(
                    i, self._x(i) - 2, top + TRADING_SIGNAL_OFFSET, TRADING_SIGNAL_MARK, color
                )
            )
        return markers

    def top_info(self) -> list[tuple[str, str]]:
        """``(text, color)`` of each price average at the bar under the cursor."""
        bar = self.data.kline[self.window.index_at(self.window.mouse_x)]
        return [
            (f"MA{period} {value:.2f}", color)
            for period, value, color in zip(
                self.data.average_line_periods, bar.averages, self.data.average_line_colors
            )
        ]

    def detail(self) -> BarDetail:
        """Details of the bar under the cursor, coloured against the previous bar."""
        index = self.window.index_at(self.window.mouse_x)
        bar = self.data.kline[index]
        previous = self.data.kline[max(index - 1, 0)]

        def up_down(condition: bool) -> str:
            return UP_COLOR if condition else DOWN_COLOR

        return BarDetail(
            time=bar.time,
            time_color=PLAIN_COLOR,
            price=bar.closing_price,
            price_color=UP_COLOR,
            opening=bar.opening_price,
            opening_color=up_down(bar.opening_price > previous.opening_price),
            highest=bar.highest_bid,
            highest_color=up_down(bar.highest_bid > previous.closing_price),
            lowest=bar.lowest_bid,
            lowest_color=up_down(bar.lowest_bid > previous.closing_price),
            closing=bar.closing_price,
            closing_color=up_down(bar.closing_price > bar.opening_price),
            increase=bar.amount_of_increase,
            increase_color=up_down(bar.amount_of_increase > 0),
            amplitude=bar.amount_of_amplitude,
            amplitude_color=INFO_COLOR,
            total_volume=bar.total_volume,
            total_volume_color=INFO_COLOR,
            total_amount=bar.total_amount,
            total_amount_color=INFO_COLOR,
            turnover_rate=bar.turnover_rate,
            turnover_rate_color=INFO_COLOR,
            signal=bar.trading_signal_for_simple_strategy,
            signal_color=PLAIN_COLOR,
        )

    def tip_value(self, y: int) -> float:
        """Price at vertical position ``y``."""
        self.compute_ranges()
        if self.yscale == 0.0:
            return self.highest_bid
        return self.highest_bid - (y - self.window.layout.margin_top) / self.yscale