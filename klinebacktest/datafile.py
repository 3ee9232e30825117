"""Bar data loaded from CSV files, with moving averages of price and capital."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

AVERAGE_LINE_PERIODS: tuple[int, ...] = (10, 15, 50, 170, 190)
AVERAGE_LINE_COLORS: tuple[str, ...] = ("white", "yellow", "magenta", "green", "gray")
CAPITAL_AVERAGE_LINE_PERIODS: tuple[int, ...] = (250,)
CAPITAL_AVERAGE_LINE_COLORS: tuple[str, ...] = ("magenta",)
TRADING_SIGNAL_COLORS: dict[str, str] = {
    "BPK": "yellow",
    "SPK": "red",
    "BK": "white",
    "SK": "green",
    "BP": "blue",
    "SP": "darkMagenta",
}

_NUMBER_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _atof(text: str) -> float:
    """Parse the leading number of ``text``; 0.0 when there is none."""
    match = _NUMBER_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def split_fields(line: str, sep: str) -> list[str]:
    """Split ``line`` on ``sep``; a line without any separator yields no fields."""
    if sep not in line:
        return []
    return line.split(sep)


def _zeros(count: int) -> list[float]:
    return [0.0] * count


@dataclass
class KLine:
    """One bar of market data together with backtesting results for it."""

    time: str = ""
    opening_price: float = 0.0
    highest_bid: float = 0.0
    lowest_bid: float = 0.0
    closing_price: float = 0.0
    amount_of_increase: float = 0.0
    amount_of_amplitude: float = 0.0
    total_volume: str = ""
    total_amount: str = ""
    turnover_rate: float = 0.0
    ftotal_volume: float = 0.0
    averages: list[float] = field(default_factory=lambda: _zeros(len(AVERAGE_LINE_PERIODS)))
    trading_signal: str = ""
    adjustment_signal: str = ""
    capital: float = 0.0
    capital_avgs: list[float] = field(
        default_factory=lambda: _zeros(len(CAPITAL_AVERAGE_LINE_PERIODS))
    )
    capital_avg_diff: float = 0.0
    capital_for_simple_strategy: float = 0.0
    capital_avgs_for_simple_strategy: list[float] = field(
        default_factory=lambda: _zeros(len(CAPITAL_AVERAGE_LINE_PERIODS))
    )
    capital_avg_diff_for_simple_strategy: float = 0.0
    capital_backtrack_for_simple_strategy: float = 0.0
    trading_signal_for_simple_strategy: str = ""

    def copy(self) -> "KLine":
        return KLine(
            time=self.time,
            opening_price=self.opening_price,
            highest_bid=self.highest_bid,
            lowest_bid=self.lowest_bid,
            closing_price=self.closing_price,
            amount_of_increase=self.amount_of_increase,
            amount_of_amplitude=self.amount_of_amplitude,
            total_volume=self.total_volume,
            total_amount=self.total_amount,
            turnover_rate=self.turnover_rate,
            ftotal_volume=self.ftotal_volume,
            averages=list(self.averages),
            trading_signal=self.trading_signal,
            adjustment_signal=self.adjustment_signal,
            capital=self.capital,
            capital_avgs=list(self.capital_avgs),
            capital_avg_diff=self.capital_avg_diff,
            capital_for_simple_strategy=self.capital_for_simple_strategy,
            capital_avgs_for_simple_strategy=list(self.capital_avgs_for_simple_strategy),
            capital_avg_diff_for_simple_strategy=self.capital_avg_diff_for_simple_strategy,
            capital_backtrack_for_simple_strategy=self.capital_backtrack_for_simple_strategy,
            trading_signal_for_simple_strategy=self.trading_signal_for_simple_strategy,
        )


def _read_lines(path: str | Path):
    with open(path, encoding="utf-8", errors="replace") as handle:
        for raw in handle:
            yield raw.rstrip("\r\n")


def _moving_average(values: list[float], period: int) -> list[float]:
    """Simple moving average; positions before a full window are 0.0."""
    result = [0.0] * len(values)
    if period <= 0 or len(values) < period:
        return result
    total = sum(values[:period])
    result[period - 1] = total / period
    for j in range(period, len(values)):
        total += values[j] - values[j - period]
        result[j] = total / period
    return result


class DataFile:
    """A list of bars plus the files and averages that feed the charts."""

    def __init__(self) -> None:
        self.kline: list[KLine] = []
        self.average_line_periods: list[int] = list(AVERAGE_LINE_PERIODS)
        self.average_line_colors: list[str] = list(AVERAGE_LINE_COLORS)
        self.capital_average_line_periods: list[int] = list(CAPITAL_AVERAGE_LINE_PERIODS)
        self.capital_average_line_colors: list[str] = list(CAPITAL_AVERAGE_LINE_COLORS)
        self.trading_signal_colors: dict[str, str] = dict(TRADING_SIGNAL_COLORS)

    def clear(self) -> None:
        self.kline.clear()

    def read_data(self, path: str | Path) -> None:
        """Append bars from a ``time,open,high,low,close,volume`` file.

        Fields missing from a line keep the value of the previous line.
        """
        bar = KLine()
        setters = (
            lambda b, t: setattr(b, "time", t),
            lambda b, t: setattr(b, "opening_price", _atof(t)),
            lambda b, t: setattr(b, "highest_bid", _atof(t)),
            lambda b, t: setattr(b, "lowest_bid", _atof(t)),
            lambda b, t: setattr(b, "closing_price", _atof(t)),
            self._set_volume,
        )
        for line in _read_lines(path):
            if not line:
                continue
            tokens = [token for token in line.split(",") if token]
            for setter, token in zip(setters, tokens):
                setter(bar, token)
            self.kline.append(bar.copy())
        self.calc_average_lines()

    @staticmethod
    def _set_volume(bar: KLine, token: str) -> None:
        bar.total_volume = token
        bar.ftotal_volume = _atof(token)

    def _result_rows(self, path: str | Path, min_columns: int):
        for index, line in enumerate(_read_lines(path)):
            columns = split_fields(line, ",")
            if len(columns) < min_columns:
                raise ValueError(
                    f"line {index + 1} of {path} has {len(columns)} columns, "
                    f"expected at least {min_columns}"
                )
            if index >= len(self.kline):
                raise ValueError(f"{path} has more rows than the {len(self.kline)} loaded bars")
            yield self.kline[index], columns

    def read_backtesting_result(self, path: str | Path) -> None:
        """Read ``time,signal,capital,adjustment`` rows onto the loaded bars."""
        for bar, columns in self._result_rows(path, 4):
            bar.trading_signal = columns[1]
            bar.capital = _atof(columns[2])
            bar.adjustment_signal = columns[3]
        self.calc_capital_average_lines()

    def read_backtesting_simple_result(self, path: str | Path) -> None:
        """Read ``time,signal,capital`` rows of the simple strategy onto the bars."""
        for bar, columns in self._result_rows(path, 3):
            bar.trading_signal_for_simple_strategy = columns[1]
            bar.capital_for_simple_strategy = _atof(columns[2])
        self.calc_capital_simple_average_lines()

    def calc_average_lines(self) -> None:
        closes = [bar.closing_price for bar in self.kline]
        for i, period in enumerate(self.average_line_periods):
            for bar, value in zip(self.kline, _moving_average(closes, period)):
                bar.averages[i] = value

    def calc_capital_average_lines(self) -> None:
        capitals = [bar.capital for bar in self.kline]
        for i, period in enumerate(self.capital_average_line_periods):
            for bar, value in zip(self.kline, _moving_average(capitals, period)):
                bar.capital_avgs[i] = value
        first_period = self.capital_average_line_periods[0]
        for index, bar in enumerate(self.kline):
            if index < first_period:
                bar.capital_avg_diff = 0.0
            else:
                bar.capital_avg_diff = bar.capital - bar.capital_avgs[0]

    def calc_capital_simple_average_lines(self) -> None:
        capitals = [bar.capital_for_simple_strategy for bar in self.kline]
        for i, period in enumerate(self.capital_average_line_periods):
            for bar, value in zip(self.kline, _moving_average(capitals, period)):
                bar.capital_avgs_for_simple_strategy[i] = value
        first_period = self.capital_average_line_periods[0]
        max_capital = 0.0
        for index, bar in enumerate(self.kline):
            capital = bar.capital_for_simple_strategy
            if index < first_period:
                bar.capital_avg_diff_for_simple_strategy = 0.0
            else:
                bar.capital_avg_diff_for_simple_strategy = (
                    capital - bar.capital_avgs_for_simple_strategy[0]
                )
            max_capital = max(max_capital, capital)
            bar.capital_backtrack_for_simple_strategy = max(0.0, max_capital - capital)