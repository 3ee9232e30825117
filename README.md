# klinebacktest

Reads K-line (candlestick) market data and per-bar backtesting results from
comma-separated files. It works out price and capital moving averages, and
computes the geometry of the charts that show them: points, bars, labels and
colour names that any drawing toolkit can render.

## Modules

- `klinebacktest.datafile`
  - `DataFile.read_data(path)` appends `KLine` records from lines of the form
    `time,open,high,low,close,volume`. A field missing from a line keeps the
    value it had on the previous line. It then computes the price moving
    averages for periods 10, 15, 50, 170 and 190.
  - `read_backtesting_simple_result(path)` reads `time,signal,capital` rows
    onto the loaded bars. From them it computes the capital average (period
    250), the capital-minus-average difference and the drawdown from peak
    capital.
  - `read_backtesting_result(path)` reads `time,signal,capital,adjustment`
    rows and computes the capital average and difference.
  - Both result readers raise `ValueError` when a row has too few columns or
    when the file has more rows than there are loaded bars.
  - `clear()` empties the bars. `split_fields(line, sep)` is the field
    splitter the result readers use.
- `klinebacktest.datawindow`
  - `DataWindow(bar_count, layout)` tracks the visible range of bars. When
    there are enough bars it starts on the last 200.
  - `press_key(Key.LEFT | Key.RIGHT | Key.UP | Key.DOWN)` moves the cursor or
    pans, and zooms in or out. It shows no fewer than 10 bars, and returns
    `True` when the view changed.
  - `mouse_move`, `mouse_press` and `mouse_release` handle the mouse. Dragging
    with the button held scrolls the window, and a click without movement
    toggles the crosshair (`cross`).
  - `index_at(x)` gives the bar under a horizontal position.
  - `Layout` holds the widget size, the margins and the number of grid rows.
- `klinebacktest.capitalchart`: `CapitalLineChart` provides:
  - capital and simple-strategy capital polylines;
  - their moving averages;
  - `SignalMarker`s for adjustment codes and trade signals;
  - y-axis ticks and the top info line;
  - `tip_value(y)`;
  - `set_average_interval(n)`, which recomputes the capital average with a
    new period.
- `klinebacktest.klinechart`: `KLineChart` provides:
  - `Candle` geometry for each visible bar;
  - price average polylines;
  - the simple-strategy capital polyline;
  - signal markers;
  - y-axis ticks;
  - the top info line;
  - a `BarDetail` for the bar under the cursor, with each value coloured
    against the previous bar.
- `klinebacktest.diffchart`: `CapitalDiffChart` provides:
  - `DiffBar`s of the simple strategy's capital-minus-average difference
    around a zero line;
  - the drawdown polyline;
  - y-axis ticks;
  - the `Diff: … Backtrack: …` info text;
  - `tip_value(y)`.
- `klinebacktest.timeaxis`: `time_label(data, window, x)` returns the time of
  the bar at `x` while the crosshair is shown. Otherwise it returns `None`.

## Example

```python
from klinebacktest.datafile import DataFile
from klinebacktest.datawindow import DataWindow, Key, Layout
from klinebacktest.klinechart import KLineChart

data = DataFile()
data.read_data("rebar_15min.csv")
data.read_backtesting_simple_result("rebar_simple_stats.csv")
data.read_backtesting_result("rebar_stats.csv")

window = DataWindow(len(data.kline), Layout(width=1200, height=600))
window.press_key(Key.UP)          # zoom in around the cursor

chart = KLineChart(data, window)
for candle in chart.candles():
    print(candle.index, candle.left, candle.open_y, candle.close_y, candle.color)
```

## What it does not do

- It does not draw anything or open a window. The chart classes only return
  coordinates, texts and colour names.
- It does not run trading strategies or produce the backtesting result files
  itself. It only reads result files that already exist.
- It has no command-line program.

## Installing

```
pip install .
pip install ".[test]"
pytest
```