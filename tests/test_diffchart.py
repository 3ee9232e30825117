from klinebacktest.datafile import DataFile, KLine
from klinebacktest.datawindow import DataWindow, Layout
from klinebacktest.diffchart import CapitalDiffChart

DIFFS = [1.0, -5.0, 3.0, 2.0, 0.0]
BACKTRACKS = [0.0, 2.0, 1.0, 0.0, 0.0]


def _chart(diffs=DIFFS, backtracks=BACKTRACKS):
    data = DataFile()
    for index, (diff, backtrack) in enumerate(zip(diffs, backtracks)):
        data.kline.append(
            KLine(
                time=f"t{index}",
                capital_avg_diff_for_simple_strategy=diff,
                capital_backtrack_for_simple_strategy=backtrack,
            )
        )
    window = DataWindow(len(data.kline), Layout())
    return CapitalDiffChart(data, window)


def test_max_volume_is_largest_absolute_visible_deviation():
    chart = _chart()
    chart.compute_ranges()
    assert chart.max_volume == 5.0


def test_zero_line_in_middle_of_grid():
    chart = _chart()
    chart.compute_ranges()
    layout = chart.window.layout
    assert chart.yp_zero_line == int(layout.height - layout.grid_height / 2)


def test_bars_follow_sign_of_deviation():
    chart = _chart()
    bars = chart.bars()
    assert len(bars) == chart.window.end - chart.window.begin
    for bar in bars:
        value = DIFFS[bar.index]
        assert bar.positive == (value > 0.0)
        assert bar.color == ("#55FCFC" if value > 0.0 else "red")
        if value > 0:
            assert bar.top < bar.zero
        elif value < 0:
            assert bar.top > bar.zero
        assert bar.right - bar.left == chart.line_width


def test_largest_deviation_reaches_edge_of_grid():
    chart = _chart()
    bars = chart.bars()
    layout = chart.window.layout
    assert bars[1].top == layout.height - layout.margin_bottom


def test_zero_deviation_gives_flat_bars_and_zero_tip():
    chart = _chart(diffs=[0.0] * 5)
    bars = chart.bars()
    assert all(bar.top == bar.zero for bar in bars)
    assert chart.tip_value(0) == 0.0


def test_backtrack_points_span_grid():
    chart = _chart()
    points = chart.backtrack_points()
    layout = chart.window.layout
    ys = [y for _, y in points]
    assert len(points) == chart.window.end - chart.window.begin
    assert min(ys) == layout.margin_top
    assert max(ys) == layout.height - layout.margin_bottom
    xs = [x for x, _ in points]
    assert xs == sorted(xs)


def test_y_ticks_mirror_around_zero_line():
    chart = _chart()
    ticks = chart.y_ticks()
    grid_num = chart.window.layout.h_grid_num
    assert len(ticks) == 2 * grid_num + 1
    assert ticks[0][0] == "0"
    assert ticks[0][2] == chart.yp_zero_line
    upper = ticks[1 : grid_num + 1]
    lower = ticks[grid_num + 1 :]
    assert [t[0] for t in upper] == [t[0] for t in lower]
    assert all(t[2] < chart.yp_zero_line for t in upper)
    assert all(t[2] > chart.yp_zero_line for t in lower)


def test_tip_value_at_zero_line_and_edge():
    chart = _chart()
    chart.compute_ranges()
    half = chart.window.layout.grid_height / 2
    assert chart.tip_value(chart.yp_zero_line) == 0.0
    assert chart.tip_value(int(chart.yp_zero_line - half)) == chart.max_volume


def test_top_info_of_first_bar():
    chart = _chart()
    chart.window.mouse_x = 0
    assert chart.top_info() == "Diff: 1.00\t Backtrack: 0.00"