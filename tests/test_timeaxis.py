from klinebacktest.datafile import DataFile, KLine
from klinebacktest.datawindow import DataWindow, Layout
from klinebacktest.timeaxis import time_label


def _setup(cross=True):
    data = DataFile()
    for index in range(5):
        data.kline.append(KLine(time=f"2020-01-0{index + 1} 09:00"))
    window = DataWindow(len(data.kline), Layout())
    window.cross = cross
    return data, window


def test_no_label_without_cross():
    data, window = _setup(cross=False)
    assert time_label(data, window, window.layout.margin_left + 5) is None


def test_label_at_left_edge_is_first_visible_bar():
    data, window = _setup()
    label = time_label(data, window, window.layout.margin_left)
    assert label == data.kline[window.begin].time


def test_label_at_right_edge_is_last_bar():
    data, window = _setup()
    layout = window.layout
    label = time_label(data, window, int(layout.margin_left + layout.grid_width))
    assert label == data.kline[window.end].time


def test_no_label_outside_grid():
    data, window = _setup()
    layout = window.layout
    assert time_label(data, window, layout.margin_left - 1) is None
    assert time_label(data, window, int(layout.margin_left + layout.grid_width) + 1) is None