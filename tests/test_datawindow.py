from klinebacktest.datawindow import DataWindow, Key, Layout

LAYOUT = Layout(width=500, height=300, margin_left=10, margin_right=90, margin_top=20, margin_bottom=10)


def test_initial_window_large():
    window = DataWindow(500, LAYOUT)
    assert window.end == 500 - 1
    assert window.total == 200
    assert window.begin == window.end - window.total


def test_initial_window_small():
    window = DataWindow(50, LAYOUT)
    assert window.begin == 0
    assert window.total == 50
    assert window.end == 49


def test_left_at_start_scrolls_back():
    window = DataWindow(500, LAYOUT)
    begin, end = window.begin, window.end
    assert window.press_key(Key.LEFT) is True
    assert window.begin == begin - 1
    assert window.end == end - 1
    assert window.key_down is True


def test_left_at_first_bar_does_nothing():
    window = DataWindow(50, LAYOUT)
    assert window.press_key(Key.LEFT) is False
    assert window.begin == 0


def test_right_at_last_bar_does_nothing():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(LAYOUT.width - LAYOUT.margin_right, 50, True)
    assert window.press_key(Key.RIGHT) is False
    assert window.end == 499


def test_right_moves_cursor_inside_grid():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(100, 50, True)
    window.press_key(Key.RIGHT)
    assert window.mouse_x > 100
    assert window.end == 499


def test_up_zooms_in_consistently():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(200, 50, True)
    window.press_key(Key.UP)
    assert window.total == 100
    assert window.end - window.begin == window.total
    assert window.begin >= 0
    assert window.end <= 500 - 10


def test_up_never_below_minimum():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(200, 50, True)
    for _ in range(10):
        window.press_key(Key.UP)
    assert window.total >= 10
    assert window.press_key(Key.UP) is False


def test_down_zooms_out_within_bounds():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(200, 50, True)
    window.press_key(Key.DOWN)
    assert window.total > 200
    assert window.begin >= 0
    assert window.end <= 499
    assert window.total == window.end - window.begin


def test_down_stops_at_all_bars():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(200, 50, True)
    for _ in range(5):
        window.press_key(Key.DOWN)
    assert window.total <= 499
    assert window.begin >= 0


def test_click_toggles_cross():
    window = DataWindow(100, LAYOUT)
    window.mouse_press(40, 40)
    window.mouse_release(40, 40)
    assert window.cross is True
    window.mouse_press(40, 40)
    window.mouse_release(40, 40)
    assert window.cross is False


def test_release_elsewhere_keeps_cross():
    window = DataWindow(100, LAYOUT)
    window.mouse_press(40, 40)
    window.mouse_release(60, 40)
    assert window.cross is False


def test_drag_right_scrolls_back_keeping_width():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(100, 50, True)
    begin, width = window.begin, window.end - window.begin
    window.mouse_press(100, 50)
    window.mouse_move(300, 50, True)
    assert window.begin < begin
    assert window.end - window.begin == width
    assert window.cross is False
    assert (window.mouse_x, window.mouse_y) == (300, 50)


def test_drag_left_clamps_to_last_bar():
    window = DataWindow(500, LAYOUT)
    window.mouse_move(300, 50, True)
    window.mouse_press(300, 50)
    window.mouse_move(10, 50, True)
    assert window.end == 499


def test_resize_hides_cross():
    window = DataWindow(100, LAYOUT)
    window.mouse_press(5, 5)
    window.mouse_release(5, 5)
    window.resize()
    assert window.cross is False


def test_index_at_clamps():
    window = DataWindow(500, LAYOUT)
    assert window.index_at(LAYOUT.margin_left - 1000) == window.begin
    assert window.index_at(LAYOUT.width * 10) == window.end
    middle = window.index_at(LAYOUT.margin_left + int(LAYOUT.grid_width) // 2)
    assert window.begin <= middle <= window.end


def test_layout_geometry():
    assert LAYOUT.grid_width == LAYOUT.width - LAYOUT.margin_left - LAYOUT.margin_right
    assert LAYOUT.atom_grid_height * LAYOUT.h_grid_num == LAYOUT.grid_height