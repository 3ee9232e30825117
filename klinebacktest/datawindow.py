"""Visible bar window of a chart and its reaction to keys and the mouse."""

from __future__ import annotations

import enum
from dataclasses import dataclass

DEFAULT_VISIBLE_BARS = 200
MIN_VISIBLE_BARS = 10


class Key(enum.Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


@dataclass
class Layout:
    """Pixel geometry of a chart: widget size, margins and grid rows."""

    width: int = 800
    height: int = 400
    margin_left: int = 10
    margin_right: int = 70
    margin_top: int = 20
    margin_bottom: int = 10
    h_grid_num: int = 4

    @property
    def grid_width(self) -> float:
        return float(self.width - self.margin_left - self.margin_right)

    @property
    def grid_height(self) -> float:
        return float(self.height - self.margin_top - self.margin_bottom)

    @property
    def atom_grid_height(self) -> float:
        if self.h_grid_num == 0:
            return self.grid_height
        return self.grid_height / self.h_grid_num


def _tdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    return int(a / b)


class DataWindow:
    """Tracks which bars are visible, the cursor and whether the cross is shown."""

    def __init__(self, bar_count: int, layout: Layout | None = None) -> None:
        self.bar_count = bar_count
        self.layout = layout if layout is not None else Layout()
        self.end = bar_count - 1
        self.total = DEFAULT_VISIBLE_BARS
        self.begin = self.end - self.total
        self.current = self.begin + self.total // 2
        if self.begin < 0:
            self.begin = 0
            self.total = bar_count
        self.cross = False
        self.mouse_x = 0
        self.mouse_y = 0
        self.under_mouse = False
        self.pressed_x = 0
        self.pressed_y = 0
        self.mouse_released = True
        self.key_down = False

    def press_key(self, key: Key) -> bool:
        """Move the cursor or zoom; returns True when the view changed."""
        layout = self.layout
        self.current = int(
            (self.mouse_x - layout.margin_left) / layout.grid_width * self.total + self.begin
        )
        self.key_down = True
        last = self.bar_count - 1

        if key is Key.LEFT:
            xstep = max(layout.grid_width / self.total, 1.0)
            if self.mouse_x - xstep < layout.margin_left:
                if self.begin - 1 < 0:
                    return False
                self.end -= 1
                self.begin -= 1
            else:
                self.mouse_x = int(self.mouse_x - xstep)
            return True

        if key is Key.RIGHT:
            xstep = max(layout.grid_width / self.total, 1.0)
            if self.mouse_x + xstep > layout.width - layout.margin_right:
                if self.end + 1 > last:
                    return False
                self.end += 1
                self.begin += 1
            else:
                self.mouse_x = int(self.mouse_x + xstep)
            return True

        if key is Key.UP:
            self.total //= 2
            if self.total < MIN_VISIBLE_BARS:
                self.total *= 2
                return False
            self.end = self.current + _tdiv(self.end - self.current, 2)
            self.begin = self.current - (self.total - (self.end - self.current))
            if self.end > self.bar_count - MIN_VISIBLE_BARS:
                self.end = self.bar_count - MIN_VISIBLE_BARS
                self.begin = self.end - self.total
            if self.begin < 0:
                self.begin = 0
                self.end = self.begin + self.total
            return True

        if key is Key.DOWN:
            previous_total = self.total
            if self.total == last:
                return False
            self.total = min(self.total * 2, last)
            self.end = self.current + int(
                (self.end - self.current) / previous_total * self.total
            )
            self.end = min(self.end, last)
            self.begin = max(self.current - (self.total - (self.end - self.current)), 0)
            self.total = self.end - self.begin
            self.mouse_x = int(
                (self.current - self.begin) / self.total * layout.grid_width + layout.margin_left
            )
            return True

        return False

    def mouse_move(self, x: int, y: int, under_mouse: bool) -> None:
        """Follow the mouse; dragging with the button held scrolls the window."""
        if not self.mouse_released:
            self.cross = False
            self._move_window(x)
        self.under_mouse = under_mouse
        self.mouse_x = x
        self.mouse_y = y
        self.key_down = False

    def mouse_press(self, x: int, y: int) -> None:
        self.mouse_released = False
        self.pressed_x = x
        self.pressed_y = y

    def mouse_release(self, x: int, y: int) -> None:
        """A click without movement toggles the cross."""
        self.mouse_released = True
        if x == self.pressed_x and y == self.pressed_y:
            self.cross = not self.cross

    def resize(self) -> None:
        self.cross = False

    def index_at(self, x: int) -> int:
        """Index of the bar under horizontal position ``x``, clamped to the window."""
        layout = self.layout
        index = int((x - layout.margin_left) * self.total / layout.grid_width + self.begin)
        if index >= self.end:
            return self.end
        if index <= self.begin:
            return self.begin
        return index

    def _move_window(self, x: int) -> None:
        x_delta = x - self.mouse_x
        interval = int((self.end - self.begin) * abs(x_delta) / self.layout.grid_width)
        last = self.bar_count - 1
        if x_delta > 0:
            if self.begin - interval < 0:
                self.end -= self.begin
                self.begin = 0
            else:
                self.end -= interval
                self.begin -= interval
        elif x_delta < 0:
            if self.end + interval > last:
                remaining = last - self.end
                self.begin += remaining
                self.end = last
            else:
                self.end += interval
                self.begin += interval