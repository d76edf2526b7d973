"""SSD1306 OLED framebuffer, drawing primitives and I2C command encoding."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import IntEnum

from .font import GLYPH_WIDTH, glyph

WIDTH = 128
HEIGHT = 64
I2C_ADDRESS = 0x3C
I2C_CLOCK_KHZ = 400
PAGE_HEIGHT = 8
N_PAGES = HEIGHT // PAGE_HEIGHT
BUFFER_LENGTH = N_PAGES * WIDTH

COMMAND_CONTROL = 0x80
DATA_CONTROL = 0x40

WriteFn = Callable[[int, bytes], object]


class Command(IntEnum):
    """SSD1306 command codes."""

    SET_MEMORY_MODE = 0x20
    SET_COLUMN_ADDRESS = 0x21
    SET_PAGE_ADDRESS = 0x22
    SET_HORIZONTAL_SCROLL = 0x26
    SET_SCROLL = 0x2E
    SET_DISPLAY_START_LINE = 0x40
    SET_CONTRAST = 0x81
    SET_CHARGE_PUMP = 0x8D
    SET_SEGMENT_REMAP = 0xA0
    SET_ENTIRE_ON = 0xA4
    SET_ALL_ON = 0xA5
    SET_NORMAL_DISPLAY = 0xA6
    SET_INVERSE_DISPLAY = 0xA7
    SET_MUX_RATIO = 0xA8
    SET_DISPLAY = 0xAE
    SET_COMMON_OUTPUT_DIRECTION = 0xC0
    SET_DISPLAY_OFFSET = 0xD3
    SET_DISPLAY_CLOCK_DIVIDE_RATIO = 0xD5
    SET_PRECHARGE = 0xD9
    SET_COMMON_PIN_CONFIGURATION = 0xDA
    SET_VCOMH_DESELECT_LEVEL = 0xDB
    WRITE_MODE = 0xFE
    READ_MODE = 0xFF


def _pin_configuration(width: int, height: int) -> int:
    if width == 128 and height == 64:
        return 0x12
    return 0x02


@dataclass
class RenderArea:
    """A rectangle of columns and pages to be refreshed on the display."""

    start_column: int = 0
    end_column: int = WIDTH - 1
    start_page: int = 0
    end_page: int = N_PAGES - 1

    @property
    def buffer_length(self) -> int:
        """Number of framebuffer bytes covered by the area."""
        return (self.end_column - self.start_column + 1) * (
            self.end_page - self.start_page + 1
        )


class Framebuffer:
    """Page-organised monochrome pixel buffer: one byte holds eight vertical pixels."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        if width <= 0 or height <= 0 or height % PAGE_HEIGHT:
            raise ValueError(
                f"invalid framebuffer size {width}x{height}; "
                f"height must be a positive multiple of {PAGE_HEIGHT}"
            )
        self.width = width
        self.height = height
        self.pages = height // PAGE_HEIGHT
        self.buffer = bytearray(self.pages * width)

    def clear(self) -> None:
        """Turn every pixel off."""
        self.buffer[:] = bytes(len(self.buffer))

    def set_pixel(self, x: int, y: int, set: bool = True) -> None:
        """Turn the pixel at (x, y) on or off."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        index = (y // PAGE_HEIGHT) * self.width + x
        mask = 1 << (y % PAGE_HEIGHT)
        if set:
            self.buffer[index] |= mask
        else:
            self.buffer[index] &= ~mask & 0xFF

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, set: bool = True) -> None:
        """Draw a line between two points with Bresenham's algorithm."""
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        error = dx + dy
        while True:
            self.set_pixel(x0, y0, set)
            if x0 == x1 and y0 == y1:
                break
            doubled = 2 * error
            if doubled >= dy:
                error += dy
                x0 += sx
            if doubled <= dx:
                error += dx
                y0 += sy

    def draw_char(self, x: int, y: int, character: str) -> None:
        """Draw one character at column x on the page containing row y.

        Characters that would not fit at the right or bottom are ignored.
        """
        if x > self.width - GLYPH_WIDTH or y > self.height - PAGE_HEIGHT:
            return
        page = int(y / PAGE_HEIGHT)
        start = page * self.width + x
        if x < 0 or start < 0:
            raise IndexError(f"character position ({x}, {y}) is off the display")
        self.buffer[start:start + GLYPH_WIDTH] = glyph(character)

    def draw_string(self, x: int, y: int, text: str) -> None:
        """Draw text left to right, eight columns per character."""
        if x > self.width - GLYPH_WIDTH or y > self.height - PAGE_HEIGHT:
            return
        for character in text:
            self.draw_char(x, y, character)
            x += GLYPH_WIDTH

    def to_bytes(self) -> bytes:
        """Return a copy of the raw page data."""
        return bytes(self.buffer)

    def __bytes__(self) -> bytes:
        return self.to_bytes()


class Display:
    """SSD1306 driven through a write(address, data) I2C callable."""

    def __init__(self, write: WriteFn, address: int = I2C_ADDRESS) -> None:
        self.write = write
        self.address = address

    def send_command(self, command: int) -> None:
        """Send a single command byte preceded by the command control byte."""
        self.write(self.address, bytes((COMMAND_CONTROL, command)))

    def send_commands(self, commands: Iterable[int]) -> None:
        """Send each command in turn."""
        for command in commands:
            self.send_command(command)

    def send_buffer(self, data: bytes) -> None:
        """Send display data preceded by the data control byte."""
        self.write(self.address, bytes((DATA_CONTROL,)) + bytes(data))

    def init(self) -> None:
        """Send the power-up configuration sequence."""
        self.send_commands(
            (
                Command.SET_DISPLAY,
                Command.SET_MEMORY_MODE, 0x00,
                Command.SET_DISPLAY_START_LINE,
                Command.SET_SEGMENT_REMAP | 0x01,
                Command.SET_MUX_RATIO, HEIGHT - 1,
                Command.SET_COMMON_OUTPUT_DIRECTION | 0x08,
                Command.SET_DISPLAY_OFFSET, 0x00,
                Command.SET_COMMON_PIN_CONFIGURATION, _pin_configuration(WIDTH, HEIGHT),
                Command.SET_DISPLAY_CLOCK_DIVIDE_RATIO, 0x80,
                Command.SET_PRECHARGE, 0xF1,
                Command.SET_VCOMH_DESELECT_LEVEL, 0x30,
                Command.SET_CONTRAST, 0xFF,
                Command.SET_ENTIRE_ON,
                Command.SET_NORMAL_DISPLAY,
                Command.SET_CHARGE_PUMP, 0x14,
                Command.SET_SCROLL | 0x00,
                Command.SET_DISPLAY | 0x01,
            )
        )

    def scroll(self, enabled: bool) -> None:
        """Configure horizontal scrolling and switch it on or off."""
        self.send_commands(
            (
                Command.SET_HORIZONTAL_SCROLL | 0x00, 0x00, 0x00, 0x00, 0x03,
                0x00, 0xFF,
                Command.SET_SCROLL | (0x01 if enabled else 0x00),
            )
        )

    def render(self, framebuffer: Framebuffer | bytes, area: RenderArea) -> None:
        """Refresh the given area of the display from the framebuffer."""
        data = bytes(framebuffer)
        length = area.buffer_length
        if len(data) < length:
            raise ValueError(
                f"framebuffer holds {len(data)} bytes, area needs {length}"
            )
        self.send_commands(
            (
                Command.SET_COLUMN_ADDRESS, area.start_column, area.end_column,
                Command.SET_PAGE_ADDRESS, area.start_page, area.end_page,
            )
        )
        self.send_buffer(data[:length])


class BitmapDisplay:
    """SSD1306 in vertical addressing mode, fed whole bitmaps."""

    def __init__(
        self,
        write: WriteFn,
        width: int = WIDTH,
        height: int = HEIGHT,
        external_vcc: bool = False,
        address: int = I2C_ADDRESS,
    ) -> None:
        self.write = write
        self.width = width
        self.height = height
        self.pages = height // PAGE_HEIGHT
        self.external_vcc = external_vcc
        self.address = address
        self.bufsize = self.pages * width + 1
        self.ram_buffer = bytearray(self.bufsize)
        self.ram_buffer[0] = DATA_CONTROL

    def command(self, command: int) -> None:
        """Send a single command byte."""
        self.write(self.address, bytes((COMMAND_CONTROL, command)))

    def config(self) -> None:
        """Send the bitmap-mode configuration sequence."""
        for command in (
            Command.SET_DISPLAY | 0x00,
            Command.SET_MEMORY_MODE, 0x01,
            Command.SET_DISPLAY_START_LINE | 0x00,
            Command.SET_SEGMENT_REMAP | 0x01,
            Command.SET_MUX_RATIO, HEIGHT - 1,
            Command.SET_COMMON_OUTPUT_DIRECTION | 0x08,
            Command.SET_DISPLAY_OFFSET, 0x00,
            Command.SET_COMMON_PIN_CONFIGURATION, 0x12,
            Command.SET_DISPLAY_CLOCK_DIVIDE_RATIO, 0x80,
            Command.SET_PRECHARGE, 0xF1,
            Command.SET_VCOMH_DESELECT_LEVEL, 0x30,
            Command.SET_CONTRAST, 0xFF,
            Command.SET_ENTIRE_ON,
            Command.SET_NORMAL_DISPLAY,
            Command.SET_CHARGE_PUMP, 0x14,
            Command.SET_DISPLAY | 0x01,
        ):
            self.command(command)

    def send_data(self) -> None:
        """Address the whole screen and send the RAM buffer."""
        for command in (
            Command.SET_COLUMN_ADDRESS, 0, self.width - 1,
            Command.SET_PAGE_ADDRESS, 0, self.pages - 1,
        ):
            self.command(command)
        self.write(self.address, bytes(self.ram_buffer))

    def draw_bitmap(self, bitmap: bytes) -> None:
        """Copy a bitmap into RAM byte by byte, refreshing the screen after each byte."""
        size = self.bufsize - 1
        if len(bitmap) < size:
            raise ValueError(f"bitmap holds {len(bitmap)} bytes, display needs {size}")
        for offset, value in enumerate(bitmap[:size], start=1):
            self.ram_buffer[offset] = value
            self.send_data()