# galtonboard

A Galton board simulation. By default a hundred balls drop one at a time
through a triangle of fifteen rows of pins. At each row a ball moves left
or right with equal chance. The balls collect in seven bins at the bottom,
and the bin counts take on the bell shape of the normal distribution.

The board can be drawn into a monochrome framebuffer that uses the SSD1306
OLED page layout: 128×64 pixels, with each byte holding a column of eight
vertical pixels. The package also produces the command and data byte
streams for that controller.

## Installation

```
pip install .
```

The package has no runtime dependencies. To install the test tools too:

```
pip install ".[test]"
```

## Command line

```
galtonboard [--balls N] [--seed S]
```

This runs one full experiment and prints one line per bin. Each line shows
the bin index, the number of balls in the bin and a bar of `#` characters.

- `--balls N` sets the number of balls. The default is 100, and N must not be negative.
- `--seed S` seeds the random generator so that the run can be repeated.

## Library use

```python
import random

from galtonboard.simulation import Board, GaltonSimulation
from galtonboard.ssd1306 import Framebuffer

board = Board(128, 64)
sim = GaltonSimulation(board, 100, random.Random(42))
counts = sim.run()          # list of 7 bin counts

frame = Framebuffer(128, 64)
sim.render(frame)
pixels = frame.to_bytes()   # 1024 bytes in SSD1306 page order
```

To follow an experiment frame by frame, call `release()` to drop the next
ball. Then call `step()`, which moves every falling ball and bins the ones
that have landed, and `render(framebuffer)`. `finished` becomes true once
every ball has been released and has come to rest. `reset()` starts over.

### Modules

- `galtonboard.simulation`
  - `Ball`: a ball's position and state.
  - `Board`: the pin layout (`pins`), the bin columns (`bin_x`),
    `new_ball()`, `update_ball(ball, rng)` and `nearest_bin(x)`.
  - `GaltonSimulation`: `reset`, `release`, `step`, `render` and `run`,
    plus the `ball_count`, `finished` and `bins` members.
  - `main(argv=None)`: the entry point of the command.
- `galtonboard.ssd1306`
  - `Framebuffer`: `clear`, `set_pixel`, `draw_line` (Bresenham),
    `draw_char`, `draw_string` and `to_bytes`.
  - `RenderArea`: a range of columns and pages, and its `buffer_length`.
  - `Display`: `init`, `scroll`, `render`, `send_command`,
    `send_commands` and `send_buffer`.
  - `BitmapDisplay`: `config`, `command`, `send_data` and `draw_bitmap`.
  - `Command`: the controller's command codes.
- `galtonboard.font`: the 8×8 glyph table for A–Z and 0–9.
  `glyph_index(character)` gives a character's place in the table, and
  `glyph(character)` gives its eight column bytes. Lower-case letters are
  drawn as upper case, and any other character is drawn blank.

### Sending to a display

`Display` and `BitmapDisplay` have no transport of their own. You give them
a function that takes an I2C address and a `bytes` payload:

```python
from galtonboard.ssd1306 import Display, RenderArea

sent = []
display = Display(lambda address, payload: sent.append((address, payload)), 0x3C)
display.init()
display.render(frame, RenderArea(0, 127, 0, 7))
```

Each command goes out as a two-byte write, a `0x80` control byte followed by
the command. Display data goes out as one write, starting with a `0x40`
control byte.

## What it does not do

The package does not talk to hardware. It has no I2C bus driver, it does
not read push buttons, and it does not drive a live screen. The command
line prints the final bin counts as text. To see the board on an SSD1306,
supply a `write` function for your own I2C bus and render a `Framebuffer`
through `Display`.