# lcdcanvas

A software framebuffer for 16-bit LCD-style displays. Pixels are held in
memory as RGB565 or ARGB4444 values. Every drawing call respects a clipping
rectangle and a drawing offset.

## Modules

- `lcdcanvas.pixels`
  - `PixelFormat`: `RGB565` or `ARGB4444`.
  - Colour packing and splitting: `rgb`, `rgb_join`, `argb`, `rgb_split`, `argb_split`.
  - The colour carried in the upper 16 bits of drawing flags: `color_val`, `color_flags`.
  - Line patterns: `SOLID`, `DOTTED`, `STASHED`.
- `lcdcanvas.canvas`: the `Bitmap` class, a width × height list of 16-bit pixels.
  - Clipping and offset: `set_clipping_rect`, `clear_clipping_rect`, `set_offset`, `clear_offset`, `reset`.
  - Pixel access: `pixel` (clipped, relative to the offset) and `pixel_abs`.
  - Drawing:
    - pixels and alpha-blended pixels (opacity 0–15);
    - patterned horizontal and vertical lines;
    - Liang–Barsky clipping (`clip_line`) and Bresenham lines (`draw_line`);
    - rectangle outlines and solid outlines;
    - solid, patterned and translucent filled rectangles;
    - `invert_rect` and `clear`;
    - bitmap blitting with optional scaling (`draw_bitmap`, `draw_scaled_bitmap`).
  - Copies: `horizontal_flip`, `vertical_flip` and `invert_mask`.
- `lcdcanvas.shapes`: `draw_filled_triangle`, `draw_circle`,
  `draw_filled_circle`, `draw_annulus_sector` and `draw_bitmap_pattern_pie`.
  The sectors are selected with `Slope`.
- `lcdcanvas.masks`:
  - Blending through a 4-bit alpha mask: `draw_mask` uses a colour, `draw_mask_bitmap` uses another bitmap.
  - `draw_bitmap_pattern` blends a colour through an 8-bit alpha pattern with a 16-bit width/height header.
  - Building masks: `load_8bit_mask` reads width byte, height byte and alpha bytes; `mask_from_bitmap` makes darker pixels more opaque.
  - `mask_on_background` renders a mask over a filled background.
- `lcdcanvas.text`:
  - `Font` describes a bitmap font: an alpha pattern plus glyph column offsets.
  - `TextFlags` holds the flags `VERTICAL`, `LEADING0`, `CENTERED`, `RIGHT` and `SPACING_NUMBERS_CONST`.
  - Functions: `text_width`, `draw_char`, `draw_sized_text`, `draw_text`, `draw_text_at_index` and `draw_number`.
  - `format_number` formats integers with an implied decimal point, zero padding, a prefix and a suffix.
- `lcdcanvas.imaging`:
  - RLE decoding: `rle_decode`, `decode_rle_bitmap`.
  - `load_bmp` reads 16-bit, 32-bit and 4-bit palette BMP files. A 1-bit BMP yields a blank bitmap.
  - `load_bitmap` and `load_ram_bitmap` load other image formats through Pillow.
  - `convert_rgba` converts packed RGBA bytes.
  - `load_mask`, `load_mask_on_background`, `load_8bit_mask_on_background` and `load_font` cover masks and fonts. `load_font` returns grey bytes with width and height.
  - Failures raise `ImageError`, a `ValueError`.
- `lcdcanvas.files`: `get_file_extension`, `is_extension_matching` (for
  patterns such as `".gif.jpg.png"`), `compare_nocase` and `sort_nocase`.
- `lcdcanvas.keyboard`: layout and hit-testing of a four-row on-screen text
  keyboard.
  - `TextKeyboard.keys()` yields the key positions.
  - `TextKeyboard.touch(x, y)` returns the `KeyPress` hit, or `None`. Layout keys switch between lowercase, uppercase and numbers.
- `lcdcanvas.helpers`: `limit`, `div_round_closest`, `mult_div_round_closest`,
  `mod`, `align32`, `sgn`, `text_at_index` and `find_next_line`.

## Installing

```
pip install .
```

## Example

```python
from lcdcanvas.canvas import Bitmap
from lcdcanvas.pixels import PixelFormat, rgb, color_flags
from lcdcanvas.shapes import draw_filled_circle

canvas = Bitmap(PixelFormat.RGB565, 64, 32)
canvas.clear(color_flags(rgb(0, 0, 0)))
canvas.set_clipping_rect(0, 48, 0, 32)
draw_filled_circle(canvas, 24, 16, 10, color_flags(rgb(255, 0, 0)))
print(hex(canvas.pixel_abs(24, 16)))
```

## What it does not do

- It draws into in-memory buffers only. It does not show anything on a screen or in a window.
- It has no widgets, windows, focus handling or event loop. The text keyboard computes layout and hits but does not paint itself.
- It ships no fonts. A `Font` is built from a pattern and glyph offsets that you supply.

## Running the tests

```
pip install .[test]
pytest
```