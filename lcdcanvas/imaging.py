"""Loading images into bitmaps: RLE data, BMP files and common image formats."""

from __future__ import annotations

import io
import os
import struct
from pathlib import Path
from typing import BinaryIO, Union

from PIL import Image

from .canvas import Bitmap
from .files import get_file_extension
from .helpers import limit
from .masks import load_8bit_mask, mask_from_bitmap, mask_on_background
from .pixels import PixelFormat, argb, rgb

PathLike = Union[str, "os.PathLike[str]"]

_WINDIB_HEADER_SIZES = (40, 56, 64, 108, 124)
_OS2_V1_HEADER_SIZE = 12


class ImageError(ValueError):
    """Raised when image data cannot be read or decoded."""


def rle_decode(src: bytes, size: int) -> bytes:
    """Decode ``size`` bytes of run-length encoded data.

    A byte that repeats the previous one is followed by a count of further
    copies; after a run the next byte starts afresh.
    """
    out = bytearray()
    stream = iter(src)
    previous: int | None = None
    while len(out) < size:
        byte = next(stream, None)
        if byte is None:
            raise ImageError("RLE data ends early")
        out.append(byte)
        if previous is not None and byte == previous:
            count = next(stream, None)
            if count is None:
                raise ImageError("RLE data ends early")
            if len(out) + count > size:
                raise ImageError("RLE data overflows the destination")
            out.extend(bytes([byte]) * count)
            previous = None
        else:
            previous = byte
    return bytes(out)


def decode_rle_bitmap(fmt, rle_data: bytes) -> Bitmap:
    """Build a bitmap from a 16-bit width and height followed by RLE pixels."""
    if len(rle_data) < 4:
        raise ImageError("RLE bitmap header is truncated")
    width, height = struct.unpack_from("<HH", rle_data, 0)
    pixels = width * height
    raw = rle_decode(rle_data[4:], pixels * 2)
    return Bitmap(fmt, width, height, struct.unpack(f"<{pixels}H", raw))


def _read(stream: BinaryIO, size: int) -> bytes:
    chunk = stream.read(size)
    if len(chunk) != size:
        raise ImageError("BMP data is truncated")
    return chunk


def _parse_bmp(content: bytes) -> Bitmap:
    if len(content) < 14:
        raise ImageError("file is too short for a BMP header")
    stream = io.BytesIO(content)
    header = _read(stream, 14)
    if header[:2] != b"BM":
        raise ImageError("missing BMP signature")
    (fsize,) = struct.unpack_from("<I", header, 2)
    (hsize,) = struct.unpack_from("<I", header, 10)

    info = _read(stream, limit(4, (hsize - 14) & 0xFFFFFFFF, 32))
    (ihsize,) = struct.unpack_from("<I", info, 0)
    if ihsize + 14 > hsize:
        raise ImageError("invalid BMP info header size")
    if fsize in (14, ihsize + 14):
        fsize = len(content) - 2
    if fsize <= hsize:
        raise ImageError("declared BMP size is smaller than its header")

    if ihsize in _WINDIB_HEADER_SIZES:
        if len(info) < 12:
            raise ImageError("BMP info header is truncated")
        width, height = struct.unpack_from("<II", info, 4)
        fields = info[12:]
    elif ihsize == _OS2_V1_HEADER_SIZE:
        if len(info) < 8:
            raise ImageError("BMP info header is truncated")
        width, height = struct.unpack_from("<HH", info, 4)
        fields = info[8:]
    else:
        raise ImageError(f"unsupported BMP info header size {ihsize}")

    if len(fields) < 4:
        raise ImageError("BMP info header is truncated")
    planes, depth = struct.unpack_from("<HH", fields, 0)
    if planes != 1:
        raise ImageError("BMP must have exactly one plane")
    if width > 0xFFFF or height > 0xFFFF:
        raise ImageError(f"unsupported BMP size {width}x{height}")

    palette = b""
    if depth == 4:
        if hsize < 64:
            raise ImageError("BMP palette is missing")
        stream.seek(hsize - 64)
        palette = _read(stream, 64)[0::4]
    else:
        stream.seek(hsize)

    bmp = Bitmap(PixelFormat.RGB565, width, height)

    if depth == 16:
        for row in reversed(range(height)):
            values = struct.unpack(f"<{width}H", _read(stream, 2 * width))
            bmp.data[row * width:(row + 1) * width] = values
    elif depth == 32:
        has_alpha = False
        end = width * height
        for row in reversed(range(height)):
            for col in range(width):
                (pixel,) = struct.unpack("<I", _read(stream, 4))
                index = row * width + col
                red, green, blue = pixel >> 24, (pixel >> 16) & 0xFF, (pixel >> 8) & 0xFF
                if not has_alpha and (pixel & 0xFF) == 0xFF:
                    bmp.data[index] = rgb(red, green, blue)
                    continue
                if not has_alpha:
                    has_alpha = True
                    bmp.format = PixelFormat.ARGB4444
                    bmp.data[index:end] = [
                        ((tmp >> 1) & 0x0F)
                        + (((tmp >> 7) & 0x0F) << 4)
                        + (((tmp >> 12) & 0x0F) << 8)
                        for tmp in bmp.data[index:end]
                    ]
                bmp.data[index] = argb(pixel & 0xFF, red, green, blue)
    elif depth == 1:
        pass
    elif depth == 4:
        row_size = ((4 * width + 31) // 32) * 4
        for row in reversed(range(height)):
            line = _read(stream, row_size)
            for col in range(width):
                index = (line[col // 2] >> (0 if col & 1 else 4)) & 0x0F
                val = palette[index]
                bmp.data[row * width + col] = rgb(val, val, val)
    else:
        raise ImageError(f"unsupported BMP depth {depth}")

    return bmp


def load_bmp(path: PathLike) -> Bitmap:
    """Load an uncompressed 4, 16 or 32-bit BMP file."""
    try:
        content = Path(path).read_bytes()
    except OSError as exc:
        raise ImageError(f"cannot read {path}: {exc}") from exc
    return _parse_bmp(content)


def convert_rgba(img: bytes, width: int, height: int, channels: int) -> Bitmap:
    """Convert packed RGBA bytes to ARGB4444 (when ``channels`` is 4) or RGB565."""
    needed = width * height * 4
    if len(img) < needed:
        raise ImageError("RGBA data is truncated")
    quads = struct.iter_unpack("4B", bytes(img[:needed]))
    if channels == 4:
        data = [argb(a, r, g, b) for r, g, b, a in quads]
        return Bitmap(PixelFormat.ARGB4444, width, height, data)
    data = [rgb(r, g, b) for r, g, b, _ in quads]
    return Bitmap(PixelFormat.RGB565, width, height, data)


def _channel_count(image: Image.Image) -> int:
    if image.mode == "P":
        return 4 if "transparency" in image.info else 3
    if image.mode in ("CMYK", "YCbCr", "LAB", "HSV"):
        return 3
    return len(image.getbands())


def _decode(source, mode: str):
    try:
        with Image.open(source) as image:
            image.load()
            channels = _channel_count(image)
            converted = image.convert(mode)
            return converted.tobytes(), converted.width, converted.height, channels
    except (OSError, ValueError) as exc:
        raise ImageError(f"cannot decode image: {exc}") from exc


def load_bitmap(path: PathLike) -> Bitmap:
    """Load an image file; ``.bmp`` files use the BMP reader."""
    if get_file_extension(os.fspath(path)) == ".bmp":
        return load_bmp(path)
    img, width, height, channels = _decode(os.fspath(path), "RGBA")
    return convert_rgba(img, width, height, channels)


def load_ram_bitmap(buffer: bytes) -> Bitmap:
    """Decode an image held in memory."""
    img, width, height, channels = _decode(io.BytesIO(bytes(buffer)), "RGBA")
    return convert_rgba(img, width, height, channels)


def load_mask(path: PathLike) -> Bitmap:
    """Load an image file as a mask: darker pixels give higher opacity."""
    return mask_from_bitmap(load_bitmap(path))


def load_mask_on_background(path: PathLike, foreground: int, background: int) -> Bitmap:
    """Load a mask file and render it in ``foreground`` over ``background``."""
    return mask_on_background(load_mask(path), foreground, background)


def load_8bit_mask_on_background(lbm: bytes, foreground: int, background: int) -> Bitmap:
    """Render an 8-bit mask in ``foreground`` over ``background``."""
    return mask_on_background(load_8bit_mask(lbm), foreground, background)


def load_font(buffer: bytes) -> tuple[bytes, int, int]:
    """Decode an image in memory to one grey byte per pixel.

    Returns ``(pixels, width, height)``.
    """
    data, width, height, _ = _decode(io.BytesIO(bytes(buffer)), "L")
    return data, width, height