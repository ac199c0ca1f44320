"""Reading of uncompressed 32-bit BMP images."""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from typing import Tuple, Union

import numpy as np

from skygame.files import load_entire_file
from skygame.reporting import LogLevel, logf

# magic, file size, reserved, data offset, header size, width, height,
# planes, bits per pixel, compression, image size, horizontal and vertical
# resolution, colour count, important colour count.
_HEADER = struct.Struct("<2sIIIIIIhhiIiiII")


class BitmapError(ValueError):
    """The data is not a BMP image this loader supports."""


@dataclass(frozen=True, eq=False)
class Bitmap:
    """Image pixels as 32-bit values holding red, green, blue, alpha from high byte to low."""

    width: int
    height: int
    pixels: np.ndarray

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def pixel(self, x: int, y: int) -> int:
        """The packed value at column ``x`` of stored row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return int(self.pixels[y * self.width + x])

    def rgba(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """The red, green, blue and alpha channels at ``(x, y)``."""
        value = self.pixel(x, y)
        return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF

    def to_bytes(self) -> bytes:
        """The pixels as little-endian 32-bit values."""
        return self.pixels.astype("<u4").tobytes()


def parse_bmp(data: bytes) -> Bitmap:
    """Decode a 32-bit uncompressed BMP held in ``data``."""
    if len(data) < _HEADER.size:
        raise BitmapError("data too short for a BMP header")
    (
        magic,
        _file_size,
        _reserved,
        data_offset,
        header_size,
        width,
        height,
        num_planes,
        bitpp,
        compression,
        image_size,
        _hppm,
        _vppm,
        _num_colors,
        _num_important,
    ) = _HEADER.unpack_from(data)

    if magic != b"BM":
        raise BitmapError("missing BM signature")
    if header_size != 40:
        raise BitmapError(f"unsupported header size {header_size}")
    if num_planes != 1:
        raise BitmapError(f"unsupported plane count {num_planes}")
    if bitpp != 32:
        raise BitmapError(f"unsupported bit depth {bitpp}")
    if compression != 0:
        raise BitmapError(f"unsupported compression {compression}")

    logf(LogLevel.INFO, "Image Dimensions: %dx%d Size: %d", width, height, image_size)

    count = width * height
    if count * 4 > image_size:
        raise BitmapError("image size smaller than its dimensions")
    if data_offset + count * 4 > len(data):
        raise BitmapError("pixel data truncated")

    raw = np.frombuffer(data, dtype="<u4", count=count, offset=data_offset).astype(np.uint32)
    # Stored as blue, green, red, alpha bytes; rotate so red is the high byte.
    pixels = (raw << np.uint32(8)) | (raw >> np.uint32(24))
    return Bitmap(width, height, pixels)


def load_bmp(filename: Union[str, os.PathLike]) -> Bitmap:
    """Read and decode the BMP file ``filename``."""
    return parse_bmp(load_entire_file(filename, "rb"))