"""8-bit indexed bitmaps, the game palette and bitmap blitting."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import ClassVar, Iterable, Sequence

__all__ = [
    "BitmapType",
    "Bmp8Flags",
    "Bmp8Header",
    "Rgba",
    "TRANSPARENT",
    "Bitmap8",
    "Palette",
    "fill_bitmap",
    "copy_bitmap",
    "copy_bitmap_w_transparency",
]


class BitmapType(enum.IntEnum):
    NONE = 0
    RAW = 1
    DIB = 2
    SPLICED = 3


class Bmp8Flags(enum.IntFlag):
    RAW_BMP_UNALIGNED = 1 << 0
    DIB_BITMAP = 1 << 1
    SPLICED = 1 << 2


@dataclass
class Bmp8Header:
    """Header that precedes an 8-bit bitmap record in a data file."""

    resolution: int = 0
    width: int = 0
    height: int = 0
    x_position: int = 0
    y_position: int = 0
    size: int = 0
    flags: Bmp8Flags = Bmp8Flags(0)

    FORMAT: ClassVar[str] = "<BhhhhiB"
    SIZE: ClassVar[int] = struct.calcsize("<BhhhhiB")

    @classmethod
    def unpack(cls, data: bytes) -> "Bmp8Header":
        """Decode the 14-byte little-endian header."""
        try:
            res, width, height, x_pos, y_pos, size, flags = struct.unpack(cls.FORMAT, bytes(data))
        except struct.error as exc:
            raise ValueError(f"bitmap header must be {cls.SIZE} bytes") from exc
        return cls(res, width, height, x_pos, y_pos, size, Bmp8Flags(flags))

    def pack(self) -> bytes:
        return struct.pack(
            self.FORMAT,
            self.resolution,
            self.width,
            self.height,
            self.x_position,
            self.y_position,
            self.size,
            int(self.flags),
        )

    def is_flag_set(self, flag: Bmp8Flags) -> bool:
        return bool(self.flags & flag)


@dataclass(frozen=True)
class Rgba:
    red: int = 0
    green: int = 0
    blue: int = 0
    alpha: int = 0

    @property
    def value(self) -> int:
        """The colour packed as 0xAARRGGBB."""
        return (self.alpha << 24) | (self.red << 16) | (self.green << 8) | self.blue

    def __bool__(self) -> bool:
        return self.value != 0


TRANSPARENT = Rgba()

_SYSTEM_COLORS = (
    (0x00, 0x00, 0x00),
    (0x80, 0x00, 0x00),
    (0x00, 0x80, 0x00),
    (0x80, 0x80, 0x00),
    (0x00, 0x00, 0x80),
    (0x80, 0x00, 0x80),
    (0x00, 0x80, 0x80),
    (0xC0, 0xC0, 0xC0),
    (0xC0, 0xDC, 0xC0),
    (0xA6, 0xCA, 0xF0),
)


class Bitmap8:
    """A bitmap with optional 8-bit indexed data and a resolved colour buffer."""

    def __init__(self, width: int, height: int, indexed: bool = False) -> None:
        if width < 0 or height < 0:
            raise ValueError("negative bitmap dimensions")
        self.width = width
        self.height = height
        self.stride = width
        self.indexed_stride = width
        self.bitmap_type = BitmapType.DIB
        self.x_position = 0
        self.y_position = 0
        self.resolution = 0
        self.indexed: bytearray | None = bytearray(height * width) if indexed else None
        self.pixels: list[Rgba] = [TRANSPARENT] * (width * height)

    @classmethod
    def from_header(cls, header: Bmp8Header) -> "Bitmap8":
        """Create an empty bitmap sized by a data-file header.

        The indexed buffer is allocated to ``header.size`` bytes for the
        caller to fill.
        """
        bmp = cls(header.width, header.height)
        if header.is_flag_set(Bmp8Flags.SPLICED):
            bmp.bitmap_type = BitmapType.SPLICED
        elif header.is_flag_set(Bmp8Flags.DIB_BITMAP):
            bmp.bitmap_type = BitmapType.DIB
        else:
            bmp.bitmap_type = BitmapType.RAW
        bmp.x_position = header.x_position
        bmp.y_position = header.y_position
        bmp.resolution = header.resolution

        if bmp.bitmap_type == BitmapType.SPLICED:
            size = header.size
        else:
            width = bmp.width
            if (
                bmp.bitmap_type == BitmapType.RAW
                and width % 4
                and not header.is_flag_set(Bmp8Flags.RAW_BMP_UNALIGNED)
            ):
                raise ValueError("wrong raw bitmap align flag")
            if width % 4:
                bmp.indexed_stride = width - width % 4 + 4
            size = bmp.height * bmp.indexed_stride
            if size != header.size:
                raise ValueError(f"wrong bitmap size {header.size}, expected {size}")
        bmp.indexed = bytearray(size)
        return bmp

    def scale_indexed(self, scale_x: float, scale_y: float) -> None:
        """Resize the indexed data by nearest-neighbour sampling."""
        if self.indexed is None:
            raise ValueError("scaling a non-indexed bitmap")
        new_width = int(self.width * scale_x)
        new_height = int(self.height * scale_y)
        if new_width == self.width and new_height == self.height:
            return
        src = self.indexed
        stride = self.indexed_stride
        scaled = bytearray()
        for y in range(new_height):
            row_start = int(y / scale_y) * stride
            scaled.extend(src[row_start + int(x / scale_x)] for x in range(new_width))
        self.width = self.stride = self.indexed_stride = new_width
        self.height = new_height
        self.indexed = scaled
        self.pixels = [TRANSPARENT] * (new_width * new_height)


class Palette:
    """The 256-colour table used to resolve indexed bitmaps."""

    def __init__(self, colors: Iterable[Rgba] | None = None) -> None:
        self.colors = list(colors) if colors is not None else [TRANSPARENT] * 256
        if len(self.colors) != 256:
            raise ValueError("a palette has 256 colours")

    @classmethod
    def from_entries(cls, entries: Sequence[Rgba] | None) -> "Palette":
        """Build the display palette from a table's palette record.

        Entries 0-9 are the fixed system colours, 10-245 come from the table,
        255 is white; the rest stay transparent.
        """
        if entries is not None and len(entries) < 246:
            raise ValueError("palette record needs at least 246 entries")
        colors = [TRANSPARENT] * 256
        for index, (red, green, blue) in enumerate(_SYSTEM_COLORS):
            colors[index] = Rgba(red, green, blue, 0)
        for index in range(10, 246):
            if entries is not None:
                entry = entries[index]
                colors[index] = Rgba(entry.red, entry.green, entry.blue, 0xFF)
            else:
                colors[index] = Rgba(0, 0, 0, 0xFF)
        colors[255] = Rgba(0xFF, 0xFF, 0xFF, 0xFF)
        return cls(colors)

    def __getitem__(self, index: int) -> Rgba:
        return self.colors[index]

    def __len__(self) -> int:
        return len(self.colors)

    def apply(self, bitmap: Bitmap8) -> None:
        """Resolve a bitmap's indexed data to colours, flipping it vertically."""
        if bitmap.bitmap_type == BitmapType.NONE:
            return
        if bitmap.bitmap_type == BitmapType.SPLICED:
            raise ValueError("cannot apply a palette to a spliced bitmap")
        if bitmap.indexed is None:
            raise ValueError("cannot apply a palette to a non-indexed bitmap")
        stride = bitmap.indexed_stride
        data = bitmap.indexed
        pixels: list[Rgba] = []
        for y in reversed(range(bitmap.height)):
            row = data[y * stride : y * stride + bitmap.width]
            pixels.extend(self.colors[index] for index in row)
        bitmap.pixels = pixels


def fill_bitmap(bmp: Bitmap8, width: int, height: int, x_off: int, y_off: int, color: Rgba) -> None:
    """Fill a rectangle of ``bmp`` with one colour."""
    for y in range(y_off, y_off + height):
        start = y * bmp.stride + x_off
        bmp.pixels[start : start + width] = [color] * width


def copy_bitmap(
    dst: Bitmap8,
    width: int,
    height: int,
    x_off: int,
    y_off: int,
    src: Bitmap8,
    src_x_off: int,
    src_y_off: int,
) -> None:
    """Copy a rectangle of ``src`` into ``dst``."""
    for row in range(height):
        s = (src_y_off + row) * src.stride + src_x_off
        d = (y_off + row) * dst.stride + x_off
        dst.pixels[d : d + width] = src.pixels[s : s + width]


def copy_bitmap_w_transparency(
    dst: Bitmap8,
    width: int,
    height: int,
    x_off: int,
    y_off: int,
    src: Bitmap8,
    src_x_off: int,
    src_y_off: int,
) -> None:
    """Copy a rectangle of ``src`` into ``dst``, skipping transparent pixels."""
    for row in range(height):
        s = (src_y_off + row) * src.stride + src_x_off
        d = (y_off + row) * dst.stride + x_off
        for offset, pixel in enumerate(src.pixels[s : s + width]):
            if pixel:
                dst.pixels[d + offset] = pixel