"""Depth maps and depth-tested blitting."""

from __future__ import annotations

from array import array

from .gdrv import Bitmap8, BitmapType

__all__ = ["ZMap", "fill", "paint", "paint_flat", "flip_zmap_horizontally"]


class ZMap:
    """A 16-bit depth buffer with its own row stride."""

    def __init__(self, width: int, height: int, stride: int = -1) -> None:
        self.width = width
        self.height = height
        self.stride = stride if stride >= 0 else self._pad(width)
        self.resolution = 0
        self.values = array("H", [0]) * (self.stride * height)

    @staticmethod
    def _pad(width: int) -> int:
        return width - (width & 3) + 4 if width & 3 else width


def fill(zmap: ZMap, width: int, height: int, x_off: int, y_off: int, fill_word: int) -> None:
    """Set a rectangle of the depth map to one value."""
    row_fill = array("H", [fill_word]) * width
    for y in range(y_off, y_off + height):
        start = y * zmap.stride + x_off
        zmap.values[start : start + width] = row_fill


def _require_unspliced(bmp: Bitmap8) -> None:
    if bmp.bitmap_type == BitmapType.SPLICED:
        raise ValueError("wrong bitmap type")


def paint(
    width: int,
    height: int,
    dst_bmp: Bitmap8,
    dst_bmp_x: int,
    dst_bmp_y: int,
    dst_zmap: ZMap,
    dst_zmap_x: int,
    dst_zmap_y: int,
    src_bmp: Bitmap8,
    src_bmp_x: int,
    src_bmp_y: int,
    src_zmap: ZMap,
    src_zmap_x: int,
    src_zmap_y: int,
) -> None:
    """Copy pixels that are at least as near as the destination depth."""
    _require_unspliced(src_bmp)
    for row in range(height):
        src = (src_bmp_y + row) * src_bmp.stride + src_bmp_x
        dst = (dst_bmp_y + row) * dst_bmp.stride + dst_bmp_x
        src_z = (src_zmap_y + row) * src_zmap.stride + src_zmap_x
        dst_z = (dst_zmap_y + row) * dst_zmap.stride + dst_zmap_x
        for col in range(width):
            depth = src_zmap.values[src_z + col]
            if dst_zmap.values[dst_z + col] >= depth:
                dst_bmp.pixels[dst + col] = src_bmp.pixels[src + col]
                dst_zmap.values[dst_z + col] = depth


def paint_flat(
    width: int,
    height: int,
    dst_bmp: Bitmap8,
    dst_bmp_x: int,
    dst_bmp_y: int,
    zmap: ZMap,
    zmap_x: int,
    zmap_y: int,
    src_bmp: Bitmap8,
    src_bmp_x: int,
    src_bmp_y: int,
    depth: int,
) -> None:
    """Copy opaque pixels at a single depth where the depth map is farther."""
    _require_unspliced(src_bmp)
    for row in range(height):
        src = (src_bmp_y + row) * src_bmp.stride + src_bmp_x
        dst = (dst_bmp_y + row) * dst_bmp.stride + dst_bmp_x
        z = (zmap_y + row) * zmap.stride + zmap_x
        for col in range(width):
            pixel = src_bmp.pixels[src + col]
            if pixel and zmap.values[z + col] > depth:
                dst_bmp.pixels[dst + col] = pixel


def flip_zmap_horizontally(zmap: ZMap) -> None:
    """Mirror the depth map top to bottom, in place."""
    values = zmap.values
    stride, width = zmap.stride, zmap.width
    for top in range(zmap.height // 2):
        bottom = zmap.height - 1 - top
        a, b = top * stride, bottom * stride
        values[a : a + width], values[b : b + width] = values[b : b + width], values[a : a + width]