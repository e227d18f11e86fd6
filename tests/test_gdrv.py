import pytest

from cadetpinball.gdrv import (
    TRANSPARENT,
    Bitmap8,
    BitmapType,
    Bmp8Flags,
    Bmp8Header,
    Palette,
    Rgba,
    copy_bitmap,
    copy_bitmap_w_transparency,
    fill_bitmap,
)
from cadetpinball.utils import align


def _indexed(width, height, data):
    bmp = Bitmap8(width, height, indexed=True)
    bmp.indexed[:] = bytes(data)
    return bmp


def test_header_packs_to_fourteen_bytes():
    header = Bmp8Header(1, 8, 4, 0, 0, 32, Bmp8Flags.DIB_BITMAP)
    assert len(header.pack()) == 14


def test_header_round_trip():
    header = Bmp8Header(2, 6, 3, -5, 7, 24, Bmp8Flags.DIB_BITMAP)
    assert Bmp8Header.unpack(header.pack()) == header


def test_header_unpack_rejects_short_data():
    with pytest.raises(ValueError):
        Bmp8Header.unpack(b"\x00" * 5)


def test_negative_dimensions_rejected():
    with pytest.raises(ValueError):
        Bitmap8(-1, 4)


def test_from_header_pads_unaligned_width():
    stride = align(6, 4)
    header = Bmp8Header(0, 6, 3, 10, 20, stride * 3, Bmp8Flags.DIB_BITMAP)
    bmp = Bitmap8.from_header(header)
    assert bmp.bitmap_type == BitmapType.DIB
    assert bmp.indexed_stride == stride
    assert bmp.stride == 6
    assert len(bmp.indexed) == stride * 3
    assert (bmp.x_position, bmp.y_position) == (10, 20)


def test_from_header_wrong_size_raises():
    with pytest.raises(ValueError):
        Bitmap8.from_header(Bmp8Header(0, 4, 4, 0, 0, 15, Bmp8Flags.DIB_BITMAP))


def test_from_header_raw_unaligned_requires_flag():
    with pytest.raises(ValueError):
        Bitmap8.from_header(Bmp8Header(0, 6, 2, 0, 0, align(6, 4) * 2, Bmp8Flags(0)))
    bmp = Bitmap8.from_header(
        Bmp8Header(0, 6, 2, 0, 0, align(6, 4) * 2, Bmp8Flags.RAW_BMP_UNALIGNED)
    )
    assert bmp.bitmap_type == BitmapType.RAW


def test_from_header_spliced_uses_header_size():
    bmp = Bitmap8.from_header(Bmp8Header(0, 5, 5, 0, 0, 9, Bmp8Flags.SPLICED))
    assert bmp.bitmap_type == BitmapType.SPLICED
    assert len(bmp.indexed) == 9


def test_scale_indexed_nearest_neighbour():
    bmp = _indexed(2, 2, [1, 2, 3, 4])
    bmp.scale_indexed(2.0, 2.0)
    assert (bmp.width, bmp.height, bmp.stride) == (4, 4, 4)
    assert len(bmp.pixels) == 16
    for y in range(4):
        for x in range(4):
            assert bmp.indexed[y * 4 + x] == [1, 2, 3, 4][(y // 2) * 2 + x // 2]


def test_scale_indexed_identity_keeps_data():
    bmp = _indexed(2, 2, [1, 2, 3, 4])
    bmp.scale_indexed(1.0, 1.0)
    assert bytes(bmp.indexed) == bytes([1, 2, 3, 4])


def test_scale_non_indexed_raises():
    with pytest.raises(ValueError):
        Bitmap8(3, 3).scale_indexed(2.0, 2.0)


def test_palette_fixed_entries():
    palette = Palette.from_entries(None)
    assert len(palette) == 256
    assert palette[0] == TRANSPARENT
    assert palette[255] == Rgba(0xFF, 0xFF, 0xFF, 0xFF)
    assert palette[7] == Rgba(0xC0, 0xC0, 0xC0, 0)
    assert palette[10].alpha == 0xFF
    assert palette[250] == TRANSPARENT


def test_palette_copies_table_colours():
    entries = [Rgba(i % 256, (i * 3) % 256, (i * 7) % 256, 0) for i in range(256)]
    palette = Palette.from_entries(entries)
    for index in range(10, 246):
        entry = entries[index]
        assert palette[index] == Rgba(entry.red, entry.green, entry.blue, 0xFF)


def test_palette_short_record_raises():
    with pytest.raises(ValueError):
        Palette.from_entries([TRANSPARENT] * 20)


def test_apply_flips_vertically():
    palette = Palette.from_entries(None)
    bmp = _indexed(2, 2, [0, 255, 255, 0])
    palette.apply(bmp)
    assert bmp.pixels == [palette[255], palette[0], palette[0], palette[255]]


def test_apply_spliced_raises():
    bmp = Bitmap8.from_header(Bmp8Header(0, 2, 2, 0, 0, 4, Bmp8Flags.SPLICED))
    with pytest.raises(ValueError):
        Palette.from_entries(None).apply(bmp)


def test_fill_bitmap_region():
    bmp = Bitmap8(4, 4)
    red = Rgba(255, 0, 0, 255)
    fill_bitmap(bmp, 2, 2, 1, 1, red)
    filled = {i for i, p in enumerate(bmp.pixels) if p == red}
    assert filled == {5, 6, 9, 10}


def test_copy_bitmap_rectangle():
    src = Bitmap8(3, 3)
    src.pixels = [Rgba(i, 0, 0, 255) for i in range(9)]
    dst = Bitmap8(3, 3)
    copy_bitmap(dst, 2, 2, 0, 0, src, 1, 1)
    assert dst.pixels[0:2] == src.pixels[4:6]
    assert dst.pixels[3:5] == src.pixels[7:9]
    assert dst.pixels[2] == TRANSPARENT


def test_copy_with_transparency_keeps_background():
    blue = Rgba(0, 0, 255, 255)
    green = Rgba(0, 255, 0, 255)
    dst = Bitmap8(2, 1)
    fill_bitmap(dst, 2, 1, 0, 0, blue)
    src = Bitmap8(2, 1)
    src.pixels = [TRANSPARENT, green]
    copy_bitmap_w_transparency(dst, 2, 1, 0, 0, src, 0, 0)
    assert dst.pixels == [blue, green]