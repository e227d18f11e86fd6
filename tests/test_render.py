import pytest

from cadetpinball.gdrv import TRANSPARENT, Bitmap8, Rgba
from cadetpinball.maths import Rectangle
from cadetpinball.render import Renderer, Sprite, VisualType
from cadetpinball.zdrv import ZMap, fill as zfill

RED = Rgba(255, 0, 0, 255)
BLUE = Rgba(0, 0, 255, 255)
GREEN = Rgba(0, 255, 0, 255)


def solid(width, height, color):
    bmp = Bitmap8(width, height)
    bmp.pixels = [color] * (width * height)
    return bmp


def depth_map(width, height, value):
    zmap = ZMap(width, height, width)
    zfill(zmap, width, height, 0, 0, value)
    return zmap


def pixel(renderer, x, y):
    return renderer.vscreen.pixels[y * renderer.vscreen.stride + x]


def test_init_without_background_clears_screen_and_depth():
    renderer = Renderer(None, 0.0, 1.0, 8, 6)
    assert renderer.vscreen.pixels == [TRANSPARENT] * 48
    assert list(renderer.zscreen.values) == [0xFFFF] * 48
    assert renderer.vscreen_rect == Rectangle(0, 0, 8, 6)


def test_init_with_background_copies_it():
    background = solid(8, 6, GREEN)
    renderer = Renderer(background, 0.0, 1.0, 8, 6)
    assert renderer.vscreen.pixels == [GREEN] * 48


def test_create_sprite_registers_and_marks_dirty():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    bmp = solid(3, 2, RED)
    sprite = renderer.create_sprite(VisualType.SPRITE, bmp, None, 4, 5, None)
    assert sprite in renderer.sprite_list
    assert sprite in renderer.dirty_list
    assert sprite.bmp_rect == Rectangle(4, 5, bmp.width, bmp.height)
    assert sprite.bounding_rect.width == -1
    assert sprite.dirty_rect_prev == sprite.bmp_rect
    assert sprite.dirty_rect_prev is not sprite.bmp_rect


def test_create_ball_is_not_dirty():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    ball = renderer.create_sprite(VisualType.BALL, None, None, 0, 0, None)
    assert ball in renderer.ball_list
    assert ball not in renderer.sprite_list
    assert renderer.dirty_list == []


def test_sprite_without_zmap_uses_background_zmap():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    background_zmap = depth_map(16, 16, 0)
    renderer.set_background_zmap(background_zmap, 10, 20)
    sprite = renderer.create_sprite(VisualType.SPRITE, None, None, 15, 27, None)
    assert sprite.zmap is background_zmap
    assert (sprite.zmap_offset_x + 10, sprite.zmap_offset_y + 20) == (15, 27)


def test_update_paints_nearest_sprite():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    near = renderer.create_sprite(
        VisualType.SPRITE, solid(4, 4, RED), depth_map(4, 4, 0), 2, 2, Rectangle(2, 2, 4, 4)
    )
    far = renderer.create_sprite(
        VisualType.SPRITE, solid(2, 2, BLUE), depth_map(2, 2, 5), 2, 2, Rectangle(2, 2, 2, 2)
    )
    renderer.build_occlude_list()
    assert near.sprite_array == [near, far]
    renderer.update()
    for y in range(2, 6):
        for x in range(2, 6):
            assert pixel(renderer, x, y) == RED
            assert renderer.zscreen.values[y * 16 + x] == 0
    assert pixel(renderer, 0, 0) == TRANSPARENT
    assert pixel(renderer, 6, 6) == TRANSPARENT
    assert renderer.dirty_list == []


def test_removed_sprite_is_dropped_on_update():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    sprite = renderer.create_sprite(VisualType.SPRITE, solid(2, 2, RED), None, 1, 1, None)
    sprite.removed = True
    renderer.update()
    assert sprite not in renderer.sprite_list


def test_ball_is_painted_and_unpainted():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    ball = renderer.create_sprite(VisualType.BALL, None, None, 0, 0, None)
    bmp = solid(2, 2, RED)
    renderer.ball_set(ball, bmp, 1.0, 3, 4)
    renderer.update()
    assert pixel(renderer, 3, 4) == RED
    assert pixel(renderer, 4, 5) == RED
    renderer.ball_set(ball, bmp, 1.0, 10, 10)
    renderer.update()
    assert pixel(renderer, 3, 4) == TRANSPARENT
    assert pixel(renderer, 10, 10) == RED


def test_ball_without_bitmap_has_no_dirty_rect():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    ball = renderer.create_sprite(VisualType.BALL, None, None, 0, 0, None)
    renderer.update()
    assert ball.dirty_rect.width == -1


def test_ball_set_depth():
    renderer = Renderer(None, 5.0, 1.0, 16, 16)
    ball = renderer.create_sprite(VisualType.BALL, None, None, 0, 0, None)
    renderer.ball_set(ball, None, 1.0, 0, 0)
    assert ball.depth == 0
    renderer.ball_set(ball, None, 8.5, 0, 0)
    assert ball.depth == 3


def test_sprite_set_bitmap_only_marks_changes():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    bmp = solid(2, 2, RED)
    sprite = renderer.create_sprite(VisualType.SPRITE, bmp, None, 0, 0, None)
    renderer.update()
    renderer.sprite_set_bitmap(sprite, bmp)
    assert renderer.dirty_list == []
    other = solid(3, 5, BLUE)
    renderer.sprite_set_bitmap(sprite, other)
    assert renderer.dirty_list == [sprite]
    assert (sprite.bmp_rect.width, sprite.bmp_rect.height) == (other.width, other.height)


def test_sprite_set_moves_sprite():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    sprite = renderer.create_sprite(VisualType.SPRITE, None, None, 0, 0, None)
    renderer.update()
    bmp = solid(2, 3, RED)
    zmap = depth_map(2, 3, 0)
    renderer.sprite_set(sprite, bmp, zmap, 7, 8)
    assert sprite.bmp_rect == Rectangle(7, 8, 2, 3)
    assert sprite.zmap is zmap
    assert renderer.dirty_list == [sprite]


def test_shift_accumulates():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    renderer.shift(2, -1)
    renderer.shift(-1, 3)
    assert (renderer.offset_x, renderer.offset_y) == (2 - 1, -1 + 3)


def test_occlude_list_lone_bitmap_sprite_has_none():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    with_bmp = renderer.create_sprite(
        VisualType.SPRITE, solid(2, 2, RED), None, 0, 0, Rectangle(0, 0, 2, 2)
    )
    area = renderer.create_sprite(VisualType.NONE, None, None, 10, 10, Rectangle(10, 10, 2, 2))
    renderer.build_occlude_list()
    assert with_bmp.sprite_array is None
    assert area.sprite_array == [area]


def test_remove_sprite_and_ball():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    sprite = renderer.create_sprite(VisualType.SPRITE, None, None, 0, 0, None)
    ball = renderer.create_sprite(VisualType.BALL, None, None, 0, 0, None)
    renderer.remove_sprite(sprite)
    renderer.remove_ball(ball)
    assert renderer.sprite_list == []
    assert renderer.ball_list == []


def test_sprite_identity_not_equality():
    renderer = Renderer(None, 0.0, 1.0, 16, 16)
    first = renderer.create_sprite(VisualType.SPRITE, None, None, 0, 0, None)
    second = renderer.create_sprite(VisualType.SPRITE, None, None, 0, 0, None)
    renderer.remove_sprite(second)
    assert renderer.sprite_list == [first]
    assert isinstance(first, Sprite) and renderer.sprite_list[0] is first