"""Sprite and ball compositing onto the virtual screen with depth testing."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, replace
from typing import Optional

from .gdrv import TRANSPARENT, Bitmap8, copy_bitmap, fill_bitmap
from .maths import Rectangle, enclosing_box, rectangle_clip
from .zdrv import ZMap, fill as zmap_fill, paint, paint_flat

__all__ = ["VisualType", "Sprite", "Renderer", "MAX_DIRTY_SPRITES", "BALL_BITMAP_COUNT"]

MAX_DIRTY_SPRITES = 999
BALL_BITMAP_COUNT = 20
_BALL_BITMAP_SIZE = 64
_FAR_DEPTH = 0xFFFF


class VisualType(enum.IntEnum):
    NONE = 0
    SPRITE = 1
    BALL = 2


def _to_int16(value: int) -> int:
    return ((value + 0x8000) & 0xFFFF) - 0x8000


@dataclass(eq=False)
class Sprite:
    """Something drawn on the table: a static sprite, an area or a ball."""

    visual_type: VisualType
    bmp: Optional[Bitmap8] = None
    zmap: Optional[ZMap] = None
    bmp_rect: Rectangle = field(default_factory=Rectangle)
    removed: bool = False
    depth: int = 0
    dirty_rect_prev: Rectangle = field(default_factory=Rectangle)
    zmap_offset_x: int = 0
    zmap_offset_y: int = 0
    dirty_rect: Rectangle = field(default_factory=Rectangle)
    sprite_array: Optional[list["Sprite"]] = None
    bounding_rect: Rectangle = field(default_factory=lambda: Rectangle(0, 0, -1, -1))


class Renderer:
    """Owns the virtual screen, its depth buffer and every sprite on it."""

    def __init__(
        self,
        bmp: Optional[Bitmap8],
        z_min: float,
        z_scaler: float,
        width: int,
        height: int,
    ) -> None:
        self.zscaler = z_scaler
        self.zmin = z_min
        self.zmax = (4294967300.0 / z_scaler if z_scaler else math.inf) + z_min
        self.vscreen = Bitmap8(width, height)
        self.zscreen = ZMap(width, height, width)
        zmap_fill(self.zscreen, width, height, 0, 0, _FAR_DEPTH)
        self.vscreen_rect = Rectangle(0, 0, width, height)
        self.ball_bitmaps = [
            Bitmap8(_BALL_BITMAP_SIZE, _BALL_BITMAP_SIZE) for _ in range(BALL_BITMAP_COUNT)
        ]
        self.background_bitmap = bmp
        self.background_zmap: Optional[ZMap] = None
        self.zmap_offset_x = 0
        self.zmap_offset_y = 0
        self.offset_x = 0
        self.offset_y = 0
        self.dirty_list: list[Sprite] = []
        self.sprite_list: list[Sprite] = []
        self.ball_list: list[Sprite] = []
        if bmp is not None:
            copy_bitmap(self.vscreen, width, height, 0, 0, bmp, 0, 0)
        else:
            fill_bitmap(self.vscreen, width, height, 0, 0, TRANSPARENT)

    def _clear(self, rect: Rectangle) -> None:
        zmap_fill(self.zscreen, rect.width, rect.height, rect.x, rect.y, _FAR_DEPTH)
        if self.background_bitmap is not None:
            copy_bitmap(
                self.vscreen, rect.width, rect.height, rect.x, rect.y,
                self.background_bitmap, rect.x, rect.y,
            )
        else:
            fill_bitmap(self.vscreen, rect.width, rect.height, rect.x, rect.y, TRANSPARENT)

    def update(self) -> None:
        """Redraw every dirty sprite and the balls."""
        self._unpaint_balls()

        for sprite in self.dirty_list:
            clear = False
            if sprite.visual_type == VisualType.SPRITE:
                if sprite.dirty_rect_prev.width > 0:
                    sprite.dirty_rect = enclosing_box(sprite.dirty_rect_prev, sprite.bmp_rect)
                clipped = rectangle_clip(sprite.dirty_rect, self.vscreen_rect)
                if clipped is not None:
                    sprite.dirty_rect = clipped
                    clear = True
                else:
                    sprite.dirty_rect.width = -1
            elif sprite.visual_type == VisualType.NONE:
                clipped = rectangle_clip(sprite.bmp_rect, self.vscreen_rect)
                if clipped is not None:
                    sprite.dirty_rect = clipped
                    clear = sprite.bmp is None
                else:
                    sprite.dirty_rect.width = -1
            if clear:
                self._clear(sprite.dirty_rect)

        for sprite in self.dirty_list:
            if sprite.dirty_rect.width > 0 and sprite.visual_type in (VisualType.NONE, VisualType.SPRITE):
                self._repaint(sprite)

        self._paint_balls()

        for sprite in self.dirty_list:
            sprite.dirty_rect_prev = replace(sprite.dirty_rect)
            if sprite.removed:
                self.remove_sprite(sprite)

        self.dirty_list.clear()

    def sprite_modified(self, sprite: Sprite) -> None:
        """Queue a non-ball sprite for redrawing on the next update."""
        if sprite.visual_type != VisualType.BALL and len(self.dirty_list) < MAX_DIRTY_SPRITES:
            self.dirty_list.append(sprite)

    def create_sprite(
        self,
        visual_type: VisualType,
        bmp: Optional[Bitmap8],
        zmap: Optional[ZMap],
        x_position: int,
        y_position: int,
        rect: Optional[Rectangle],
    ) -> Sprite:
        """Create a sprite and register it with the renderer."""
        sprite = Sprite(visual_type=visual_type, bmp=bmp, zmap=zmap)
        sprite.bmp_rect = Rectangle(
            x_position,
            y_position,
            bmp.width if bmp is not None else 0,
            bmp.height if bmp is not None else 0,
        )
        if rect is not None:
            sprite.bounding_rect = replace(rect)
        if zmap is None and visual_type != VisualType.BALL:
            sprite.zmap = self.background_zmap
            sprite.zmap_offset_x = x_position - self.zmap_offset_x
            sprite.zmap_offset_y = y_position - self.zmap_offset_y
        sprite.dirty_rect_prev = replace(sprite.bmp_rect)
        if visual_type == VisualType.BALL:
            self.ball_list.append(sprite)
        else:
            self.sprite_list.append(sprite)
            self.sprite_modified(sprite)
        return sprite

    def remove_sprite(self, sprite: Sprite) -> None:
        if sprite in self.sprite_list:
            self.sprite_list.remove(sprite)
        sprite.sprite_array = None

    def remove_ball(self, ball: Sprite) -> None:
        if ball in self.ball_list:
            self.ball_list.remove(ball)
        ball.sprite_array = None

    def sprite_set(
        self,
        sprite: Optional[Sprite],
        bmp: Optional[Bitmap8],
        zmap: Optional[ZMap],
        x_pos: int,
        y_pos: int,
    ) -> None:
        """Move a sprite and change its bitmap and depth map."""
        if sprite is None:
            return
        sprite.bmp_rect.x = x_pos
        sprite.bmp_rect.y = y_pos
        sprite.bmp = bmp
        if bmp is not None:
            sprite.bmp_rect.width = bmp.width
            sprite.bmp_rect.height = bmp.height
        sprite.zmap = zmap
        self.sprite_modified(sprite)

    def sprite_set_bitmap(self, sprite: Optional[Sprite], bmp: Optional[Bitmap8]) -> None:
        """Change a sprite's bitmap; nothing happens if it is already set."""
        if sprite is None or sprite.bmp is bmp:
            return
        sprite.bmp = bmp
        if bmp is not None:
            sprite.bmp_rect.width = bmp.width
            sprite.bmp_rect.height = bmp.height
        self.sprite_modified(sprite)

    def set_background_zmap(self, zmap: Optional[ZMap], offset_x: int, offset_y: int) -> None:
        self.background_zmap = zmap
        self.zmap_offset_x = offset_x
        self.zmap_offset_y = offset_y

    def ball_set(
        self,
        sprite: Optional[Sprite],
        bmp: Optional[Bitmap8],
        depth: float,
        x_pos: int,
        y_pos: int,
    ) -> None:
        """Set a ball's bitmap, position and scaled depth."""
        if sprite is None:
            return
        sprite.bmp = bmp
        if bmp is not None:
            sprite.bmp_rect = Rectangle(x_pos, y_pos, bmp.width, bmp.height)
        if depth >= self.zmin:
            scaled = (depth - self.zmin) * self.zscaler
            sprite.depth = _to_int16(int(scaled)) if scaled <= self.zmax else -1
        else:
            sprite.depth = 0

    def shift(self, offset_x: int, offset_y: int) -> None:
        """Move the whole table view, as when nudging."""
        self.offset_x += offset_x
        self.offset_y += offset_y

    def build_occlude_list(self) -> None:
        """Work out, for each sprite, which sprites overlap its bounding box."""
        for main in self.sprite_list:
            main.sprite_array = None
            if main.removed or main.bounding_rect.width == -1:
                continue
            overlapping = [
                ref
                for ref in self.sprite_list
                if not ref.removed
                and ref.bounding_rect.width != -1
                and rectangle_clip(main.bounding_rect, ref.bounding_rect) is not None
            ]
            if main.bmp is not None and len(overlapping) < 2:
                overlapping = []
            if overlapping:
                main.sprite_array = overlapping

    def _repaint(self, sprite: Sprite) -> None:
        if not sprite.sprite_array:
            return
        for ref in sprite.sprite_array:
            if ref.removed or ref.bmp is None or ref.zmap is None:
                continue
            clip = rectangle_clip(ref.bmp_rect, sprite.dirty_rect)
            if clip is None:
                continue
            paint(
                clip.width,
                clip.height,
                self.vscreen,
                clip.x,
                clip.y,
                self.zscreen,
                clip.x,
                clip.y,
                ref.bmp,
                clip.x - ref.bmp_rect.x,
                clip.y - ref.bmp_rect.y,
                ref.zmap,
                clip.x + ref.zmap_offset_x - ref.bmp_rect.x,
                clip.y + ref.zmap_offset_y - ref.bmp_rect.y,
            )

    def _paint_balls(self) -> None:
        balls = self.ball_list
        count = len(balls)
        # Partial depth ordering, kept exactly as the game draws it.
        for i in range(count):
            for j in range(i, count // 2):
                ball_a, ball_b = balls[j], balls[i]
                if ball_b.depth > ball_a.depth:
                    balls[i], balls[j] = ball_a, ball_b

        for index, ball in enumerate(balls):
            clip = rectangle_clip(ball.bmp_rect, self.vscreen_rect) if ball.bmp is not None else None
            if clip is None:
                ball.dirty_rect.width = -1
                continue
            ball.dirty_rect = clip
            copy_bitmap(self.ball_bitmaps[index], clip.width, clip.height, 0, 0, self.vscreen, clip.x, clip.y)
            paint_flat(
                clip.width,
                clip.height,
                self.vscreen,
                clip.x,
                clip.y,
                self.zscreen,
                clip.x,
                clip.y,
                ball.bmp,
                clip.x - ball.bmp_rect.x,
                clip.y - ball.bmp_rect.y,
                ball.depth & 0xFFFF,
            )

    def _unpaint_balls(self) -> None:
        for index in reversed(range(len(self.ball_list))):
            ball = self.ball_list[index]
            dirty = ball.dirty_rect
            if dirty.width > 0:
                copy_bitmap(
                    self.vscreen, dirty.width, dirty.height, dirty.x, dirty.y,
                    self.ball_bitmaps[index], 0, 0,
                )
            ball.dirty_rect_prev = replace(dirty)