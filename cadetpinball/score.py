"""Score counters drawn with digit bitmaps, and score text formatting."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .gdrv import TRANSPARENT, Bitmap8, copy_bitmap, copy_bitmap_w_transparency, fill_bitmap

__all__ = ["ScoreDisplay", "string_format", "MAX_DISPLAYED_SCORE", "NO_SCORE"]

MAX_DISPLAYED_SCORE = 1_000_000_000
NO_SCORE = -999


@dataclass
class ScoreDisplay:
    """A score box on screen, drawn right-aligned from ten digit bitmaps."""

    offset_x: int
    offset_y: int
    width: int
    height: int
    char_bitmaps: Sequence[Bitmap8]
    background: Optional[Bitmap8] = None
    score: int = -9999
    dirty: bool = False

    def __post_init__(self) -> None:
        self.char_bitmaps = list(self.char_bitmaps)
        if len(self.char_bitmaps) != 10:
            raise ValueError("a score display needs ten digit bitmaps")

    def set(self, value: int) -> None:
        self.score = value
        self.dirty = True

    def erase(self, screen: Bitmap8) -> None:
        """Restore the score box from the background, or clear it."""
        if self.background is not None:
            copy_bitmap(
                screen, self.width, self.height, self.offset_x, self.offset_y,
                self.background, self.offset_x, self.offset_y,
            )
        else:
            fill_bitmap(screen, self.width, self.height, self.offset_x, self.offset_y, TRANSPARENT)

    def update(self, screen: Bitmap8, transparent: bool) -> None:
        """Redraw the score if it changed and is small enough to show."""
        if not self.dirty or self.score > MAX_DISPLAYED_SCORE:
            return
        self.dirty = False
        x = self.width + self.offset_x
        y = self.offset_y
        self.erase(screen)
        if self.score < 0:
            return
        blit = copy_bitmap_w_transparency if transparent else copy_bitmap
        for digit in reversed(str(self.score)):
            bmp = self.char_bitmaps[int(digit) % 10]
            x -= bmp.width
            blit(screen, bmp.width, bmp.height, x, y, bmp, 0, 0)


def string_format(score: int) -> str:
    """Format a score with thousands separators; -999 means no score."""
    if score == NO_SCORE:
        return ""
    if score < 0:
        return str(score)
    billions = score // 1_000_000_000
    millions = score % 1_000_000_000 // 1_000_000
    thousands = score % 1_000_000 // 1000
    units = score % 1000
    if billions > 0:
        return f"{billions},{millions:03d},{thousands:03d},{units:03d}"
    if millions > 0:
        return f"{millions},{thousands:03d},{units:03d}"
    if thousands > 0:
        return f"{thousands},{units:03d}"
    return str(score)