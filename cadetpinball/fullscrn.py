"""Table resolutions and the display scaling settings."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ResolutionInfo", "RESOLUTIONS", "DisplaySettings"]


@dataclass(frozen=True)
class ResolutionInfo:
    screen_width: int
    screen_height: int
    table_width: int
    table_height: int
    resolution_menu_id: int


RESOLUTIONS: tuple[ResolutionInfo, ...] = (
    ResolutionInfo(640, 480, 600, 416, 501),
    ResolutionInfo(800, 600, 752, 520, 502),
    ResolutionInfo(1024, 768, 960, 666, 503),
)


class DisplaySettings:
    """Chosen resolution plus screen scale and offset.

    Only the full-tilt data set has more than one resolution; otherwise the
    resolution is always 0.
    """

    def __init__(self, full_tilt_mode: bool = False) -> None:
        self.full_tilt_mode = full_tilt_mode
        self.scale_x = 1.0
        self.scale_y = 1.0
        self.offset_x = 0
        self.offset_y = 0
        self._resolution = 0

    @property
    def resolution(self) -> int:
        return self._resolution

    @resolution.setter
    def resolution(self, value: int) -> None:
        if not self.full_tilt_mode:
            value = 0
        if not 0 <= value <= 2:
            raise ValueError(f"resolution {value} out of bounds")
        self._resolution = value

    @property
    def max_resolution(self) -> int:
        return 2 if self.full_tilt_mode else 0

    @property
    def resolution_info(self) -> ResolutionInfo:
        return RESOLUTIONS[self._resolution]

    def table_size(self) -> tuple[int, int]:
        """Table width and height at the current resolution."""
        info = self.resolution_info
        return info.table_width, info.table_height