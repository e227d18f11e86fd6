"""Game options and the key/value settings store they are kept in."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, fields
from typing import ClassVar, Iterator, Mapping, Optional

__all__ = ["Menu", "Controls", "Settings", "Options"]


class Menu(enum.IntEnum):
    """Menu command identifiers."""

    NEW_GAME = 101
    ABOUT_PINBALL = 102
    HIGH_SCORES = 103
    EXIT = 105
    SOUNDS = 201
    MUSIC = 202
    HELP_TOPICS = 301
    LAUNCH_BALL = 401
    PAUSE_RESUME_GAME = 402
    FULL_SCREEN = 403
    DEMO = 404
    SELECT_TABLE = 405
    PLAYER_CONTROLS = 406
    ONE_PLAYER = 408
    TWO_PLAYERS = 409
    THREE_PLAYERS = 410
    FOUR_PLAYERS = 411
    SHOW_MENU = 412
    MAXIMUM_RESOLUTION = 500
    R640X480 = 501
    R800X600 = 502
    R1024X768 = 503
    WINDOW_UNIFORM_SCALE = 600
    WINDOW_LINEAR_FILTER = 601


@dataclass
class Controls:
    """Key codes bound to the table controls."""

    left_flipper: int = 0
    right_flipper: int = 0
    plunger: int = 0
    left_table_bump: int = 0
    right_table_bump: int = 0
    bottom_table_bump: int = 0


_KEY_SETTING_NAMES = {
    "left_flipper": "Left Flipper key",
    "right_flipper": "Right Flipper key",
    "plunger": "Plunger key",
    "left_table_bump": "Left Table Bump key",
    "right_table_bump": "Right Table Bump key",
    "bottom_table_bump": "Bottom Table Bump key",
}

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


def _parse_int(text: str) -> int:
    match = _INT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not an integer setting: {text!r}")
    value = int(match.group(1))
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"integer setting out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"not a number setting: {text!r}")
    return float(match.group(1))


class Settings:
    """String settings by name; reading a missing name stores its default."""

    def __init__(self, values: Optional[Mapping[str, str]] = None) -> None:
        self._values: dict[str, str] = dict(values or {})

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def as_dict(self) -> dict[str, str]:
        return dict(self._values)

    def _get(self, name: str, default: str) -> str:
        return self._values.setdefault(name, default)

    def get_int(self, name: str, default: int) -> int:
        return _parse_int(self._get(name, str(int(default))))

    def set_int(self, name: str, value: int) -> None:
        self._values[name] = str(int(value))

    def get_string(self, name: str, default: str) -> str:
        return self._get(name, default)

    def set_string(self, name: str, value: str) -> None:
        self._values[name] = value

    def get_float(self, name: str, default: float) -> float:
        return _parse_float(self._get(name, f"{default:f}"))

    def set_float(self, name: str, value: float) -> None:
        self._values[name] = f"{value:f}"


def _clamp(value: int, low: int, high: int) -> int:
    return min(high, max(low, value))


@dataclass
class Options:
    """User-selectable game options."""

    MAX_UPS: ClassVar[int] = 360
    MAX_FPS: ClassVar[int] = 360
    MIN_UPS: ClassVar[int] = 60
    MIN_FPS: ClassVar[int] = 60
    DEF_UPS: ClassVar[int] = 120
    DEF_FPS: ClassVar[int] = 60
    MAX_SOUND_CHANNELS: ClassVar[int] = 32
    MIN_SOUND_CHANNELS: ClassVar[int] = 1
    DEF_SOUND_CHANNELS: ClassVar[int] = 8

    key: Controls = field(default_factory=Controls)
    key_default: Controls = field(default_factory=Controls)
    sounds: bool = True
    music: bool = True
    players: int = 1
    uniform_scaling: bool = True
    linear_filtering: bool = True
    frames_per_second: int = 60
    updates_per_second: int = 120
    show_menu: bool = True
    uncapped_updates_per_second: bool = False
    sound_channels: int = 8

    @classmethod
    def load(cls, settings: Settings) -> "Options":
        """Read options from settings, clamping rates and channel counts."""
        opts = cls()
        key_default = Controls()
        opts.key_default = key_default
        key = Controls()
        for f in fields(Controls):
            setattr(
                key,
                f.name,
                settings.get_int(_KEY_SETTING_NAMES[f.name], getattr(key_default, f.name)),
            )
        opts.sounds = bool(settings.get_int("Sounds", True))
        opts.music = bool(settings.get_int("Music", True))
        opts.players = settings.get_int("Players", 1)
        opts.key = key
        opts.uniform_scaling = bool(settings.get_int("Uniform scaling", True))
        opts.linear_filtering = bool(settings.get_int("Linear Filtering", True))
        opts.frames_per_second = _clamp(
            settings.get_int("Frames Per Second", cls.DEF_FPS), cls.MIN_UPS, cls.MAX_FPS
        )
        ups = _clamp(settings.get_int("Updates Per Second", cls.DEF_UPS), cls.MIN_UPS, cls.MAX_UPS)
        opts.updates_per_second = max(ups, opts.frames_per_second)
        opts.show_menu = bool(settings.get_int("ShowMenu", True))
        opts.uncapped_updates_per_second = bool(
            settings.get_int("Uncapped Updates Per Second", False)
        )
        opts.sound_channels = _clamp(
            settings.get_int("Sound Channels", cls.DEF_SOUND_CHANNELS),
            cls.MIN_SOUND_CHANNELS,
            cls.MAX_SOUND_CHANNELS,
        )
        return opts

    def save(self, settings: Settings) -> None:
        """Write every option back to settings."""
        settings.set_int("Sounds", self.sounds)
        settings.set_int("Music", self.music)
        settings.set_int("Players", self.players)
        for f in fields(Controls):
            settings.set_int(_KEY_SETTING_NAMES[f.name], getattr(self.key, f.name))
        settings.set_int("Uniform scaling", self.uniform_scaling)
        settings.set_int("Linear Filtering", self.linear_filtering)
        settings.set_int("Frames Per Second", self.frames_per_second)
        settings.set_int("Updates Per Second", self.updates_per_second)
        settings.set_int("ShowMenu", self.show_menu)
        settings.set_int("Uncapped Updates Per Second", self.uncapped_updates_per_second)
        settings.set_int("Sound Channels", self.sound_channels)

    def toggle(self, item: Menu) -> None:
        """Apply a menu toggle to the options."""
        item = Menu(item)
        if item == Menu.SOUNDS:
            self.sounds = not self.sounds
        elif item == Menu.MUSIC:
            self.music = not self.music
        elif item == Menu.SHOW_MENU:
            self.show_menu = not self.show_menu
        elif item in (Menu.ONE_PLAYER, Menu.TWO_PLAYERS, Menu.THREE_PLAYERS, Menu.FOUR_PLAYERS):
            self.players = item - Menu.ONE_PLAYER + 1
        elif item == Menu.WINDOW_LINEAR_FILTER:
            self.linear_filtering = not self.linear_filtering

    @property
    def update_to_frame_ratio(self) -> float:
        """Physics updates per drawn frame."""
        return self.updates_per_second / self.frames_per_second

    @property
    def target_frame_time_ms(self) -> float:
        """Milliseconds between physics updates."""
        return 1000.0 / self.updates_per_second