import pytest

from cadetpinball.options import Controls, Menu, Options, Settings


def test_get_int_stores_default():
    settings = Settings()
    assert settings.get_int("Players", 3) == 3
    assert settings.get_string("Players", "") == "3"


def test_get_int_prefers_existing_value():
    settings = Settings({"Players": "2"})
    assert settings.get_int("Players", 4) == 2


def test_get_int_parses_leading_digits():
    settings = Settings({"n": "  42abc"})
    assert settings.get_int("n", 0) == 42


def test_get_int_rejects_garbage():
    settings = Settings({"n": "abc"})
    with pytest.raises(ValueError):
        settings.get_int("n", 0)


def test_string_round_trip():
    settings = Settings()
    settings.set_string("Pinball Data", "CADET.DAT")
    assert settings.get_string("Pinball Data", "PINBALL.DAT") == "CADET.DAT"


def test_float_round_trip_and_storage_format():
    settings = Settings()
    settings.set_float("f", 1.5)
    assert settings.get_string("f", "") == "1.500000"
    assert settings.get_float("f", 0.0) == 1.5


def test_get_float_rejects_garbage():
    settings = Settings({"f": "x1"})
    with pytest.raises(ValueError):
        settings.get_float("f", 0.0)


def test_load_defaults_from_empty_settings():
    opts = Options.load(Settings())
    assert opts.frames_per_second == Options.DEF_FPS
    assert opts.updates_per_second == Options.DEF_UPS
    assert opts.sound_channels == Options.DEF_SOUND_CHANNELS
    assert opts.players == 1
    assert opts.sounds is True
    assert opts.uncapped_updates_per_second is False
    assert opts.key == Controls()


def test_load_clamps_rates_and_channels():
    settings = Settings(
        {"Frames Per Second": "1000", "Updates Per Second": "10", "Sound Channels": "0"}
    )
    opts = Options.load(settings)
    assert opts.frames_per_second == Options.MAX_FPS
    assert opts.updates_per_second >= opts.frames_per_second
    assert opts.sound_channels == Options.MIN_SOUND_CHANNELS


def test_save_then_load_round_trip():
    opts = Options.load(Settings())
    opts.players = 3
    opts.music = False
    opts.key.plunger = 32
    opts.frames_per_second = 90
    opts.updates_per_second = 180
    settings = Settings()
    opts.save(settings)
    assert Options.load(settings) == opts


@pytest.mark.parametrize(
    "item, players",
    [(Menu.ONE_PLAYER, 1), (Menu.TWO_PLAYERS, 2), (Menu.THREE_PLAYERS, 3), (Menu.FOUR_PLAYERS, 4)],
)
def test_toggle_players(item, players):
    opts = Options()
    opts.toggle(item)
    assert opts.players == players


def test_toggle_flags_flip_back():
    opts = Options()
    before = (opts.sounds, opts.music, opts.show_menu, opts.linear_filtering)
    for item in (Menu.SOUNDS, Menu.MUSIC, Menu.SHOW_MENU, Menu.WINDOW_LINEAR_FILTER):
        opts.toggle(item)
    assert (opts.sounds, opts.music, opts.show_menu, opts.linear_filtering) == tuple(
        not v for v in before
    )
    for item in (Menu.SOUNDS, Menu.MUSIC, Menu.SHOW_MENU, Menu.WINDOW_LINEAR_FILTER):
        opts.toggle(item)
    assert (opts.sounds, opts.music, opts.show_menu, opts.linear_filtering) == before


def test_frame_ratio():
    opts = Options.load(Settings())
    assert opts.update_to_frame_ratio == opts.updates_per_second / opts.frames_per_second