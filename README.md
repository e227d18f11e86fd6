# cadetpinball

Building blocks of a classic 3D pinball table engine, in pure Python with no
third-party dependencies.

## What is inside

- `cadetpinball.utils`: `swap_i16`, `swap_u16`, `swap_i32`, `swap_u32` and
  `swap_float` reverse the byte order of a value; `align` rounds a value up to
  a multiple of an alignment.
- `cadetpinball.maths`: the `Vector`, `Rectangle`, `Circle`, `Ray`, `Line`,
  `WallPoint` and `RampPlane` dataclasses, and the geometry used by table
  physics: `rectangle_clip`, `enclosing_box`, `overlapping_box`,
  `ray_intersect_circle`, `line_init`, `ray_intersect_line`, `normalize_2d`,
  `cross`, `magnitude`, `distance`, `rotate_pt`, `rotate_vector`,
  `find_closest_edge` and `basic_collision` (bounces any object that has
  `position`, `acceleration` and `speed`). A missed ray reports `NO_HIT`.
- `cadetpinball.proj`: `Projection`, built from a 3x4 camera matrix, a
  perspective distance and a screen centre; `xform_to_2d` maps a table point to
  integer pixel coordinates and `z_distance` gives its distance from the camera.
- `cadetpinball.fullscrn`: the three table resolutions (`RESOLUTIONS`) and
  `DisplaySettings`, which only allows resolutions above 0 in full-tilt mode.
- `cadetpinball.gdrv`: `Bitmap8` (8-bit indexed data plus resolved `Rgba`
  pixels), `Bmp8Header` for the 14-byte bitmap record header, `Palette`
  (`Palette.from_entries` builds the 256-colour display palette, `apply`
  resolves a bitmap and flips it top to bottom), and the blitters
  `fill_bitmap`, `copy_bitmap` and `copy_bitmap_w_transparency`.
- `cadetpinball.zdrv`: `ZMap` 16-bit depth buffers, `fill`, depth-tested
  `paint` and `paint_flat`, and `flip_zmap_horizontally`.
- `cadetpinball.timer`: `TimerQueue`, one-shot callbacks in game time.
- `cadetpinball.render`: `Renderer`, which keeps a virtual screen and depth
  buffer, tracks `Sprite` objects by `VisualType` and redraws dirty rectangles
  and balls on `update`.
- `cadetpinball.score`: `ScoreDisplay`, a right-aligned score drawn from ten
  digit bitmaps, and `string_format`, which adds thousands separators.
- `cadetpinball.options`: `Settings`, an in-memory string store where reading
  a missing name stores its default; `Options` with `load`, `save` and
  `toggle`; the `Menu` command ids and `Controls` key bindings.
- `cadetpinball.high_score`: `HighScoreTable`, five `HighScore` entries kept
  in `Settings` with a checksum; a table whose checksum fails reads as empty.
- `cadetpinball.pinball`: the table's message strings, `get_rc_string`,
  `get_rc_int` and `make_path_name`.
- `cadetpinball.midi`: `mds_to_midi` and `mds_file_to_midi` turn RIFF MIDS
  music into a format-0 MIDI file, raising `MidsFormatError` on bad input;
  `to_variable_length` encodes a MIDI variable-length quantity.

## Installing

    pip install .

## Examples

Formatting a score with thousands separators:

    from cadetpinball.score import string_format

    string_format(1234567)   # '1,234,567'
    string_format(-999)      # ''

Keeping high scores in a settings store:

    from cadetpinball.options import Settings
    from cadetpinball.high_score import HighScoreTable

    settings = Settings()
    table = HighScoreTable.read(settings)
    position = table.score_position(50000)
    if position >= 0:
        table.place_new_score(50000, "Player 1", position)
    table.write(settings)

Running timers against a game clock in milliseconds:

    from cadetpinball.timer import TimerQueue

    now = [0]
    timers = TimerQueue(150, clock=lambda: now[0])
    fired = []
    timer_id = timers.set(0.4, None, lambda tid, caller: fired.append(tid))
    now[0] = 400
    timers.check()   # 1, and fired == [timer_id]

Converting game music to a standard MIDI file:

    from cadetpinball.midi import mds_file_to_midi

    midi_bytes = mds_file_to_midi("TABA1.MDS")
    with open("TABA1.mid", "wb") as out:
        out.write(midi_bytes)

## What the package does not do

It is a set of engine parts, not a playable game. There is no command to run,
no window or screen output, no input handling, no sound playback, no game loop
or table components (flippers, bumpers, ball physics beyond
`basic_collision`), and no reader for table data files. `Settings` lives only
in memory: saving it to disk is left to the caller.

## Running the tests

    pip install .[test]
    pytest