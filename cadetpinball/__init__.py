"""Engine parts of a 3D pinball table: geometry, projection, bitmaps and depth maps, rendering, timers, scores, options and MIDS-to-MIDI conversion."""

__version__ = "0.1.0"