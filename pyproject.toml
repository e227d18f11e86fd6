[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cadetpinball"
version = "0.1.0"
description = "Core pieces of a 3D pinball table engine: geometry, projection, software rendering, timers, scores, options and MIDS-to-MIDI conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["pinball", "game", "rendering", "midi", "high-score"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["cadetpinball"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
