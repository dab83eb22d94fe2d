[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sinesynth"
version = "0.1.0"
description = "A polyphonic sine wave synthesizer with ADSR envelopes, note events and smoothed parameters"
requires-python = ">=3.10"
dependencies = []
keywords = ["synthesizer", "audio", "dsp", "oscillator", "adsr", "envelope", "midi"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sinesynth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
