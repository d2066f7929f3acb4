[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "wavfilter"
version = "0.1.0"
description = "Cascaded IIR filtering of PCM WAV files"
requires-python = ">=3.10"
dependencies = []
keywords = ["wav", "iir", "biquad", "filter", "audio", "dsp", "butterworth"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Analysis",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
wavfilter = "wavfilter.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["wavfilter"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
