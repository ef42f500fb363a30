[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "audiopipe"
version = "0.1.0"
description = "Composable audio sample sources: buffers, format, channel and rate conversion, mixing, queueing and WAV decoding"
requires-python = ">=3.10"
dependencies = []
keywords = ["audio", "pcm", "wav", "mixer", "resampling", "samples"]
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
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["audiopipe"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
