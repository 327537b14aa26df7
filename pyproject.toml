[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mxmidibridge"
version = "0.1.0"
description = "Bridge MIDI messages to RS-232C control commands for Panasonic MX-series video mixers"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = ["midi", "video mixer", "rs232", "serial", "panasonic", "mx30", "vj"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: MIDI",
    "Topic :: Multimedia :: Video",
    "Topic :: Terminals :: Serial",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mxmidibridge = "mxmidibridge.bridge:main"

[tool.hatch.build.targets.wheel]
packages = ["mxmidibridge"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
