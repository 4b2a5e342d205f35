[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "musicterm"
version = "0.1.0"
description = "Terminal music player building blocks: directory stacks, image protocol detection, ueberzugpp control and yt-dlp downloads"
requires-python = ">=3.10"
keywords = ["terminal", "tui", "music", "ueberzug", "yt-dlp", "tmux"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = []

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["musicterm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
