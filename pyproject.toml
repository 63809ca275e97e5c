[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rsedit"
version = "1.5.1"
description = "A small terminal text editor with grapheme-aware editing and incremental search"
requires-python = ">=3.10"
keywords = ["editor", "terminal", "text", "tui", "search", "unicode"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Editors",
]
dependencies = [
    "regex",
    "wcwidth",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
rsedit = "rsedit.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["rsedit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
