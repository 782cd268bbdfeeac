[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gfckit"
version = "0.1.0"
description = "Rectangles, sprites, sprite lists, shape and text sprites, and sound players for small 2D games on pygame"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "sprite", "2d", "pygame", "collision", "animation", "sound", "rectangle"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: pygame",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["gfckit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
