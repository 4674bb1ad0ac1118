[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lcdcanvas"
version = "0.1.0"
description = "Drawing on in-memory RGB565/ARGB4444 pixel buffers: clipping, lines, shapes, masks, bitmap fonts and image loading"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["framebuffer", "rgb565", "argb4444", "lcd", "drawing", "bitmap", "font", "mask"]
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
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["lcdcanvas"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
