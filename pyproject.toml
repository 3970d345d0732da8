[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skigif"
version = "1.34.0"
description = "Collect animation frames from PNG sequences, GIFs and YUV4MPEG2 video for GIF encoding"
requires-python = ">=3.10"
keywords = ["gif", "animation", "png", "y4m", "yuv", "frames"]
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
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: Multimedia :: Video :: Conversion",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pillow",
]

[tool.hatch.build.targets.wheel]
packages = ["skigif"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
