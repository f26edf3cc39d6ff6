[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glyphkit"
version = "0.1.0"
description = "Pure Python glyph outline flattening, coverage rasterization, kerning table parsing and font metrics."
requires-python = ">=3.10"
dependencies = []
keywords = ["font", "glyph", "rasterizer", "truetype", "opentype", "kerning", "bezier"]
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
    "Topic :: Text Processing :: Fonts",
    "Topic :: Multimedia :: Graphics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["glyphkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
