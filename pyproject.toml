[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "thermoprint"
version = "0.1.0"
description = "Command encoding, 1-bpp drawing and text output for small Bluetooth thermal receipt printers"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "thermal printer",
    "receipt printer",
    "esc/pos",
    "cat printer",
    "peripage",
    "bitmap",
]
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
    "Topic :: Printing",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["thermoprint"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
