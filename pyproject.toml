[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parkinglot"
version = "0.1.0"
description = "A small parking-lot manager: slots, reservations, fees, payments and revenue settlement with CSV storage and a Tk desktop window."
requires-python = ">=3.10"
dependencies = []
keywords = ["parking", "parking lot", "reservation", "fees", "settlement", "csv", "tkinter"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Chinese (Simplified)",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parkinglot = "parkinglot.app:main"

[tool.hatch.build.targets.wheel]
packages = ["parkinglot"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
