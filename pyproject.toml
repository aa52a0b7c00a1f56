[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "athletefile"
version = "0.1.0"
description = "Fixed-width binary record files of athlete statistics: CSV import and export, editing, block sorting, splitting and binary search"
requires-python = ">=3.10"
dependencies = []
keywords = ["binary file", "records", "csv", "sorting", "binary search", "min-heap"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
athletefile = "athletefile.cli:main"
athletefile-split = "athletefile.split:main"
athletefile-preview = "athletefile.preview:main"

[tool.hatch.build.targets.wheel]
packages = ["athletefile"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
