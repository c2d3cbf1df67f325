[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "storagekit"
version = "0.1.0"
description = "A small file-system abstraction with FAT timestamps, path normalisation and config-style line reading"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "filesystem",
    "storage",
    "fat",
    "timestamps",
    "config",
    "line-reader",
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
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
storagekit-selftest = "storagekit.selftest:main"

[tool.hatch.build.targets.wheel]
packages = ["storagekit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
