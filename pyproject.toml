[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "euiccdrv"
version = "0.1.0"
description = "eUICC toolkit: DER/TLV and base64 helpers, ES10a commands, and pluggable APDU and HTTP drivers"
requires-python = ">=3.10"
dependencies = []
keywords = ["euicc", "esim", "apdu", "der", "tlv", "sgp22", "lpa", "at-commands"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Telecommunications Industry",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["euiccdrv"]

[tool.hatch.build.targets.sdist]
include = ["euiccdrv", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
