[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stdplus"
version = "0.1.0"
description = "Small building blocks for systems code: errno checking, bit flags, cancel handles, integer and IP address text conversion, endian helpers and file descriptor utilities"
requires-python = ">=3.10"
dependencies = []
keywords = ["errno", "file descriptor", "ipv4", "ipv6", "endian", "bit flags", "atomic write"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stdplus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
