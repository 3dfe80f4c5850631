[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ezlogger"
version = "0.1.0"
description = "A small logging library with level filtering, pluggable sinks and formatters, serial background task runners, memory-mapped buffers, byte-size arithmetic and AES/ECDH helpers."
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["logging", "logger", "sink", "formatter", "mmap", "executor", "thread pool", "aes", "ecdh"]
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
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ezlogger"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
