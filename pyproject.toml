[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "sgrelay"
version = "1.12.0"
description = "Keyed sorted lists, bounded byte queues, CRC-16 dialog files, argument parsing, socket and worker-thread helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["sorted list", "queue", "dialog", "crc16", "argument parsing", "sockets", "threads"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["sgrelay*"]

[tool.pytest.ini_options]
addopts = "-ra"
