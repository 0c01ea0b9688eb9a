[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "huffzip"
version = "0.1.0"
description = "Huffman-coding compressor for single files and directory trees"
requires-python = ">=3.10"
dependencies = []
keywords = ["huffman", "compression", "archive", "entropy-coding", "bitstream"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Compression",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
huffzip = "huffzip.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["huffzip"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
