[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "distwt"
version = "0.1.0"
description = "Wavelet tree and wavelet matrix construction by sorting, bucket-sort, domain-decomposition and splitting algorithms"
requires-python = ">=3.10"
dependencies = []
keywords = ["wavelet tree", "wavelet matrix", "succinct data structures", "text indexing", "bucket sort"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Indexing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
distwt = "distwt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["distwt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
