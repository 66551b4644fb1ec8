[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parity2"
version = "0.1.0"
description = "Building blocks for PAR 2.0 parity archives: MD5, Galois field arithmetic, PAR1 records, recovery file planning and disk file access"
requires-python = ">=3.10"
dependencies = []
keywords = ["par2", "parity", "reed-solomon", "galois", "md5", "recovery", "archive"]
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
    "Topic :: System :: Archiving",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["parity2"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
