[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cachelab"
version = "0.1.0"
description = "FIFO cache simulator (set-associative and fully associative) with matrix transpose and multiply testbenches"
requires-python = ">=3.10"
dependencies = []
keywords = ["cache", "simulator", "fifo", "memory hierarchy", "matrix", "benchmark"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
cachelab-bench = "cachelab.testbench:main"

[tool.hatch.build.targets.wheel]
packages = ["cachelab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
