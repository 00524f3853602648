[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "iontrack"
version = "0.1.0"
description = "Building blocks for Monte-Carlo ion transport and radiation damage simulations"
requires-python = ">=3.10"
dependencies = ["numpy"]
keywords = ["ion transport", "monte carlo", "radiation damage", "straggling", "NRT", "LSS"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["iontrack"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
