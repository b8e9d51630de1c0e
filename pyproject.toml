[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "divedeco"
version = "6.0.2"
description = "Dive decompression models (Buhlmann ZH-L16C with gradient factors)"
requires-python = ">=3.10"
dependencies = []
keywords = ["scuba", "diving", "decompression", "buhlmann", "zhl-16c", "gradient-factors"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["divedeco*"]

[tool.pytest.ini_options]
addopts = "-ra"
