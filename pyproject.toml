[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gradlite"
version = "0.1.0"
description = "A small pure-Python tensor library with gradient accumulation, optimizers, a cross-entropy loss and a few layers."
requires-python = ">=3.10"
dependencies = []
keywords = ["autograd", "tensor", "deep learning", "neural network", "optimizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gradlite"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
