[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "oceanlab"
version = "0.1.0"
description = "Wa-tor predator-prey simulations and a Mandelbrot renderer, sequential and multi-threaded"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "wa-tor",
    "predator-prey",
    "cellular-automaton",
    "simulation",
    "mandelbrot",
    "fractal",
    "threads",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
oceanlab-mandel = "oceanlab.mandel:main"
oceanlab-wator = "oceanlab.wator:main"
oceanlab-wator-fixed = "oceanlab.wator:main_fixed"
oceanlab-wator-threads = "oceanlab.threaded:main"
oceanlab-wator-striped = "oceanlab.wator_striped:main"

[tool.hatch.build.targets.wheel]
packages = ["oceanlab"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
