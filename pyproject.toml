[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kigumi"
version = "0.1.0"
description = "Exact-arithmetic triangle soup geometry: face-face intersection, AABB trees, point-in-soup queries, binary and OFF I/O"
requires-python = ">=3.10"
dependencies = []
keywords = ["geometry", "mesh", "triangle", "intersection", "aabb", "off", "exact arithmetic"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Multimedia :: Graphics :: 3D Modeling",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["kigumi"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
