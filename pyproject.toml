[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "democollection"
version = "0.1.0"
description = "Vector math, a camera with orbit control, procedural meshes and PMX model loading for 3D demos"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "linear-algebra", "camera", "mesh", "pmx", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["democollection"]

[tool.pytest.ini_options]
addopts = "-ra"
