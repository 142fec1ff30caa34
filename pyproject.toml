[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "terrainwalk"
version = "0.1.0"
description = "Heightmap terrain, OBJ models, a walking first-person camera and scene lighting state"
requires-python = ">=3.10"
keywords = ["terrain", "heightmap", "obj", "wavefront", "camera", "3d", "scene"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["terrainwalk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
