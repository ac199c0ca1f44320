[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "skygame"
version = "0.1.0"
description = "Core systems of a small side-scrolling game: reflection-driven JSON config loading, OBJ and BMP loaders, camera, input mapping and a live edit server."
requires-python = ">=3.10"
keywords = ["game", "reflection", "json", "obj", "bmp", "camera", "parallax", "input"]
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
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["skygame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
