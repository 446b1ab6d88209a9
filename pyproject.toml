[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shapeherd"
version = "0.1.0"
description = "An arcade game: steer a pen around drifting coloured shapes, loop them together and combine them into new colours."
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["game", "arcade", "pygame", "shapes", "colours"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Arcade",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
shapeherd = "shapeherd.app:main"

[tool.hatch.build.targets.wheel]
packages = ["shapeherd"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
